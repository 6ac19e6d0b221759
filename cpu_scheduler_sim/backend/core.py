"""
Core data structures for the CPU scheduler simulator.
Includes Job, JobState, JobLedger and the simulator error types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
import math


class SimulatorError(Exception):
    """Base class for simulator errors."""


class EmptyInputError(SimulatorError):
    """Raised when metrics are requested over an empty job set."""


class SchedulingError(SimulatorError):
    """Raised when a run leaves jobs in an inconsistent state."""


class InvalidJobError(SimulatorError, ValueError):
    """Raised when a job record carries negative or non-finite times."""


class JobState(Enum):
    """Job states in a simulation run."""
    UNARRIVED = "UNARRIVED"
    READY = "READY"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"


@dataclass
class Job:
    """A single CPU job described by its arrival and burst time."""
    id: int
    arrival_time: float
    burst_time: float
    remaining_time: float = None
    completion_time: Optional[float] = None
    turnaround_time: Optional[float] = None
    waiting_time: Optional[float] = None
    state: JobState = JobState.UNARRIVED
    dispatch_count: int = 0
    preemptions: int = 0

    def __post_init__(self):
        """Validate times and initialize the remaining-time counter."""
        for name in ("arrival_time", "burst_time"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidJobError(f"job {self.id}: {name} must be a finite non-negative number, got {value!r}")
        self.remaining_time = self.burst_time if self.remaining_time is None else self.remaining_time

    @property
    def is_completed(self) -> bool:
        return self.completion_time is not None

    def complete(self, now: float) -> None:
        """Record completion at `now` and derive turnaround and waiting time."""
        if self.is_completed:
            raise SchedulingError(f"job {self.id} completed twice (at {self.completion_time} and {now})")
        self.completion_time = now
        self.turnaround_time = now - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time
        self.state = JobState.COMPLETED

    def fresh_copy(self) -> "Job":
        """Return a pristine copy carrying only the input fields."""
        return Job(id=self.id, arrival_time=self.arrival_time, burst_time=self.burst_time)


class JobLedger:
    """Ordered, read-only collection of jobs exactly as they were read.

    Jobs are addressable by id (their position in the input). Strategies
    never run on the ledger itself; they run on `copy()`.
    """

    def __init__(self, jobs: Iterable[Job] = ()):
        self._jobs: Tuple[Job, ...] = tuple(jobs)
        for index, job in enumerate(self._jobs):
            if job.id != index:
                raise InvalidJobError(f"job at position {index} has id {job.id}")

    @classmethod
    def from_records(cls, records: Iterable[Sequence[float]]) -> "JobLedger":
        """Build a ledger from (arrival_time, burst_time) pairs."""
        jobs = [
            Job(id=i, arrival_time=float(arrival), burst_time=float(burst))
            for i, (arrival, burst) in enumerate(records)
        ]
        return cls(jobs)

    def copy(self) -> List[Job]:
        """Return an independent working copy of every job."""
        return [job.fresh_copy() for job in self._jobs]

    def records(self) -> List[Tuple[float, float]]:
        """The (arrival_time, burst_time) pairs in ledger order."""
        return [(job.arrival_time, job.burst_time) for job in self._jobs]

    def __getitem__(self, job_id: int) -> Job:
        return self._jobs[job_id]

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)

    def __repr__(self) -> str:
        return f"JobLedger({len(self._jobs)} jobs)"
