"""
Scheduler implementations: FCFS, non-preemptive SJF and Round Robin.

Every scheduler runs on a private list of jobs whose ids equal their list
positions, so ready queues hold job ids rather than job references.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple
import heapq
import math

from .core import Job, JobState, SchedulingError
from .utils import EventLogger


@dataclass
class RoundRobinStats:
    """Run-level statistics produced by a Round Robin run."""
    total_time: float = 0.0
    avg_queue_length: float = 0.0
    max_queue_length: int = 0
    preemptions: int = 0
    context_switch_time: float = 0.0


class BaseScheduler(ABC):
    """Abstract base class for all schedulers."""

    policy: str = ""

    def __init__(self, logger: Optional[EventLogger] = None):
        self.logger = logger
        self.clock: float = 0.0

    @abstractmethod
    def run(self, jobs: List[Job]):
        """Dispatch every job to completion, mutating the given jobs."""
        pass

    @staticmethod
    def _arena(jobs: List[Job]) -> List[Job]:
        """Check that job ids index the list and that the jobs are pristine."""
        for index, job in enumerate(jobs):
            if job.id != index:
                raise SchedulingError(f"job at position {index} has id {job.id}")
            if job.is_completed or job.state is not JobState.UNARRIVED:
                raise SchedulingError(f"job {job.id} was already scheduled; run on a fresh ledger copy")
        return list(jobs)

    @staticmethod
    def _admit(arena: List[Job], unadmitted: List[int], now: float) -> Tuple[List[int], List[int]]:
        """Split not-yet-admitted ids into (arrived, still pending), keeping ledger order."""
        arrived = [i for i in unadmitted if arena[i].arrival_time <= now]
        if not arrived:
            return arrived, unadmitted
        return arrived, [i for i in unadmitted if arena[i].arrival_time > now]

    @staticmethod
    def _idle_steps(now: float, next_arrival: float) -> int:
        """Whole time units the idle CPU clock must tick to reach next_arrival.

        Equivalent to advancing the clock one unit at a time until the next
        job is eligible, so timestamps land on the same values.
        """
        # the float difference can land just above a whole number, so start one low
        steps = max(1, math.ceil(next_arrival - now) - 1)
        while now + steps < next_arrival:
            steps += 1
        return steps

    def _idle(self, steps: int) -> None:
        if self.logger:
            self.logger.log_timeline_slice(self.clock, self.clock + steps, None, self.policy, reason="idle")
        self.clock += steps

    def _execute(self, job: Job, run_for: float) -> None:
        """Run `job` on the CPU for `run_for` time units."""
        job.state = JobState.RUNNING
        job.dispatch_count += 1
        start = self.clock
        self.clock += run_for
        if self.logger:
            self.logger.log_job_event(start, job.id, "dispatch")
            self.logger.log_timeline_slice(start, self.clock, job.id, self.policy)

    def _complete(self, job: Job) -> None:
        job.complete(self.clock)
        if self.logger:
            self.logger.log_job_event(self.clock, job.id, "complete")


class FCFSScheduler(BaseScheduler):
    """First Come First Serve in ledger order.

    Jobs are served in the order they were read, not re-sorted by arrival:
    a job listed early but arriving late holds back the jobs behind it.
    """

    policy = "FCFS"

    def run(self, jobs: List[Job]) -> None:
        self.clock = 0.0
        for job in self._arena(jobs):
            if self.clock < job.arrival_time:
                if self.logger:
                    self.logger.log_timeline_slice(self.clock, job.arrival_time, None, self.policy, reason="idle")
                self.clock = job.arrival_time
            job.state = JobState.READY
            self._execute(job, job.burst_time)
            job.remaining_time = 0.0
            self._complete(job)


class SJFScheduler(BaseScheduler):
    """Non-preemptive Shortest Job First.

    Among the jobs that have arrived, the one with the shortest burst runs to
    completion; equal bursts go to the lowest job id.
    """

    policy = "SJF"

    def run(self, jobs: List[Job]) -> None:
        arena = self._arena(jobs)
        self.clock = 0.0
        unadmitted = list(range(len(arena)))
        ready: List[Tuple[float, int]] = []
        completed = 0

        while completed < len(arena):
            arrived, unadmitted = self._admit(arena, unadmitted, self.clock)
            for job_id in arrived:
                arena[job_id].state = JobState.READY
                heapq.heappush(ready, (arena[job_id].burst_time, job_id))

            if not ready:
                next_arrival = min(arena[i].arrival_time for i in unadmitted)
                self._idle(self._idle_steps(self.clock, next_arrival))
                continue

            _, job_id = heapq.heappop(ready)
            job = arena[job_id]
            self._execute(job, job.burst_time)
            job.remaining_time = 0.0
            self._complete(job)
            completed += 1


class RoundRobinScheduler(BaseScheduler):
    """Round Robin with a fixed time quantum and context-switch overhead.

    The overhead is charged each time a job is preempted and re-queued, never
    after a job's final slice. Quantum and overhead share the jobs' time unit.
    """

    policy = "RR"

    def __init__(self, time_quantum: float = 2.0, context_switch_time: float = 0.0, logger: Optional[EventLogger] = None):
        super().__init__(logger)
        if not time_quantum > 0:
            raise ValueError(f"time quantum must be positive, got {time_quantum!r}")
        if context_switch_time < 0:
            raise ValueError(f"context switch time must be non-negative, got {context_switch_time!r}")
        self.time_quantum = time_quantum
        self.context_switch_time = context_switch_time

    def run(self, jobs: List[Job]) -> RoundRobinStats:
        arena = self._arena(jobs)
        self.clock = 0.0
        unadmitted = list(range(len(arena)))
        ready: Deque[int] = deque()
        completed = 0
        preemptions = 0
        # Ready-queue length is sampled once per dispatch iteration.
        samples = 0
        sample_sum = 0
        max_length = 0

        while completed < len(arena):
            arrived, unadmitted = self._admit(arena, unadmitted, self.clock)
            for job_id in arrived:
                arena[job_id].state = JobState.READY
                ready.append(job_id)

            samples += 1
            sample_sum += len(ready)
            max_length = max(max_length, len(ready))

            if not ready:
                next_arrival = min(arena[i].arrival_time for i in unadmitted)
                steps = self._idle_steps(self.clock, next_arrival)
                # each skipped unit step would have sampled an empty queue
                samples += steps - 1
                self._idle(steps)
                continue

            job = arena[ready.popleft()]
            run_for = min(self.time_quantum, job.remaining_time)
            job.remaining_time -= run_for
            self._execute(job, run_for)

            if job.remaining_time <= 0:
                job.remaining_time = 0.0
                self._complete(job)
                completed += 1
            else:
                job.preemptions += 1
                preemptions += 1
                if self.logger:
                    self.logger.log_job_event(self.clock, job.id, "preempt")
                    if self.context_switch_time > 0:
                        self.logger.log_timeline_slice(self.clock, self.clock + self.context_switch_time, None, self.policy, reason="context_switch")
                self.clock += self.context_switch_time
                job.state = JobState.READY
                ready.append(job.id)

        return RoundRobinStats(
            total_time=self.clock,
            avg_queue_length=sample_sum / samples if samples else 0.0,
            max_queue_length=max_length,
            preemptions=preemptions,
            context_switch_time=preemptions * self.context_switch_time,
        )
