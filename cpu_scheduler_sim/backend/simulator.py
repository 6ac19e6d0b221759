from __future__ import annotations

from typing import List, Optional
from dataclasses import dataclass

from .core import Job, JobLedger
from .schedulers import BaseScheduler, FCFSScheduler, SJFScheduler, RoundRobinScheduler, RoundRobinStats
from .utils import EventLogger, MetricsSummary, compute_metrics


@dataclass
class SimulationResult:
    policy: str
    jobs: List[Job]
    metrics: MetricsSummary
    total_time: float
    rr_stats: Optional[RoundRobinStats]
    logger: EventLogger

    @property
    def avg_waiting_time(self) -> float:
        return self.metrics.avg_waiting_time

    @property
    def avg_turnaround_time(self) -> float:
        return self.metrics.avg_turnaround_time


class Scheduler:
    FCFS = FCFSScheduler.policy   # non-preemptive, ledger order
    SJF = SJFScheduler.policy     # non-preemptive, shortest burst first
    RR = RoundRobinScheduler.policy

    ALL = (FCFS, SJF, RR)


def make_scheduler(
    policy: str,
    time_quantum: float = 2.0,
    context_switch_time: float = 0.0,
    logger: Optional[EventLogger] = None,
) -> BaseScheduler:
    if policy == Scheduler.FCFS:
        return FCFSScheduler(logger)
    if policy == Scheduler.SJF:
        return SJFScheduler(logger)
    if policy == Scheduler.RR:
        return RoundRobinScheduler(time_quantum=time_quantum, context_switch_time=context_switch_time, logger=logger)
    raise ValueError(f"unknown scheduling policy {policy!r}; expected one of {', '.join(Scheduler.ALL)}")


def simulate(
    ledger: JobLedger,
    policy: str = Scheduler.RR,
    time_quantum: float = 2.0,
    context_switch_time: float = 0.0,
    logger: Optional[EventLogger] = None,
) -> SimulationResult:
    """Run one strategy over a fresh copy of the ledger and aggregate its metrics.

    `time_quantum` and `context_switch_time` only apply to Round Robin and
    are in the same unit as the jobs' arrival and burst times.
    """
    logger = logger if logger is not None else EventLogger()
    scheduler = make_scheduler(policy, time_quantum, context_switch_time, logger)
    jobs = ledger.copy()
    stats = scheduler.run(jobs)
    metrics = compute_metrics(jobs)

    return SimulationResult(
        policy=policy,
        jobs=jobs,
        metrics=metrics,
        total_time=scheduler.clock,
        rr_stats=stats if isinstance(stats, RoundRobinStats) else None,
        logger=logger,
    )
