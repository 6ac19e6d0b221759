from __future__ import annotations

from dataclasses import dataclass
from typing import List, Dict, Optional, Any, Sequence
import json
import csv

import pandas as pd

from .core import Job, EmptyInputError, SchedulingError


class EventLogger:
    def __init__(self) -> None:
        self.job_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def log_job_event(self, time_s: float, job_id: int, event: str) -> None:
        self.job_events.append({
            "time": time_s,
            "job_id": job_id,
            "event": event,
        })

    def log_timeline_slice(self, start: float, end: float, job_id: Optional[int], policy: str, reason: Optional[str] = None) -> None:
        self.timeline.append({
            "start": start,
            "end": end,
            "job_id": job_id,
            "policy": policy,
            "reason": reason,
        })

    def export_json(self, path: str) -> None:
        data = {
            "job_events": self.job_events,
            "timeline": self.timeline,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> None:
        with open(f"{base_path_no_ext}_events.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["time", "job_id", "event"])
            writer.writeheader()
            for row in self.job_events:
                writer.writerow(row)
        with open(f"{base_path_no_ext}_timeline.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["start", "end", "job_id", "policy", "reason"])
            writer.writeheader()
            for row in self.timeline:
                writer.writerow(row)


@dataclass
class MetricsSummary:
    avg_waiting_time: float
    avg_turnaround_time: float
    job_count: int


def compute_metrics(jobs: Sequence[Job]) -> MetricsSummary:
    """Average waiting and turnaround time over a completed job set.

    Raises EmptyInputError for an empty set and SchedulingError if any job
    was never completed by the strategy.
    """
    if not jobs:
        raise EmptyInputError("cannot compute metrics over zero jobs")
    pending = [j.id for j in jobs if not j.is_completed]
    if pending:
        raise SchedulingError(f"jobs never completed: {pending}")
    total_waiting = sum(j.waiting_time for j in jobs)
    total_turnaround = sum(j.turnaround_time for j in jobs)
    return MetricsSummary(
        avg_waiting_time=total_waiting / len(jobs),
        avg_turnaround_time=total_turnaround / len(jobs),
        job_count=len(jobs),
    )


def jobs_to_dataframe(jobs: Sequence[Job]) -> pd.DataFrame:
    data = [
        {
            "id": j.id,
            "arrival_time": j.arrival_time,
            "burst_time": j.burst_time,
            "completion_time": j.completion_time,
            "turnaround_time": j.turnaround_time,
            "waiting_time": j.waiting_time,
            "dispatches": j.dispatch_count,
            "preemptions": j.preemptions,
        }
        for j in jobs
    ]
    return pd.DataFrame(data, columns=[
        "id", "arrival_time", "burst_time", "completion_time",
        "turnaround_time", "waiting_time", "dispatches", "preemptions",
    ])
