from __future__ import annotations

from typing import List, Sequence
from colorama import Fore, Style, just_fix_windows_console

from .simulator import SimulationResult
from .sweep import SweepRecord
from .utils import MetricsSummary

SEPARATOR = "---------------------------"


def format_metrics(metrics: MetricsSummary) -> List[str]:
    return [
        f"Average Waiting Time: {metrics.avg_waiting_time:.2f} seconds",
        f"Average Turnaround Time: {metrics.avg_turnaround_time:.2f} seconds",
    ]


def format_strategy(title: str, result: SimulationResult) -> List[str]:
    return [f"{title}:"] + format_metrics(result.metrics)


def format_sweep_record(record: SweepRecord) -> List[str]:
    return [
        record.label,
        f"Average Waiting Time: {record.avg_waiting_time:.2f} seconds",
        f"Average Turnaround Time: {record.avg_turnaround_time:.2f} seconds",
        f"Total Simulation Time: {record.total_simulation_time:.2f} seconds",
        f"Average Ready Queue Length: {record.avg_queue_length:.2f}",
        f"Maximum Ready Queue Length: {record.max_queue_length}",
        SEPARATOR,
    ]


class Reporter:
    """Prints simulation results to the terminal."""

    def __init__(self, color: bool = True) -> None:
        just_fix_windows_console()
        self.color = color

    def _paint(self, style: str, text: str) -> str:
        return style + text + Style.RESET_ALL if self.color else text

    def heading(self, text: str) -> None:
        print(self._paint(Style.BRIGHT + Fore.CYAN, text))

    def strategy(self, title: str, result: SimulationResult) -> None:
        header, *lines = format_strategy(title, result)
        self.heading(header)
        for line in lines:
            print(line)

    def sweep(self, records: Sequence[SweepRecord]) -> None:
        self.heading("Round-Robin Scheduling Analysis:")
        for record in records:
            label, *lines = format_sweep_record(record)
            print(self._paint(Fore.GREEN, label))
            for line in lines:
                print(line)

    def truncated(self, jobs_kept: int, skipped_tokens: int, bad_token: str | None) -> None:
        detail = f" at {bad_token!r}" if bad_token is not None else ""
        print(self._paint(Fore.YELLOW, f"Input truncated{detail}: kept {jobs_kept} jobs, skipped {skipped_tokens} token(s)"))

    def error(self, message: str) -> None:
        print(self._paint(Fore.RED, message))
