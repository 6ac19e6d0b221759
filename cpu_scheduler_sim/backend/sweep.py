from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Sequence, Tuple, Union
import logging

import pandas as pd

from .core import JobLedger
from .simulator import simulate, Scheduler

logger = logging.getLogger(__name__)

OVERHEAD_OPTIONS: Tuple[int, ...] = (0, 5, 10, 15, 20, 25)
QUANTUM_VALUES: Tuple[int, ...] = (50, 100, 250, 500)


@dataclass
class SweepConfig:
    """Round Robin parameter grid.

    Grid values are in milliseconds; jobs are in seconds. Each value is
    divided by `time_unit_divisor` before it reaches the scheduler.
    """
    overhead_options: Sequence[float] = OVERHEAD_OPTIONS
    quantum_values: Sequence[float] = QUANTUM_VALUES
    time_unit_divisor: float = 1000.0
    workers: int = 1

    def __post_init__(self) -> None:
        if self.time_unit_divisor <= 0:
            raise ValueError(f"time_unit_divisor must be positive, got {self.time_unit_divisor!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers!r}")

    def cells(self) -> List[Tuple[float, float]]:
        """(overhead, quantum) pairs, overhead outer and quantum inner."""
        return [(overhead, quantum) for overhead in self.overhead_options for quantum in self.quantum_values]


@dataclass
class SweepRecord:
    quantum: float
    overhead: float
    avg_waiting_time: float
    avg_turnaround_time: float
    total_simulation_time: float
    avg_queue_length: float
    max_queue_length: int
    preemptions: int

    @property
    def label(self) -> str:
        return f"Round Robin with Quantum: {self.quantum:g}ms and Overhead: {self.overhead:g}ms"


def run_cell(ledger: JobLedger, quantum: float, overhead: float, time_unit_divisor: float = 1000.0) -> SweepRecord:
    """Run Round Robin once on a fresh ledger copy for one grid cell."""
    result = simulate(
        ledger,
        policy=Scheduler.RR,
        time_quantum=quantum / time_unit_divisor,
        context_switch_time=overhead / time_unit_divisor,
    )
    stats = result.rr_stats
    logger.debug("cell quantum=%sms overhead=%sms: total time %.3f", quantum, overhead, stats.total_time)
    return SweepRecord(
        quantum=quantum,
        overhead=overhead,
        avg_waiting_time=result.avg_waiting_time,
        avg_turnaround_time=result.avg_turnaround_time,
        total_simulation_time=stats.total_time,
        avg_queue_length=stats.avg_queue_length,
        max_queue_length=stats.max_queue_length,
        preemptions=stats.preemptions,
    )


def run_sweep(ledger: JobLedger, config: SweepConfig | None = None) -> List[SweepRecord]:
    """Run Round Robin over every (overhead, quantum) cell of the grid.

    Records come back in grid order regardless of `config.workers`.
    """
    config = config or SweepConfig()
    cells = config.cells()

    def _run(cell: Tuple[float, float]) -> SweepRecord:
        overhead, quantum = cell
        return run_cell(ledger, quantum, overhead, config.time_unit_divisor)

    if config.workers == 1:
        return [_run(cell) for cell in cells]

    # Executor.map yields in submission order, which is grid order.
    with ThreadPoolExecutor(max_workers=config.workers) as pool:
        return list(pool.map(_run, cells))


def sweep_to_dataframe(records: Sequence[SweepRecord]) -> pd.DataFrame:
    columns = [
        "quantum", "overhead", "avg_waiting_time", "avg_turnaround_time",
        "total_simulation_time", "avg_queue_length", "max_queue_length", "preemptions",
    ]
    return pd.DataFrame([asdict(r) for r in records], columns=columns)


def export_sweep(records: Sequence[SweepRecord], out_dir: Union[str, Path]) -> Path:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    df = sweep_to_dataframe(records)
    df.to_csv(out / "rr_sweep.csv", index=False)
    (out / "rr_sweep.json").write_text(df.to_json(orient="records", indent=2), encoding="utf-8")
    return out / "rr_sweep.csv"
