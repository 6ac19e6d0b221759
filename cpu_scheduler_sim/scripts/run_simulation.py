from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from cpu_scheduler_sim.backend.core import EmptyInputError, InvalidJobError
from cpu_scheduler_sim.backend.loader import DEFAULT_INPUT, load_jobs
from cpu_scheduler_sim.backend.reporter import Reporter
from cpu_scheduler_sim.backend.simulator import simulate, Scheduler
from cpu_scheduler_sim.backend.sweep import OVERHEAD_OPTIONS, QUANTUM_VALUES, SweepConfig, export_sweep, run_sweep
from cpu_scheduler_sim.backend.utils import jobs_to_dataframe


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="FCFS / SJF / Round Robin scheduling simulator")
    p.add_argument("--input", type=str, default=DEFAULT_INPUT, help="File of (arrival, burst) pairs in seconds")
    p.add_argument("--quantum", type=float, nargs="+", default=list(QUANTUM_VALUES), help="Round Robin quanta in ms")
    p.add_argument("--overhead", type=float, nargs="+", default=list(OVERHEAD_OPTIONS), help="Context switch overheads in ms")
    p.add_argument("--divisor", type=float, default=1000.0, help="Converts grid values to job time units (default: ms -> s)")
    p.add_argument("--workers", type=int, default=1, help="Threads used for the sweep")
    p.add_argument("--out", type=str, default=None, help="Directory for CSV/JSON exports and plots")
    p.add_argument("--gantt", choices=list(Scheduler.ALL), default=None, help="Save a Gantt chart for this policy (needs --out)")
    p.add_argument("--no-color", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    reporter = Reporter(color=not args.no_color)

    try:
        loaded = load_jobs(args.input)
    except FileNotFoundError:
        reporter.error(f"Input file not found: {args.input}")
        return 1
    except InvalidJobError as e:
        reporter.error(f"Invalid job record: {e}")
        return 1

    ledger = loaded.ledger
    if loaded.truncated:
        reporter.truncated(len(ledger), loaded.skipped_tokens, loaded.bad_token)

    try:
        config = SweepConfig(
            overhead_options=tuple(args.overhead),
            quantum_values=tuple(args.quantum),
            time_unit_divisor=args.divisor,
            workers=args.workers,
        )
        fcfs = simulate(ledger, policy=Scheduler.FCFS)
        sjf = simulate(ledger, policy=Scheduler.SJF)
        records = run_sweep(ledger, config)
    except EmptyInputError:
        reporter.error(f"No jobs could be read from {args.input}")
        return 1
    except ValueError as e:
        reporter.error(str(e))
        return 1

    reporter.strategy("First-Come, First-Served Scheduling", fcfs)
    print()
    reporter.strategy("Shortest-Job-First Scheduling", sjf)
    print()
    reporter.sweep(records)

    if args.out:
        from cpu_scheduler_sim.backend.visualizer import plot_gantt, plot_sweep

        out = Path(args.out)
        csv_path = export_sweep(records, out)
        jobs_to_dataframe(fcfs.jobs).to_csv(out / "fcfs_jobs.csv", index=False)
        jobs_to_dataframe(sjf.jobs).to_csv(out / "sjf_jobs.csv", index=False)
        plot_sweep(records, "avg_waiting_time", str(out / "rr_sweep_waiting.png"))
        plot_sweep(records, "avg_turnaround_time", str(out / "rr_sweep_turnaround.png"))
        if args.gantt:
            # Round Robin chart uses the first grid cell
            result = simulate(
                ledger,
                policy=args.gantt,
                time_quantum=config.quantum_values[0] / config.time_unit_divisor,
                context_switch_time=config.overhead_options[0] / config.time_unit_divisor,
            )
            result.logger.export_json(str(out / f"{args.gantt.lower()}_events.json"))
            plot_gantt(result.jobs, result.logger, str(out / f"{args.gantt.lower()}_gantt.png"), title=f"{args.gantt} Gantt chart")
        reporter.heading(f"Results written to {out} (sweep table: {csv_path.name})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
