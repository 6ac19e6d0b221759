from __future__ import annotations

import pytest

from cpu_scheduler_sim.backend.reporter import Reporter, SEPARATOR, format_metrics, format_sweep_record
from cpu_scheduler_sim.backend.simulator import simulate, Scheduler
from cpu_scheduler_sim.backend.sweep import SweepRecord
from cpu_scheduler_sim.backend.utils import MetricsSummary
from cpu_scheduler_sim.scripts.run_simulation import main


@pytest.fixture
def input_file(tmp_path, classic_records):
    path = tmp_path / "process_data.txt"
    path.write_text("\n".join(f"{a} {b}" for a, b in classic_records) + "\n", encoding="utf-8")
    return path


def test_format_metrics():
    lines = format_metrics(MetricsSummary(avg_waiting_time=5.75, avg_turnaround_time=11.25, job_count=4))
    assert lines == [
        "Average Waiting Time: 5.75 seconds",
        "Average Turnaround Time: 11.25 seconds",
    ]


def test_format_sweep_record():
    record = SweepRecord(
        quantum=50, overhead=5, avg_waiting_time=1.234, avg_turnaround_time=2.5,
        total_simulation_time=10.0, avg_queue_length=1.5, max_queue_length=3, preemptions=7,
    )
    lines = format_sweep_record(record)
    assert lines[0] == "Round Robin with Quantum: 50ms and Overhead: 5ms"
    assert "Average Waiting Time: 1.23 seconds" in lines
    assert "Total Simulation Time: 10.00 seconds" in lines
    assert "Average Ready Queue Length: 1.50" in lines
    assert "Maximum Ready Queue Length: 3" in lines
    assert lines[-1] == SEPARATOR


def test_reporter_without_color(classic_ledger, capsys):
    Reporter(color=False).strategy("Shortest-Job-First Scheduling", simulate(classic_ledger, policy=Scheduler.SJF))
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "Shortest-Job-First Scheduling:",
        "Average Waiting Time: 5.25 seconds",
        "Average Turnaround Time: 10.75 seconds",
    ]


class TestCommandLine:

    def test_full_report(self, input_file, capsys):
        code = main(["--input", str(input_file), "--no-color"])
        out = capsys.readouterr().out
        assert code == 0
        assert "First-Come, First-Served Scheduling:" in out
        assert "Average Waiting Time: 5.75 seconds" in out
        assert "Average Waiting Time: 5.25 seconds" in out
        assert out.count("Round Robin with Quantum:") == 24

    def test_custom_grid(self, input_file, capsys):
        code = main(["--input", str(input_file), "--no-color", "--quantum", "2", "--overhead", "0", "--divisor", "1"])
        out = capsys.readouterr().out
        assert code == 0
        assert out.count("Round Robin with Quantum:") == 1
        assert "Total Simulation Time: 22.00 seconds" in out
        assert "Maximum Ready Queue Length: 4" in out

    def test_truncated_input_is_reported(self, tmp_path, capsys):
        path = tmp_path / "data.txt"
        path.write_text("0 5\n1 3\noops\n", encoding="utf-8")
        assert main(["--input", str(path), "--no-color", "--quantum", "100", "--overhead", "0"]) == 0
        assert "Input truncated at 'oops': kept 2 jobs" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert main(["--input", str(tmp_path / "missing.txt"), "--no-color"]) == 1
        assert "Input file not found" in capsys.readouterr().out

    def test_empty_input(self, tmp_path, capsys):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert main(["--input", str(path), "--no-color"]) == 1
        assert "No jobs could be read" in capsys.readouterr().out

    def test_bad_quantum(self, input_file, capsys):
        assert main(["--input", str(input_file), "--no-color", "--quantum", "0"]) == 1

    def test_writes_outputs(self, input_file, tmp_path, capsys):
        out_dir = tmp_path / "results"
        code = main([
            "--input", str(input_file), "--no-color", "--workers", "2",
            "--quantum", "500", "1000", "--overhead", "0", "25", "--out", str(out_dir), "--gantt", "RR",
        ])
        assert code == 0
        for name in ("rr_sweep.csv", "rr_sweep.json", "fcfs_jobs.csv", "sjf_jobs.csv",
                     "rr_sweep_waiting.png", "rr_gantt.png", "rr_events.json"):
            assert (out_dir / name).exists(), name
