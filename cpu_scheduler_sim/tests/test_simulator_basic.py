import pytest

from cpu_scheduler_sim.backend.core import EmptyInputError, JobLedger, SchedulingError
from cpu_scheduler_sim.backend.simulator import simulate, Scheduler
from cpu_scheduler_sim.backend.utils import compute_metrics, jobs_to_dataframe, EventLogger


def test_fcfs_and_sjf_averages(classic_ledger):
    fcfs = simulate(classic_ledger, policy=Scheduler.FCFS)
    sjf = simulate(classic_ledger, policy=Scheduler.SJF)
    assert fcfs.avg_waiting_time == pytest.approx(5.75)
    assert fcfs.avg_turnaround_time == pytest.approx(11.25)
    assert sjf.avg_waiting_time == pytest.approx(5.25)
    assert sjf.avg_turnaround_time == pytest.approx(10.75)
    assert fcfs.rr_stats is None
    assert fcfs.total_time == 22


def test_rr_result_carries_stats(classic_ledger):
    result = simulate(classic_ledger, policy=Scheduler.RR, time_quantum=2)
    assert result.rr_stats.total_time == result.total_time == 22
    assert result.avg_waiting_time == pytest.approx(8.75)
    assert result.avg_turnaround_time == pytest.approx(14.25)


def test_runs_leave_ledger_untouched(classic_ledger):
    simulate(classic_ledger, policy=Scheduler.RR, time_quantum=1, context_switch_time=0.2)
    assert all(job.completion_time is None for job in classic_ledger)
    assert [job.remaining_time for job in classic_ledger] == [5, 3, 8, 6]
    again = simulate(classic_ledger, policy=Scheduler.FCFS)
    assert again.avg_waiting_time == pytest.approx(5.75)


def test_empty_ledger_raises():
    with pytest.raises(EmptyInputError):
        simulate(JobLedger(), policy=Scheduler.FCFS)
    with pytest.raises(EmptyInputError):
        simulate(JobLedger(), policy=Scheduler.RR, time_quantum=0.05)


def test_unknown_policy():
    with pytest.raises(ValueError):
        simulate(JobLedger.from_records([(0, 1)]), policy="LOTTERY")


def test_event_log_records_timeline(classic_ledger, tmp_path):
    logger = EventLogger()
    simulate(classic_ledger, policy=Scheduler.RR, time_quantum=2, context_switch_time=1, logger=logger)
    reasons = {seg["reason"] for seg in logger.timeline}
    assert "context_switch" in reasons
    completes = [e for e in logger.job_events if e["event"] == "complete"]
    assert len(completes) == 4

    logger.export_json(str(tmp_path / "events.json"))
    logger.export_csv(str(tmp_path / "run"))
    assert (tmp_path / "events.json").exists()
    assert (tmp_path / "run_timeline.csv").read_text().startswith("start,end,job_id,policy,reason")


def test_metrics_require_completed_jobs(classic_ledger):
    with pytest.raises(SchedulingError):
        compute_metrics(classic_ledger.copy())
    with pytest.raises(EmptyInputError):
        compute_metrics([])


def test_jobs_dataframe(classic_ledger):
    result = simulate(classic_ledger, policy=Scheduler.SJF)
    df = jobs_to_dataframe(result.jobs)
    assert list(df["id"]) == [0, 1, 2, 3]
    assert list(df["completion_time"]) == [5, 8, 22, 14]
    assert df["waiting_time"].mean() == pytest.approx(5.25)
