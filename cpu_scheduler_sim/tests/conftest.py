import os
import sys

import matplotlib
import pytest

matplotlib.use("Agg")


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so 'cpu_scheduler_sim' can be imported
    here = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(here, os.pardir, os.pardir))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


@pytest.fixture
def classic_records():
    """Four jobs arriving one time unit apart."""
    return [(0, 5), (1, 3), (2, 8), (3, 6)]


@pytest.fixture
def classic_ledger(classic_records):
    from cpu_scheduler_sim.backend.core import JobLedger
    return JobLedger.from_records(classic_records)
