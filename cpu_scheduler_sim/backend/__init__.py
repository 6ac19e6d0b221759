from .core import Job, JobLedger, JobState, EmptyInputError, InvalidJobError, SchedulingError, SimulatorError
from .simulator import simulate, Scheduler, SimulationResult
from .sweep import SweepConfig, SweepRecord, run_sweep

__all__ = [
    'Job', 'JobLedger', 'JobState',
    'SimulatorError', 'EmptyInputError', 'InvalidJobError', 'SchedulingError',
    'simulate', 'Scheduler', 'SimulationResult',
    'SweepConfig', 'SweepRecord', 'run_sweep',
]
