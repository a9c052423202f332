"""
schedsim package.

Discrete-event simulator for single-processor scheduling policies (FCFS,
SJF, SRTF, Round Robin) with a small command-line front end.
"""

from .algorithms import ALGORITHMS, run, run_algorithm
from .errors import InvalidConfiguration, InvalidInput, SchedulerError
from .models import Process, ProcessState, ScheduleResult

__all__ = [
    "ALGORITHMS",
    "InvalidConfiguration",
    "InvalidInput",
    "Process",
    "ProcessState",
    "ScheduleResult",
    "SchedulerError",
    "run",
    "run_algorithm",
]
