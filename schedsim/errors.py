from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for errors raised before or around a simulation run."""


class InvalidInput(SchedulerError):
    """The process set (or a workload describing one) cannot be simulated."""


class InvalidConfiguration(SchedulerError):
    """The run was requested with an unknown algorithm or a bad quantum."""
