from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union

ProcessId = Union[int, str]


class ProcessState(enum.Enum):
    UNARRIVED = "unarrived"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class Process:
    """
    A process and its timing record.

    The timing fields stay ``None`` until the engine fills them in;
    ``response_time`` is set at first dispatch, the rest at completion.
    """

    pid: ProcessId
    arrival_time: int
    burst_time: int
    remaining_time: Optional[int] = None
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None
    response_time: Optional[int] = None
    state: ProcessState = ProcessState.UNARRIVED

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    @property
    def completed(self) -> bool:
        return self.state is ProcessState.COMPLETED

    def fresh_copy(self) -> "Process":
        """Return an unscheduled copy carrying only identity and timing inputs."""
        return Process(pid=self.pid, arrival_time=self.arrival_time, burst_time=self.burst_time)

    def complete(self, now: int) -> None:
        if self.completed:
            raise RuntimeError(f"Process {self.pid!r} completed twice")
        self.completion_time = now
        self.turnaround_time = now - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time
        self.state = ProcessState.COMPLETED


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: ProcessId
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    final_clock: int = 0
    system: Optional[SystemMetrics] = None
