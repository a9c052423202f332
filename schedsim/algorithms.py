from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Tuple

from .errors import InvalidConfiguration, InvalidInput
from .metrics import compute_system_metrics
from .models import Process, ProcessId, ProcessState, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def pid_order_key(pid: ProcessId) -> tuple:
    """
    Sort key for process ids: integers numerically and ahead of any other
    ids, which compare by their string form.
    """
    if isinstance(pid, int) and not isinstance(pid, bool):
        return (0, pid, "")
    return (1, 0, str(pid))


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validated_copies(processes: Iterable[Process]) -> List[Process]:
    procs = list(processes)
    if not procs:
        raise InvalidInput("At least one process is required")

    seen: set = set()
    for p in procs:
        if not (_is_int(p.pid) or isinstance(p.pid, str)):
            raise InvalidInput(f"Process id must be an integer or a string, got {p.pid!r}")
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id {p.pid!r}")
        seen.add(p.pid)
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidInput(
                f"Process {p.pid!r}: arrival_time must be a non-negative integer, got {p.arrival_time!r}"
            )
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidInput(
                f"Process {p.pid!r}: burst_time must be a positive integer, got {p.burst_time!r}"
            )

    return [p.fresh_copy() for p in procs]


def _check_quantum(quantum: Optional[int]) -> int:
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidConfiguration(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


class _Simulation:
    """
    State owned by a single policy run.

    Holds private copies of the processes (pending ones keyed by pid), the
    virtual clock, the completed sequence in completion order and the
    execution timeline. Nothing here refers back to the caller's objects.
    """

    def __init__(self, processes: Iterable[Process]):
        self.pending: Dict[ProcessId, Process] = {p.pid: p for p in _validated_copies(processes)}
        self.time = 0
        self.completed: List[Process] = []
        self.timeline: List[ScheduledSlice] = []
        self._running: Optional[Process] = None

    @property
    def done(self) -> bool:
        return not self.pending

    def ready(self) -> List[Process]:
        """Processes that have arrived by the current clock and are not finished."""
        ready = [p for p in self.pending.values() if p.arrival_time <= self.time]
        for p in ready:
            if p.state is ProcessState.UNARRIVED:
                p.state = ProcessState.READY
        return ready

    def jump_to(self, time: int) -> None:
        if time > self.time:
            logger.debug("t=%d: cpu idle until t=%d", self.time, time)
            self.time = time

    def jump_to_next_arrival(self) -> None:
        self.jump_to(min(p.arrival_time for p in self.pending.values()))

    def preempt(self, p: Process) -> None:
        p.state = ProcessState.READY
        logger.debug("t=%d: preempt %r (remaining %d)", self.time, p.pid, p.remaining_time)

    def execute(self, p: Process, units: int) -> None:
        """Run ``p`` for ``units`` time units starting at the current clock."""
        previous = self._running
        if previous is not None and previous is not p and previous.state is ProcessState.RUNNING:
            self.preempt(previous)

        if p.response_time is None:
            p.start_time = self.time
            p.response_time = self.time - p.arrival_time
            logger.debug("t=%d: first dispatch of %r", self.time, p.pid)

        p.state = ProcessState.RUNNING
        self._running = p

        start = self.time
        self.time += units
        p.remaining_time -= units

        last = self.timeline[-1] if self.timeline else None
        if last is not None and last.pid == p.pid and last.end_time == start:
            last.end_time = self.time
        else:
            self.timeline.append(ScheduledSlice(pid=p.pid, start_time=start, end_time=self.time))

        if p.remaining_time == 0:
            p.complete(self.time)
            del self.pending[p.pid]
            self.completed.append(p)
            self._running = None
            logger.debug("t=%d: %r completed", self.time, p.pid)

    def result(self, algorithm: str, quantum: Optional[int] = None) -> ScheduleResult:
        result = ScheduleResult(
            algorithm=algorithm,
            quantum=quantum,
            processes=self.completed,
            timeline=self.timeline,
            final_clock=self.time,
        )
        compute_system_metrics(result)
        logger.info("%s finished %d processes at t=%d", algorithm, len(self.completed), self.time)
        return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    sim = _Simulation(processes)

    # sorted() is stable: equal arrival times keep input order.
    for p in sorted(sim.pending.values(), key=lambda x: x.arrival_time):
        sim.jump_to(p.arrival_time)
        p.state = ProcessState.READY
        sim.execute(p, p.burst_time)

    return sim.result("FCFS")


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. A shorter job
    arriving later waits for the running one to finish.
    """
    sim = _Simulation(processes)

    while not sim.done:
        ready = sim.ready()
        if not ready:
            sim.jump_to_next_arrival()
            continue

        # Tie-breaker: earlier arrival, then id.
        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time, pid_order_key(x.pid)))
        sim.execute(p, p.burst_time)

    return sim.result("SJF (non-preemptive)")


def schedule_srtf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The choice is re-evaluated at every unit tick, so a newly arrived process
    with less work left takes the CPU at the tick it arrives.
    """
    sim = _Simulation(processes)

    while not sim.done:
        ready = sim.ready()
        if not ready:
            sim.jump_to_next_arrival()
            continue

        p = min(ready, key=lambda x: (x.remaining_time, x.arrival_time, pid_order_key(x.pid)))
        sim.execute(p, 1)

    return sim.result("SRTF")


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs (or exactly when it ends) join
    the ready queue before the process that was just running is put back.
    """
    sim = _Simulation(processes)
    quantum = _check_quantum(quantum)

    arrivals: Deque[Process] = deque(
        sorted(sim.pending.values(), key=lambda x: (x.arrival_time, pid_order_key(x.pid)))
    )
    # Ready queue as pids; records are looked up in sim.pending.
    ready: Deque[ProcessId] = deque()

    def enqueue_new_arrivals() -> None:
        while arrivals and arrivals[0].arrival_time <= sim.time:
            p = arrivals.popleft()
            p.state = ProcessState.READY
            ready.append(p.pid)

    while not sim.done:
        enqueue_new_arrivals()
        if not ready:
            sim.jump_to_next_arrival()
            continue

        p = sim.pending[ready.popleft()]
        sim.execute(p, min(quantum, p.remaining_time))

        enqueue_new_arrivals()
        if not p.completed:
            sim.preempt(p)
            ready.append(p.pid)

    return sim.result("Round Robin", quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    processes = list(processes)
    key = name.lower()
    if key not in ALGORITHMS:
        raise InvalidConfiguration(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    logger.info("Running %s on %d processes", key, len(processes))
    return ALGORITHMS[key](processes, quantum=quantum)


def run(policy: str, processes: List[Process], quantum: Optional[int] = None) -> Tuple[List[Process], int]:
    """
    Simulate ``processes`` under ``policy`` and return the completed processes
    in completion order together with the final clock value.
    """
    result = run_algorithm(policy, processes, quantum=quantum)
    return result.processes, result.final_clock
