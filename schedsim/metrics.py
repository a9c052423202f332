from __future__ import annotations

from typing import List, Sequence

from .errors import InvalidInput
from .models import Process, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization for a finished run and store them
    on the result.
    """
    makespan = result.final_clock
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: Sequence[Process]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        raise InvalidInput("Cannot average metrics over an empty set of completed processes")

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }


def cpu_utilization(processes: Sequence[Process], final_clock: int) -> float:
    """
    Percentage of the time between 0 and ``final_clock`` the CPU spent busy.
    """
    if not processes:
        raise InvalidInput("Cannot compute utilization without completed processes")
    if final_clock <= 0:
        raise InvalidInput(f"Final clock must be positive, got {final_clock}")

    return 100.0 * sum(p.burst_time for p in processes) / final_clock


def format_report(result: ScheduleResult) -> List[str]:
    summary = summarize_process_metrics(result.processes)
    utilization = cpu_utilization(result.processes, result.final_clock)
    return [
        f"Average Turnaround Time: {summary['avg_turnaround']:.2f}",
        f"Average Waiting Time: {summary['avg_waiting']:.2f}",
        f"Average Response Time: {summary['avg_response']:.2f}",
        f"CPU Utilization: {utilization:.2f}%",
    ]
