import pytest

from schedsim.algorithms import run_algorithm
from schedsim.errors import InvalidInput
from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.metrics import cpu_utilization, format_report, summarize_process_metrics
from schedsim.models import Process
from schedsim.workload_io import demo_processes


def test_fcfs_demo_report():
    res = run_algorithm("fcfs", demo_processes())
    assert format_report(res) == [
        "Average Turnaround Time: 14.25",
        "Average Waiting Time: 8.75",
        "Average Response Time: 8.75",
        "CPU Utilization: 100.00%",
    ]


def test_rr_demo_report():
    res = run_algorithm("rr", demo_processes(), quantum=2)
    assert format_report(res) == [
        "Average Turnaround Time: 13.75",
        "Average Waiting Time: 8.25",
        "Average Response Time: 2.25",
        "CPU Utilization: 100.00%",
    ]


def test_summary_srtf():
    res = run_algorithm("srtf", demo_processes())
    summary = summarize_process_metrics(res.processes)
    assert summary == {"avg_waiting": 4.5, "avg_turnaround": 10.0, "avg_response": 1.0}


def test_utilization_below_100_with_idle_time():
    res = run_algorithm("sjf", [Process(1, 2, 3), Process(2, 10, 1)])
    util = cpu_utilization(res.processes, res.final_clock)
    assert util == pytest.approx(100.0 * 4 / 11)
    assert res.system.makespan == 11
    assert res.system.cpu_busy_time == 4


def test_empty_metrics_are_errors():
    with pytest.raises(InvalidInput):
        summarize_process_metrics([])
    with pytest.raises(InvalidInput):
        cpu_utilization([], 10)


def test_zero_clock_is_an_error():
    with pytest.raises(InvalidInput):
        cpu_utilization([Process(1, 0, 1)], 0)


def test_render_gantt_marks_idle_time():
    res = run_algorithm("fcfs", [Process(1, 2, 3), Process(2, 10, 1)])
    chart = render_gantt(res.timeline)
    assert chart.splitlines()[1] == "|..===.....=|"


def test_rich_gantt_time_marks():
    res = run_algorithm("fcfs", demo_processes())
    _, marks = build_rich_gantt(res.timeline)
    assert marks == "0 10 16 18 22"
    assert build_rich_gantt([])[1] == ""


def test_rich_gantt_marks_idle_time():
    res = run_algorithm("fcfs", [Process(1, 2, 3), Process(2, 10, 1)])
    _, marks = build_rich_gantt(res.timeline)
    assert marks == "0  2  5 10 11"
    assert render_gantt(res.timeline).splitlines()[3] == marks
