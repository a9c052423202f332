from pathlib import Path

from schedsim.cli import main


def test_demo_prints_four_reports(capsys):
    assert main(["demo"]) == 0
    out = capsys.readouterr().out
    assert "First Come First Serve (FCFS)" in out
    assert "Shortest Job First (SJF)" in out
    assert "Shortest Remaining Time First (SRTF)" in out
    assert "Round Robin (RR) with Time Quantum = 2" in out
    assert "Average Turnaround Time: 14.25" in out
    assert "Average Waiting Time: 4.50" in out
    assert out.count("CPU Utilization: 100.00%") == 4


def test_run_with_gantt(capsys):
    assert main(["run", "-a", "srtf", "--gantt"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm: SRTF" in out
    assert "Gantt Chart" in out


def test_run_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    assert main(["run", "-a", "rr", "-q", "1", "-w", str(p)]) == 0
    assert "Quantum: 1" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "-a", "fcfs", "rr"]) == 0
    assert "Algorithm comparison" in capsys.readouterr().out


def test_bad_quantum_reports_error(capsys):
    assert main(["run", "-a", "rr", "-q", "0"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_unknown_algorithm_reports_error(capsys):
    assert main(["run", "-a", "lottery"]) == 1
    assert "Unknown algorithm" in capsys.readouterr().out
