from pathlib import Path

import pytest

from schedsim.errors import InvalidInput
from schedsim.models import Process
from schedsim.workload_io import DEMO_WORKLOAD, demo_processes, load_workload, processes_from_tuples


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"pid":7,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].pid == "A"
    assert procs[1].pid == 7
    assert procs[1].arrival_time == 1
    assert procs[1].remaining_time == 2


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\n12,1,2\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    # Integer-looking ids are read as integers so they order numerically.
    assert procs[1].pid == 12
    assert procs[1].burst_time == 2


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1 0 3\n")
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_malformed_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":"soon","burst_time":3}]')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_json_must_be_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A","arrival_time":0,"burst_time":3}')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_demo_dataset():
    procs = demo_processes()
    assert [(p.pid, p.arrival_time, p.burst_time) for p in procs] == list(DEMO_WORKLOAD)
    # Each call builds new records.
    assert procs[0] is not demo_processes()[0]


def test_processes_from_tuples():
    (p,) = processes_from_tuples([("x", 2, 5)])
    assert p == Process(pid="x", arrival_time=2, burst_time=5)
    assert p.completion_time is None


def test_json_float_times_rejected(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0.9,"burst_time":2.7}]')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_json_bool_times_rejected(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":true}]')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_json_numeric_strings_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":" 4 ","burst_time":"3"}]')
    (proc,) = load_workload(p)
    assert (proc.arrival_time, proc.burst_time) == (4, 3)
