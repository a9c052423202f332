from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import InvalidInput
from .models import Process, ProcessId

logger = logging.getLogger(__name__)

# (pid, arrival_time, burst_time)
DEMO_WORKLOAD: Tuple[Tuple[int, int, int], ...] = (
    (1, 0, 10),
    (2, 1, 6),
    (3, 3, 2),
    (4, 5, 4),
)


def processes_from_tuples(rows: Iterable[Tuple[ProcessId, int, int]]) -> List[Process]:
    return [Process(pid=pid, arrival_time=arrival, burst_time=burst) for pid, arrival, burst in rows]


def demo_processes() -> List[Process]:
    return processes_from_tuples(DEMO_WORKLOAD)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidInput(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        return [_process_from_mapping(row) for row in csv.DictReader(f)]


def _coerce_pid(value) -> ProcessId:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("empty pid")
    try:
        return int(text)
    except ValueError:
        return text


def _coerce_time(value) -> int:
    # Whole numbers only; JSON floats and booleans do not qualify.
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"not an integer: {value!r}")


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _coerce_pid(mapping["pid"])
        arrival_time = _coerce_time(mapping["arrival_time"])
        burst_time = _coerce_time(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time)
