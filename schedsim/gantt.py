from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ProcessId, ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _segments(slices: List[ScheduledSlice]) -> Iterator[Tuple[Optional[ProcessId], int, int]]:
    """
    Walk the timeline from t=0 as ``(pid, width, end_time)`` segments.
    Idle stretches come out with ``pid=None``.
    """
    clock = 0
    for sl in sorted(slices, key=lambda s: s.start_time):
        if sl.start_time > clock:
            yield None, sl.start_time - clock, sl.start_time
        yield sl.pid, sl.end_time - sl.start_time, sl.end_time
        clock = sl.end_time


def _label(pid: ProcessId, width: int) -> str:
    return str(pid)[:width].ljust(width)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: ``=`` for busy units, ``.`` while the CPU idles.
    """
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    marks = "0"
    for pid, width, end in _segments(slices):
        bar += ("." if pid is None else "=") * width
        labels += " " * width if pid is None else _label(pid, width)
        marks += f"{end:>3}"

    return "\n".join(["Gantt Chart:", bar + "|", labels, marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Colored variant of :func:`render_gantt`; returns the chart panel and the
    time marks line.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    colors: Dict[ProcessId, str] = {}
    timeline = Text()
    labels = Text()
    marks = "0"

    for pid, width, end in _segments(slices):
        if pid is None:
            timeline.append(" " * width)
            labels.append(" " * width)
        else:
            color = colors.setdefault(pid, COLORS[len(colors) % len(COLORS)])
            timeline.append(" " * width, style=f"on {color}")
            labels.append(_label(pid, width), style="bold")
        marks += f"{end:>3}"

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), marks
