from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .metrics import cpu_utilization, format_report, summarize_process_metrics
from .models import Process, ScheduleResult
from .workload_io import demo_processes, load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_ALGORITHMS = ["fcfs", "sjf", "srtf", "rr"]

DEMO_TITLES = {
    "fcfs": "First Come First Serve (FCFS)",
    "sjf": "Shortest Job First (SJF)",
    "srtf": "Shortest Remaining Time First (SRTF)",
    "rr": "Round Robin (RR) with Time Quantum = {quantum}",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Single-processor scheduling simulator (FCFS, SJF, SRTF, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log engine activity (-v for runs, -vv for every dispatch).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    demo_parser = subparsers.add_parser(
        "demo",
        help="Run every algorithm on the built-in demo dataset and print the reports.",
    )
    demo_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in demo dataset).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by FCFS, SJF, SRTF).",
    )
    run_parser.add_argument(
        "--gantt",
        action="store_true",
        help="Show a Gantt chart of the schedule.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in demo dataset).",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=DEFAULT_ALGORITHMS,
        help="Algorithms to compare (default: fcfs sjf srtf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(workload: Optional[str]) -> List[Process]:
    if workload is None:
        return demo_processes()
    return load_workload(Path(workload))


def _print_result(result: ScheduleResult, console: Console, gantt: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
        console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Wait", "Turnaround", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        proc_table.add_column(h, justify="center" if h == "PID" else "right")

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    sys_table.add_row("Final clock", str(result.final_clock))
    if result.system:
        sys_table.add_row("Throughput (proc/time)", f"{result.system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{cpu_utilization(result.processes, result.final_clock):.2f}%")

    console.print(sys_table)


def _run_demo(quantum: int, console: Console) -> None:
    processes = demo_processes()
    for idx, alg in enumerate(DEFAULT_ALGORITHMS):
        q = quantum if alg == "rr" else None
        result = run_algorithm(alg, processes, quantum=q)
        if idx:
            console.print()
        console.print(DEMO_TITLES[alg].format(quantum=quantum), highlight=False)
        for line in format_report(result):
            console.print(line, highlight=False)


def _run_compare(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for alg in algorithms:
        q = quantum if alg.lower() == "rr" else None
        result = run_algorithm(alg, processes, quantum=q)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_response']:.2f}",
            f"{cpu_utilization(result.processes, result.final_clock):.2f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "demo":
            _run_demo(args.quantum, console)
            return 0

        if args.command == "run":
            result = run_algorithm(args.algorithm, _load(args.workload), quantum=args.quantum)
            _print_result(result, console, gantt=args.gantt)
            return 0

        if args.command == "compare":
            _run_compare(_load(args.workload), args.algorithms, args.quantum, console)
            return 0
    except SchedulerError as exc:
        logger.debug("Run aborted", exc_info=True)
        console.print(f"Error: {exc}", style="red", markup=False)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
