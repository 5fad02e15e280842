import sys

from typing import List, TextIO

from kvbench.runner import PhaseResult


def format_backend_line(name: str) -> str:
    return f"backend: {name}"


def format_phase_header(phase: str) -> str:
    return f"==== {phase} ===="


def format_phase_summary(result: PhaseResult) -> List[str]:
    return [
        f"total: {result.total}",
        f"ops: {result.ops_per_sec}",
        f"ok: {result.ok}",
        f"err: {result.err}",
    ]


def print_lines(lines: List[str], out: TextIO = None) -> None:
    out = out or sys.stdout
    for line in lines:
        print(line, file=out)
    out.flush()
