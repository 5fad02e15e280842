"""Phase progress display using the Rich library.

On an interactive terminal a progress bar counts the phase's wall-clock
budget down. When output is not a terminal (CI, redirected logs) the phase
start is logged at STATUS level instead and the bar is skipped.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

if TYPE_CHECKING:
    from logging import Logger

UpdateFunc = Callable[..., None]


def is_interactive_terminal() -> bool:
    """Detect if stderr is an interactive terminal."""
    console = Console(stderr=True)
    return console.is_terminal


@contextmanager
def phase_progress(
    description: str,
    duration: float,
    logger: Optional["Logger"] = None,
    transient: bool = True,
) -> Iterator[UpdateFunc]:
    """Context manager yielding ``update(completed=seconds)`` for a timed phase.

    Args:
        description: Text shown next to the bar, e.g. ``"set phase"``.
        duration: Phase length in seconds, the bar's total.
        logger: Logger for the non-interactive status line.
        transient: Clear the bar when the phase ends (default True).

    Example:
        >>> with phase_progress("set phase", 10.0, logger) as update:
        ...     update(completed=2.5)
    """
    if not is_interactive_terminal():
        if logger is not None:
            logger.status(f"Running {description} for {duration:g}s...")

        def noop_update(advance: float = 0, completed: Optional[float] = None) -> None:
            pass

        yield noop_update
        return

    columns = [
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
    ]

    # The bar lives on stderr next to the log; stdout carries only the summary.
    progress = Progress(*columns, console=Console(stderr=True), transient=transient)
    task_id: TaskID = TaskID(0)

    try:
        progress.start()
        task_id = progress.add_task(description, total=duration)

        def update_func(advance: float = 0, completed: Optional[float] = None) -> None:
            if completed is not None:
                progress.update(task_id, completed=completed)
            else:
                progress.update(task_id, advance=advance)

        yield update_func
    finally:
        progress.stop()


__all__ = [
    "is_interactive_terminal",
    "phase_progress",
]
