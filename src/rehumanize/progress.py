"""Progress reporting for humanization calls."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

SUBMITTED = "SUBMITTED"
POLLING = "POLLING"
COMPLETED = "COMPLETED"
FALLBACK = "FALLBACK"


@dataclass(frozen=True, slots=True)
class PollEvent:
    """Immutable event emitted while a humanization call progresses.

    Attributes:
        state: One of ``SUBMITTED``, ``POLLING``, ``COMPLETED``, ``FALLBACK``.
        attempt: 1-based poll attempt, 0 before polling starts.
        max_attempts: Poll attempt ceiling for this call.
        detail: Human-readable detail string for verbose output.
    """

    state: str
    attempt: int
    max_attempts: int
    detail: str


class PollReporter:
    """Rich-based progress display for a single humanization call.

    Renders a live progress bar on TTY stderr. Falls back to structured
    log messages when stderr is not a terminal.
    """

    def __init__(
        self,
        console: Console,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        self._console = console
        self._verbose = verbose
        self._quiet = quiet
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._is_tty: bool = sys.stderr.isatty()
        self._logger: logging.Logger = logging.getLogger("rehumanize.progress")

    def start(self, max_attempts: int) -> None:
        """Begin a progress display for up to ``max_attempts`` polls."""
        if self._quiet or not self._is_tty:
            return
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("[cyan]Submitting", total=max_attempts)

    def callback(self, event: PollEvent) -> None:
        """Handle a poll event -- update progress display."""
        if self._quiet:
            return

        if self._progress is not None and self._task_id is not None:
            if event.attempt:
                self._progress.update(self._task_id, completed=event.attempt)
            self._progress.update(self._task_id, description=f"[cyan]{event.state.title()}")
        else:
            self._logger.info(
                "%s (%d/%d) %s", event.state, event.attempt, event.max_attempts, event.detail
            )

        if self._verbose and self._progress is not None:
            self._progress.console.print(f"  [dim]{event.detail}[/dim]")

    def finish(self) -> None:
        """Stop the progress display."""
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_id = None
