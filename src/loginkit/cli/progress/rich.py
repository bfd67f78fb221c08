"""Rich-based login progress display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.markup import escape

from loginkit.contracts.progress import LoginProgress


class RichLoginProgress(LoginProgress):
    """Live terminal status spinner powered by Rich.

    Use as a context manager so the live display is properly started/stopped::

        with RichLoginProgress() as progress:
            result = await flow.run(identity)
    """

    _PHASE_LABELS: ClassVar[dict[str, str]] = {
        "Identity": "[cyan]Resolving identity[/]",
        "Authenticate": "[green]Waiting for approval[/]",
        "Persist": "[blue]Storing credentials[/]",
        "Side channel": "[magenta]Seeding proxy daemon[/]",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._status = self._console.status("")
        self._phase: str | None = None

    def __enter__(self) -> RichLoginProgress:
        self._status.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._status.stop()

    def phase_start(self, phase: str) -> None:
        self._phase = phase
        self._status.update(self._PHASE_LABELS.get(phase, phase))

    def phase_done(self, phase: str) -> None:
        self._console.print(f"[green]✓[/green] {self._label(phase)}")

    def phase_error(self, phase: str, error: BaseException) -> None:
        self._console.print(f"[red]✗[/red] {self._label(phase)}: {escape(str(error))}")

    def consent_required(self, url: str) -> None:
        self._console.print(f"Visit [bold]{escape(url)}[/bold] to approve this login")

    def attempt(self, number: int, total: int) -> None:
        if self._phase != "Authenticate" or number == 1:
            return
        label = self._PHASE_LABELS["Authenticate"]
        self._status.update(f"{label} (attempt {number}/{total})")

    def _label(self, phase: str) -> str:
        label = self._PHASE_LABELS.get(phase)
        if label is None:
            return escape(phase)
        return label
