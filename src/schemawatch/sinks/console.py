from pathlib import Path

from rich.console import Console
from rich.markup import escape

from schemawatch.models import Severity
from schemawatch.sinks.memory import InMemoryDiagnosticSink

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class ConsoleDiagnosticSink(InMemoryDiagnosticSink):
    """Print diagnostics as they arrive while also keeping them in memory."""

    def __init__(self, console: Console | None = None, root: Path | None = None) -> None:
        super().__init__()
        self._console = console or Console()
        self._root = root

    def _display(self, file: Path) -> str:
        if self._root is not None and file.is_relative_to(self._root):
            return str(file.relative_to(self._root))
        return str(file)

    async def clear_diagnostics(self, file: Path) -> None:
        if self.diagnostics.get(file):
            self._console.print(f"[green]Cleared[/green] {escape(self._display(file))}")
        await super().clear_diagnostics(file)

    async def add_diagnostic(self, file: Path, message: str, line: int, severity: Severity) -> None:
        await super().add_diagnostic(file, message, line, severity)
        style = _SEVERITY_STYLES.get(severity, "white")
        self._console.print(
            f"[{style}]{severity.value}[/{style}] {escape(self._display(file))}:{max(line, 1)} {escape(message)}",
            highlight=False,
        )
