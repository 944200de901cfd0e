from pathlib import Path

from schemawatch.models import Diagnostic, Severity


class InMemoryDiagnosticSink:
    """Keep diagnostics per file in memory.

    Implements the ``DiagnosticSink`` protocol.
    """

    def __init__(self) -> None:
        self.diagnostics: dict[Path, list[Diagnostic]] = {}

    async def clear_diagnostics(self, file: Path) -> None:
        self.diagnostics.pop(file, None)

    async def add_diagnostic(self, file: Path, message: str, line: int, severity: Severity) -> None:
        self.diagnostics.setdefault(file, []).append(
            Diagnostic(file=file, message=message, line=max(line, 1), severity=severity)
        )

    def diagnostics_for(self, file: Path) -> list[Diagnostic]:
        return list(self.diagnostics.get(file, []))

    def all_diagnostics(self) -> list[Diagnostic]:
        rows = [d for items in self.diagnostics.values() for d in items]
        return sorted(rows, key=lambda d: (str(d.file), d.line))

    def error_count(self) -> int:
        return sum(1 for d in self.all_diagnostics() if d.severity == Severity.ERROR)
