from pathlib import Path
from typing import Protocol

from schemawatch.models import Severity


class DiagnosticSink(Protocol):
    async def clear_diagnostics(self, file: Path) -> None: ...

    async def add_diagnostic(self, file: Path, message: str, line: int, severity: Severity) -> None: ...
