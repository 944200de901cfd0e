from pathlib import Path
from typing import Protocol


class SchemaProvider(Protocol):
    def get_schema_for(self, file: Path) -> str | None: ...


class HostCapabilities(Protocol):
    def has_syntax_checker(self, file: Path) -> bool: ...
