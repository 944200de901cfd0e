from pathlib import Path
from typing import Protocol


class Workspace(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def list_siblings(self, directory: Path) -> set[str]: ...
