import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalWorkspace:
    """Read files from the local file system.

    Implements the ``Workspace`` protocol.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8-sig")

    def list_siblings(self, directory: Path) -> set[str]:
        try:
            return {child.name for child in directory.iterdir()}
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return set()
