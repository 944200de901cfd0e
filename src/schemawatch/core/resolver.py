import logging
from pathlib import Path

from schemawatch.core.dependencies import DependencyIndex
from schemawatch.core.ports.workspace import Workspace

logger = logging.getLogger(__name__)

_SCHEMA_SUFFIX = "schema.json"


def is_schema_name(name: str) -> bool:
    return name.lower().endswith(_SCHEMA_SUFFIX)


def schema_candidates(file: Path) -> list[str]:
    """Return the schema filenames to look for next to ``file``, in priority order."""
    base = file.stem
    return [
        f"{base}Schema.json",
        f"{base}.schema.json",
        "schema.json",
    ]


def find_member_ignore_case(names: set[str], wanted: str) -> str | None:
    wanted_lower = wanted.lower()
    for name in sorted(names):
        if name.lower() == wanted_lower:
            return name
    return None


class SchemaResolver:
    """Find the schema that applies to a data file by naming convention.

    ``Foo.json`` is validated against the first sibling found among
    ``FooSchema.json``, ``Foo.schema.json`` and ``schema.json``, compared
    case-insensitively. Files that are themselves schemas never resolve.
    """

    def __init__(self, workspace: Workspace, index: DependencyIndex) -> None:
        self._workspace = workspace
        self._index = index

    def resolve_schema(self, data_file: Path) -> Path | None:
        if is_schema_name(data_file.name):
            return None

        directory = data_file.parent
        siblings = self._workspace.list_siblings(directory)
        for wanted in schema_candidates(data_file):
            logger.debug('Looking for "%s" in "%s"', wanted, directory)
            found = find_member_ignore_case(siblings, wanted)
            if found is None:
                continue
            schema_file = directory / found
            if not self._workspace.is_file(schema_file):
                continue
            self._index.associate(schema_file, data_file)
            return schema_file

        return None
