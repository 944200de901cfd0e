import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from schemawatch.core.ports.providers import SchemaProvider

logger = logging.getLogger(__name__)


def normalize_suffix(suffix: str) -> str:
    suffix = suffix.strip().lower()
    if suffix and not suffix.startswith("."):
        suffix = "." + suffix
    return suffix


class ExtensionSchemaProvider:
    """Supply an implicit schema for every file with a given suffix.

    Implements the ``SchemaProvider`` protocol.
    """

    def __init__(self, schemas: Mapping[str, str]) -> None:
        self._schemas = {normalize_suffix(suffix): text for suffix, text in schemas.items()}

    @classmethod
    def from_files(cls, schema_files: Mapping[str, str | Path]) -> "ExtensionSchemaProvider":
        schemas: dict[str, str] = {}
        for suffix, schema_path in schema_files.items():
            schemas[suffix] = Path(schema_path).read_text(encoding="utf-8-sig")
        return cls(schemas)

    @property
    def suffixes(self) -> frozenset[str]:
        return frozenset(self._schemas)

    def get_schema_for(self, file: Path) -> str | None:
        return self._schemas.get(file.suffix.lower())


class ExtensionSyntaxCheckers:
    """Report file types whose host editor already checks JSON syntax.

    Implements the ``HostCapabilities`` protocol.
    """

    def __init__(self, suffixes: Iterable[str] = ()) -> None:
        self._suffixes = frozenset(normalize_suffix(s) for s in suffixes)

    def has_syntax_checker(self, file: Path) -> bool:
        return file.suffix.lower() in self._suffixes


def first_schema_for(providers: Iterable[SchemaProvider], file: Path) -> str | None:
    for provider in providers:
        schema = provider.get_schema_for(file)
        if schema is not None:
            logger.debug("Implicit schema for %s from %s", file, type(provider).__name__)
            return schema
    return None
