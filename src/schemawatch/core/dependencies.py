import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class DependencyIndex:
    """Bidirectional schema -> data file index.

    A data file is a dependent of at most one schema at a time. All
    read-modify-write sequences run under a single lock, and lookups return
    immutable snapshots so callers can iterate while other passes mutate.
    """

    def __init__(self) -> None:
        self._dependents: dict[Path, set[Path]] = {}
        self._lock = threading.Lock()

    def associate(self, schema: Path, data_file: Path) -> None:
        with self._lock:
            for other, dependents in list(self._dependents.items()):
                if other != schema and data_file in dependents:
                    dependents.discard(data_file)
                    logger.debug("%s moved from schema %s to %s", data_file, other, schema)
                    if not dependents:
                        del self._dependents[other]
            self._dependents.setdefault(schema, set()).add(data_file)

    def dissociate(self, data_file: Path) -> None:
        """Drop ``data_file`` from whatever schema it is currently validated against."""
        with self._lock:
            self._discard_dependent(data_file)

    def dependents_of(self, schema: Path) -> frozenset[Path]:
        with self._lock:
            return frozenset(self._dependents.get(schema, ()))

    def schema_for(self, data_file: Path) -> Path | None:
        with self._lock:
            for schema, dependents in self._dependents.items():
                if data_file in dependents:
                    return schema
        return None

    def schemas(self) -> frozenset[Path]:
        with self._lock:
            return frozenset(self._dependents)

    def remove(self, resource: Path) -> frozenset[Path]:
        """Forget ``resource`` as a schema and as a dependent.

        Returns the former dependents when ``resource`` was a schema key so the
        caller can re-validate them; otherwise an empty set.
        """
        with self._lock:
            former = frozenset(self._dependents.pop(resource, ()))
            self._discard_dependent(resource)
        if former:
            logger.debug("Schema %s removed, %d dependent(s) affected", resource, len(former))
        return former

    def _discard_dependent(self, data_file: Path) -> None:
        for schema in list(self._dependents):
            dependents = self._dependents[schema]
            if data_file in dependents:
                dependents.discard(data_file)
                if not dependents:
                    del self._dependents[schema]
