from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from schemawatch.core.dependencies import DependencyIndex
from schemawatch.core.errors import ParseError, SchemaLoadError
from schemawatch.core.ports.diagnostics import DiagnosticSink
from schemawatch.core.ports.providers import HostCapabilities, SchemaProvider
from schemawatch.core.ports.validator import SchemaValidator
from schemawatch.core.ports.workspace import Workspace
from schemawatch.core.positions import build_position_map
from schemawatch.core.providers import ExtensionSyntaxCheckers, first_schema_for
from schemawatch.core.resolver import SchemaResolver
from schemawatch.models import Failure, Severity

logger = logging.getLogger(__name__)

EMPTY_SCHEMA = "{}"


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, exc.lineno) from exc


class ValidationOrchestrator:
    """Validate JSON documents in response to change and removal events.

    Each event runs one validation pass per affected document. Passes for
    different documents may overlap; passes for the same document are
    serialized so that clearing and re-adding its diagnostics is atomic.
    """

    def __init__(
        self,
        workspace: Workspace,
        sink: DiagnosticSink,
        validator: SchemaValidator,
        index: DependencyIndex | None = None,
        providers: Sequence[SchemaProvider] = (),
        host: HostCapabilities | None = None,
    ) -> None:
        self.workspace = workspace
        self.sink = sink
        self.validator = validator
        self.index = index if index is not None else DependencyIndex()
        self.providers = list(providers)
        self.host = host if host is not None else ExtensionSyntaxCheckers()
        self.resolver = SchemaResolver(workspace, self.index)
        self._locks: dict[Path, asyncio.Lock] = {}
        self._lock_users: dict[Path, int] = {}

    @asynccontextmanager
    async def _file_lock(self, file: Path) -> AsyncIterator[None]:
        """Serialize passes over one file; the lock is dropped once nobody holds or awaits it."""
        lock = self._locks.get(file)
        if lock is None:
            lock = self._locks[file] = asyncio.Lock()
        self._lock_users[file] = self._lock_users.get(file, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[file] -= 1
            if not self._lock_users[file]:
                del self._lock_users[file]
                del self._locks[file]

    async def on_resource_changed(self, resource: Path) -> None:
        file = Path(resource).absolute()
        if not self.workspace.exists(file):
            logger.debug("File removed: %s", file)
            return
        if not self.workspace.is_file(file):
            return

        schema_text = first_schema_for(self.providers, file)
        if schema_text is not None:
            await self.check_against(file, schema_text=schema_text)
            return

        if not file.name.lower().endswith(".json"):
            return

        schema_file = self.resolver.resolve_schema(file)
        if schema_file is not None:
            await self.check_against(file, schema_file=schema_file)
            return
        self.index.dissociate(file)

        dependents = self.index.dependents_of(file)
        if dependents:
            for data_file in dependents:
                logger.debug("%s status affected by schema %s", data_file, file)
            await self._gather(self.check_against(d, schema_file=file) for d in sorted(dependents))
        else:
            logger.debug("No schema for %s", file)
            await self.check_against(file, schema_text=EMPTY_SCHEMA)

    async def on_resource_removed(self, resource: Path) -> None:
        file = Path(resource).absolute()
        former = self.index.remove(file)
        if former:
            await self._gather(self.on_resource_changed(d) for d in sorted(former))

    async def check_against(
        self,
        file: Path,
        schema_file: Path | None = None,
        schema_text: str | None = None,
    ) -> None:
        """Run one validation pass of ``file`` against a schema file or schema text.

        With neither given, the empty schema is used so only syntax is checked.
        Parsing and validation run in a worker thread; the document's
        diagnostics are only replaced once that work has produced a result.
        """
        try:
            text = self.workspace.read_text(file)
            if schema_text is None:
                schema_text = self.workspace.read_text(schema_file) if schema_file is not None else EMPTY_SCHEMA
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read %s: %s", file, exc)
            return

        schema_label = str(schema_file) if schema_file is not None else "(implicit)"
        async with self._file_lock(file):
            try:
                results = await asyncio.to_thread(self._evaluate, file, text, schema_label, schema_text)
            except RecursionError:
                logger.error("%s is nested too deeply to validate", file)
                return

            await self.sink.clear_diagnostics(file)
            for line, message in results:
                await self.sink.add_diagnostic(file, message, line, Severity.ERROR)

    def _evaluate(self, file: Path, text: str, schema_label: str, schema_text: str) -> list[tuple[int, str]]:
        """Return the ``(line, message)`` pairs a pass reports for ``file``."""
        try:
            instance = parse_json(text)
        except ParseError as exc:
            if self.host.has_syntax_checker(file):
                logger.info('No diagnostic for "%s" since its syntax is checked by the host.', file.name)
                return []
            return [(exc.line, exc.message)]

        try:
            failures = self._validate(schema_label, schema_text, instance)
        except SchemaLoadError as exc:
            logger.error("%s (validating %s)", exc, file)
            return []

        results: list[tuple[int, str]] = []
        positions: dict[str, int] | None = None
        for failure in failures:
            if positions is None:
                positions = build_position_map(text)
            line = positions.get(failure.pointer)
            if line is None:
                if failure.pointer:
                    logger.warning('Unknown line number of "%s" in %s', failure.pointer, file)
                line = 1
            message = failure.format_message()
            logger.debug("%s (%s, schema: %s)", message, file.name, schema_label)
            results.append((line, message))
        return results

    def _validate(self, schema_label: str, schema_text: str, instance: Any) -> list[Failure]:
        try:
            schema = json.loads(schema_text)
        except json.JSONDecodeError as exc:
            raise SchemaLoadError(schema_label, f"{exc.msg} (line {exc.lineno})") from exc
        try:
            return self.validator.validate(schema, instance)
        except SchemaLoadError as exc:
            raise SchemaLoadError(schema_label, exc.message) from exc

    async def _gather(self, passes: Any) -> None:
        results = await asyncio.gather(*passes, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                logger.error("Validation pass failed", exc_info=result)
