from collections.abc import Mapping, Sequence
from pathlib import Path

from schemawatch.config import Settings, get_settings
from schemawatch.core.orchestrator import ValidationOrchestrator
from schemawatch.core.ports.diagnostics import DiagnosticSink
from schemawatch.core.ports.providers import SchemaProvider
from schemawatch.core.providers import ExtensionSchemaProvider, ExtensionSyntaxCheckers
from schemawatch.validation.jsonschema_adapter import JsonSchemaValidator
from schemawatch.workspace.local import LocalWorkspace


def create_orchestrator(
    sink: DiagnosticSink,
    schema_providers: Mapping[str, str | Path] | None = None,
    syntax_checked: Sequence[str] | None = None,
    settings: Settings | None = None,
) -> ValidationOrchestrator:
    """Wire an orchestrator to the local file system and the jsonschema validator.

    Explicit arguments take precedence over the environment settings.
    """
    settings = settings or get_settings()
    provider_files = dict(settings.schema_providers)
    provider_files.update(schema_providers or {})
    providers: list[SchemaProvider] = []
    if provider_files:
        providers.append(ExtensionSchemaProvider.from_files(provider_files))

    return ValidationOrchestrator(
        workspace=LocalWorkspace(),
        sink=sink,
        validator=JsonSchemaValidator(),
        providers=providers,
        host=ExtensionSyntaxCheckers([*settings.syntax_checked, *(syntax_checked or [])]),
    )


def collect_files(paths: Sequence[Path], suffixes: frozenset[str] = frozenset({".json"})) -> list[Path]:
    """Expand directories and order data files before schema files.

    Schemas come last so that their dependents are already indexed when they
    are visited.
    """
    found: set[Path] = set()
    for path in paths:
        path = path.absolute()
        if path.is_dir():
            found.update(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in suffixes)
        elif path.is_file():
            found.add(path)
    return sorted(found, key=lambda p: (p.name.lower().endswith("schema.json"), str(p)))
