"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from schemawatch.core.dependencies import DependencyIndex
from schemawatch.core.orchestrator import ValidationOrchestrator
from schemawatch.sinks.memory import InMemoryDiagnosticSink
from schemawatch.validation.jsonschema_adapter import JsonSchemaValidator
from schemawatch.workspace.local import LocalWorkspace

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sink() -> InMemoryDiagnosticSink:
    return InMemoryDiagnosticSink()


@pytest.fixture
def index() -> DependencyIndex:
    return DependencyIndex()


@pytest.fixture
def orchestrator(sink: InMemoryDiagnosticSink, index: DependencyIndex) -> ValidationOrchestrator:
    """Return an orchestrator reading the real file system with no providers."""
    return ValidationOrchestrator(
        workspace=LocalWorkspace(),
        sink=sink,
        validator=JsonSchemaValidator(),
        index=index,
    )


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes text below ``tmp_path`` and returns the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
