"""FastMCP server exposing schemawatch tools."""

from __future__ import annotations

from pathlib import Path

from fastmcp import FastMCP

from schemawatch.core.orchestrator import ValidationOrchestrator
from schemawatch.sinks.memory import InMemoryDiagnosticSink


def _as_dicts(sink: InMemoryDiagnosticSink, file: Path) -> list[dict[str, str | int]]:
    return [
        {"file": str(d.file), "line": d.line, "severity": d.severity.value, "message": d.message}
        for d in sink.diagnostics_for(file)
    ]


def create_mcp_server(orchestrator: ValidationOrchestrator, sink: InMemoryDiagnosticSink) -> FastMCP:
    """Create a FastMCP server wired to the given orchestrator and the sink it writes to."""

    mcp = FastMCP("schemawatch", instructions="Validate JSON files against schemas found by naming convention.")

    @mcp.tool()
    async def validate(path: str) -> list[dict[str, str | int]]:
        """Validate a JSON file (or every dependent of a schema) and return its diagnostics."""
        file = Path(path).absolute()
        await orchestrator.on_resource_changed(file)
        return _as_dicts(sink, file)

    @mcp.tool()
    async def diagnostics(path: str) -> list[dict[str, str | int]]:
        """Return the current diagnostics of a file without re-validating it."""
        return _as_dicts(sink, Path(path).absolute())

    @mcp.tool()
    async def dependents(schema: str) -> list[str]:
        """List the data files currently validated against a schema."""
        return sorted(str(p) for p in orchestrator.index.dependents_of(Path(schema).absolute()))

    @mcp.tool()
    async def removed(path: str) -> list[str]:
        """Notify that a file was deleted; returns the files re-validated as a result."""
        file = Path(path).absolute()
        affected = sorted(str(p) for p in orchestrator.index.dependents_of(file))
        await orchestrator.on_resource_removed(file)
        return affected

    return mcp
