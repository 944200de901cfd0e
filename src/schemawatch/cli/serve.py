from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.callback()
def serve() -> None:
    """Start servers."""


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
    provider: Annotated[
        list[str] | None,
        typer.Option("--provider", help="Implicit schema for a file type, as '.ext=path/to/schema.json'."),
    ] = None,
) -> None:
    """Start the MCP server."""
    from schemawatch.cli.check import build_orchestrator
    from schemawatch.mcp.server import create_mcp_server
    from schemawatch.sinks.memory import InMemoryDiagnosticSink

    sink = InMemoryDiagnosticSink()
    orchestrator, _ = build_orchestrator(sink, provider, None)
    server = create_mcp_server(orchestrator, sink)
    console.print(f"[green]Starting MCP server (transport: {transport}) in {Path.cwd()}[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
