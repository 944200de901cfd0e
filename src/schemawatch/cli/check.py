import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from schemawatch.config import parse_provider_specs
from schemawatch.core.factory import collect_files, create_orchestrator
from schemawatch.core.orchestrator import ValidationOrchestrator
from schemawatch.core.providers import normalize_suffix
from schemawatch.models import Diagnostic
from schemawatch.sinks.memory import InMemoryDiagnosticSink

console = Console()
logger = logging.getLogger(__name__)

ProviderOption = Annotated[
    list[str] | None,
    typer.Option("--provider", help="Implicit schema for a file type, as '.ext=path/to/schema.json'."),
]
SyntaxCheckedOption = Annotated[
    list[str] | None,
    typer.Option("--syntax-checked", help="File type whose syntax errors are reported elsewhere (e.g. '.jsonc')."),
]


def build_orchestrator(
    sink: InMemoryDiagnosticSink,
    provider: list[str] | None,
    syntax_checked: list[str] | None,
) -> tuple[ValidationOrchestrator, frozenset[str]]:
    """Create an orchestrator from CLI options; also return the suffixes worth visiting."""
    try:
        provider_files = parse_provider_specs(provider or [])
        orchestrator = create_orchestrator(sink, provider_files, syntax_checked or [])
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Cannot read schema: {exc}[/red]")
        raise typer.Exit(2) from exc
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from exc
    suffixes = frozenset({".json", *(normalize_suffix(s) for s in provider_files)})
    return orchestrator, suffixes


async def run_check(orchestrator: ValidationOrchestrator, files: list[Path]) -> None:
    for file in files:
        try:
            await orchestrator.on_resource_changed(file)
        except Exception:
            logger.exception("Validation of %s failed", file)


def render_diagnostics(diagnostics: list[Diagnostic], root: Path | None = None) -> None:
    table = Table(show_lines=False)
    for header in ("file", "line", "severity", "message"):
        table.add_column(header)
    for d in diagnostics:
        file = d.file
        if root is not None and file.is_relative_to(root):
            file = file.relative_to(root)
        table.add_row(str(file), str(d.line), d.severity.value, d.message)
    console.print(table)
    console.print(f"({len(diagnostics)} diagnostics)")


def check(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to validate.")],
    provider: ProviderOption = None,
    syntax_checked: SyntaxCheckedOption = None,
) -> None:
    """Validate JSON files once and report diagnostics."""
    missing = [p for p in paths if not p.exists()]
    if missing:
        console.print(f"[red]No such file or directory: {', '.join(str(p) for p in missing)}[/red]")
        raise typer.Exit(2)

    sink = InMemoryDiagnosticSink()
    orchestrator, suffixes = build_orchestrator(sink, provider, syntax_checked)
    files = collect_files(paths, suffixes)
    asyncio.run(run_check(orchestrator, files))

    diagnostics = sink.all_diagnostics()
    if diagnostics:
        render_diagnostics(diagnostics, Path.cwd())
    console.print(f"Checked {len(files)} file(s)")
    if sink.error_count():
        raise typer.Exit(1)


def schema(
    file: Annotated[Path, typer.Argument(help="Data file to resolve a schema for.")],
) -> None:
    """Show which schema applies to a data file by naming convention."""
    from schemawatch.core.dependencies import DependencyIndex
    from schemawatch.core.resolver import SchemaResolver
    from schemawatch.workspace.local import LocalWorkspace

    resolver = SchemaResolver(LocalWorkspace(), DependencyIndex())
    found = resolver.resolve_schema(file.absolute())
    if found is None:
        console.print(f"No schema for {file}", soft_wrap=True)
        return
    console.print(str(found), soft_wrap=True)
