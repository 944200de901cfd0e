import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from schemawatch.cli.check import ProviderOption, SyntaxCheckedOption, build_orchestrator, run_check
from schemawatch.core.factory import collect_files
from schemawatch.core.orchestrator import ValidationOrchestrator
from schemawatch.sinks.console import ConsoleDiagnosticSink
from schemawatch.watcher.watchfiles_adapter import WatchfilesWatcher

console = Console()


def make_change_handler(orchestrator: ValidationOrchestrator):
    async def _on_change(changed: set[Path], deleted: set[Path]) -> None:
        for path in sorted(deleted):
            await orchestrator.on_resource_removed(path)
        for path in sorted(changed):
            await orchestrator.on_resource_changed(path)

    return _on_change


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
    provider: ProviderOption = None,
    syntax_checked: SyntaxCheckedOption = None,
) -> None:
    """Validate a directory, then re-validate files as they change."""
    if not directory.is_dir():
        console.print(f"[red]Not a directory: {directory}[/red]")
        raise typer.Exit(2)

    root = directory.absolute()
    sink = ConsoleDiagnosticSink(console, root)
    orchestrator, suffixes = build_orchestrator(sink, provider, syntax_checked)

    async def _run() -> None:
        await run_check(orchestrator, collect_files([root], suffixes))
        watcher = WatchfilesWatcher(
            root,
            make_change_handler(orchestrator),
            is_relevant=lambda p: p.suffix.lower() in suffixes,
        )
        await watcher.start()
        console.print(f"[green]Watching[/green] {root} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
