import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from schemawatch.cli.check import check, schema
from schemawatch.cli.serve import serve_app
from schemawatch.cli.watch import watch
from schemawatch.config import get_settings

app = typer.Typer(
    name="schemawatch",
    help="Schemawatch CLI — validate JSON files against schemas found by naming convention.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("check")(check)
app.command("watch")(watch)
app.command("schema")(schema)
app.add_typer(serve_app, name="serve")


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    """Configure logging for every command."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def main() -> None:
    app()
