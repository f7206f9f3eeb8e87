import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from gql_engine.cli.run import run_query
from gql_engine.cli.schema import show_schema
from gql_engine.config import get_settings

app = typer.Typer(
    name="gql-engine",
    help="gql-engine CLI: resolve selection sets against a declared schema.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("run")(run_query)
app.command("schema")(show_schema)


def main() -> None:
    app()
