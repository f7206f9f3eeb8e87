import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.json import JSON

from gql_engine.core.document import execute_document
from gql_engine.core.errors import GraphQLError
from gql_engine.core.ports.arguments import ArgumentCoercer, NoArguments, PassThroughArguments
from gql_engine.core.response import ExecutionFailure, PreExecutionFailure, encode
from gql_engine.core.schema import load_schema

console = Console()
err_console = Console(stderr=True)


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        err_console.print(f"[red]{what} file not found:[/red] {path}")
        raise typer.Exit(1) from None
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]{what} file is not valid JSON:[/red] {path} ({exc.msg})")
        raise typer.Exit(1) from None
    except UnicodeDecodeError as exc:
        err_console.print(f"[red]{what} file is not valid UTF-8:[/red] {path} ({exc.reason})")
        raise typer.Exit(1) from None


def run_query(
    schema: Annotated[Path, typer.Argument(help="JSON schema description.")],
    query: Annotated[Path, typer.Argument(help="JSON query document (selection set).")],
    data: Annotated[Path | None, typer.Option(help="JSON file with the values handlers return.")] = None,
    arguments: Annotated[bool, typer.Option(help="Pass field arguments through to handlers.")] = False,
) -> None:
    """Execute a query document and print the JSON response."""
    try:
        root = load_schema(schema)
    except (FileNotFoundError, ValueError, GraphQLError) as exc:
        err_console.print(f"[red]Invalid schema:[/red] {exc}")
        raise typer.Exit(1) from None

    document = _read_json(query, "Query")
    handlers = _read_json(data, "Data") if data is not None else {}
    coercer: ArgumentCoercer = PassThroughArguments() if arguments else NoArguments()

    response = asyncio.run(execute_document(root, handlers, document, coercer=coercer))
    console.print(JSON.from_data(encode(response)), soft_wrap=True)
    if isinstance(response, PreExecutionFailure | ExecutionFailure):
        raise typer.Exit(2)
