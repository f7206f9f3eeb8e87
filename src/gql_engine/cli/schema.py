from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.tree import Tree

from gql_engine.core.errors import GraphQLError
from gql_engine.core.schema import ObjectNode, load_schema

console = Console()


def _add_fields(tree: Tree, node: ObjectNode) -> None:
    for name, child in node.fields.items():
        if isinstance(child, ObjectNode):
            _add_fields(tree.add(f"[bold]{name}[/bold]: {child.type_name}"), child)
        else:
            tree.add(f"{name}: [cyan]{child.type_name}[/cyan]")


def show_schema(
    schema: Annotated[Path, typer.Argument(help="JSON schema description.")],
) -> None:
    """Render a declared schema as a tree."""
    try:
        root = load_schema(schema)
    except (FileNotFoundError, ValueError, GraphQLError) as exc:
        console.print(f"[red]Invalid schema:[/red] {exc}")
        raise typer.Exit(1) from None

    tree = Tree(f"[bold]{root.type_name}[/bold]")
    _add_fields(tree, root)
    console.print(tree)
