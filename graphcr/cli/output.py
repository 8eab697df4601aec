"""Rich rendering of nodes, types and trees for the graphcr CLI."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from graphcr.errors import GraphCRError
from graphcr.resolver.analyzer import ChildTypeAnalyzer
from graphcr.resolver.projector import NodeView
from graphcr.schema.registry import TypeRegistry
from graphcr.transport import RepositoryTransport


class CLIOutput:
    """Console output for graphcr commands.

    Example:
        >>> output = CLIOutput()
        >>> output.node("/news", transport.get_node("/news"))
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def node(self, path: str, node: NodeView) -> None:
        table = Table(title=escape(path), show_header=True, header_style="bold")
        table.add_column("Property", min_width=20)
        table.add_column("Type", width=14)
        table.add_column("Value")
        for name, prop in node.properties.items():
            table.add_row(escape(name), prop.tag.label, _format_value(prop.value))
        self.console.print(table)

        if node.children:
            self.console.print(f"[bold]Children[/bold] ({len(node.children)})")
            for child in node.children:
                self.console.print(f"  {escape(child)}")

    def node_json(self, node: NodeView) -> None:
        self.console.print_json(json.dumps(node.to_dict(), default=str))

    def types(self, registry: TypeRegistry) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Type", min_width=24)
        table.add_column("Links")
        table.add_column("Name property", width=14)
        for descriptor in registry.all_types():
            links = ", ".join(
                f"{role.value}={prop.name}->{prop.link_target or '*'}"
                for role, prop in registry.link_properties(descriptor)
            )
            name_prop = registry.name_property(descriptor)
            table.add_row(descriptor.name, links or "-", name_prop.name if name_prop else "-")
        self.console.print(table)

    def child_types(self, type_name: str, analyzer: ChildTypeAnalyzer) -> None:
        candidates = analyzer.child_candidates(type_name)
        if not candidates:
            self.console.print(f"[yellow]{type_name} has no child types[/yellow]")
            return
        self.console.print(f"[bold]{type_name}[/bold] may contain:")
        for candidate in candidates:
            roles = ", ".join(r.value for r in analyzer.matching_roles(candidate, type_name))
            self.console.print(f"  {candidate.name} [dim]({roles})[/dim]")

    def tree(self, transport: RepositoryTransport, path: str, depth: int) -> None:
        root = Tree(f"[bold]{escape(path)}[/bold]")
        self._add_branch(root, transport, path, depth)
        self.console.print(root)

    def _add_branch(self, branch: Tree, transport: RepositoryTransport, path: str, depth: int) -> None:
        if depth <= 0:
            return
        node = transport.get_node(path)
        for child in node.children:
            child_path = f"{path.rstrip('/')}/{child}"
            sub = branch.add(escape(child))
            self._add_branch(sub, transport, child_path, depth - 1)

    def error(self, error: GraphCRError, verbose: bool = False) -> None:
        message = error.format_verbose() if verbose else str(error)
        self.console.print(f"[red]✗[/red] {escape(message)}", highlight=False)


def _format_value(value: Any) -> str:
    if value is None:
        return "[dim]null[/dim]"
    return escape(str(value))
