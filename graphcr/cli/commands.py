"""CLI commands for graphcr."""

from __future__ import annotations

import logging
import sys

import click

from graphcr.cli.output import CLIOutput
from graphcr.config import GraphCRConfig, load_config
from graphcr.errors import GraphCRError
from graphcr.resolver.analyzer import ChildTypeAnalyzer
from graphcr.transport import RepositoryTransport, build_registry, build_transport


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _open_transport(ctx: click.Context) -> RepositoryTransport:
    config: GraphCRConfig = ctx.obj["config"]
    transport = build_transport(config)
    transport.login(ctx.obj["workspace"] or config.workspaces[0])
    return transport


def _fail(ctx: click.Context, error: GraphCRError) -> None:
    CLIOutput().error(error, verbose=ctx.obj["verbose"])
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--workspace", "-w", default=None, help="Workspace to log in to")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None, workspace: str | None) -> None:
    """graphcr - browse an object graph as a content-repository tree."""
    ctx.ensure_object(dict)

    setup_logging(verbose)
    try:
        config_obj = load_config(config)
    except GraphCRError as e:
        ctx.obj["verbose"] = verbose
        _fail(ctx, e)
        return
    if verbose:
        config_obj.verbose = True

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose
    ctx.obj["workspace"] = workspace


@cli.command()
@click.argument("path", default="/")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def node(ctx: click.Context, path: str, output_format: str) -> None:
    """Show the node stored at PATH."""
    try:
        view = _open_transport(ctx).get_node(path)
    except GraphCRError as e:
        _fail(ctx, e)
        return

    output = CLIOutput()
    if output_format == "json":
        output.node_json(view)
    else:
        output.node(path, view)


@cli.command()
@click.argument("identifier")
@click.pass_context
def path(ctx: click.Context, identifier: str) -> None:
    """Print the path of the object with IDENTIFIER."""
    try:
        resolved = _open_transport(ctx).get_node_path_for_identifier(identifier)
    except GraphCRError as e:
        _fail(ctx, e)
        return
    click.echo(resolved)


@cli.command("types")
@click.pass_context
def list_types(ctx: click.Context) -> None:
    """List the registered types and their link roles."""
    try:
        registry = build_registry(ctx.obj["config"])
    except GraphCRError as e:
        _fail(ctx, e)
        return
    CLIOutput().types(registry)


@cli.command()
@click.argument("type_name")
@click.pass_context
def children(ctx: click.Context, type_name: str) -> None:
    """List the types that may appear as children of TYPE_NAME."""
    try:
        analyzer = ChildTypeAnalyzer(build_registry(ctx.obj["config"]))
        CLIOutput().child_types(type_name, analyzer)
    except GraphCRError as e:
        _fail(ctx, e)


@cli.command()
@click.argument("path", default="/")
@click.option("--depth", "-d", type=click.IntRange(min=1), default=3, help="Levels to expand")
@click.pass_context
def tree(ctx: click.Context, path: str, depth: int) -> None:
    """Render the addressable subtree below PATH."""
    try:
        CLIOutput().tree(_open_transport(ctx), path, depth)
    except GraphCRError as e:
        _fail(ctx, e)
