"""graphcr CLI - Command line interface for graphcr."""

from graphcr.cli.commands import cli
from graphcr.cli.output import CLIOutput


def main() -> None:
    """Main entry point for the graphcr CLI."""
    cli()


__all__ = ["main", "cli", "CLIOutput"]
