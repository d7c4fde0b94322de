"""BazelPlane CLI - bzp command."""

from pathlib import Path

import click

from bazelplane.cli.discover import discover_command
from bazelplane.cli.run import test_command
from bazelplane.cli.show import show_lcov_command


@click.group()
@click.version_option(version="0.1.0", prog_name="bzp")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Bazel workspace root (default: search upward from the current directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, workspace: Path | None) -> None:
    """BazelPlane - discover and run bazel tests, collect LCOV coverage."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["workspace"] = workspace


cli.add_command(discover_command, name="discover")
cli.add_command(test_command, name="test")
cli.add_command(show_lcov_command, name="show-lcov")


if __name__ == "__main__":
    cli()
