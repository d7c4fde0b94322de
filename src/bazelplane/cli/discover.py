"""bzp discover command - list test targets in the workspace."""

import asyncio
import json

import click

from bazelplane.cli.utils import build_ops, command_error, load_cli_config, resolve_workspace
from bazelplane.core.errors import BazelError
from bazelplane.core.progress import pluralize, spinner, status


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def discover_command(ctx: click.Context, as_json: bool) -> None:
    """List the test targets bazel knows about."""
    workspace_root = resolve_workspace(ctx)
    config = load_cli_config(workspace_root, ctx.obj["verbose"])
    ops = build_ops(workspace_root, config)

    try:
        with spinner("Querying test targets"):
            targets = asyncio.run(ops.discover())
    except BazelError as e:
        raise command_error(e.message) from e

    if as_json:
        click.echo(json.dumps([t.target_id for t in targets], indent=2))
        return

    for target in targets:
        click.echo(target.label)
    status(f"Found {pluralize(len(targets), 'test target')}", style="success")
