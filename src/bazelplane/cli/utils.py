"""CLI utilities."""

from pathlib import Path

import click

from bazelplane.config.loader import load_config
from bazelplane.config.models import BazelPlaneConfig
from bazelplane.core.errors import ConfigError
from bazelplane.core.logging import configure_logging, get_log_file_path
from bazelplane.testing.bazel import BazelClient
from bazelplane.testing.ops import TestOps

WORKSPACE_MARKERS = ("MODULE.bazel", "WORKSPACE", "WORKSPACE.bazel")


def find_workspace_root(start_path: Path | None = None) -> Path:
    """Find the bazel workspace root from the given path.

    Walks up the directory tree looking for MODULE.bazel or WORKSPACE.
    If start_path is None, uses the current working directory.

    Raises:
        click.ClickException: If not inside a bazel workspace
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while True:
        if any((current / marker).exists() for marker in WORKSPACE_MARKERS):
            return current
        if current == current.parent:
            break
        current = current.parent

    raise click.ClickException(
        f"Not inside a bazel workspace: {start_path}\n"
        "Run from a directory containing MODULE.bazel or WORKSPACE, or pass --workspace."
    )


def load_cli_config(workspace_root: Path, verbose: bool) -> BazelPlaneConfig:
    """Load config for a workspace and configure logging from it."""
    try:
        config = load_config(workspace_root)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    return config


def build_ops(workspace_root: Path, config: BazelPlaneConfig) -> TestOps:
    client = BazelClient(
        workspace_root,
        executable=config.bazel.executable,
        startup_args=config.bazel.startup_args,
    )
    return TestOps(workspace_root, client, config)


def resolve_workspace(ctx: click.Context) -> Path:
    """Workspace from --workspace, else the enclosing bazel workspace."""
    workspace: Path | None = ctx.obj.get("workspace")
    if workspace is not None:
        return workspace.resolve()
    return find_workspace_root()


def command_error(message: str) -> click.ClickException:
    """ClickException pointing at the log file when one is configured."""
    log_file = get_log_file_path()
    if log_file is not None:
        message = f"{message}\nSee {log_file} for details."
    return click.ClickException(message)
