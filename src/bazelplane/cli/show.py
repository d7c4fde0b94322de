"""bzp show-lcov command - display an existing LCOV report."""

import asyncio
import json
from pathlib import Path

import click

from bazelplane.cli.console_sink import ConsoleSink
from bazelplane.cli.utils import build_ops, command_error, load_cli_config
from bazelplane.core.progress import get_console, make_table, status
from bazelplane.testing.coverage import (
    CoverageParseError,
    CoverageReport,
    build_summary,
    build_text_summary,
    compute_file_stats,
)


@click.command()
@click.argument("lcov_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--base",
    "base_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory relative SF paths resolve against (default: current directory)",
)
@click.option("--description", default=None, help="Heading printed above the report")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show_lcov_command(
    ctx: click.Context,
    lcov_file: Path,
    base_dir: Path | None,
    description: str | None,
    as_json: bool,
) -> None:
    """Show per-file coverage from LCOV_FILE."""
    base = (base_dir or Path.cwd()).resolve()
    workspace_root = ctx.obj.get("workspace") or base
    config = load_cli_config(workspace_root, ctx.obj["verbose"])
    ops = build_ops(workspace_root, config)

    heading = description or f"Coverage from {lcov_file}"
    sink = ConsoleSink(show_output=not as_json)
    try:
        records = asyncio.run(
            ops.show_lcov(heading + "\n", base, lcov_file.read_bytes(), sink)
        )
    except CoverageParseError as e:
        raise command_error(f"Error parsing coverage data: {e}") from e

    report = CoverageReport(records=records)
    if as_json:
        click.echo(json.dumps(build_summary(report), indent=2))
        return

    rows = []
    for stats in sorted(
        (compute_file_stats(record) for record in records), key=lambda s: s["path"]
    ):
        rows.append(
            [
                stats["path"],
                f"{stats['covered_lines']}/{stats['total_lines']}",
                f"{stats['coverage_percent']:.1f}%",
                stats["missed_lines"],
            ]
        )
    get_console().print(make_table("Files", ["File", "Lines", "Coverage", "Missing"], rows))
    status(build_text_summary(report), style="info")
