"""bzp test command - run test targets, optionally with coverage."""

import asyncio
import json
import signal
from contextlib import suppress

import click

from bazelplane.cli.console_sink import ConsoleSink
from bazelplane.cli.utils import build_ops, command_error, load_cli_config, resolve_workspace
from bazelplane.core.errors import BazelError
from bazelplane.core.logging import get_log_file_path
from bazelplane.core.progress import get_console, make_table, pluralize, spinner, status
from bazelplane.testing.coverage import CoverageReport, build_summary, build_text_summary
from bazelplane.testing.models import RunRequest, RunStatus, RunSummary, TestTarget
from bazelplane.testing.ops import TestOps

_STATUS_STYLES = {
    RunStatus.PASSED: "[green]passed[/green]",
    RunStatus.FAILED: "[red]failed[/red]",
    RunStatus.ERRORED: "[yellow]errored[/yellow]",
    RunStatus.CANCELLED: "[dim]cancelled[/dim]",
}


async def _run(ops: TestOps, request: RunRequest, sink: ConsoleSink) -> RunSummary:
    run_ctx = ops.create_run(request, sink)
    loop = asyncio.get_running_loop()
    # Not available on every platform; Ctrl-C then falls back to KeyboardInterrupt
    with suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, run_ctx.cancel)
    try:
        return await ops.execute(run_ctx)
    finally:
        with suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)


def _summary_json(summary: RunSummary) -> dict:
    result: dict = {
        "run_id": summary.run_id,
        "cancelled": summary.cancelled,
        "duration_seconds": round(summary.duration_seconds, 3),
        "targets": [
            {
                "target": entry.target.target_id,
                "status": str(entry.status),
                "duration_seconds": round(entry.duration_seconds, 3)
                if entry.duration_seconds is not None
                else None,
                "message": entry.message,
            }
            for entry in summary.entries
        ],
    }
    records = [record for entry in summary.entries for record in entry.coverage]
    if records:
        result["coverage"] = build_summary(CoverageReport(records=records))
    return result


def _print_summary(summary: RunSummary) -> None:
    rows = [
        [
            entry.target.label,
            _STATUS_STYLES.get(entry.status, str(entry.status)),
            f"{entry.duration_seconds:.1f}s" if entry.duration_seconds is not None else "-",
            entry.message or "",
        ]
        for entry in summary.entries
    ]
    console = get_console()
    console.print()
    console.print(make_table("Results", ["Target", "Status", "Time", "Message"], rows))

    records = [record for entry in summary.entries for record in entry.coverage]
    if records:
        status(build_text_summary(CoverageReport(records=records)), style="info")

    counts = summary.counts
    passed = counts[RunStatus.PASSED]
    total = len(summary.entries)
    style = "success" if summary.passed else "error"
    status(f"{passed}/{pluralize(total, 'target')} passed", style=style)
    if not summary.passed and (log_file := get_log_file_path()) is not None:
        status(f"Log: {log_file}", style="info")


@click.command()
@click.argument("targets", nargs=-1)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help="Skip a discovered target (repeatable). Ignored when TARGETS are given.",
)
@click.option("--coverage", is_flag=True, help="Run under bazel coverage and collect LCOV")
@click.option("--json", "as_json", is_flag=True, help="Print the run summary as JSON")
@click.pass_context
def test_command(
    ctx: click.Context,
    targets: tuple[str, ...],
    excludes: tuple[str, ...],
    coverage: bool,
    as_json: bool,
) -> None:
    """Run bazel test targets one after another.

    With no TARGETS, every discovered test target runs. Ctrl-C stops the run
    after the current target; the rest are reported as cancelled.
    """
    workspace_root = resolve_workspace(ctx)
    config = load_cli_config(workspace_root, ctx.obj["verbose"])
    ops = build_ops(workspace_root, config)

    if targets:
        request = RunRequest(
            include=[TestTarget.from_label(t) for t in targets], coverage=coverage
        )
    else:
        try:
            with spinner("Querying test targets"):
                asyncio.run(ops.discover())
        except BazelError as e:
            raise command_error(e.message) from e
        request = RunRequest(
            exclude=[TestTarget.from_label(t) for t in excludes], coverage=coverage
        )

    sink = ConsoleSink(show_output=not as_json)
    summary = asyncio.run(_run(ops, request, sink))

    if as_json:
        click.echo(json.dumps(_summary_json(summary), indent=2))
    else:
        _print_summary(summary)

    if not summary.passed:
        ctx.exit(1)
