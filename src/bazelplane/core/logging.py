"""structlog setup for bazelplane.

Events go through stdlib logging, one handler per configured output. Every
event logged while a run executes carries that run's id, so the interleaved
lines of a `bzp test` session can be told apart in a shared log file.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from bazelplane.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)

# First file output of the current configuration, shown by the CLI on failure
_log_file: Path | None = None


# =============================================================================
# Run correlation
# =============================================================================


def get_run_id() -> str | None:
    return _run_id.get()


def set_run_id(run_id: str | None = None) -> str:
    """Bind a run id to the current context, generating one if not given."""
    rid = run_id or uuid4().hex[:12]
    _run_id.set(rid)
    return rid


def clear_run_id() -> None:
    _run_id.set(None)


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    rid = _run_id.get()
    if rid is not None:
        event_dict.setdefault("run_id", rid)
    return event_dict


def get_log_file_path() -> Path | None:
    """Where file logging goes, or None when only the console is configured."""
    return _log_file


# =============================================================================
# Handlers
# =============================================================================


class ConsoleSuppressingFilter(logging.Filter):
    """Drop console records while a spinner owns the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from bazelplane.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _level(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


def _renderer(output: LogOutputConfig, to_terminal: bool) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=to_terminal and sys.stderr.isatty(),
        pad_event_to=0,
        pad_level=False,
    )


def _handler_for(
    output: LogOutputConfig,
    level: int,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    handler: logging.Handler
    to_terminal = output.destination in ("stderr", "stdout")
    if to_terminal:
        stream = sys.stderr if output.destination == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        handler.addFilter(ConsoleSuppressingFilter())
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(output, to_terminal),
            foreign_pre_chain=pre_chain,
        )
    )
    return handler


# =============================================================================
# Setup
# =============================================================================


def configure_logging(config: LoggingConfig | None = None) -> None:
    """(Re)configure structlog and the root logger from ``config``.

    Safe to call repeatedly; previous root handlers are replaced.
    """
    global _log_file
    from bazelplane.config.models import LoggingConfig

    config = config or LoggingConfig()
    root_level = _level(config.level, logging.WARNING)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_run_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    # Parser yield points make asyncio's slow-callback debug output noisy
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _log_file = None
    for output in config.outputs:
        root.addHandler(_handler_for(output, _level(output.level, root_level), pre_chain))
        if _log_file is None and output.destination not in ("stderr", "stdout"):
            _log_file = Path(output.destination)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
