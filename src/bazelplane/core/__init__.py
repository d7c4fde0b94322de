"""Core module exports."""

from bazelplane.core.errors import (
    BazelError,
    BazelPlaneError,
    ConfigError,
    CoverageError,
    ErrorCode,
    InternalError,
    RunStateError,
)
from bazelplane.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from bazelplane.core.progress import spinner, status

__all__ = [
    # Errors
    "BazelError",
    "BazelPlaneError",
    "ConfigError",
    "CoverageError",
    "ErrorCode",
    "InternalError",
    "RunStateError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Console
    "spinner",
    "status",
]
