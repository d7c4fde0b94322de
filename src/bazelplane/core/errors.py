"""bazelplane error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 7xxx: Test run state
- 71xx: Coverage collection
- 8xxx: Bazel commands
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Test run state (7xxx)
    RUN_INVALID_TRANSITION = 7001
    RUN_ALREADY_STARTED = 7002
    RUN_UNKNOWN_TARGET = 7003
    RUN_DUPLICATE_TARGET = 7004

    # Coverage (71xx)
    COVERAGE_OUTPUT_PATH = 7101
    COVERAGE_ARTIFACT_MISSING = 7102
    COVERAGE_READ_FAILED = 7103
    COVERAGE_PARSE_FAILED = 7104

    # Bazel (8xxx)
    BAZEL_COMMAND_FAILED = 8001
    BAZEL_NOT_FOUND = 8002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class BazelPlaneError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(BazelPlaneError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class RunStateError(BazelPlaneError):
    """Illegal state transition inside a test run."""

    @classmethod
    def invalid_transition(cls, target_id: str, current: str, wanted: str) -> "RunStateError":
        return cls(
            code=ErrorCode.RUN_INVALID_TRANSITION,
            message=f"Cannot move {target_id} from {current} to {wanted}",
            details={"target_id": target_id, "current": current, "wanted": wanted},
        )

    @classmethod
    def already_started(cls, target_id: str) -> "RunStateError":
        return cls(
            code=ErrorCode.RUN_ALREADY_STARTED,
            message=f"Cannot enqueue {target_id}: run has already started executing",
            details={"target_id": target_id},
        )

    @classmethod
    def unknown_target(cls, target_id: str) -> "RunStateError":
        return cls(
            code=ErrorCode.RUN_UNKNOWN_TARGET,
            message=f"Target is not part of this run: {target_id}",
            details={"target_id": target_id},
        )

    @classmethod
    def duplicate_target(cls, target_id: str) -> "RunStateError":
        return cls(
            code=ErrorCode.RUN_DUPLICATE_TARGET,
            message=f"Target already enqueued in this run: {target_id}",
            details={"target_id": target_id},
        )


class CoverageError(BazelPlaneError):
    """Coverage data could not be collected for a finished run.

    The message is user-facing: the orchestrator reports it verbatim as the
    errored target's failure message.
    """

    @classmethod
    def output_path_failed(cls, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_OUTPUT_PATH,
            message=f"Error parsing coverage data: could not resolve output path: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def artifact_missing(cls, path: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_ARTIFACT_MISSING,
            message=f"Error parsing coverage data: coverage report not found: {path}",
            details={"path": path},
        )

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_READ_FAILED,
            message=f"Error parsing coverage data: failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def parse_failed(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_FAILED,
            message=f"Error parsing coverage data: {reason}",
            details={"path": path, "reason": reason},
        )


class BazelError(BazelPlaneError):
    """A bazel subcommand could not be run or exited unsuccessfully."""

    @classmethod
    def command_failed(cls, command: list[str], exit_code: int, stderr: str) -> "BazelError":
        return cls(
            code=ErrorCode.BAZEL_COMMAND_FAILED,
            message=f"`{' '.join(command)}` exited with code {exit_code}",
            details={"command": command, "exit_code": exit_code, "stderr": stderr},
        )

    @classmethod
    def not_found(cls, executable: str, reason: str) -> "BazelError":
        return cls(
            code=ErrorCode.BAZEL_NOT_FOUND,
            message=f"Could not start {executable}: {reason}",
            details={"executable": executable, "reason": reason},
        )


class InternalError(BazelPlaneError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
