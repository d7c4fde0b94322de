"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (BAZELPLANE__SECTION__KEY)
3. Workspace YAML (<workspace>/.bazelplane/config.yaml)
4. Global YAML (~/.config/bazelplane/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    BAZELPLANE__<SECTION>__<KEY>=<VALUE>

Examples:
    BAZELPLANE__LOGGING__LEVEL=DEBUG
    BAZELPLANE__BAZEL__EXECUTABLE=bazelisk
    BAZELPLANE__COVERAGE__YIELD_EVERY_LINES=5000
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from bazelplane.config.constants import (
    DEFAULT_COVERAGE_ARGS,
    DEFAULT_TEST_ARGS,
    DEFAULT_TEST_QUERY,
    DEFAULT_YIELD_EVERY_LINES,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        BAZELPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Test output is printed separately, so INFO is chatty.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class BazelConfig(BaseModel):
    """How to invoke bazel.

    Env vars:
        BAZELPLANE__BAZEL__EXECUTABLE: bazel binary (default: bazel)
    """

    executable: str = Field(
        default="bazel",
        description="Bazel executable name or path, e.g. bazelisk.",
    )
    startup_args: list[str] = Field(
        default_factory=list,
        description="Startup options placed before the subcommand, e.g. --output_base=/tmp/out.",
    )
    test_args: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_ARGS),
        description="Arguments passed to every `bazel test` / `bazel coverage` call.",
    )

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("executable must not be empty")
        return v


class DiscoveryConfig(BaseModel):
    """Test target discovery.

    Env vars:
        BAZELPLANE__DISCOVERY__QUERY: bazel query expression selecting test rules
    """

    query: str = Field(
        default=DEFAULT_TEST_QUERY,
        description="Query expression used to find test targets.",
    )
    sort_by_rule_name: bool = Field(
        default=True,
        description="Sort discovered targets by label.",
    )


class CoverageConfig(BaseModel):
    """Coverage collection.

    Env vars:
        BAZELPLANE__COVERAGE__YIELD_EVERY_LINES: parser yield interval
    """

    report_args: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COVERAGE_ARGS),
        description="Extra arguments for coverage runs (combined LCOV report).",
    )
    yield_every_lines: int = Field(
        default=DEFAULT_YIELD_EVERY_LINES,
        description="Lines parsed between event-loop yields on large reports.",
    )

    @field_validator("yield_every_lines")
    @classmethod
    def validate_yield_every_lines(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"yield_every_lines must be >= 1, got {v}")
        return v


class BazelPlaneConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    bazel: BazelConfig = Field(default_factory=BazelConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
