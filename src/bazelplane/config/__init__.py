"""Config module exports."""

from bazelplane.config.loader import load_config
from bazelplane.config.models import (
    BazelConfig,
    BazelPlaneConfig,
    CoverageConfig,
    DiscoveryConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "BazelConfig",
    "BazelPlaneConfig",
    "CoverageConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
