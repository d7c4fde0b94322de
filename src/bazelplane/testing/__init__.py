"""Test discovery, execution and coverage collection for bazel workspaces."""

from bazelplane.testing.bazel import BazelClient, ExecutionCollaborator
from bazelplane.testing.models import (
    RunRequest,
    RunStatus,
    RunSummary,
    TestRunEntry,
    TestTarget,
)
from bazelplane.testing.ops import RunContext, TestOps
from bazelplane.testing.sink import LoggingSink, ReportingSink
from bazelplane.testing.tracker import RunStateTracker

__all__ = [
    "BazelClient",
    "ExecutionCollaborator",
    "LoggingSink",
    "ReportingSink",
    "RunContext",
    "RunRequest",
    "RunStateTracker",
    "RunStatus",
    "RunSummary",
    "TestOps",
    "TestRunEntry",
    "TestTarget",
]
