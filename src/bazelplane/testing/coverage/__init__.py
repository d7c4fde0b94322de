"""LCOV coverage parsing, collection, and reporting.

Usage:
    from bazelplane.testing.coverage import parse_lcov, CoverageReport, build_summary

    records = await parse_lcov("/path/to/workspace", lcov_text)
    summary = build_summary(CoverageReport(records))
"""

from bazelplane.testing.coverage.collector import collect_coverage, coverage_artifact_path
from bazelplane.testing.coverage.models import (
    BranchHit,
    CoverageParseError,
    CoverageReport,
    CoverageSummary,
    FileCoverageRecord,
    LineHit,
)
from bazelplane.testing.coverage.parsers import parse_lcov
from bazelplane.testing.coverage.paths import resolve_source_path
from bazelplane.testing.coverage.report import (
    build_summary,
    build_text_summary,
    compute_file_stats,
)

__all__ = [
    # Models
    "BranchHit",
    "CoverageParseError",
    "CoverageReport",
    "CoverageSummary",
    "FileCoverageRecord",
    "LineHit",
    # Parsing
    "parse_lcov",
    "resolve_source_path",
    # Collection
    "collect_coverage",
    "coverage_artifact_path",
    # Report
    "build_summary",
    "build_text_summary",
    "compute_file_stats",
]
