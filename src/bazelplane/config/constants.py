"""Configuration constants.

Values here are protocol details of bazel's coverage output and defaults
for the configurable fields in models.py.
"""

# =============================================================================
# Coverage Artifact Location
# =============================================================================
# `bazel coverage --combined_report=lcov` writes the merged report here,
# relative to the directory printed by `bazel info output_path`.

COVERAGE_DIR_NAME = "_coverage"
COVERAGE_REPORT_NAME = "_coverage_report.dat"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_TEST_QUERY = "kind('.*_test rule', ...)"
"""Selects every test rule in the workspace."""

DEFAULT_TEST_ARGS: tuple[str, ...] = ("--curses=no", "--color=yes", "--test_output=all")

DEFAULT_COVERAGE_ARGS: tuple[str, ...] = ("--combined_report=lcov",)

DEFAULT_YIELD_EVERY_LINES = 1000

CONFIG_DIR_NAME = ".bazelplane"
