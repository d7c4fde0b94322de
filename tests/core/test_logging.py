"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import structlog

from bazelplane.config.models import LoggingConfig, LogOutputConfig
from bazelplane.core.logging import (
    ConsoleSuppressingFilter,
    clear_run_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_run_id,
    set_run_id,
)
from bazelplane.core.progress import suppress_console_logs


class TestRunIdCorrelation:
    """Run ID context variable tests."""

    def setup_method(self) -> None:
        clear_run_id()

    def test_given_run_id_when_set_then_can_retrieve(self) -> None:
        """Run ID can be set and retrieved."""
        # When
        result = set_run_id("run-123")

        # Then
        assert result == "run-123"
        assert get_run_id() == "run-123"

    def test_given_no_id_when_set_then_generates_one(self) -> None:
        rid = set_run_id()

        assert len(rid) == 12

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        set_run_id("to-clear")

        clear_run_id()

        assert get_run_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def teardown_method(self) -> None:
        clear_run_id()

    def test_given_run_id_when_log_then_event_carries_it(self, tmp_path: Path) -> None:
        """Events logged during a run include its run_id."""
        # Given
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_run_id("abc12345")

        # When
        get_logger("ops").info("target_passed", target="//a:t")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "target_passed"
        assert data["run_id"] == "abc12345"
        assert data["target"] == "//a:t"
        assert data["level"] == "info"
        assert get_log_file_path() == log_file

    def test_given_level_when_lower_event_then_dropped(self, tmp_path: Path) -> None:
        log_file = tmp_path / "warn.log"
        configure_logging(
            config=LoggingConfig(
                level="WARNING",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        logger = get_logger()
        logger.info("quiet")
        logger.warning("loud")

        content = log_file.read_text()
        assert "quiet" not in content
        assert "loud" in content

    def test_given_multi_output_config_when_configure_then_per_output_levels(
        self, tmp_path: Path
    ) -> None:
        """Each output filters at its own level."""
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[
                    LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                    LogOutputConfig(format="console", destination=str(debug_file)),
                ],
            )
        )

        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        assert "debug only" not in info_file.read_text()
        assert "debug only" in debug_file.read_text()
        assert "info msg" in debug_file.read_text()


class TestConsoleSuppressingFilter:
    def test_blocks_while_suppressed(self) -> None:
        log_filter = ConsoleSuppressingFilter()
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert log_filter.filter(record) is True
        with suppress_console_logs():
            assert log_filter.filter(record) is False
        assert log_filter.filter(record) is True

    def test_given_console_only_when_configure_then_no_log_file(self, tmp_path: Path) -> None:
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(format="json", destination=str(tmp_path / "a.log"))]
            )
        )
        configure_logging(config=LoggingConfig())

        assert get_log_file_path() is None
