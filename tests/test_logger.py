"""
Tests for logger functionality.
"""

import pytest

from careersarthi.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        logger = StructuredLogger(name="test", level="INFO", log_dir=tmp_path, enable_console=False)

        assert logger.logger.name == "test"
        assert logger.metrics["api_calls"] == 0

    def test_log_with_context(self, tmp_path):
        """Context keywords are appended to the message as JSON."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.info("Found jobs", country="gb", count=5)

        content = next(tmp_path.glob("*.log")).read_text()
        assert "Found jobs" in content
        assert '"country": "gb"' in content

    def test_metrics_tracking(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_api_call()
        logger.record_api_call()
        logger.record_fetch_attempt("gb")
        logger.record_fetch_success("gb", postings=20)
        logger.record_fetch_attempt("us")
        logger.record_fetch_failure("us", "Timeout")

        metrics = logger.get_metrics()

        assert metrics["api_calls"] == 2
        assert metrics["fetches_attempted"] == 2
        assert metrics["fetches_successful"] == 1
        assert metrics["fetches_failed"] == 1
        assert metrics["postings_received"] == 20
        assert metrics["errors_by_type"]["Timeout"] == 1
        assert metrics["country_success_rate"]["gb"]["success_rate"] == 1.0
        assert metrics["country_success_rate"]["us"]["success_rate"] == 0.0

    def test_success_rate_calculation(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        for _ in range(3):
            logger.record_fetch_attempt("in")
        logger.record_fetch_success("in")
        logger.record_fetch_success("in")

        rate = logger.get_metrics()["country_success_rate"]["in"]["success_rate"]
        assert rate == pytest.approx(0.667, rel=0.01)

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_fetch_attempt("gb")
        logger.record_fetch_failure("gb", "HTTPError_500")

        logger.log_metrics_summary()

        content = next(tmp_path.glob("*.log")).read_text()
        assert "Fetches: 0/1" in content
        assert "HTTPError_500: 1" in content
        assert "Countries with failures: gb" in content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        reset_logger()
        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_api_call()

        reset_logger()
        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2.metrics["api_calls"] == 0
