"""
Structured logging for CareerSarthi.

Messages carry keyword context as JSON. The logger also counts job-search
fetches per country so a run can report which endpoints failed.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
    return handler


class StructuredLogger:
    """Console/file logger with per-country fetch counters."""

    def __init__(
        self,
        name: str = "careersarthi",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for the daily log file (default: logs/)
            enable_file: Write logs to file
            enable_console: Write logs to stderr
        """
        numeric_level = getattr(logging, level.upper())
        self.logger = logging.getLogger(name)
        self.logger.setLevel(numeric_level)
        self.logger.handlers.clear()

        self.metrics = {
            "api_calls": 0,
            "fetches_attempted": 0,
            "fetches_successful": 0,
            "fetches_failed": 0,
            "postings_received": 0,
            "errors_by_type": {},
            "country_success_rate": {},
        }

        if enable_console:
            self.logger.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level, CONSOLE_FORMAT))

        if enable_file:
            log_dir = log_dir or Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"careersarthi_{datetime.now().strftime('%Y%m%d')}.log"
            # File gets everything, whatever the console level
            self.logger.addHandler(_handler(logging.FileHandler(log_file, encoding='utf-8'), logging.DEBUG, FILE_FORMAT))

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def record_api_call(self):
        self.metrics["api_calls"] += 1

    def _country(self, country: str) -> dict:
        return self.metrics["country_success_rate"].setdefault(country, {"attempts": 0, "successes": 0})

    def record_fetch_attempt(self, country: str):
        self.metrics["fetches_attempted"] += 1
        self._country(country)["attempts"] += 1

    def record_fetch_success(self, country: str, postings: int = 0):
        self.metrics["fetches_successful"] += 1
        self.metrics["postings_received"] += postings
        self._country(country)["successes"] += 1

    def record_fetch_failure(self, country: str, error_type: str):
        self.metrics["fetches_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Counters plus a success_rate for every country attempted."""
        for stats in self.metrics["country_success_rate"].values():
            if stats["attempts"]:
                stats["success_rate"] = round(stats["successes"] / stats["attempts"], 3)
        return self.metrics

    def log_metrics_summary(self):
        m = self.get_metrics()
        self.info(
            f"Fetches: {m['fetches_successful']}/{m['fetches_attempted']}, "
            f"API calls: {m['api_calls']}, postings: {m['postings_received']}"
        )
        failed = [c for c, s in m["country_success_rate"].items() if s["successes"] < s["attempts"]]
        if failed:
            self.info(f"Countries with failures: {', '.join(failed)}")
        for error_type, count in m["errors_by_type"].items():
            self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "careersarthi", level: str = "INFO", **kwargs) -> StructuredLogger:
    """Return the process-wide logger, creating it on first use.

    Arguments only apply when the logger is created.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Drop the process-wide logger (tests use this)."""
    global _global_logger
    _global_logger = None
