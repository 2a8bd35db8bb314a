"""
Structured logging for Saned.

Console and file output with key/value context, plus counters that
track how the match store is being used.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks match store activity counters.
    """

    def __init__(
        self,
        name: str = "saned",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "match_runs": 0,
            "matches_computed": 0,
            "matches_created": 0,
            "matches_reused": 0,
            "preferences_recorded": {},
            "not_found": 0,
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"saned_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_match_run(self, computed: int, created: int):
        """Record one find-potential-matches pass."""
        self.metrics["match_runs"] += 1
        self.metrics["matches_computed"] += computed
        self.metrics["matches_created"] += created
        self.metrics["matches_reused"] += computed - created

    def record_preference(self, preference: str):
        """Record a like/dislike."""
        counts = self.metrics["preferences_recorded"]
        counts[preference] = counts.get(preference, 0) + 1

    def record_not_found(self):
        self.metrics["not_found"] += 1

    def get_metrics(self) -> dict:
        """Return a copy of current metrics with the reuse rate filled in."""
        metrics_copy = dict(self.metrics)
        metrics_copy["preferences_recorded"] = dict(self.metrics["preferences_recorded"])
        computed = metrics_copy["matches_computed"]
        metrics_copy["reuse_rate"] = (
            round(metrics_copy["matches_reused"] / computed, 3) if computed > 0 else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Match Store Metrics ===")
        self.info(f"Match runs: {metrics['match_runs']}")
        self.info(
            f"Matches: {metrics['matches_computed']} computed, "
            f"{metrics['matches_created']} created, "
            f"{metrics['matches_reused']} reused ({metrics['reuse_rate'] * 100:.1f}% reuse)"
        )

        if metrics["preferences_recorded"]:
            self.info("Preferences:")
            for preference, count in metrics["preferences_recorded"].items():
                self.info(f"  {preference}: {count}")

        if metrics["not_found"]:
            self.info(f"Lookups for missing users: {metrics['not_found']}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "saned",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
