"""
Structured logging system for TourFinder.

Provides centralized logging with console and file outputs,
log levels, and metrics tracking for search usage.
"""

import copy
import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics about searches and catalog loading.
    """

    def __init__(
        self,
        name: str = "tourfinder",
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
            "searches": 0,
            "empty_results": 0,
            "catalog_loads": 0,
            "tours_skipped": 0,
            "searches_by_category": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
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

            log_file = log_dir / f"tourfinder_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_search(self, category: str, result_count: int):
        """Record a search and whether it found anything."""
        self.metrics["searches"] += 1
        if result_count == 0:
            self.metrics["empty_results"] += 1
        by_category = self.metrics["searches_by_category"]
        if category not in by_category:
            by_category[category] = {"searches": 0, "hits": 0}
        by_category[category]["searches"] += 1
        if result_count > 0:
            by_category[category]["hits"] += 1

    def record_catalog_load(self, skipped: int = 0):
        self.metrics["catalog_loads"] += 1
        self.metrics["tours_skipped"] += skipped

    def get_metrics(self) -> dict:
        """Return current metrics with per-category hit rates."""
        metrics_copy = copy.deepcopy(self.metrics)
        for category, stats in metrics_copy["searches_by_category"].items():
            if stats["searches"] > 0:
                stats["hit_rate"] = round(stats["hits"] / stats["searches"], 3)

        return metrics_copy

    def log_metrics_summary(self, level: int = logging.INFO):
        """Log a summary of current metrics at the given level."""
        metrics = self.get_metrics()

        total = metrics["searches"]
        empty = metrics["empty_results"]
        hit_rate = 0
        if total > 0:
            hit_rate = round((total - empty) / total * 100, 1)

        self._log(level, "=== Search Session Metrics ===", {})
        self._log(level, f"Catalog loads: {metrics['catalog_loads']} (tours skipped: {metrics['tours_skipped']})", {})
        self._log(level, f"Searches: {total - empty}/{total} with results ({hit_rate}%)", {})

        if metrics["searches_by_category"]:
            self._log(level, "Category Hit Rates:", {})
            for category, stats in metrics["searches_by_category"].items():
                rate = stats.get("hit_rate", 0) * 100
                self._log(level, f"  {category}: {stats['hits']}/{stats['searches']} ({rate:.1f}%)", {})


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "tourfinder",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file output default to TOURFINDER_LOG_LEVEL,
    TOURFINDER_LOG_DIR and TOURFINDER_LOG_FILE when not passed.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if level is None:
            level = os.getenv("TOURFINDER_LOG_LEVEL", "INFO")
        if "log_dir" not in kwargs and os.getenv("TOURFINDER_LOG_DIR"):
            kwargs["log_dir"] = Path(os.environ["TOURFINDER_LOG_DIR"])
        if "enable_file" not in kwargs:
            kwargs["enable_file"] = os.getenv("TOURFINDER_LOG_FILE", "1").lower() not in ("0", "false", "no")
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
