"""Logging infrastructure with date-range context."""
import logging
import os
import sys
from datetime import date
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def default_log_dir() -> Path:
    """Log directory used before settings are loaded."""
    home = os.getenv("REWARDFLOW_HOME")
    base = Path(home) if home else Path.home() / ".rewardflow"
    return base / "logs"


def format_range(start: Optional[date], end: Optional[date]) -> str:
    """Render a date range as ``start..end`` with ``*`` for open bounds."""
    start_text = start.isoformat() if start else "*"
    end_text = end.isoformat() if end else "*"
    return f"{start_text}..{end_text}"


class RangeContextFilter(logging.Filter):
    """Add the active date range to log records."""

    def __init__(self):
        super().__init__()
        self.date_range: Optional[str] = None

    def filter(self, record):
        """Add date_range to record."""
        record.date_range = self.date_range or "*..*"
        return True


class RewardFlowLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 30
    ):
        self.log_dir = Path(log_dir) if log_dir else default_log_dir()
        self.log_file = self.log_dir / "rewardflow.log"
        self.range_filter = RangeContextFilter()

        self.logger = logging.getLogger("rewardflow")
        self.logger.setLevel(getattr(logging, log_level.upper()))

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [range:%(date_range)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.range_filter)
        self.logger.addHandler(console_handler)

        # File handler with rotation
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {self.log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.range_filter)
            self.logger.addHandler(file_handler)

    def set_range_context(self, start: Optional[date], end: Optional[date]):
        """Set current date range for logging."""
        if start is None and end is None:
            self.range_filter.date_range = None
        else:
            self.range_filter.date_range = format_range(start, end)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[RewardFlowLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = RewardFlowLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(
    log_level: str,
    log_dir: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 30
) -> logging.Logger:
    """Rebuild the global logger from loaded settings."""
    global _logger_instance
    _logger_instance = RewardFlowLogger(
        log_level,
        log_dir=log_dir,
        max_bytes=max_file_size_mb * 1024 * 1024,
        backup_count=backup_count
    )
    return _logger_instance.get_logger()


def set_range_context(start: Optional[date], end: Optional[date]):
    """Set date range context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_range_context(start, end)
