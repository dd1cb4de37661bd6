"""
Logging configuration for the pumi gazetteer.

This module provides the logger used by the command-line tools, with
configurable level, optional file output and helpers for pipeline phases.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class GazetteerLogger:
    """Custom logger for gazetteer build and query operations."""

    def __init__(self, name: str = "pumi", level: str = "INFO",
                 log_file: Optional[str] = None):
        """
        Initialize the gazetteer logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Query output goes to stdout, keep log lines on stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def critical(self, message: str):
        self.logger.critical(message)

    def log_phase_start(self, phase_name: str):
        """Log the start of a processing phase."""
        self.info("-" * 40)
        self.info(f"Starting {phase_name}")
        self.info("-" * 40)

    def log_phase_complete(self, phase_name: str, count: int, duration: float):
        """Log the completion of a processing phase."""
        self.info(f"Completed {phase_name}")
        self.info(f"Records processed: {count:,}")
        self.info(f"Duration: {duration:.2f} seconds")


def setup_logging(config) -> GazetteerLogger:
    """
    Set up logging based on configuration.

    Args:
        config: GazetteerConfig instance

    Returns:
        Configured GazetteerLogger instance
    """
    return GazetteerLogger(
        name="pumi",
        level=config.log_level,
        log_file=config.log_file
    )


def log_data_quality_warning(logger: logging.Logger, message: str):
    """Log a data quality warning with the common prefix."""
    logger.warning(f"DATA QUALITY: {message}")
