# Path: doc_match/core/logger/ipo_logging.py
"""
IPO-Aware Logging for doc_match (Document Reference Matching)

Input-Process-Output separated logging for the matching engine.

This module sets up logging with separate files for:
- INPUT layer (reference/path lists, dictionary, learning snapshots)
- PROCESS layer (scoring, learning, series detection, ledger)
- OUTPUT layer (learning-data export, CLI summaries)
- Full activity (everything combined)

File logging is optional. Without a log directory only the console
handler is installed, so the engine can run inside a host application
that owns its own log files.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

IPO_LAYERS = ('input', 'process', 'output')


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name == self.layer or record.name.startswith(f'{self.layer}.')


def _resolve_level(log_level: str) -> int:
    """Map a level name to a logging constant, INFO when unknown."""
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for doc_match.

    When log_dir is given, creates:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS/matching layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files, or None for console only
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/doc_match'),
            log_level='INFO',
            console_output=True
        )
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        full_handler = logging.FileHandler(log_dir / 'full_activity.log')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer in IPO_LAYERS:
            handler = logging.FileHandler(log_dir / f'{layer}_activity.log')
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'dictionary_loader', 'learning_snapshot')

    Returns:
        Logger configured for INPUT layer

    Example:
        logger = get_input_logger('dictionary_loader')
        logger.info("Loading document types")
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer (matching engine).

    Args:
        name: Logger name (e.g., 'matcher.coordinator', 'matcher.learning')

    Returns:
        Logger configured for PROCESS layer
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'learning_export')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
