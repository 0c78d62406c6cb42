# Path: doc_match/core/__init__.py
"""
doc_match Core Package

Core utilities for the document reference matching engine.

Submodules:
    - logger: IPO-aware logging system
"""

from .logger import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
