# Path: doc_match/core/logger/__init__.py
"""
doc_match Logger Package

IPO-aware logging for the document reference matching engine.

Provides separate log streams for:
- INPUT layer (loaders)
- PROCESS layer (matching, learning)
- OUTPUT layer (exports)
"""

from .ipo_logging import (
    IPOFilter,
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
