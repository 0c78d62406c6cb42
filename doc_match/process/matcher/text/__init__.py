# Path: doc_match/process/matcher/text/__init__.py
"""
Text Normalization

Pure string helpers shared by scoring, learning, series detection
and context tracking.
"""

from .normalizer import (
    Normalizer,
    clean,
    words,
    tokenize,
    extract_pattern,
    key_terms,
    basename,
    directory,
    path_segments,
    last_number,
    sequence_base,
)

__all__ = [
    'Normalizer',
    'clean',
    'words',
    'tokenize',
    'extract_pattern',
    'key_terms',
    'basename',
    'directory',
    'path_segments',
    'last_number',
    'sequence_base',
]
