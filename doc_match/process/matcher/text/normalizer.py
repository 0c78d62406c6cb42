# Path: doc_match/process/matcher/text/normalizer.py
"""
Normalizer

Cleans raw references and path segments into comparable forms.

All functions are pure and deterministic. clean() is idempotent:
after one pass no extension, prefix code, date, version suffix or
separator run is left for a second pass to remove.
"""

import re
from functools import lru_cache
from typing import Optional

from ....constants import STOP_WORDS, MIN_TERM_LENGTH, DIGIT_PLACEHOLDER


# ==============================================================================
# PATTERNS
# ==============================================================================

# Extension must contain a letter so "A5.01" keeps its number
_EXTENSION = re.compile(r'\.(?=[A-Za-z0-9]*[A-Za-z])[A-Za-z0-9]{1,5}$')

# Leading short alphabetic code followed by a hyphen and more text,
# e.g. "RDCC-Appendix". "CW-1" is left alone.
_PREFIX_CODE = re.compile(r'^[A-Za-z]{2,5}-(?=[A-Za-z])')

_ISO_DATE = re.compile(r'\d{4}[-_.]\d{2}[-_.]\d{2}')
# Version marker after any separator collapsed below
_VERSION = re.compile(r'[\s_\-–—./\\]v\d+(?=$|[\s_\-–—./\\])', re.IGNORECASE)
_PUNCTUATION = re.compile(r'[\'"()\[\],;:]')
_SEPARATORS = re.compile(r'[\s_\-–—./\\]+')

_TERM_SPLIT = re.compile(r'[\s/\\\-_.]+')
_PATH_SPLIT = re.compile(r'[/\\]')

_KEY_TERMS = re.compile(r'([A-Z]+-?\d+-\d+)|([A-Z]+-?\d+)|(\d{3,})')
_DIGITS = re.compile(r'\d+')

# Pattern generalization mirrors the learning-data format
_PATTERN_EXTENSION = re.compile(r'\.[^/.]+$')
_PATTERN_SEPARATORS = re.compile(r'[_-]+')
_PATTERN_VERSION = re.compile(r'\b(v|ver|version)\s*#')
_WHITESPACE = re.compile(r'\s+')


# ==============================================================================
# FUNCTIONS
# ==============================================================================

@lru_cache(maxsize=65536)
def clean(text: str) -> str:
    """
    Clean text into its comparable token form.

    Strips a file extension, a leading prefix code, ISO-like dates
    and version suffixes; collapses separators to single spaces;
    lowercases and trims.

    Args:
        text: Raw reference or file name

    Returns:
        Cleaned string (empty for empty input)

    Example:
        clean("Exhibit_A5-01.PDF")  # "exhibit a5 01"
    """
    if not text:
        return ''

    value = text.strip()
    value = _EXTENSION.sub('', value)
    value = _PREFIX_CODE.sub('', value)
    value = _PUNCTUATION.sub(' ', value)
    value = _ISO_DATE.sub(' ', value)
    value = _VERSION.sub(' ', value)
    value = _SEPARATORS.sub(' ', value)
    return value.lower().strip()


def words(text: str) -> list[str]:
    """All tokens of the cleaned text, in order."""
    cleaned = clean(text)
    return cleaned.split(' ') if cleaned else []


def tokenize(text: str) -> list[str]:
    """
    Split text into learning terms.

    Splits on whitespace, slashes and separators; drops terms
    shorter than three characters and stop words.

    Args:
        text: Raw reference or path

    Returns:
        Ordered list of terms (duplicates kept)
    """
    if not text:
        return []
    return [
        term for term in _TERM_SPLIT.split(text.lower())
        if len(term) >= MIN_TERM_LENGTH and term not in STOP_WORDS
    ]


def extract_pattern(text: str) -> str:
    """
    Generalize text into a pattern: digits become '#'.

    Example:
        extract_pattern("Exhibit A5-01")  # "exhibit a# #"
    """
    if not text:
        return ''
    value = _DIGITS.sub(DIGIT_PLACEHOLDER, text.lower())
    value = _PATTERN_EXTENSION.sub('', value)
    value = _PATTERN_SEPARATORS.sub(' ', value)
    value = _PATTERN_VERSION.sub('v#', value)
    value = _WHITESPACE.sub(' ', value)
    return value.strip()


def key_terms(text: str) -> list[str]:
    """
    Extract identifying codes (A5-01, CW-1, 3+ digit numbers).

    Matching is case-sensitive: codes are upper-case in references.
    """
    if not text:
        return []
    return [match.group(0) for match in _KEY_TERMS.finditer(text)]


def basename(path: str) -> str:
    """Last segment of a path, with either separator."""
    if not path:
        return ''
    return _PATH_SPLIT.split(path)[-1]


def directory(path: str) -> str:
    """Directory part of a path using '/', empty at top level."""
    if not path:
        return ''
    parts = _PATH_SPLIT.split(path)
    return '/'.join(parts[:-1])


def path_segments(path: str) -> list[str]:
    """Directory segments of a path, excluding the file name."""
    folder = directory(path)
    return [segment for segment in folder.split('/') if segment] if folder else []


def last_number(text: str) -> Optional[int]:
    """Value of the last digit run in text, or None."""
    if not text:
        return None
    runs = _DIGITS.findall(basename(text))
    return int(runs[-1]) if runs else None


def sequence_base(text: str) -> str:
    """
    Key shared by references differing only in their last number.

    Example:
        sequence_base("Exhibit A5-03")  # "exhibit a5-#"
    """
    if not text:
        return ''
    value = text.lower().strip()
    runs = list(_DIGITS.finditer(value))
    if not runs:
        return value
    last = runs[-1]
    return value[:last.start()] + DIGIT_PLACEHOLDER + value[last.end():]


class Normalizer:
    """
    Object facade over the normalization functions.

    Lets collaborators receive a normalizer instead of importing
    module functions, so it can be swapped in tests.

    Example:
        normalizer = Normalizer()
        normalizer.clean("Exhibit_A5-01.PDF")     # "exhibit a5 01"
        normalizer.tokenize("Claimant Letter")    # ["claimant", "letter"]
    """

    clean = staticmethod(clean)
    words = staticmethod(words)
    tokenize = staticmethod(tokenize)
    extract_pattern = staticmethod(extract_pattern)
    key_terms = staticmethod(key_terms)
    basename = staticmethod(basename)
    directory = staticmethod(directory)
    path_segments = staticmethod(path_segments)
    last_number = staticmethod(last_number)
    sequence_base = staticmethod(sequence_base)


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
