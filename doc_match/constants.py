# Path: doc_match/constants.py
"""
System-Wide Constants for doc_match (Document Reference Matching)

Central repository for constant values used across the matching engine.
NO HARDCODED VALUES in module code - all constants defined here.

Constants are organized by category:
- Match Methods
- Series Types and Increment Patterns
- Scoring Weights and Text Handling
- Learning Bonuses
- Context Bonuses
- Learning Data Format
"""

from enum import Enum
from typing import Final


# ==============================================================================
# MATCH METHODS
# ==============================================================================

class MatchMethod(str, Enum):
    """How a confirmed match was produced."""
    MANUAL = 'manual'
    PATTERN = 'pattern'
    AUTO = 'auto'


# ==============================================================================
# SERIES TYPES
# ==============================================================================

class SeriesType(str, Enum):
    """
    Known series shapes, in detection priority order.

    First matching shape wins for each reference.
    """
    EXHIBIT = 'exhibit'
    APPENDIX = 'appendix'
    WITNESS = 'witness'
    DOCUMENT = 'document'


class IncrementPattern(str, Enum):
    """
    Numeric progression observed inside a series or sequence.

    SEQUENTIAL: every step uses the same increment
    GAPPED: most steps share an increment, a few jump
    IRREGULAR: no dominant increment
    """
    SEQUENTIAL = 'sequential'
    GAPPED = 'gapped'
    IRREGULAR = 'irregular'


# ==============================================================================
# SCORING WEIGHTS
# ==============================================================================

# Default adaptive weights; always sum to 1.0
DEFAULT_WORD_WEIGHT: Final[float] = 0.56
DEFAULT_CHARACTER_WEIGHT: Final[float] = 0.24
DEFAULT_LEARNED_WEIGHT: Final[float] = 0.2

# Ceiling reached by the learned weight with enough successful history
MAX_LEARNED_WEIGHT: Final[float] = 0.4

# Weight adaptation control loop
WEIGHT_UPDATE_MIN_MATCHES: Final[int] = 50
WEIGHT_UPDATE_MIN_SUCCESS_RATE: Final[float] = 0.8
WEIGHT_UPDATE_FULL_DATA: Final[int] = 500
WEIGHT_UPDATE_SUCCESS_GAIN: Final[float] = 5.0

WEIGHT_TOLERANCE: Final[float] = 1e-9

# Partial credit for prefix/substring word matches
PARTIAL_WORD_CREDIT: Final[float] = 0.7
PARTIAL_WORD_MIN_LENGTH: Final[int] = 2


# ==============================================================================
# TEXT HANDLING
# ==============================================================================

MIN_TERM_LENGTH: Final[int] = 3

STOP_WORDS: Final[frozenset[str]] = frozenset({
    'the', 'and', 'for', 'with', 'from',
    'pdf', 'doc', 'docx', 'txt', 'file',
})

DIGIT_PLACEHOLDER: Final[str] = '#'


# ==============================================================================
# LEARNING BONUSES
# ==============================================================================

PATTERN_BONUS_CAP: Final[float] = 0.15
PATTERN_BONUS_FACTOR: Final[float] = 0.03
TERM_BONUS_CAP: Final[float] = 0.15

TERM_CONFIRM_STEP: Final[float] = 0.1
TERM_REJECT_STEP: Final[float] = 0.05

SUGGESTION_LIMIT: Final[int] = 5
SUGGESTION_CONFIDENCE_STEP: Final[float] = 0.1
SUGGESTION_CONFIDENCE_CAP: Final[float] = 0.9

TERM_SUGGESTION_LIMIT: Final[int] = 3
TERM_SUGGESTION_MIN_WEIGHT: Final[float] = 0.1
TERM_SUGGESTION_CONFIDENCE_CAP: Final[float] = 0.8

TOP_PATTERN_LIMIT: Final[int] = 5
TOP_PATTERN_EXAMPLES: Final[int] = 3
RECENT_MATCH_LIMIT: Final[int] = 10


# ==============================================================================
# CONTEXT BONUSES
# ==============================================================================

FOLDER_SAME_BONUS: Final[float] = 0.10
FOLDER_SUBFOLDER_BONUS: Final[float] = 0.05
TYPE_FOLDER_BONUS: Final[float] = 0.10

SEQUENCE_BONUS: Final[dict[IncrementPattern, float]] = {
    IncrementPattern.SEQUENTIAL: 0.15,
    IncrementPattern.GAPPED: 0.10,
    IncrementPattern.IRREGULAR: 0.05,
}

HIERARCHY_BONUS_CAP: Final[float] = 0.10
PROXIMITY_BONUS_CAP: Final[float] = 0.10
PROXIMITY_MAX_DEPTH: Final[int] = 4


# ==============================================================================
# CONFIDENCE BANDS
# ==============================================================================

CONFIDENCE_HIGH_MIN: Final[float] = 0.7
CONFIDENCE_MEDIUM_MIN: Final[float] = 0.4


# ==============================================================================
# LEARNING DATA FORMAT
# ==============================================================================

LEARNING_DATA_VERSION: Final[str] = '1.0'
SUPPORTED_LEARNING_VERSIONS: Final[tuple[str, ...]] = ('1.0',)


class LearningKeys:
    """
    Standard JSON keys for learning-data snapshots.

    Shared by the snapshot parser and the exporter.
    """
    VERSION: Final[str] = 'version'
    EXPORT_DATE: Final[str] = 'exportDate'
    PATTERNS: Final[str] = 'patterns'
    TERM_MAPPINGS: Final[str] = 'termMappings'
    STATISTICS: Final[str] = 'statistics'
    WEIGHTS: Final[str] = 'weights'
    MATCH_HISTORY: Final[str] = 'matchHistory'


# ==============================================================================
# DISPLAY FORMATTING
# ==============================================================================

MENU_WIDTH: Final[int] = 60
MENU_SEPARATOR: Final[str] = '-' * MENU_WIDTH
MENU_HEADER: Final[str] = '=' * MENU_WIDTH

# Status indicators (ASCII only - no emojis)
STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'


# ==============================================================================
# EXPORTS
# ==============================================================================

__all__ = [
    # Enums
    'MatchMethod',
    'SeriesType',
    'IncrementPattern',

    # Weights
    'DEFAULT_WORD_WEIGHT',
    'DEFAULT_CHARACTER_WEIGHT',
    'DEFAULT_LEARNED_WEIGHT',
    'MAX_LEARNED_WEIGHT',
    'WEIGHT_UPDATE_MIN_MATCHES',
    'WEIGHT_UPDATE_MIN_SUCCESS_RATE',
    'WEIGHT_UPDATE_FULL_DATA',
    'WEIGHT_UPDATE_SUCCESS_GAIN',
    'WEIGHT_TOLERANCE',
    'PARTIAL_WORD_CREDIT',
    'PARTIAL_WORD_MIN_LENGTH',

    # Text
    'MIN_TERM_LENGTH',
    'STOP_WORDS',
    'DIGIT_PLACEHOLDER',

    # Learning
    'PATTERN_BONUS_CAP',
    'PATTERN_BONUS_FACTOR',
    'TERM_BONUS_CAP',
    'TERM_CONFIRM_STEP',
    'TERM_REJECT_STEP',
    'SUGGESTION_LIMIT',
    'SUGGESTION_CONFIDENCE_STEP',
    'SUGGESTION_CONFIDENCE_CAP',
    'TERM_SUGGESTION_LIMIT',
    'TERM_SUGGESTION_MIN_WEIGHT',
    'TERM_SUGGESTION_CONFIDENCE_CAP',
    'TOP_PATTERN_LIMIT',
    'TOP_PATTERN_EXAMPLES',
    'RECENT_MATCH_LIMIT',

    # Context
    'FOLDER_SAME_BONUS',
    'FOLDER_SUBFOLDER_BONUS',
    'TYPE_FOLDER_BONUS',
    'SEQUENCE_BONUS',
    'HIERARCHY_BONUS_CAP',
    'PROXIMITY_BONUS_CAP',
    'PROXIMITY_MAX_DEPTH',

    # Confidence
    'CONFIDENCE_HIGH_MIN',
    'CONFIDENCE_MEDIUM_MIN',

    # Learning data
    'LEARNING_DATA_VERSION',
    'SUPPORTED_LEARNING_VERSIONS',
    'LearningKeys',

    # Display
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
]
