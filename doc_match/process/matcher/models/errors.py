# Path: doc_match/process/matcher/models/errors.py
"""
Matching Errors

Exception hierarchy and import-report models for the matching engine.

This module defines:
- MatchingError: root of all engine errors
- ValidationError: invalid reference/path given to a stateful operation
- ConflictError: confirm on a used path or an already matched reference
- DataCorruptionError: learning-data payload unusable as a whole
- ImportIssue/ImportReport: per-entry problems collected during import
"""

from dataclasses import dataclass, field
from typing import Optional


# ==============================================================================
# EXCEPTIONS
# ==============================================================================

class MatchingError(Exception):
    """Base class for all matching engine errors."""


class ValidationError(MatchingError):
    """
    A reference or path is empty or unknown to the session.

    Raised by stateful operations only (confirm, reject, remove).
    Scoring never raises it: an empty input simply scores 0.
    """


class ConflictError(MatchingError):
    """
    A confirm would break the one-to-one mapping.

    Attributes:
        reference: Reference the caller tried to confirm
        path: Path the caller tried to confirm
        holder: Reference already holding the path, or path already
                assigned to the reference
    """

    def __init__(self, reference: str, path: str, holder: str, message: Optional[str] = None):
        self.reference = reference
        self.path = path
        self.holder = holder
        super().__init__(
            message or f"Cannot match '{reference}' to '{path}': held by '{holder}'"
        )


class DataCorruptionError(MatchingError):
    """Learning-data payload is not a mapping or has an unsupported version."""


# ==============================================================================
# IMPORT REPORT
# ==============================================================================

@dataclass
class ImportIssue:
    """
    A single skipped or adjusted entry during a learning-data import.

    Attributes:
        location: Where in the payload (e.g., "patterns[3]")
        message: What was wrong
    """
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'location': self.location, 'message': self.message}


@dataclass
class ImportReport:
    """
    Outcome of a learning-data import.

    Attributes:
        patterns_imported: Reference patterns accepted
        terms_imported: Term entries accepted
        history_imported: History entries accepted
        warnings: Per-entry problems that were skipped or adjusted
    """
    patterns_imported: int = 0
    terms_imported: int = 0
    history_imported: int = 0
    warnings: list[ImportIssue] = field(default_factory=list)

    def warn(self, location: str, message: str) -> None:
        """Record a warning."""
        self.warnings.append(ImportIssue(location=location, message=message))

    @property
    def has_warnings(self) -> bool:
        """Check if any entry was skipped or adjusted."""
        return bool(self.warnings)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'patterns_imported': self.patterns_imported,
            'terms_imported': self.terms_imported,
            'history_imported': self.history_imported,
            'warnings': [str(w) for w in self.warnings],
        }


__all__ = [
    'MatchingError',
    'ValidationError',
    'ConflictError',
    'DataCorruptionError',
    'ImportIssue',
    'ImportReport',
]
