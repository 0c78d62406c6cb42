# Path: doc_match/process/matcher/models/series.py
"""
Series Models

Models for numbered document series detected in a batch of
references, the path templates inferred from them and the
generated path suggestions.
"""

from typing import Optional
from dataclasses import dataclass, field

from ....constants import SeriesType, IncrementPattern


@dataclass(frozen=True)
class SeriesItem:
    """
    One reference recognized as part of a series.

    Attributes:
        reference: Original reference text
        number: Extracted numeric index
        series: Series code (e.g., "A5", "CW", "RDCC"), or parent for appendices
        description: Trailing free text, if any
    """
    reference: str
    number: int
    series: str = ''
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'reference': self.reference,
            'number': self.number,
            'series': self.series,
            'description': self.description,
        }


@dataclass
class SeriesGroup:
    """
    References sharing a naming scheme and a numeric index.

    Derived from the current unmatched references; never persisted.

    Attributes:
        type: Series shape that recognized the items
        series_key: Grouping key, "<type>:<series>"
        series: Series code shared by all items
        items: Items sorted by number
        detected_increment: Most common step between consecutive numbers
        increment_pattern: How regular the progression is
    """
    type: SeriesType
    series_key: str
    series: str
    items: list[SeriesItem] = field(default_factory=list)
    detected_increment: int = 1
    increment_pattern: IncrementPattern = IncrementPattern.SEQUENTIAL

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def first(self) -> SeriesItem:
        return self.items[0]

    @property
    def numbers(self) -> list[int]:
        return [item.number for item in self.items]

    @property
    def references(self) -> list[str]:
        return [item.reference for item in self.items]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'type': self.type.value,
            'series_key': self.series_key,
            'series': self.series,
            'detected_increment': self.detected_increment,
            'increment_pattern': self.increment_pattern.value,
            'items': [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class PathTemplate:
    """
    Path template inferred from the best match of a series' first item.

    The template contains "{number}" and possibly "{series}"
    placeholders. pad_width > 0 means numbers are zero-padded
    to that width.

    Attributes:
        template: Path with placeholders
        source_path: Path the template was derived from
        source_score: Score of source_path against the first item
        pad_width: Zero-padding width, 0 when not padded
    """
    template: str
    source_path: str
    source_score: float
    pad_width: int = 0

    def render(self, number: int, series: str = '') -> str:
        """Substitute an item's number and series code."""
        digits = str(number).zfill(self.pad_width) if self.pad_width else str(number)
        return self.template.replace('{series}', series).replace('{number}', digits)

    def to_dict(self) -> dict:
        return {
            'template': self.template,
            'source_path': self.source_path,
            'source_score': round(self.source_score, 4),
            'pad_width': self.pad_width,
        }


@dataclass(frozen=True)
class SeriesSuggestion:
    """
    A generated path for one series item.

    Attributes:
        reference: Series item reference
        path: Generated path
        confidence: Fixed pattern confidence
        exists: Whether the path is in the candidate pool
        available: Whether the path is currently unused
    """
    reference: str
    path: str
    confidence: float
    exists: bool = False
    available: bool = False

    def to_dict(self) -> dict:
        return {
            'reference': self.reference,
            'path': self.path,
            'confidence': self.confidence,
            'exists': self.exists,
            'available': self.available,
        }


@dataclass
class SeriesSuggestionSet:
    """A series with its inferred template and generated suggestions."""
    group: SeriesGroup
    template: Optional[PathTemplate] = None
    suggestions: list[SeriesSuggestion] = field(default_factory=list)

    @property
    def applicable(self) -> list[SeriesSuggestion]:
        """Suggestions whose path exists and is unused."""
        return [s for s in self.suggestions if s.exists and s.available]

    def to_dict(self) -> dict:
        return {
            'group': self.group.to_dict(),
            'template': self.template.to_dict() if self.template else None,
            'suggestions': [s.to_dict() for s in self.suggestions],
        }


__all__ = [
    'SeriesItem',
    'SeriesGroup',
    'PathTemplate',
    'SeriesSuggestion',
    'SeriesSuggestionSet',
]
