# Path: doc_match/process/matcher/engine/ledger.py
"""
Match Ledger

The authoritative record of confirmed matches.

State machines:
- Candidate path: available -> used (on confirm), used -> available (on remove)
- Reference: unmatched -> matched (on confirm), matched -> unmatched (on remove)

Invariant: a path is held by at most one match and a reference has
at most one match. Confirm never overwrites: it raises instead.
"""

from typing import Optional, Iterable

from doc_match.core.logger.ipo_logging import get_process_logger

from ....constants import MatchMethod
from ..models.errors import ValidationError, ConflictError
from ..models.match import Match


def _unique(values: Iterable[str]) -> tuple[list[str], int]:
    """Order-preserving de-duplication; returns (values, dropped count)."""
    seen: set[str] = set()
    unique = []
    dropped = 0
    for value in values:
        if value in seen:
            dropped += 1
            continue
        seen.add(value)
        unique.append(value)
    return unique, dropped


class MatchLedger:
    """
    One-to-one record of confirmed (reference, path) pairs.

    References and paths are natural keys: identity is the exact text.
    Duplicates in the input lists are dropped.

    Example:
        ledger = MatchLedger(["Exhibit A5-01"], ["folder/A5-01-letter.pdf"])
        ledger.confirm("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.9)
        ledger.available_paths()        # []
        ledger.remove("Exhibit A5-01")
        ledger.available_paths()        # ['folder/A5-01-letter.pdf']
    """

    def __init__(self, references: Iterable[str], paths: Iterable[str]):
        """
        Initialize ledger.

        Args:
            references: Ordered references
            paths: Ordered candidate paths
        """
        self.logger = get_process_logger('matcher.ledger')

        self._references, dropped_refs = _unique(r for r in references if r and r.strip())
        self._paths, dropped_paths = _unique(p for p in paths if p and p.strip())
        if dropped_refs or dropped_paths:
            self.logger.warning(
                f"Dropped {dropped_refs} duplicate references and "
                f"{dropped_paths} duplicate paths"
            )

        self._reference_set = set(self._references)
        self._path_index = {path: index for index, path in enumerate(self._paths)}

        self._matches: dict[str, Match] = {}
        self._used: dict[str, str] = {}

    # ==========================================================================
    # TRANSITIONS
    # ==========================================================================

    def confirm(
        self,
        reference: str,
        path: str,
        score: float,
        method: MatchMethod = MatchMethod.MANUAL
    ) -> Match:
        """
        Record a match, flipping both sides to used/matched.

        Args:
            reference: Unmatched reference
            path: Available path
            score: Score in [0, 1]
            method: How the match was produced

        Returns:
            The new Match

        Raises:
            ValidationError: Empty or unknown reference/path
            ConflictError: Path already used or reference already matched
        """
        self._validate(reference, path)

        holder = self._used.get(path)
        if holder is not None:
            self.logger.warning(f"[CONFLICT] '{path}' already matched to '{holder}'")
            raise ConflictError(reference, path, holder)

        existing = self._matches.get(reference)
        if existing is not None:
            self.logger.warning(
                f"[CONFLICT] '{reference}' already matched to '{existing.path}'"
            )
            raise ConflictError(
                reference, path, existing.path,
                f"Reference '{reference}' is already matched to '{existing.path}'"
            )

        match = Match(
            reference=reference,
            path=path,
            score=max(0.0, min(1.0, score)),
            method=method,
        )
        self._matches[reference] = match
        self._used[path] = reference
        return match

    def remove(self, reference: str) -> Match:
        """
        Remove a reference's match, releasing its path.

        Args:
            reference: Matched reference

        Returns:
            The removed Match

        Raises:
            ValidationError: Reference has no match
        """
        match = self._matches.pop(reference, None)
        if match is None:
            raise ValidationError(f"No match to remove for '{reference}'")
        del self._used[match.path]
        return match

    def clear(self) -> None:
        """Remove every match."""
        self._matches.clear()
        self._used.clear()

    def _validate(self, reference: str, path: str) -> None:
        if not reference or not reference.strip():
            raise ValidationError("Reference must not be empty")
        if not path or not path.strip():
            raise ValidationError("Path must not be empty")
        if reference not in self._reference_set:
            raise ValidationError(f"Unknown reference: '{reference}'")
        if path not in self._path_index:
            raise ValidationError(f"Unknown path: '{path}'")

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    def get_match(self, reference: str) -> Optional[Match]:
        return self._matches.get(reference)

    def holder_of(self, path: str) -> Optional[str]:
        """Reference currently holding a path."""
        return self._used.get(path)

    def is_used(self, path: str) -> bool:
        return path in self._used

    def is_matched(self, reference: str) -> bool:
        return reference in self._matches

    def has_reference(self, reference: str) -> bool:
        return reference in self._reference_set

    def has_path(self, path: str) -> bool:
        return path in self._path_index

    def path_index(self, path: str) -> int:
        """Position of a path in the original list, -1 if unknown."""
        return self._path_index.get(path, -1)

    def available_paths(self) -> list[str]:
        """Unused paths in original order."""
        return [p for p in self._paths if p not in self._used]

    def available_candidates(self) -> list[tuple[int, str]]:
        """Unused (index, path) pairs in original order."""
        return [(i, p) for i, p in enumerate(self._paths) if p not in self._used]

    def unmatched_references(self) -> list[str]:
        """References without a match, in original order."""
        return [r for r in self._references if r not in self._matches]

    @property
    def references(self) -> list[str]:
        return list(self._references)

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    @property
    def matches(self) -> list[Match]:
        """Active matches in confirmation order."""
        return list(self._matches.values())

    def summary(self) -> dict[str, int]:
        """Counts for statistics and CLI output."""
        return {
            'references': len(self._references),
            'paths': len(self._paths),
            'matched': len(self._matches),
            'unmatched': len(self._references) - len(self._matches),
            'available_paths': len(self._paths) - len(self._used),
        }

    def __len__(self) -> int:
        return len(self._matches)

    def __repr__(self) -> str:
        return (
            f"MatchLedger(matched={len(self._matches)}/{len(self._references)}, "
            f"paths={len(self._paths)})"
        )


__all__ = ['MatchLedger']
