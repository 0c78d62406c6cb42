# Path: doc_match/loaders/learning_snapshot.py
"""
Learning Data Snapshot Parser

Reads a versioned learning-data payload (as produced by
LearningExporter) into a validated LearningSnapshot.

Payload format:
    {
        "version": "1.0",
        "exportDate": "2024-05-01T10:00:00+00:00",
        "patterns": [{"reference": "...", "mappings": [["...", 3]]}],
        "termMappings": [{"term": "...", "mappings": [["...", 0.4]]}],
        "statistics": {"totalMatches": 12, ...},
        "weights": {"word": 0.56, "character": 0.24, "learned": 0.2},
        "matchHistory": [{"reference": "...", "path": "...", ...}]
    }

Only a payload that is unusable as a whole raises DataCorruptionError.
Bad entries are skipped and reported; they never abort the import.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from dateutil.parser import isoparse
from pydantic import ValidationError as PydanticValidationError

from doc_match.core.logger.ipo_logging import get_input_logger
from doc_match.constants import SUPPORTED_LEARNING_VERSIONS, LearningKeys
from doc_match.process.matcher.models.errors import DataCorruptionError, ImportReport
from doc_match.process.matcher.models.learning import (
    HistoryEntry,
    LearningSnapshot,
    LearningStatistics,
    ScoringWeights,
)
from doc_match.process.matcher.models.snapshot_schema import (
    HistoryRecordEntry,
    PatternMappingEntry,
    StatisticsEntry,
    TermMappingEntry,
    WeightsEntry,
)
from doc_match.process.matcher.text.normalizer import extract_pattern


def _first_error(exc: PydanticValidationError) -> str:
    """Compact description of a pydantic validation failure."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = '.'.join(str(part) for part in first.get('loc', ()))
    message = first.get('msg', 'invalid')
    return f"{location}: {message}" if location else message


class LearningSnapshotParser:
    """
    Validates learning-data payloads entry by entry.

    Example:
        parser = LearningSnapshotParser()
        snapshot, report = parser.parse(json.loads(text))
        for issue in report.warnings:
            print(issue)
    """

    def __init__(self):
        self.logger = get_input_logger('learning_snapshot')

    def load_file(self, path: Path) -> tuple[LearningSnapshot, ImportReport]:
        """
        Read and parse a snapshot file.

        Args:
            path: JSON file path

        Returns:
            Tuple of (snapshot, report)

        Raises:
            DataCorruptionError: File unreadable or not valid JSON
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DataCorruptionError(f"Learning data file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise DataCorruptionError(f"Learning data is not valid JSON: {path}: {e}") from e

        self.logger.info(f"[IMPORT] Loaded learning data from {path}")
        return self.parse(data)

    def parse(self, data: Any) -> tuple[LearningSnapshot, ImportReport]:
        """
        Validate a payload.

        Args:
            data: Decoded JSON payload

        Returns:
            Tuple of (snapshot, report)

        Raises:
            DataCorruptionError: Not a mapping, or unsupported version
        """
        if not isinstance(data, dict):
            raise DataCorruptionError(
                f"Learning data must be an object, got {type(data).__name__}"
            )

        version = data.get(LearningKeys.VERSION)
        if version is None:
            raise DataCorruptionError("Learning data has no version")
        version = str(version)
        if version not in SUPPORTED_LEARNING_VERSIONS:
            raise DataCorruptionError(f"Unsupported learning data version: {version}")

        report = ImportReport()
        snapshot = LearningSnapshot(version=version)

        snapshot.export_date = self._parse_date(
            data.get(LearningKeys.EXPORT_DATE), LearningKeys.EXPORT_DATE, report
        )
        snapshot.patterns = self._parse_patterns(data.get(LearningKeys.PATTERNS), report)
        snapshot.term_edges = self._parse_terms(data.get(LearningKeys.TERM_MAPPINGS), report)
        snapshot.statistics = self._parse_statistics(data.get(LearningKeys.STATISTICS), report)
        snapshot.weights = self._parse_weights(data.get(LearningKeys.WEIGHTS), report)
        snapshot.history = self._parse_history(data.get(LearningKeys.MATCH_HISTORY), report)

        if report.has_warnings:
            self.logger.warning(
                f"[IMPORT] {len(report.warnings)} entries skipped or adjusted"
            )
            for issue in report.warnings:
                self.logger.debug(f"[IMPORT] {issue}")

        return snapshot, report

    # ==========================================================================
    # SECTIONS
    # ==========================================================================

    def _entries(self, value: Any, key: str, report: ImportReport) -> list:
        if value is None:
            return []
        if not isinstance(value, list):
            report.warn(key, f"expected a list, got {type(value).__name__}")
            return []
        return value

    def _parse_patterns(self, value: Any, report: ImportReport) -> dict[str, dict[str, int]]:
        patterns: dict[str, dict[str, int]] = {}
        for i, raw in enumerate(self._entries(value, LearningKeys.PATTERNS, report)):
            location = f"{LearningKeys.PATTERNS}[{i}]"
            try:
                entry = PatternMappingEntry.model_validate(raw)
            except PydanticValidationError as e:
                report.warn(location, _first_error(e))
                continue
            patterns[entry.reference] = {
                path_pattern: count for path_pattern, count in entry.mappings
            }
            report.patterns_imported += 1
        return patterns

    def _parse_terms(self, value: Any, report: ImportReport) -> dict[tuple[str, str], float]:
        edges: dict[tuple[str, str], float] = {}
        for i, raw in enumerate(self._entries(value, LearningKeys.TERM_MAPPINGS, report)):
            location = f"{LearningKeys.TERM_MAPPINGS}[{i}]"
            try:
                entry = TermMappingEntry.model_validate(raw)
            except PydanticValidationError as e:
                report.warn(location, _first_error(e))
                continue
            for related, weight in entry.mappings:
                if not related:
                    report.warn(location, "empty related term skipped")
                    continue
                if weight < 0.0 or weight > 1.0:
                    report.warn(location, f"weight {weight} for '{related}' clamped")
                    weight = min(1.0, max(0.0, weight))
                left, right = sorted((entry.term, related))
                edges[(left, right)] = weight
            report.terms_imported += 1
        return edges

    def _parse_statistics(self, value: Any, report: ImportReport) -> Optional[LearningStatistics]:
        if value is None:
            return None
        try:
            entry = StatisticsEntry.model_validate(value)
        except PydanticValidationError as e:
            report.warn(LearningKeys.STATISTICS, _first_error(e))
            return None
        return LearningStatistics(
            total_matches=entry.total_matches,
            successful_matches=entry.successful_matches,
            failed_matches=entry.failed_matches,
            average_confidence=entry.average_confidence,
        )

    def _parse_weights(self, value: Any, report: ImportReport) -> Optional[ScoringWeights]:
        if value is None:
            return None
        try:
            entry = WeightsEntry.model_validate(value)
        except PydanticValidationError as e:
            report.warn(LearningKeys.WEIGHTS, _first_error(e))
            return None

        weights = ScoringWeights(
            word=entry.word,
            character=entry.character,
            learned=entry.learned,
        )
        if not weights.is_balanced:
            report.warn(
                LearningKeys.WEIGHTS,
                f"weights sum to {weights.total:.3f}, rebalanced around learned={weights.learned}"
            )
            weights = weights.rebalanced()
        return weights

    def _parse_history(self, value: Any, report: ImportReport) -> Optional[list[HistoryEntry]]:
        if value is None:
            return None

        history = []
        for i, raw in enumerate(self._entries(value, LearningKeys.MATCH_HISTORY, report)):
            location = f"{LearningKeys.MATCH_HISTORY}[{i}]"
            try:
                entry = HistoryRecordEntry.model_validate(raw)
            except PydanticValidationError as e:
                report.warn(location, _first_error(e))
                continue

            if entry.patterns is not None:
                reference_pattern = entry.patterns.reference_pattern
                path_pattern = entry.patterns.path_pattern
            else:
                reference_pattern = extract_pattern(entry.reference)
                path_pattern = extract_pattern(entry.path)

            history_entry = HistoryEntry(
                reference=entry.reference,
                path=entry.path,
                score=entry.score,
                confirmed=entry.confirmed,
                reference_pattern=reference_pattern,
                path_pattern=path_pattern,
            )
            timestamp = self._parse_date(entry.timestamp, f"{location}.timestamp", report)
            if timestamp is not None:
                history_entry.timestamp = timestamp

            history.append(history_entry)
            report.history_imported += 1
        return history

    def _parse_date(self, value: Any, location: str, report: ImportReport) -> Optional[datetime]:
        if value is None or value == '':
            return None
        try:
            return isoparse(str(value))
        except (ValueError, OverflowError) as e:
            report.warn(location, f"unparsable date '{value}': {e}")
            return None


__all__ = ['LearningSnapshotParser']
