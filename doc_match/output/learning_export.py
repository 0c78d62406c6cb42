# Path: doc_match/output/learning_export.py
"""
Learning Data Exporter

Serializes a LearningStore into the versioned learning-data payload
read back by LearningSnapshotParser.

Example:
    exporter = LearningExporter()
    payload = exporter.build(session.learning_store)
    exporter.write(session.learning_store, Path("learning.json"))
"""

import json
from pathlib import Path
from typing import Any, Optional

from doc_match.config_loader import ConfigLoader, DEFAULT_JSON_INDENT
from doc_match.constants import LEARNING_DATA_VERSION, LearningKeys
from doc_match.core.logger.ipo_logging import get_output_logger
from doc_match.process.matcher.learning.learning_store import LearningStore
from doc_match.process.matcher.models.match import utc_now


class LearningExporter:
    """
    Builds and writes learning-data snapshots.

    Term edges are written grouped by their lexically smaller term,
    so each undirected edge appears exactly once.
    """

    def __init__(self, indent: Optional[int] = None, config: Optional[ConfigLoader] = None):
        """
        Initialize exporter.

        Args:
            indent: JSON indent, defaults to the configured json_indent
            config: Configuration loader
        """
        self.logger = get_output_logger('learning_export')
        if indent is None:
            config = config or ConfigLoader()
            indent = config.get('json_indent', DEFAULT_JSON_INDENT)
        self.indent = indent

    def build(self, store: LearningStore) -> dict[str, Any]:
        """
        Build the JSON-able payload.

        Args:
            store: Learning store to export

        Returns:
            Payload dictionary
        """
        patterns = [
            {
                'reference': reference_pattern,
                'mappings': [[path_pattern, count] for path_pattern, count in path_patterns.items()],
            }
            for reference_pattern, path_patterns in store.patterns.items()
        ]

        grouped: dict[str, list[list]] = {}
        for (left, right), weight in store.term_edges.items():
            grouped.setdefault(left, []).append([right, weight])
        term_mappings = [
            {'term': term, 'mappings': mappings}
            for term, mappings in grouped.items()
        ]

        return {
            LearningKeys.VERSION: LEARNING_DATA_VERSION,
            LearningKeys.EXPORT_DATE: utc_now().isoformat(),
            LearningKeys.PATTERNS: patterns,
            LearningKeys.TERM_MAPPINGS: term_mappings,
            LearningKeys.STATISTICS: store.statistics.to_dict(),
            LearningKeys.WEIGHTS: store.weights.to_dict(),
            LearningKeys.MATCH_HISTORY: [entry.to_dict() for entry in store.history],
        }

    def write(self, store: LearningStore, path: Path) -> Path:
        """
        Write the payload to a JSON file.

        Args:
            store: Learning store to export
            path: Output file, parent directories created as needed

        Returns:
            Path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.build(store)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=self.indent, ensure_ascii=False)

        self.logger.info(
            f"[EXPORT] Wrote learning data to {path} "
            f"({len(payload[LearningKeys.PATTERNS])} patterns, "
            f"{len(payload[LearningKeys.MATCH_HISTORY])} history entries)"
        )
        return path


__all__ = ['LearningExporter']
