# Path: doc_match/loaders/dictionary_loader.py
"""
Document Type Dictionary Loader

Loads ordered document-type categories from YAML and classifies
references into them. Definitions are validated with pydantic;
invalid definitions and invalid regular expressions are skipped
with a warning rather than failing the whole load.
"""

import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from doc_match.core.logger.ipo_logging import get_input_logger
from doc_match.process.matcher.models.document_type import (
    DocumentTypeDefinition,
    DocumentTypeDictionary,
)


DOCUMENT_TYPES_FILE = 'document_types.yaml'


class DocumentTypeLoader:
    """
    Loads document-type definitions from the dictionary directory.

    Example:
        loader = DocumentTypeLoader()
        definitions = loader.load()
        [d.type_id for d in definitions]  # ['statement', 'exhibit', ...]
    """

    def __init__(self, dictionary_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            dictionary_path: Directory holding document_types.yaml.
                           Defaults to the bundled doc_match/dictionary/
        """
        self.logger = get_input_logger('dictionary_loader')

        if dictionary_path is None:
            self.dictionary_path = Path(__file__).parent.parent / 'dictionary'
        else:
            self.dictionary_path = Path(dictionary_path)

        self.file_path = self.dictionary_path / DOCUMENT_TYPES_FILE
        self._cache: Optional[list[DocumentTypeDefinition]] = None

    def load(self, use_cache: bool = True) -> list[DocumentTypeDefinition]:
        """
        Load definitions in priority order.

        Args:
            use_cache: Whether to use cached results

        Returns:
            List of definitions, empty when the file is missing
        """
        if use_cache and self._cache is not None:
            return self._cache

        if not self.file_path.exists():
            self.logger.warning(f"Document type dictionary not found: {self.file_path}")
            self._cache = []
            return self._cache

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"YAML parse error in {self.file_path}: {e}")
            self._cache = []
            return self._cache

        definitions = self._parse(data or {})
        self.logger.info(
            f"Loaded {len(definitions)} document types from {self.file_path.name}"
        )
        self._cache = definitions
        return definitions

    def _parse(self, data: dict) -> list[DocumentTypeDefinition]:
        """Validate each definition on its own, skipping bad ones."""
        raw_types = data.get('document_types', []) if isinstance(data, dict) else []
        if not isinstance(raw_types, list):
            self.logger.error("'document_types' must be a list")
            return []

        definitions: list[DocumentTypeDefinition] = []
        seen: set[str] = set()
        for position, raw in enumerate(raw_types):
            try:
                definition = DocumentTypeDefinition.model_validate(raw)
            except PydanticValidationError as e:
                self.logger.warning(
                    f"Skipping document_types[{position}]: "
                    f"{e.error_count()} validation error(s)"
                )
                continue

            if definition.type_id in seen:
                self.logger.warning(f"Duplicate type_id: {definition.type_id}")
                continue
            seen.add(definition.type_id)
            definitions.append(definition)

        return DocumentTypeDictionary(document_types=definitions).document_types


class DocumentTypeClassifier:
    """
    Classifies a reference into the first matching document type.

    Patterns are compiled case-insensitively once. A pattern that
    fails to compile is dropped with a warning.

    Example:
        classifier = DocumentTypeClassifier.from_dictionary()
        classifier.classify("CW-3 Witness Statement of J. Smith")  # 'witness'
        classifier.classify("")                                      # None
    """

    def __init__(self, definitions: list[DocumentTypeDefinition]):
        """
        Initialize classifier.

        Args:
            definitions: Definitions in priority order
        """
        self.logger = get_input_logger('document_types')
        self._rules: list[tuple[str, list[re.Pattern]]] = []

        for definition in definitions:
            compiled = []
            for pattern in definition.patterns:
                try:
                    compiled.append(re.compile(pattern, re.IGNORECASE))
                except re.error as e:
                    self.logger.warning(
                        f"Invalid pattern for {definition.type_id}: {pattern!r} ({e})"
                    )
            if compiled:
                self._rules.append((definition.type_id, compiled))

    @classmethod
    def from_dictionary(cls, dictionary_path: Optional[Path] = None) -> 'DocumentTypeClassifier':
        """Build a classifier from the dictionary directory."""
        return cls(DocumentTypeLoader(dictionary_path).load())

    @property
    def type_ids(self) -> list[str]:
        """Usable type ids in priority order."""
        return [type_id for type_id, _ in self._rules]

    def classify(self, text: str) -> Optional[str]:
        """
        Classify text into a document type.

        Args:
            text: Reference text

        Returns:
            type_id of the first matching category, or None
        """
        if not text:
            return None
        for type_id, patterns in self._rules:
            if any(p.search(text) for p in patterns):
                return type_id
        return None


__all__ = [
    'DocumentTypeLoader',
    'DocumentTypeClassifier',
    'DOCUMENT_TYPES_FILE',
]
