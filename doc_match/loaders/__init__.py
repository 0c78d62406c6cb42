# Path: doc_match/loaders/__init__.py
"""
Input Layer

Loaders for data entering the engine:
- Document-type dictionary (YAML)
- Learning-data snapshots (JSON)
"""

from .dictionary_loader import (
    DocumentTypeLoader,
    DocumentTypeClassifier,
    DOCUMENT_TYPES_FILE,
)
from .learning_snapshot import LearningSnapshotParser

__all__ = [
    'DocumentTypeLoader',
    'DocumentTypeClassifier',
    'DOCUMENT_TYPES_FILE',
    'LearningSnapshotParser',
]
