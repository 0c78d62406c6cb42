# Path: doc_match/output/__init__.py
"""
Output Layer

Writers for data leaving the engine.
"""

from .learning_export import LearningExporter

__all__ = ['LearningExporter']
