# Path: doc_match/process/matcher/learning/__init__.py
"""
Adaptive Learning

Pattern and term statistics learned from confirmations and rejections.
"""

from .learning_store import LearningStore

__all__ = ['LearningStore']
