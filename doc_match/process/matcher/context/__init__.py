# Path: doc_match/process/matcher/context/__init__.py
"""
Contextual Reweighting

Session context (folder locality, type continuity, numeric sequences)
used to nudge candidate scores.
"""

from .context_tracker import ContextTracker, ContextBonus, SequenceState, TypeClassifier

__all__ = [
    'ContextTracker',
    'ContextBonus',
    'SequenceState',
    'TypeClassifier',
]
