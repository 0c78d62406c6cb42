# Path: doc_match/process/matcher/enhancers/__init__.py
"""
Score Enhancers

Ordered pipeline applied after base scoring:
- LearningEnhancer: learned pattern/term bonuses
- ContextEnhancer: session context bonuses
"""

from .base_enhancer import BaseEnhancer
from .learning_enhancer import LearningEnhancer
from .context_enhancer import ContextEnhancer


def default_pipeline() -> list[BaseEnhancer]:
    """Learning first, then context."""
    return [LearningEnhancer(), ContextEnhancer()]


__all__ = [
    'BaseEnhancer',
    'LearningEnhancer',
    'ContextEnhancer',
    'default_pipeline',
]
