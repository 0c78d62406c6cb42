# Path: doc_match/process/matcher/engine/__init__.py
"""
Matching Engine Core

Core components of the matching engine:
- MatchingCoordinator: Main orchestrator
- MatchingSession: Caller-owned mutable state
- MatchLedger: One-to-one record of confirmed matches
- SearchWorker: Thread pool for large candidate pools
- AutoMatcher: Bulk best-candidate proposals
"""

from .ledger import MatchLedger
from .session import MatchingSession
from .search_worker import SearchWorker, PendingSearch
from .auto_matcher import AutoMatcher
from .coordinator import MatchingCoordinator

__all__ = [
    'MatchLedger',
    'MatchingSession',
    'SearchWorker',
    'PendingSearch',
    'AutoMatcher',
    'MatchingCoordinator',
]
