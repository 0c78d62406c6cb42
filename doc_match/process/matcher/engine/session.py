# Path: doc_match/process/matcher/engine/session.py
"""
Matching Session

Explicit container for all mutable matching state. The caller owns
the session and passes it into every coordinator call; there is no
hidden global state.
"""

from typing import Optional, Iterable

from ....config_loader import DEFAULT_HISTORY_CAP, DEFAULT_CONTEXT_WINDOW
from ..context.context_tracker import ContextTracker, TypeClassifier
from ..learning.learning_store import LearningStore
from ..models.match import SearchResponse
from .ledger import MatchLedger


class MatchingSession:
    """
    State of one reconciliation: ledger, learning and context.

    Single owner: mutate only from the thread that created it.

    Attributes:
        ledger: Confirmed matches and availability
        learning_store: Learned patterns, terms and weights
        context_tracker: Recent-match context
        last_search: Most recent completed search, used for negatives

    Example:
        session = MatchingSession(
            references=["Exhibit A5-01", "Exhibit A5-02"],
            paths=["folder/A5-01-letter.pdf", "folder/A5-02-letter.pdf"],
        )
    """

    def __init__(
        self,
        references: Iterable[str],
        paths: Iterable[str],
        learning_store: Optional[LearningStore] = None,
        context_tracker: Optional[ContextTracker] = None,
        history_cap: int = DEFAULT_HISTORY_CAP,
        context_window: int = DEFAULT_CONTEXT_WINDOW,
        classifier: Optional[TypeClassifier] = None
    ):
        self.ledger = MatchLedger(references, paths)
        self.learning_store = learning_store or LearningStore(history_cap=history_cap)
        self.context_tracker = context_tracker or ContextTracker(
            window=context_window, classifier=classifier
        )
        self.last_search: Optional[SearchResponse] = None
        self._request_id = 0

    def next_request_id(self) -> int:
        """Assign the next search sequence number."""
        self._request_id += 1
        return self._request_id

    @property
    def latest_request_id(self) -> int:
        return self._request_id

    def is_current(self, request_id: int) -> bool:
        """Check no later search has been started."""
        return request_id >= self._request_id

    def __repr__(self) -> str:
        return f"MatchingSession({self.ledger!r}, {self.learning_store!r})"


__all__ = ['MatchingSession']
