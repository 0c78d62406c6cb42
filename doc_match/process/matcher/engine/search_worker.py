# Path: doc_match/process/matcher/engine/search_worker.py
"""
Search Worker

Offloads base scoring of large candidate pools to a thread pool.

Workers compute pure scores only. They receive a snapshot of the
candidates and weights and never touch session state; enhancement
and every stateful write happen back on the owning thread.
"""

from concurrent.futures import ThreadPoolExecutor, Future
from dataclasses import dataclass, field
from typing import Optional

from doc_match.core.logger.ipo_logging import get_process_logger

from ....config_loader import DEFAULT_MAX_WORKERS
from ..models.learning import ScoringWeights
from ..scoring.similarity import SimilarityScorer, SimilarityScore


BaseScores = list[tuple[int, str, SimilarityScore]]


@dataclass
class PendingSearch:
    """
    A search whose base scores may still be computing.

    Attributes:
        request_id: Session sequence number at submission
        reference: Searched reference
        candidate_count: Size of the candidate snapshot
        offloaded: Whether scoring runs on the worker
    """
    request_id: int
    reference: str
    candidate_count: int
    offloaded: bool = False
    _future: Optional[Future] = field(default=None, repr=False)
    _scores: Optional[BaseScores] = field(default=None, repr=False)

    def done(self) -> bool:
        """Check base scores are ready."""
        return self._future is None or self._future.done()

    def result(self, timeout: Optional[float] = None) -> BaseScores:
        """Wait for and return the base scores."""
        if self._future is not None:
            return self._future.result(timeout=timeout)
        return self._scores or []


class SearchWorker:
    """
    Thread pool for base scoring.

    The executor is created on first use and shut down explicitly
    or on context-manager exit.

    Example:
        with SearchWorker(scorer, max_workers=2) as worker:
            future = worker.submit("Exhibit A5-02", candidates, weights)
            scores = future.result()
    """

    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        max_workers: int = DEFAULT_MAX_WORKERS
    ):
        """
        Initialize worker.

        Args:
            scorer: Pure similarity scorer
            max_workers: Thread pool size
        """
        self.logger = get_process_logger('matcher.search_worker')
        self.scorer = scorer or SimilarityScorer()
        self.max_workers = max(1, max_workers)
        self._executor: Optional[ThreadPoolExecutor] = None

    def _ensure_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix='doc_match_search',
            )
        return self._executor

    def submit(
        self,
        reference: str,
        candidates: list[tuple[int, str]],
        weights: ScoringWeights
    ) -> Future:
        """
        Score candidates on the pool.

        Args:
            reference: Searched reference
            candidates: Snapshot of (index, path) pairs
            weights: Snapshot of the scoring weights

        Returns:
            Future resolving to a list of (index, path, SimilarityScore)
        """
        self.logger.debug(
            f"[OFFLOAD] Scoring {len(candidates)} candidates for '{reference}'"
        )
        return self._ensure_executor().submit(
            self.scorer.score_many, reference, list(candidates), weights.copy()
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def __enter__(self) -> 'SearchWorker':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


__all__ = ['SearchWorker', 'PendingSearch', 'BaseScores']
