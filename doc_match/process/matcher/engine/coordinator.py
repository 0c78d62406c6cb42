# Path: doc_match/process/matcher/engine/coordinator.py
"""
Matching Coordinator

The main orchestrator for document reference matching.
This is the primary entry point for the matching engine.
"""

from pathlib import Path
from typing import Optional, Any, Iterable

from doc_match.core.logger.ipo_logging import get_process_logger
from doc_match.config_loader import (
    ConfigLoader,
    DEFAULT_SEARCH_TOP_K,
    DEFAULT_SCORE_FLOOR,
    DEFAULT_SERIES_MATCH_THRESHOLD,
    DEFAULT_SERIES_CONFIDENCE,
    DEFAULT_NEGATIVE_SAMPLE_LIMIT,
    DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE,
    DEFAULT_HISTORY_CAP,
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_AUTO_MATCH_THRESHOLD,
    DEFAULT_OFFLOAD_THRESHOLD,
    DEFAULT_MAX_WORKERS,
)
from doc_match.loaders.dictionary_loader import DocumentTypeClassifier
from doc_match.loaders.learning_snapshot import LearningSnapshotParser
from doc_match.output.learning_export import LearningExporter

from ....constants import MatchMethod
from ..context.context_tracker import TypeClassifier
from ..enhancers import BaseEnhancer, default_pipeline
from ..models.errors import ConflictError, ValidationError, ImportReport
from ..models.match import (
    Match,
    ScoredCandidate,
    SearchResponse,
    AutoMatchResult,
    ApplyResult,
)
from ..models.series import SeriesGroup, SeriesSuggestionSet
from ..scoring import SimilarityScorer, ConfidenceCalculator, ResultRanker
from ..series import SeriesDetector
from .auto_matcher import AutoMatcher
from .search_worker import SearchWorker, PendingSearch, BaseScores
from .session import MatchingSession


class MatchingCoordinator:
    """
    Main orchestrator for document reference matching.

    The MatchingCoordinator:
    1. Scores available candidates against a reference
    2. Runs the enhancer pipeline (learning, then context)
    3. Ranks results and attaches confidence bands
    4. Records confirmations, rejections and removals
    5. Detects series and applies bulk suggestions

    All mutable state lives in the MatchingSession passed to each
    call. The coordinator holds only configuration and stateless
    collaborators, so one coordinator can serve many sessions.

    Example:
        coordinator = MatchingCoordinator()
        session = coordinator.create_session(references, paths)

        response = coordinator.search(session, "Exhibit A5-02")
        best = response.best
        coordinator.confirm(session, "Exhibit A5-02", best.path, best.score)
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        classifier: Optional[TypeClassifier] = None,
        enhancers: Optional[list[BaseEnhancer]] = None,
        worker: Optional[SearchWorker] = None
    ):
        """
        Initialize matching coordinator.

        Args:
            config: Configuration loader (singleton if None)
            classifier: Document-type classifier for context bonuses.
                       Defaults to the YAML dictionary classifier
            enhancers: Ordered enhancer pipeline (learning, context if None)
            worker: Search worker for large candidate pools
        """
        self.logger = get_process_logger('matcher.coordinator')
        self.config = config or ConfigLoader()

        self.top_k = self.config.get('search_top_k', DEFAULT_SEARCH_TOP_K)
        self.score_floor = self.config.get('score_floor', DEFAULT_SCORE_FLOOR)
        self.negative_sample_limit = self.config.get(
            'negative_sample_limit', DEFAULT_NEGATIVE_SAMPLE_LIMIT
        )
        self.negative_sample_min_score = self.config.get(
            'negative_sample_min_score', DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE
        )
        self.history_cap = self.config.get('history_cap', DEFAULT_HISTORY_CAP)
        self.context_window = self.config.get('context_window', DEFAULT_CONTEXT_WINDOW)
        self.auto_match_threshold = self.config.get(
            'auto_match_threshold', DEFAULT_AUTO_MATCH_THRESHOLD
        )
        self.offload_threshold = self.config.get('offload_threshold', DEFAULT_OFFLOAD_THRESHOLD)
        self.unlearn_on_remove = self.config.get('unlearn_on_remove', False)

        # Stateless collaborators
        self.scorer = SimilarityScorer()
        self.ranker = ResultRanker(top_k=self.top_k, score_floor=self.score_floor)
        self.confidence = ConfidenceCalculator()
        self.series_detector = SeriesDetector(
            scorer=self.scorer,
            match_threshold=self.config.get(
                'series_match_threshold', DEFAULT_SERIES_MATCH_THRESHOLD
            ),
            confidence=self.config.get('series_confidence', DEFAULT_SERIES_CONFIDENCE),
        )
        self.auto_matcher = AutoMatcher(scorer=self.scorer, confidence=self.confidence)
        self.enhancers = enhancers if enhancers is not None else default_pipeline()
        self.worker = worker or SearchWorker(
            scorer=self.scorer,
            max_workers=self.config.get('max_workers', DEFAULT_MAX_WORKERS),
        )

        if classifier is None:
            dictionary_dir: Optional[Path] = self.config.get('dictionary_dir')
            classifier = DocumentTypeClassifier.from_dictionary(dictionary_dir)
        self.classifier = classifier

        self.logger.info(
            f"Coordinator ready: top_k={self.top_k}, floor={self.score_floor}, "
            f"enhancers={[e.enhancer_type for e in self.enhancers]}"
        )

    def create_session(
        self,
        references: Iterable[str],
        paths: Iterable[str]
    ) -> MatchingSession:
        """
        Create a session configured from this coordinator.

        Args:
            references: Ordered references
            paths: Ordered candidate paths

        Returns:
            New MatchingSession
        """
        session = MatchingSession(
            references=references,
            paths=paths,
            history_cap=self.history_cap,
            context_window=self.context_window,
            classifier=self.classifier,
        )
        summary = session.ledger.summary()
        self.logger.info(
            f"[SESSION] {summary['references']} references, {summary['paths']} paths"
        )
        return session

    # ==========================================================================
    # SEARCH
    # ==========================================================================

    def search(self, session: MatchingSession, reference: str) -> SearchResponse:
        """
        Rank available candidates for a reference.

        Args:
            session: Matching session
            reference: Reference text

        Returns:
            SearchResponse, best first
        """
        # Nothing can supersede a synchronous search
        return self.finish_search(session, self.begin_search(session, reference))

    def begin_search(self, session: MatchingSession, reference: str) -> PendingSearch:
        """
        Start a search, offloading base scoring for large pools.

        Args:
            session: Matching session
            reference: Reference text

        Returns:
            PendingSearch to pass to finish_search()
        """
        request_id = session.next_request_id()
        candidates = session.ledger.available_candidates()
        weights = session.learning_store.weights.copy()

        if len(candidates) >= self.offload_threshold:
            future = self.worker.submit(reference, candidates, weights)
            return PendingSearch(
                request_id=request_id,
                reference=reference,
                candidate_count=len(candidates),
                offloaded=True,
                _future=future,
            )

        return PendingSearch(
            request_id=request_id,
            reference=reference,
            candidate_count=len(candidates),
            _scores=self.scorer.score_many(reference, candidates, weights),
        )

    def finish_search(
        self,
        session: MatchingSession,
        pending: PendingSearch
    ) -> Optional[SearchResponse]:
        """
        Complete a search on the session's owning thread.

        Args:
            session: Matching session
            pending: Result of begin_search()

        Returns:
            SearchResponse, or None if a later search superseded this one
        """
        base_scores = pending.result()

        if not session.is_current(pending.request_id):
            self.logger.debug(
                f"[SEARCH] Discarding stale request {pending.request_id} "
                f"(latest {session.latest_request_id})"
            )
            return None

        # Paths confirmed while the search was pending are no longer available
        base_scores = [
            entry for entry in base_scores
            if not session.ledger.is_used(entry[1])
        ]

        candidates = self.ranker.above_floor(self._to_candidates(base_scores))
        for enhancer in self.enhancers:
            candidates = enhancer.enhance(session, pending.reference, candidates)
        for candidate in candidates:
            candidate.confidence = self.confidence.calculate(candidate.score)

        response = SearchResponse(
            reference=pending.reference,
            request_id=pending.request_id,
            results=self.ranker.rank(candidates),
            suggestions=session.learning_store.get_suggestions(pending.reference),
            candidate_count=pending.candidate_count,
        )
        session.last_search = response

        best = response.best
        self.logger.debug(
            f"[SEARCH] '{pending.reference}': {len(response)} of "
            f"{pending.candidate_count} candidates"
            + (f", best {best.path} ({best.score:.3f})" if best else "")
        )
        return response

    def _to_candidates(self, base_scores: BaseScores) -> list[ScoredCandidate]:
        return [
            ScoredCandidate(
                path=path,
                index=index,
                base_score=similarity.score,
                score=similarity.score,
                word_score=similarity.word_score,
                char_score=similarity.char_score,
                breakdown={'base': {'variant': similarity.variant}},
            )
            for index, path, similarity in base_scores
        ]

    # ==========================================================================
    # CONFIRM / REJECT / REMOVE
    # ==========================================================================

    def confirm(
        self,
        session: MatchingSession,
        reference: str,
        path: str,
        score: Optional[float] = None,
        method: MatchMethod = MatchMethod.MANUAL
    ) -> Match:
        """
        Confirm a match and learn from it.

        The ledger is updated first, so a conflict leaves learning
        untouched. Unchosen siblings from the latest search for the
        same reference are recorded as negative samples.

        Args:
            session: Matching session
            reference: Unmatched reference
            path: Available path
            score: Score shown to the user (looked up or computed if None)
            method: How the match was produced

        Returns:
            The new Match

        Raises:
            ValidationError: Empty or unknown reference/path
            ConflictError: Path used or reference already matched
        """
        return self._confirm(session, reference, path, score, method, record_negatives=True)

    def _confirm(
        self,
        session: MatchingSession,
        reference: str,
        path: str,
        score: Optional[float],
        method: MatchMethod,
        record_negatives: bool
    ) -> Match:
        if score is None:
            score = self._displayed_score(session, reference, path)

        match = session.ledger.confirm(reference, path, score, method)
        session.learning_store.record_match(reference, path, match.score, confirmed=True)

        negatives = 0
        if record_negatives:
            negatives = self._record_negatives(session, reference, path)

        session.context_tracker.record(reference, path)

        self.logger.info(
            f"[CONFIRM] '{reference}' -> '{path}' "
            f"({method.value}, {match.score:.3f}, {negatives} negatives)"
        )
        return match

    def _displayed_score(self, session: MatchingSession, reference: str, path: str) -> float:
        """Score from the latest search for this reference, else a fresh base score."""
        last = session.last_search
        if last is not None and last.reference == reference:
            for candidate in last.results:
                if candidate.path == path:
                    return candidate.score
        return self.scorer.score(reference, path, session.learning_store.weights)

    def _record_negatives(self, session: MatchingSession, reference: str, chosen: str) -> int:
        """Record high-scoring unchosen candidates of the latest search."""
        last = session.last_search
        if last is None or last.reference != reference or self.negative_sample_limit <= 0:
            return 0

        siblings = [
            candidate for candidate in last.results
            if candidate.path != chosen and candidate.score > self.negative_sample_min_score
        ][:self.negative_sample_limit]

        for candidate in siblings:
            session.learning_store.record_match(
                reference, candidate.path, candidate.score, confirmed=False
            )
        return len(siblings)

    def reject(
        self,
        session: MatchingSession,
        reference: str,
        path: str,
        score: Optional[float] = None
    ) -> None:
        """
        Record a rejected candidate without creating a match.

        Args:
            session: Matching session
            reference: Reference text
            path: Rejected path
            score: Score shown to the user (looked up or computed if None)

        Raises:
            ValidationError: Empty reference or path
        """
        if score is None:
            score = self._displayed_score(session, reference, path)
        session.learning_store.record_match(reference, path, score, confirmed=False)
        self.logger.info(f"[REJECT] '{reference}' -> '{path}' ({score:.3f})")

    def skip(self, session: MatchingSession, reference: str) -> Optional[str]:
        """
        Skip a reference, rejecting the best result of its latest search.

        Args:
            session: Matching session
            reference: Reference being skipped

        Returns:
            The rejected path, or None if there was no result to reject
        """
        last = session.last_search
        if last is None or last.reference != reference or last.best is None:
            self.logger.debug(f"[SKIP] '{reference}' with no search result")
            return None

        best = last.best
        self.reject(session, reference, best.path, best.score)
        return best.path

    def remove(self, session: MatchingSession, reference: str) -> Match:
        """
        Remove a match, releasing its path.

        Learning is kept unless unlearn_on_remove is configured, in
        which case a compensating rejection is recorded.

        Args:
            session: Matching session
            reference: Matched reference

        Returns:
            The removed Match

        Raises:
            ValidationError: Reference has no match
        """
        match = session.ledger.remove(reference)
        if self.unlearn_on_remove:
            session.learning_store.record_match(
                match.reference, match.path, match.score, confirmed=False
            )
        self.logger.info(
            f"[REMOVE] '{reference}' released '{match.path}'"
            + (" (unlearned)" if self.unlearn_on_remove else "")
        )
        return match

    # ==========================================================================
    # SERIES
    # ==========================================================================

    def bulk_detect_series(self, session: MatchingSession) -> list[SeriesGroup]:
        """Detect series among the unmatched references."""
        return self.series_detector.detect_patterns(session.ledger.unmatched_references())

    def suggest_series(
        self,
        session: MatchingSession,
        groups: Optional[list[SeriesGroup]] = None
    ) -> list[SeriesSuggestionSet]:
        """
        Infer a template and generate paths for each series.

        Args:
            session: Matching session
            groups: Series to process (detected if None)

        Returns:
            One SeriesSuggestionSet per group; template None when
            no path could be inferred
        """
        if groups is None:
            groups = self.bulk_detect_series(session)

        pool = session.ledger.paths
        available = session.ledger.available_paths()
        weights = session.learning_store.weights

        suggestion_sets = []
        for group in groups:
            template = self.series_detector.find_path_pattern(group, available, weights)
            suggestions = []
            if template is not None:
                suggestions = self.series_detector.generate_paths_for_series(
                    group, template, pool=pool, available=available
                )
            suggestion_sets.append(SeriesSuggestionSet(
                group=group,
                template=template,
                suggestions=suggestions,
            ))
        return suggestion_sets

    def apply_series(
        self,
        session: MatchingSession,
        suggestion_sets: Iterable[SeriesSuggestionSet]
    ) -> ApplyResult:
        """
        Confirm generated series paths.

        A suggestion is applied only when its path exists in the pool,
        is still available and its reference is unmatched; state is
        re-checked at apply time.

        Args:
            session: Matching session
            suggestion_sets: Output of suggest_series()

        Returns:
            ApplyResult with applied matches and skipped suggestions
        """
        result = ApplyResult()
        ledger = session.ledger

        for suggestion_set in suggestion_sets:
            for suggestion in suggestion_set.suggestions:
                if not ledger.has_path(suggestion.path):
                    reason = "path not in candidate pool"
                elif ledger.is_used(suggestion.path):
                    reason = f"path already matched to '{ledger.holder_of(suggestion.path)}'"
                elif ledger.is_matched(suggestion.reference):
                    reason = "reference already matched"
                else:
                    reason = None

                if reason is not None:
                    result.skipped.append((suggestion.reference, suggestion.path, reason))
                    continue

                result.applied.append(self._confirm(
                    session,
                    suggestion.reference,
                    suggestion.path,
                    suggestion.confidence,
                    MatchMethod.PATTERN,
                    record_negatives=False,
                ))

        self.logger.info(
            f"[SERIES] Applied {len(result.applied)}, skipped {len(result.skipped)}"
        )
        return result

    # ==========================================================================
    # AUTO-MATCH
    # ==========================================================================

    def auto_match(
        self,
        session: MatchingSession,
        threshold: Optional[float] = None
    ) -> AutoMatchResult:
        """
        Propose a best candidate for every unmatched reference.

        Args:
            session: Matching session
            threshold: Minimum score (configured default if None)

        Returns:
            AutoMatchResult; nothing is confirmed yet
        """
        if threshold is None:
            threshold = self.auto_match_threshold
        return self.auto_matcher.propose(
            session.ledger.unmatched_references(),
            session.ledger.available_candidates(),
            threshold=threshold,
            weights=session.learning_store.weights,
        )

    def apply_auto_matches(
        self,
        session: MatchingSession,
        result: AutoMatchResult
    ) -> ApplyResult:
        """
        Confirm auto-match proposals, skipping any that now conflict.

        Args:
            session: Matching session
            result: Output of auto_match()

        Returns:
            ApplyResult with applied matches and skipped proposals
        """
        applied = ApplyResult()
        for proposal in result.proposals:
            try:
                match = self._confirm(
                    session,
                    proposal.reference,
                    proposal.path,
                    proposal.score,
                    MatchMethod.AUTO,
                    record_negatives=False,
                )
            except (ConflictError, ValidationError) as e:
                applied.skipped.append((proposal.reference, proposal.path, str(e)))
                continue
            applied.applied.append(match)

        self.logger.info(
            f"[AUTO] Applied {len(applied.applied)}, skipped {len(applied.skipped)}"
        )
        return applied

    # ==========================================================================
    # LEARNING DATA
    # ==========================================================================

    def export_learning_data(self, session: MatchingSession) -> dict[str, Any]:
        """Versioned learning-data payload for the session's store."""
        return LearningExporter(config=self.config).build(session.learning_store)

    def import_learning_data(self, session: MatchingSession, data: Any) -> ImportReport:
        """
        Validate and apply a learning-data payload.

        Args:
            session: Matching session
            data: Decoded payload

        Returns:
            ImportReport with per-entry warnings

        Raises:
            DataCorruptionError: Payload unusable as a whole; the
                               store is left untouched
        """
        snapshot, report = LearningSnapshotParser().parse(data)
        session.learning_store.apply_snapshot(snapshot)
        self.logger.info(
            f"[IMPORT] {report.patterns_imported} patterns, "
            f"{report.terms_imported} terms, {report.history_imported} history entries, "
            f"{len(report.warnings)} warnings"
        )
        return report

    def get_statistics(self, session: MatchingSession) -> dict[str, Any]:
        """
        Learning statistics plus ledger and context summaries.

        Returns:
            Dictionary with 'learning', 'ledger' and 'context' sections
        """
        return {
            'learning': session.learning_store.get_statistics(),
            'ledger': session.ledger.summary(),
            'context': session.context_tracker.summary(),
        }

    def shutdown(self) -> None:
        """Stop the search worker."""
        self.worker.shutdown()


__all__ = ['MatchingCoordinator']
