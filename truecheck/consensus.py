"""
Consensus aggregation across hosted classifiers.

Classifiers are queried in priority order until `result_quota` of them have
answered. Failures of individual classifiers are logged and skipped; only a
run with zero successful answers is reported, as NoClassifiersAvailable.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Sequence

import httpx

from truecheck.classifiers import candidates_for
from truecheck.client import query_classifier
from truecheck.config import Settings
from truecheck.errors import ClassifierError, NoClassifiersAvailable, UpstreamColdStart
from truecheck.labels import normalize, top_classification
from truecheck.models import AI, ClassifierDescriptor, ConsensusOutcome, NormalizedResult, VoteTally
from truecheck.voting import VerdictPolicy, get_policy, mean_confidence, vote_tally

logger = logging.getLogger(__name__)


def summarize(verdict: str, score: int, tally: VoteTally, n_models: int) -> str:
    plural = "model" if n_models == 1 else "models"
    if verdict == AI:
        return (
            f"{tally.ai_votes} of {n_models} {plural} flagged this media as AI-generated "
            f"({score}% average confidence)."
        )
    return (
        f"{tally.real_votes} of {n_models} {plural} found this media authentic "
        f"({score}% average confidence)."
    )


def build_outcome(results: Sequence[NormalizedResult], policy: VerdictPolicy) -> ConsensusOutcome:
    """Reduce accumulated results to a single verdict and score."""
    if not results:
        raise NoClassifiersAvailable(attempted=0)
    tally = vote_tally(results)
    verdict = policy(results)
    score = mean_confidence(results)
    return ConsensusOutcome(
        verdict=verdict,
        score=score,
        model_details=tuple(results),
        summary_text=summarize(verdict, score, tally, len(results)),
        tally=tally,
    )


class ConsensusAggregator:
    def __init__(
        self,
        settings: Settings,
        policy: VerdictPolicy | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.policy = policy or get_policy(settings.verdict_policy)
        self._http_client = http_client

    def candidates(self, media_type: str) -> list[ClassifierDescriptor]:
        return candidates_for(media_type, self.settings.image_classifiers, self.settings.video_classifiers)

    def aggregate(self, media_type: str, payload_b64: str) -> ConsensusOutcome:
        """Query classifiers for one media item and return the consensus outcome."""
        candidates = self.candidates(media_type)
        if self._http_client is not None:
            results, cold_start = self._collect(self._http_client, candidates, payload_b64)
        else:
            with httpx.Client(follow_redirects=True) as client:
                results, cold_start = self._collect(client, candidates, payload_b64)

        if not results:
            logger.error("No classifier answered for %s (%d tried, cold_start=%s)", media_type, len(candidates), cold_start)
            raise NoClassifiersAvailable(attempted=len(candidates), cold_start=cold_start)

        outcome = build_outcome(results, self.policy)
        logger.info(
            "Consensus for %s: verdict=%s score=%d models=%s",
            media_type,
            outcome.verdict,
            outcome.score,
            outcome.models_used,
        )
        return outcome

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def _collect(
        self,
        client: httpx.Client,
        candidates: list[ClassifierDescriptor],
        payload_b64: str,
    ) -> tuple[list[NormalizedResult], bool]:
        if self.settings.concurrent and len(candidates) > 1:
            return self._collect_concurrent(client, candidates, payload_b64)
        return self._collect_sequential(client, candidates, payload_b64)

    def _query(self, client: httpx.Client, classifier: ClassifierDescriptor, payload_b64: str):
        return query_classifier(
            client,
            classifier,
            payload_b64,
            api_token=self.settings.api_token,
            timeout=self.settings.timeout_seconds,
        )

    def _normalize(self, classifier: ClassifierDescriptor, items) -> NormalizedResult:
        result = normalize(classifier.name, top_classification(items), self.settings.high_confidence_threshold)
        logger.debug("%s -> %s (%d%%, label=%r)", classifier.name, result.verdict, result.confidence, result.label)
        return result

    def _collect_sequential(self, client, candidates, payload_b64):
        results: list[NormalizedResult] = []
        cold_start = False
        for classifier in candidates:
            if len(results) >= self.settings.result_quota:
                break
            try:
                items = self._query(client, classifier, payload_b64)
            except UpstreamColdStart as exc:
                cold_start = True
                logger.warning("Skipping %s: %s", classifier.name, exc)
                continue
            except ClassifierError as exc:
                logger.warning("Skipping %s: %s", classifier.name, exc)
                continue
            results.append(self._normalize(classifier, items))
        return results, cold_start

    def _collect_concurrent(self, client, candidates, payload_b64):
        # Results are read back in priority order, not arrival order.
        results: list[NormalizedResult] = []
        cold_start = False
        executor = ThreadPoolExecutor(max_workers=len(candidates), thread_name_prefix="truecheck")
        try:
            futures: list[tuple[ClassifierDescriptor, Future]] = [
                (c, executor.submit(self._query, client, c, payload_b64)) for c in candidates
            ]
            for classifier, future in futures:
                if len(results) >= self.settings.result_quota:
                    break
                try:
                    items = future.result()
                except UpstreamColdStart as exc:
                    cold_start = True
                    logger.warning("Skipping %s: %s", classifier.name, exc)
                    continue
                except ClassifierError as exc:
                    logger.warning("Skipping %s: %s", classifier.name, exc)
                    continue
                results.append(self._normalize(classifier, items))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return results, cold_start
