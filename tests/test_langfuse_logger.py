"""Tests for Langfuse trace logging with a mocked client."""
import sys
from unittest.mock import MagicMock, patch

from truecheck.langfuse_logger import flush, log_consensus_trace, log_score, maybe_create_langfuse
from truecheck.models import ConsensusOutcome, NormalizedResult, VoteTally


def outcome() -> ConsensusOutcome:
    details = (
        NormalizedResult("m1", "ai", 90, "fake", True),
        NormalizedResult("m2", "real", 60, "real", False),
    )
    return ConsensusOutcome(verdict="ai", score=75, model_details=details, summary_text="",
                            tally=VoteTally(ai_votes=1, real_votes=1, high_confidence_ai=1))


class TestMaybeCreateLangfuse:
    def test_missing_keys_returns_none(self):
        assert maybe_create_langfuse(None, "secret") is None
        assert maybe_create_langfuse("public", "") is None

    def test_creates_client_with_default_host(self):
        fake_module = MagicMock()
        with patch.dict(sys.modules, {"langfuse": fake_module}):
            client = maybe_create_langfuse("pk", "sk")
        fake_module.Langfuse.assert_called_once_with(public_key="pk", secret_key="sk", host="https://cloud.langfuse.com")
        assert client is fake_module.Langfuse.return_value


class TestHelpersWithoutClient:
    def test_noop_when_disabled(self):
        log_score(None, "x", 1.0)
        flush(None)
        assert log_consensus_trace(None, outcome(), media_type="image") is None


class TestLogConsensusTrace:
    def test_logs_generations_span_and_scores(self):
        langfuse = MagicMock()
        trace = langfuse.trace.return_value
        trace.id = "trace-123"

        trace_id = log_consensus_trace(langfuse, outcome(), media_type="image", size_bytes=10, ground_truth="ai")

        assert trace_id == "trace-123"
        assert trace.generation.call_count == 2
        trace.span.assert_called_once()
        score_names = [c.kwargs["name"] for c in trace.score.call_args_list]
        assert "m1_confidence" in score_names
        assert "final_score" in score_names
        assert "inter_model_agreement" in score_names
        assert "final_correct" in score_names
        langfuse.flush.assert_called_once()

    def test_tracing_errors_do_not_propagate(self):
        langfuse = MagicMock()
        langfuse.trace.side_effect = RuntimeError("network down")
        assert log_consensus_trace(langfuse, outcome(), media_type="image") is None
