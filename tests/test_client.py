"""Tests for truecheck.client using httpx.MockTransport."""
import httpx
import pytest

from truecheck.client import parse_classifications, query_classifier
from truecheck.errors import MalformedUpstreamResponse, TransportFailure, UpstreamColdStart
from truecheck.models import ClassifierDescriptor

CLASSIFIER = ClassifierDescriptor(name="org/model", endpoint="https://inference.test/models/org/model", media_kind="image")


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestParseClassifications:
    def test_flat_list(self):
        items = parse_classifications("m", [{"label": "fake", "score": 0.9}, {"label": "real", "score": 0.1}])
        assert [i.label for i in items] == ["fake", "real"]
        assert items[0].score == 0.9

    def test_nested_list_is_flattened(self):
        items = parse_classifications("m", [[{"label": "fake", "score": 0.9}]])
        assert items[0].label == "fake"

    def test_score_clamped(self):
        assert parse_classifications("m", [{"label": "x", "score": 1.5}])[0].score == 1.0

    @pytest.mark.parametrize("body", [[], {}, None, "text", [{"label": "x"}], [{"label": "x", "score": "high"}], [1]])
    def test_malformed(self, body):
        with pytest.raises(MalformedUpstreamResponse):
            parse_classifications("m", body)


class TestQueryClassifier:
    def test_success_sends_payload_and_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = request.read()
            return httpx.Response(200, json=[{"label": "artificial", "score": 0.8}])

        with _client(handler) as client:
            items = query_classifier(client, CLASSIFIER, "aGVsbG8=", api_token="tok")

        assert items[0].label == "artificial"
        assert seen["auth"] == "Bearer tok"
        assert b'"inputs"' in seen["body"] and b"aGVsbG8=" in seen["body"]

    def test_no_token_no_auth_header(self):
        def handler(request):
            assert "Authorization" not in request.headers
            return httpx.Response(200, json=[{"label": "real", "score": 0.8}])

        with _client(handler) as client:
            query_classifier(client, CLASSIFIER, "aGVsbG8=")

    def test_503_is_cold_start(self):
        with _client(lambda req: httpx.Response(503, json={"error": "loading", "estimated_time": 17.5})) as client:
            with pytest.raises(UpstreamColdStart) as info:
                query_classifier(client, CLASSIFIER, "aGVsbG8=")
        assert info.value.estimated_time == 17.5
        assert info.value.status_code == 503

    def test_other_status_is_transport_failure(self):
        with _client(lambda req: httpx.Response(500, text="boom")) as client:
            with pytest.raises(TransportFailure) as info:
                query_classifier(client, CLASSIFIER, "aGVsbG8=")
        assert not isinstance(info.value, UpstreamColdStart)
        assert info.value.status_code == 500

    def test_timeout_is_transport_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with _client(handler) as client:
            with pytest.raises(TransportFailure, match="timed out"):
                query_classifier(client, CLASSIFIER, "aGVsbG8=", timeout=1.0)

    def test_connect_error_is_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client:
            with pytest.raises(TransportFailure):
                query_classifier(client, CLASSIFIER, "aGVsbG8=")

    def test_undecodable_bytes_are_malformed(self):
        with _client(lambda req: httpx.Response(200, content=b"\xff\xfe\xfa garbage")) as client:
            with pytest.raises(MalformedUpstreamResponse):
                query_classifier(client, CLASSIFIER, "aGVsbG8=")

    def test_invalid_json_is_malformed(self):
        with _client(lambda req: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(MalformedUpstreamResponse):
                query_classifier(client, CLASSIFIER, "aGVsbG8=")
