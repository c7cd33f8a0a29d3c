"""HTTP calls to hosted classifier endpoints."""
from __future__ import annotations

import json
from typing import Any

import httpx

from truecheck.errors import MalformedUpstreamResponse, TransportFailure, UpstreamColdStart
from truecheck.models import ClassifierDescriptor, RawClassification

_CONTENT_TYPE_JSON = "application/json"


def _headers(api_token: str | None) -> dict[str, str]:
    headers = {"Content-Type": _CONTENT_TYPE_JSON, "Accept": _CONTENT_TYPE_JSON}
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"
    return headers


def parse_classifications(model_name: str, data: Any) -> list[RawClassification]:
    """Validate a classifier body: a non-empty array of {label, score}."""
    # some pipelines wrap the list once more: [[{...}, {...}]]
    if isinstance(data, list) and len(data) == 1 and isinstance(data[0], list):
        data = data[0]
    if not isinstance(data, list) or not data:
        raise MalformedUpstreamResponse(model_name, f"expected a non-empty array, got {str(data)[:120]}")

    out: list[RawClassification] = []
    for item in data:
        if not isinstance(item, dict) or "label" not in item or "score" not in item:
            raise MalformedUpstreamResponse(model_name, f"bad classification entry {str(item)[:120]}")
        try:
            score = float(item["score"])
        except (TypeError, ValueError):
            raise MalformedUpstreamResponse(model_name, f"non-numeric score {item['score']!r}") from None
        out.append(RawClassification(label=str(item["label"]), score=max(0.0, min(1.0, score))))
    return out


def _estimated_time(resp: httpx.Response) -> float | None:
    try:
        value = resp.json().get("estimated_time")
        return float(value) if value is not None else None
    except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
        return None


def query_classifier(
    client: httpx.Client,
    classifier: ClassifierDescriptor,
    payload_b64: str,
    api_token: str | None = None,
    timeout: float = 20.0,
) -> list[RawClassification]:
    """POST {"inputs": payload} to one classifier and return its classifications."""
    try:
        resp = client.post(
            classifier.endpoint,
            json={"inputs": payload_b64},
            headers=_headers(api_token),
            timeout=timeout,
        )
    except httpx.TimeoutException as exc:
        raise TransportFailure(classifier.name, f"timed out after {timeout}s") from exc
    except httpx.HTTPError as exc:
        raise TransportFailure(classifier.name, f"request failed: {exc}") from exc

    if resp.status_code == 503:
        raise UpstreamColdStart(classifier.name, _estimated_time(resp))
    if not resp.is_success:
        raise TransportFailure(classifier.name, f"HTTP {resp.status_code}: {resp.text[:200]}", resp.status_code)

    try:
        data = resp.json()
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError both land here
        raise MalformedUpstreamResponse(classifier.name, f"undecodable body: {exc}") from exc

    return parse_classifications(classifier.name, data)
