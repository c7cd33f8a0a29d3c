"""Shared pytest configuration and fixtures."""
import sys
from pathlib import Path

import httpx
import pytest

# Ensure the project root is on sys.path so `from truecheck.xxx import` works
# regardless of where pytest is invoked from.
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from truecheck.classifiers import build_classifiers  # noqa: E402
from truecheck.config import Settings  # noqa: E402

BASE_URL = "https://inference.test/models"


def make_settings(image_models=("img-a", "img-b", "img-c"), video_models=("vid-a",), **overrides) -> Settings:
    return Settings(
        image_classifiers=build_classifiers(image_models, "image", BASE_URL),
        video_classifiers=build_classifiers(video_models, "video", BASE_URL),
        **overrides,
    )


def routed_client(routes: dict, calls: list | None = None) -> httpx.Client:
    """httpx client routed by model name.

    A route is (status, json_body), (status, raw_bytes), an exception to raise,
    or a callable taking the request and returning one of those.
    """

    def handle(request: httpx.Request) -> httpx.Response:
        name = request.url.path.split("/models/", 1)[1]
        if calls is not None:
            calls.append(name)
        route = routes.get(name, (404, {"error": "not found"}))
        if callable(route) and not isinstance(route, Exception):
            route = route(request)
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    return httpx.Client(transport=httpx.MockTransport(handle))


@pytest.fixture
def settings() -> Settings:
    return make_settings()
