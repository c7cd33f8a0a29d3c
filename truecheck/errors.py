"""Error taxonomy for classifier calls and aggregation."""
from __future__ import annotations


class ClassifierError(Exception):
    """A single classifier could not produce a usable result."""

    def __init__(self, model_name: str, message: str) -> None:
        super().__init__(f"{model_name}: {message}")
        self.model_name = model_name


class TransportFailure(ClassifierError):
    """Network error, timeout or non-success HTTP status."""

    def __init__(self, model_name: str, message: str, status_code: int | None = None) -> None:
        super().__init__(model_name, message)
        self.status_code = status_code


class UpstreamColdStart(TransportFailure):
    """HTTP 503: the hosted model is still loading."""

    def __init__(self, model_name: str, estimated_time: float | None = None) -> None:
        super().__init__(model_name, "model is loading", status_code=503)
        self.estimated_time = estimated_time


class MalformedUpstreamResponse(ClassifierError):
    """The classifier answered 2xx with an empty or unparseable body."""


class NoClassifiersAvailable(Exception):
    """Every candidate classifier failed; the caller should retry later."""

    retry = True

    def __init__(self, attempted: int, cold_start: bool = False) -> None:
        self.attempted = attempted
        self.cold_start = cold_start
        self.retry_after_seconds = 20 if cold_start else 10
        if cold_start:
            message = (
                f"AI models are loading. Please wait about {self.retry_after_seconds} seconds and try again."
            )
        else:
            message = (
                f"No classifier returned a result ({attempted} tried). "
                f"Please try again in {self.retry_after_seconds} seconds."
            )
        super().__init__(message)

    @property
    def wait_suggestion(self) -> str:
        return f"{self.retry_after_seconds} seconds"


class MediaError(ValueError):
    """The submitted media payload is missing, malformed or too large."""
