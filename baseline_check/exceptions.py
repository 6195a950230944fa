"""Exception types for pybaseline-check."""

from __future__ import annotations


class BaselineCheckError(Exception):
    """Base exception for expected application errors."""


class ConfigurationError(BaselineCheckError):
    """Raised when analysis configuration is invalid."""

    def __init__(self, field: str, problem: str) -> None:
        self.field = field
        super().__init__(f"Invalid configuration for {field}: {problem}")


class InvalidFeatureError(BaselineCheckError):
    """Raised when a detected feature violates the feature model."""


class ScoreRangeError(BaselineCheckError):
    """Raised when an externally supplied sub-score is outside [0, 100]."""

    def __init__(self, dimension: str, value: float) -> None:
        self.dimension = dimension
        self.value = value
        super().__init__(f"{dimension} score must be within [0, 100], got {value}")


class DatasetError(BaselineCheckError):
    """Raised when a dataset or feature file cannot be read or has the wrong shape."""

    def __init__(self, source: str, *, cause: str | None = None) -> None:
        detail = f"Unable to load data from {source}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class NetworkError(BaselineCheckError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BaselineCheckError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BaselineCheckError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BaselineCheckError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or invalid JSON content from {url}")
