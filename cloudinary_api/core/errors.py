from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cloudinary_api.services.dispatch import ApiResponse


class CloudinaryError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(CloudinaryError):
    """Raised when the client is misconfigured (bad URI, missing secret, bad base URL)."""


class RequestBuildError(CloudinaryError):
    """Raised when an outgoing request cannot be constructed."""


class InvalidAssetError(CloudinaryError):
    """Raised when a local asset cannot be uploaded."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedSourceError(CloudinaryError):
    """Raised for object-storage references when fetching them is disabled."""

    def __init__(self, message: str, *, reference: str) -> None:
        super().__init__(message)
        self.reference = reference


class TransportError(CloudinaryError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, *, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class ApiError(CloudinaryError):
    """Raised for responses with a status code outside 200-299.

    The wrapped response stays available on ``response`` so callers can
    inspect headers and status.
    """

    def __init__(
        self,
        response: ApiResponse,
        *,
        message: str = "",
        documentation_url: str | None = None,
    ) -> None:
        self.response = response
        self.status_code = response.status_code
        self.method = response.request.method
        self.url = response.url
        self.message = message
        self.documentation_url = documentation_url
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.status_code} {self.message}"


class ResponseDecodeError(CloudinaryError):
    """Raised when a successful response body is not valid for the decode target."""

    def __init__(self, message: str, *, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
