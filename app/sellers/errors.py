"""
Exceptions raised by the sellers pipeline stages.
"""

from __future__ import annotations


class SellersPipelineError(Exception):
    """Base exception for sellers pipeline failures."""


class NetworkOrHttpError(SellersPipelineError):
    """Raised when one source URL cannot be fetched or answers with a non-2xx status."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class JsonParseError(SellersPipelineError):
    """Raised when a response body or a stage input file is not valid JSON."""


class MalformedInputError(JsonParseError):
    """Raised when stage input parses as JSON but does not have the expected shape."""


class FileIOError(SellersPipelineError):
    """Raised when reading or writing a pipeline file fails."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
