from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    pass


class NetworkError(DomainError):
    """The generation request failed or the service answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ParseError(DomainError):
    """Model output did not contain a usable JSON payload."""

    def __init__(self, message: str, raw_text: str, candidate: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.raw_text = raw_text
        self.candidate = candidate if candidate is not None else raw_text


class UnsupportedFileError(DomainError):
    pass
