from __future__ import annotations


class HafasBoardError(Exception):
    """Base exception for all station board errors."""


class ValidationError(HafasBoardError):
    """Raised when query options fail validation before any network call."""


class UnknownServiceError(ValidationError):
    """Raised when a service code is not in the HAFAS service registry."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown HAFAS service: {code}")


class ApiError(HafasBoardError):
    """Raised when a HAFAS backend returns a non-2xx HTTP status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Upstream API error ({status_code})")
