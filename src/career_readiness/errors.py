"""Exception types raised across the analysis engine."""

from __future__ import annotations


class CareerReadinessError(Exception):
    """Base class for engine errors."""


class ValidationError(CareerReadinessError, ValueError):
    """Required input is missing or violates a shape constraint."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ExternalServiceError(CareerReadinessError):
    """A search or completion collaborator failed (credentials or transport)."""

    def __init__(self, service: str, message: str):
        self.service = service
        self.message = message
        super().__init__(f"{service}: {message}")


class ParseError(CareerReadinessError, ValueError):
    """Completion output could not be parsed as JSON."""
