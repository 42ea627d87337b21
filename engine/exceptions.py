"""
Custom exceptions for the SQL log correlation engine.

Only RecordNotFoundError is ever surfaced to a user. The parameter and
substitution errors are raised inside the pipeline and recovered locally,
so one malformed record never blocks its siblings.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class LogCorrelationError(Exception):
    """Base exception for all correlation-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize correlation error.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
        }


class LogTextError(LogCorrelationError, TypeError):
    """Raised when the log input is not decoded text."""

    def __init__(self, received_type: type):
        message = (
            f"Log text must be str, got {received_type.__name__}; "
            "decode the file before parsing"
        )
        super().__init__(message, {'received_type': received_type.__name__})
        self.received_type = received_type


class RecordNotFoundError(LogCorrelationError):
    """Raised when no statement exists for an ID (or in the whole log)."""

    def __init__(self, transaction_id: Optional[str] = None):
        """
        Initialize not-found error.

        Args:
            transaction_id: Requested ID, or None for a whole-log lookup
        """
        if transaction_id is None:
            message = "No SQL queries found in log"
        else:
            message = f"ID not found: {transaction_id}"
        super().__init__(message, {'transaction_id': transaction_id})
        self.transaction_id = transaction_id


class MalformedParameterToken(LogCorrelationError):
    """A single `[type:pos:value]` bracket could not be decoded."""

    def __init__(self, token: str, reason: str):
        super().__init__(f"Malformed parameter token '{token}': {reason}", {'token': token})
        self.token = token
        self.reason = reason


class SubstitutionError(LogCorrelationError):
    """Base exception for placeholder substitution failures."""

    def __init__(self, message: str, position: int,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, {'position': position, **(details or {})})
        self.position = position


class UnsupportedParameterType(SubstitutionError):
    """A binding carries a type token that cannot be rendered as a literal."""

    def __init__(self, type_name: str, position: int):
        super().__init__(
            f"Unsupported type: {type_name}",
            position,
            {'type_name': type_name}
        )
        self.type_name = type_name


class MissingParameterValue(SubstitutionError):
    """A placeholder has no bound value at its position."""

    def __init__(self, position: int):
        super().__init__(f"Missing value for position {position}", position)
