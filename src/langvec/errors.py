"""
LangVec Error Classification System.

This module provides the exceptions raised by the in-memory vector store.

Error Categories:
-----------------
1. Usage Errors: Programmer mistakes detected synchronously, before any
   mutation takes place. Never retried.
   - Invalid arguments (top < 1, blank collection name, missing argument)
   - Record types without exactly one key / vector field
   - Key type mismatches
   - Collection type conflicts
   - Vector dimension mismatches
   - Unsupported query representations

2. Cancellation: The caller's cancellation token fired while an operation
   was running. Batch operations may have been partially applied.

Usage:
------
    from langvec.errors import (
        LangVecError,
        CollectionTypeConflictError,
        DimensionMismatchError,
    )

    try:
        collection = store.get_collection("products", int, Product)
    except CollectionTypeConflictError as e:
        # "products" already exists with another key/record type
        print(e.details["existing_record_type"])
"""

from typing import Any


class LangVecError(Exception):
    """
    Base exception for all LangVec errors.

    All custom exceptions in LangVec inherit from this class
    to allow catching all LangVec-specific errors with a single except clause.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


# =============================================================================
# Usage Errors - Programmer mistakes, never retried
# =============================================================================

class InvalidArgumentError(LangVecError, ValueError):
    """
    Raised when an argument is out of range or missing.

    Common causes:
    - top / top_k less than 1
    - negative skip
    - blank collection name
    - None passed where a record or predicate is required
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class ArgumentMismatchError(InvalidArgumentError):
    """Raised when parallel inputs (corpus and corpus vectors) differ in length."""

    def __init__(
        self,
        message: str = "Corpus and corpus vectors must contain the same number of items",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InvalidRecordShapeError(LangVecError, TypeError):
    """
    Raised when a record type cannot be used with a collection.

    Common causes:
    - No field annotated with VectorStoreKey (or more than one)
    - No field annotated with VectorStoreVector (or more than one)
    - A record's vector field holds None or an unsupported value
    """

    def __init__(
        self,
        message: str = "Invalid record shape",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class KeyTypeMismatchError(LangVecError, TypeError):
    """Raised when a record's key field is not assignable to the collection key type."""

    def __init__(
        self,
        message: str = "Key type mismatch",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class CollectionTypeConflictError(LangVecError):
    """
    Raised when a collection name is requested with a different
    key/record type pair than the one it was created with.
    """

    def __init__(
        self,
        message: str = "Collection already exists with a different key or record type",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class DimensionMismatchError(LangVecError, ValueError):
    """Raised when two vectors that must be compared have different lengths."""

    def __init__(
        self,
        message: str = "Vector dimension mismatch",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class UnsupportedQueryTypeError(LangVecError, TypeError):
    """Raised when a search query cannot be normalized into a vector."""

    def __init__(
        self,
        message: str = "Unsupported query type",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class NotFoundError(LangVecError, LookupError):
    """
    Raised by lookups that signal absence as an error.

    Missing keys in get/delete are not errors; this is used for
    named-field lookups on record metadata.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Cancellation
# =============================================================================

class OperationCancelledError(LangVecError):
    """Raised when a CancellationToken fires during an operation."""

    def __init__(
        self,
        message: str = "Operation was cancelled",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Configuration
# =============================================================================

class ConfigurationError(LangVecError, ValueError):
    """
    Raised when settings read from the environment are invalid.

    Common causes:
    - Non-numeric LANGVEC_SEARCH_TIMING_THRESHOLD_MS
    - Negative thresholds
    """

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Helper Functions
# =============================================================================

_USAGE_ERRORS = (
    InvalidArgumentError,
    InvalidRecordShapeError,
    KeyTypeMismatchError,
    CollectionTypeConflictError,
    DimensionMismatchError,
    UnsupportedQueryTypeError,
    NotFoundError,
)


def is_usage_error(error: Exception) -> bool:
    """
    Check if an error is a programmer/usage error.

    Usage errors indicate a bug in the calling code; cancellation
    and foreign exceptions are not usage errors.

    Example:
        try:
            collection.upsert(record)
        except Exception as e:
            if is_usage_error(e):
                raise
    """
    return isinstance(error, _USAGE_ERRORS)
