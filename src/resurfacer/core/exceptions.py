"""
Resurfacer Domain-Specific Exceptions
=====================================

This module defines a hierarchy of exceptions for consistent error handling
across Resurfacer.

Exception Hierarchy:
    ResurfacerError (base)
    ├── RecoverableError (transient, caller may retry)
    │   ├── StorageReadError
    │   └── StorageWriteError
    ├── IrrecoverableError (permanent, requires intervention)
    │   ├── ConfigurationError
    │   ├── DataCorruptionError
    │   ├── ValidationError
    │   └── NotFoundError
    │       └── ItemNotFoundError
    └── Domain Errors
        ├── StorageError
        └── DuplicateItemError

Usage Guidelines:
    - Return None for "not found" in review/reschedule paths (benign no-op)
    - Raise exceptions for actual errors (store failures, bad config, corrupt data)
    - Always include context in error messages
"""

from typing import Any, Optional


class ResurfacerError(Exception):
    """
    Base exception for all Resurfacer errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context about the error
        recoverable: Whether the error is potentially recoverable
    """

    error_code: str = "RESURFACER_ERROR"
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        context: Optional[dict] = None,
        error_code: Optional[str] = None,
        recoverable: Optional[bool] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if error_code is not None:
            self.error_code = error_code
        if recoverable is not None:
            self.recoverable = recoverable

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON output."""
        result = {
            "error": self.message,
            "code": self.error_code,
            "recoverable": self.recoverable,
        }

        if self.context:
            result["context"] = self.context

        return result


# =============================================================================
# Base Categories: Recoverable vs Irrecoverable
# =============================================================================

class RecoverableError(ResurfacerError):
    """
    Base class for recoverable errors.

    Transient failures that may succeed when the caller tries again:
    - Store read/write failures
    - Host view not ready yet
    """
    recoverable = True


class IrrecoverableError(ResurfacerError):
    """
    Base class for irrecoverable errors.

    Permanent errors that require intervention:
    - Invalid configuration
    - Corrupt persisted data
    - Validation failures
    """
    recoverable = False


# =============================================================================
# Storage Errors
# =============================================================================

class StorageError(ResurfacerError):
    """Base exception for item store errors."""
    error_code = "STORAGE_ERROR"


class StorageReadError(RecoverableError, StorageError):
    """Raised when the store cannot be read."""
    error_code = "STORAGE_READ_ERROR"

    def __init__(self, backend: str, message: str = "Read failed", context: Optional[dict] = None):
        ctx = {"backend": backend}
        if context:
            ctx.update(context)
        super().__init__(f"[{backend}] {message}", ctx)
        self.backend = backend


class StorageWriteError(RecoverableError, StorageError):
    """Raised when a write to the store fails. The record is not committed."""
    error_code = "STORAGE_WRITE_ERROR"

    def __init__(self, backend: str, operation: str, message: str = "Write failed", context: Optional[dict] = None):
        ctx = {"backend": backend, "operation": operation}
        if context:
            ctx.update(context)
        super().__init__(f"[{backend}] {operation}: {message}", ctx)
        self.backend = backend
        self.operation = operation


class DataCorruptionError(IrrecoverableError, StorageError):
    """Raised when persisted data cannot be deserialized."""
    error_code = "DATA_CORRUPTION_ERROR"

    def __init__(self, resource_id: str, reason: str = "Data corruption detected", context: Optional[dict] = None):
        ctx = {"resource_id": resource_id}
        if context:
            ctx.update(context)
        super().__init__(f"{reason} for resource '{resource_id}'", ctx)
        self.resource_id = resource_id


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(IrrecoverableError):
    """Raised when configuration is invalid or missing."""
    error_code = "CONFIGURATION_ERROR"

    def __init__(self, config_key: str, reason: str, context: Optional[dict] = None):
        ctx = {"config_key": config_key}
        if context:
            ctx.update(context)
        super().__init__(f"Configuration error for '{config_key}': {reason}", ctx)
        self.config_key = config_key


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(IrrecoverableError):
    """Raised when input validation fails."""
    error_code = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str, value: Any = None, context: Optional[dict] = None):
        ctx = {"field": field}
        if value is not None:
            value_str = str(value)
            if len(value_str) > 100:
                value_str = value_str[:100] + "..."
            ctx["value"] = value_str
        if context:
            ctx.update(context)
        super().__init__(f"Validation error for '{field}': {reason}", ctx)
        self.field = field
        self.reason = reason


# =============================================================================
# Item Errors
# =============================================================================

class NotFoundError(IrrecoverableError):
    """Raised when a requested resource is not found."""
    error_code = "NOT_FOUND_ERROR"

    def __init__(self, resource_type: str, resource_id: str, context: Optional[dict] = None):
        ctx = {"resource_type": resource_type, "resource_id": resource_id}
        if context:
            ctx.update(context)
        super().__init__(f"{resource_type} '{resource_id}' not found", ctx)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ItemNotFoundError(NotFoundError):
    """Raised when a saved item is not in the store."""
    error_code = "ITEM_NOT_FOUND_ERROR"

    def __init__(self, item_id: str, context: Optional[dict] = None):
        super().__init__("SavedItem", item_id, context)
        self.item_id = item_id


class DuplicateItemError(IrrecoverableError):
    """Raised when saving an item whose id is already in the store."""
    error_code = "DUPLICATE_ITEM_ERROR"

    def __init__(self, item_id: str, context: Optional[dict] = None):
        ctx = {"item_id": item_id}
        if context:
            ctx.update(context)
        super().__init__(f"Item '{item_id}' is already saved", ctx)
        self.item_id = item_id


# =============================================================================
# Utility Functions
# =============================================================================

def wrap_storage_exception(backend: str, operation: str, exc: Exception) -> StorageError:
    """
    Wrap a generic exception into an appropriate StorageError.

    Args:
        backend: Name of the store backend (e.g., 'json', 'memory')
        operation: Name of the operation that failed
        exc: The original exception

    Returns:
        An appropriate StorageError subclass
    """
    if isinstance(exc, StorageError):
        return exc

    exc_name = type(exc).__name__
    ctx = {"original_exception": exc_name}

    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return DataCorruptionError(backend, f"Cannot decode store during {operation}: {exc}", ctx)

    if operation in ("get", "get_all", "load"):
        return StorageReadError(backend, str(exc), ctx)

    return StorageWriteError(backend, operation, str(exc), ctx)


__all__ = [
    # Base
    "ResurfacerError",
    "RecoverableError",
    "IrrecoverableError",
    # Storage
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "DataCorruptionError",
    # Config
    "ConfigurationError",
    # Validation
    "ValidationError",
    # Items
    "NotFoundError",
    "ItemNotFoundError",
    "DuplicateItemError",
    # Utilities
    "wrap_storage_exception",
]
