"""
Tests for the Resurfacer exception hierarchy.
"""

import pytest

from resurfacer.core.exceptions import (
    ConfigurationError,
    DataCorruptionError,
    DuplicateItemError,
    IrrecoverableError,
    ItemNotFoundError,
    NotFoundError,
    RecoverableError,
    ResurfacerError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
    wrap_storage_exception,
)


class TestHierarchy:

    def test_storage_errors(self):
        assert issubclass(StorageReadError, RecoverableError)
        assert issubclass(StorageReadError, StorageError)
        assert issubclass(StorageWriteError, RecoverableError)
        assert issubclass(DataCorruptionError, IrrecoverableError)
        assert issubclass(DataCorruptionError, StorageError)

    def test_item_errors(self):
        assert issubclass(ItemNotFoundError, NotFoundError)
        assert issubclass(DuplicateItemError, IrrecoverableError)
        for cls in (ConfigurationError, ValidationError, ItemNotFoundError, DuplicateItemError):
            assert issubclass(cls, ResurfacerError)

    def test_recoverable_flags(self):
        assert StorageWriteError("json", "put").recoverable is True
        assert DuplicateItemError("a").recoverable is False


class TestErrorPayloads:

    def test_to_dict(self):
        err = ItemNotFoundError("1789")
        data = err.to_dict()
        assert data["code"] == "ITEM_NOT_FOUND_ERROR"
        assert data["recoverable"] is False
        assert data["context"] == {"resource_type": "SavedItem", "resource_id": "1789"}
        assert "1789" in data["error"]

    def test_str_includes_context(self):
        err = StorageWriteError("json", "put", "disk full")
        assert "[json] put: disk full" in str(err)
        assert "context=" in str(err)

    def test_validation_truncates_long_values(self):
        err = ValidationError("payload", "too big", "x" * 500)
        assert len(err.context["value"]) == 103

    def test_override_code_and_recoverable(self):
        err = ResurfacerError("custom", error_code="X", recoverable=False)
        assert err.error_code == "X"
        assert err.recoverable is False
        assert str(err) == "custom"


class TestWrapStorageException:

    def test_passthrough(self):
        original = StorageReadError("json", "nope")
        assert wrap_storage_exception("json", "get", original) is original

    def test_decode_errors_become_corruption(self):
        wrapped = wrap_storage_exception("json", "get_all", ValueError("bad"))
        assert isinstance(wrapped, DataCorruptionError)

    @pytest.mark.parametrize("operation", ["get", "get_all", "load"])
    def test_reads(self, operation):
        wrapped = wrap_storage_exception("json", operation, OSError("io"))
        assert isinstance(wrapped, StorageReadError)

    def test_writes(self):
        wrapped = wrap_storage_exception("json", "delete", OSError("io"))
        assert isinstance(wrapped, StorageWriteError)
        assert wrapped.operation == "delete"
        assert wrapped.context["original_exception"] == "OSError"
