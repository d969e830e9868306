"""
JSON File Item Store
====================
Durable store that keeps every saved item in one JSON document:

    {
      "savedTweets": {
        "<id>": {"id": ..., "payload": {...}, "interval": ..., "nextReview": ...,
                 "lastReviewed": ..., "reviewCount": ...}
      }
    }

Each write reads the whole mapping, updates it and replaces the file
atomically (temp file + rename). An asyncio.Lock keeps writers in one
process from interleaving.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os
from loguru import logger

from resurfacer.core.exceptions import (
    DataCorruptionError,
    wrap_storage_exception,
)
from resurfacer.core.metrics import STORE_ERRORS, STORE_OPERATION_LATENCY, track_async_latency
from resurfacer.core.review import SavedItem

from .base import ItemStore


class JsonFileItemStore(ItemStore):
    """Single-file JSON store under one namespace key."""

    backend_name = "json"

    def __init__(self, path: str | os.PathLike, namespace: str = "savedTweets"):
        self.path = Path(path)
        self.namespace = namespace
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    #  Low-level helpers
    # ------------------------------------------------------------------

    async def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            STORE_ERRORS.labels(backend=self.backend_name, operation="read").inc()
            raise wrap_storage_exception(self.backend_name, "load", e) from e

        if not content.strip():
            return {}
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            STORE_ERRORS.labels(backend=self.backend_name, operation="read").inc()
            raise DataCorruptionError(str(self.path), f"Invalid JSON ({e.msg})") from e

        if not isinstance(document, dict):
            raise DataCorruptionError(str(self.path), "Top-level JSON value is not an object")
        return document

    async def _read_records(self) -> Dict[str, Any]:
        document = await self._read_document()
        records = document.get(self.namespace) or {}
        if not isinstance(records, dict):
            raise DataCorruptionError(str(self.path), f"Namespace '{self.namespace}' is not an object")
        return records

    async def _write_records(self, records: Dict[str, Any], operation: str) -> None:
        document = await self._read_document()
        document[self.namespace] = records
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(document, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            STORE_ERRORS.labels(backend=self.backend_name, operation=operation).inc()
            logger.error(f"[JsonItemStore] {operation} failed for {self.path}: {e}")
            raise wrap_storage_exception(self.backend_name, operation, e) from e

    @staticmethod
    def _decode(item_id: str, record: Any) -> SavedItem:
        try:
            return SavedItem.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            raise DataCorruptionError(item_id, f"Cannot decode saved item ({e})") from e

    # ------------------------------------------------------------------
    #  ItemStore API
    # ------------------------------------------------------------------

    @track_async_latency(STORE_OPERATION_LATENCY, {"backend": "json", "operation": "get"})
    async def get(self, item_id: str) -> Optional[SavedItem]:
        records = await self._read_records()
        record = records.get(item_id)
        if record is None:
            return None
        return self._decode(item_id, record)

    @track_async_latency(STORE_OPERATION_LATENCY, {"backend": "json", "operation": "get_all"})
    async def get_all(self) -> Dict[str, SavedItem]:
        records = await self._read_records()
        items: Dict[str, SavedItem] = {}
        for item_id, record in records.items():
            # Skip null entries left behind by older writers
            if record is None:
                continue
            try:
                items[item_id] = self._decode(item_id, record)
            except DataCorruptionError as e:
                STORE_ERRORS.labels(backend=self.backend_name, operation="decode").inc()
                logger.warning(f"[JsonItemStore] Skipping unreadable record {item_id}: {e}")
        return items

    @track_async_latency(STORE_OPERATION_LATENCY, {"backend": "json", "operation": "put"})
    async def put(self, item: SavedItem) -> None:
        async with self._lock:
            records = await self._read_records()
            records[item.id] = item.to_dict()
            await self._write_records(records, "put")
        logger.debug(f"[JsonItemStore] Stored item {item.id}")

    @track_async_latency(STORE_OPERATION_LATENCY, {"backend": "json", "operation": "delete"})
    async def delete(self, item_id: str) -> bool:
        async with self._lock:
            records = await self._read_records()
            if item_id not in records:
                return False
            del records[item_id]
            await self._write_records(records, "delete")
        logger.debug(f"[JsonItemStore] Removed item {item_id}")
        return True

    async def clear(self) -> None:
        async with self._lock:
            await self._write_records({}, "clear")
        logger.info(f"[JsonItemStore] Cleared namespace '{self.namespace}' in {self.path}")


__all__ = ["JsonFileItemStore"]
