"""
Resurfacer Storage Module
=========================
Key/value stores for saved items.

    - ItemStore: abstract async store contract
    - InMemoryItemStore: process-local dictionary
    - JsonFileItemStore: durable single-file JSON mapping under one namespace
"""

from .base import ItemStore
from .memory_store import InMemoryItemStore
from .json_store import JsonFileItemStore

__all__ = ["ItemStore", "InMemoryItemStore", "JsonFileItemStore"]
