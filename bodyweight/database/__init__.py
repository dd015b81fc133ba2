"""Persistence adapters and the weight record store."""

from bodyweight.database.adapters import JsonFileAdapter, MemoryAdapter, PersistenceAdapter
from bodyweight.database.weight_store import (
    WeightRecordStore,
    chronological,
    decode_entries,
    encode_entries,
    sort_canonical,
)

__all__ = [
    'PersistenceAdapter',
    'MemoryAdapter',
    'JsonFileAdapter',
    'WeightRecordStore',
    'chronological',
    'decode_entries',
    'encode_entries',
    'sort_canonical',
]
