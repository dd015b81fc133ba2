"""
Weight Record Store
Owns the list of daily weight entries kept under one storage key.

Payload schema (one JSON array per key, no required order):
- date: str - canonical YYYY-MM-DD key, local calendar day
- weight: float - value as entered, no unit tag
- timestamp: int - epoch milliseconds of the last write for that day

Every mutation is a full read-modify-write of the array. Two saves racing
on the same key can lose one update (last writer wins); callers that need
stronger guarantees must serialize writes above this class.
"""

import asyncio
import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from bodyweight.constants import DEFAULT_STORAGE_KEY
from bodyweight.database.adapters import PersistenceAdapter
from bodyweight.exceptions import MalformedPayload, StorageFailure
from bodyweight.logging_utils import PerformanceTimer, store_logger
from bodyweight.models import WeightEntry
from bodyweight.utils import DateLike, canonical_date_key, epoch_millis

logger = logging.getLogger(__name__)


def decode_entries(blob: str) -> List[WeightEntry]:
    """
    Decode a stored blob into entries.

    Individual records that fail validation are skipped with a warning.
    When two records share a date the one with the newer timestamp wins.

    Raises:
        MalformedPayload: blob is not JSON or not an array
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(f"Stored weight entries are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedPayload(f"Stored weight entries must be a list, got {type(data).__name__}")

    by_date: Dict[str, WeightEntry] = {}
    skipped = []
    for idx, record in enumerate(data):
        try:
            entry = WeightEntry.from_dict(record)
        except (ValueError, TypeError) as e:
            skipped.append((idx, str(e)))
            continue

        existing = by_date.get(entry.date)
        if existing is None or entry.timestamp > existing.timestamp:
            by_date[entry.date] = entry

    if skipped:
        logger.warning(f"Skipped {len(skipped)} invalid weight record(s)")
        for idx, error in skipped:
            logger.warning(f"  - Record {idx}: {error}")

    duplicates = len(data) - len(skipped) - len(by_date)
    if duplicates:
        logger.warning(f"Collapsed {duplicates} duplicate date record(s)")

    return list(by_date.values())


def encode_entries(entries: List[WeightEntry]) -> str:
    """Serialize entries as one JSON array."""
    return json.dumps([entry.to_dict() for entry in entries])


def sort_canonical(entries: List[WeightEntry]) -> List[WeightEntry]:
    """Newest write first. This is the order `latest()` relies on."""
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


def chronological(entries: List[WeightEntry]) -> List[WeightEntry]:
    """Oldest day first, the order the chart geometry engine expects."""
    return sorted(entries, key=lambda e: (e.date, e.timestamp))


class WeightRecordStore:
    """
    Daily weight entries for one storage key.
    At most one entry per calendar day; saving a day again overwrites it.
    """

    def __init__(self, adapter: PersistenceAdapter, key: str = DEFAULT_STORAGE_KEY,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            adapter: persistence backend
            key: storage key holding the whole collection
            clock: returns the current local time; defaults to datetime.now
        """
        self.adapter = adapter
        self.key = key
        self._clock = clock or datetime.now

    async def load_all(self) -> List[WeightEntry]:
        """
        Read the full collection, newest write first.

        Returns an empty list when nothing is stored or the stored payload
        is malformed.

        Raises:
            StorageFailure: the adapter read failed
        """
        with PerformanceTimer(store_logger, "weight_load", key=self.key):
            blob = await self._read_blob()

        if blob is None or blob == '':
            return []

        try:
            entries = decode_entries(blob)
        except MalformedPayload as e:
            logger.warning(f"Treating malformed payload under {self.key} as empty: {e}")
            store_logger.warning("malformed_payload", key=self.key, error=str(e))
            return []

        return sort_canonical(entries)

    async def save(self, weight: float, at: Optional[DateLike] = None) -> WeightEntry:
        """
        Record the weight for a day, replacing any entry already on that day.

        Args:
            weight: value to store (validated upstream, not here)
            at: day to record; defaults to today in local time

        Returns:
            The entry that was written

        Raises:
            StorageFailure: reading or writing the collection failed
        """
        now = self._clock()
        date_key = canonical_date_key(at if at is not None else now)
        new_entry = WeightEntry(date=date_key, weight=float(weight), timestamp=epoch_millis(now))

        with PerformanceTimer(store_logger, "weight_save", key=self.key):
            entries = await self.load_all()

            existing_index = next(
                (i for i, entry in enumerate(entries) if entry.date == date_key), None
            )
            if existing_index is not None:
                entries[existing_index] = new_entry
            else:
                entries.append(new_entry)

            await self._write_entries(sort_canonical(entries))

        action = "Updated" if existing_index is not None else "Added"
        logger.info(f"{action} weight entry for {date_key}: {new_entry.weight}")
        return new_entry

    async def delete(self, date: DateLike) -> bool:
        """
        Remove the entry for a day.

        Returns:
            True if an entry was removed, False if the day had none
        """
        date_key = canonical_date_key(date)
        entries = await self.load_all()
        remaining = [entry for entry in entries if entry.date != date_key]
        if len(remaining) == len(entries):
            return False

        await self._write_entries(remaining)
        logger.info(f"Deleted weight entry for {date_key}")
        return True

    async def latest(self) -> Optional[WeightEntry]:
        """Entry with the newest timestamp, or None when the store is empty."""
        entries = await self.load_all()
        return entries[0] if entries else None

    async def by_date(self, date: DateLike) -> Optional[WeightEntry]:
        """Entry whose key equals the canonical key of `date`."""
        date_key = canonical_date_key(date)
        entries = await self.load_all()
        return next((entry for entry in entries if entry.date == date_key), None)

    async def in_range(self, start: DateLike, end: DateLike) -> List[WeightEntry]:
        """
        Entries with start <= date <= end, newest write first.

        Keys are compared as strings; this is only an ordering because both
        bounds and stored keys are fixed-width YYYY-MM-DD.
        """
        start_key = canonical_date_key(start)
        end_key = canonical_date_key(end)
        entries = await self.load_all()
        return [entry for entry in entries if start_key <= entry.date <= end_key]

    async def recent(self, count: int) -> List[WeightEntry]:
        """The `count` most recently written entries."""
        if count <= 0:
            return []
        entries = await self.load_all()
        return entries[:count]

    async def get_stats(self) -> Dict[str, Any]:
        """Summary of the stored collection."""
        entries = await self.load_all()
        dates = sorted(entry.date for entry in entries)
        return {
            'key': self.key,
            'total_entries': len(entries),
            'first_date': dates[0] if dates else None,
            'last_date': dates[-1] if dates else None,
        }

    async def export_to_csv(self, filepath: str) -> int:
        """
        Export entries to CSV, oldest day first.

        Returns:
            Number of entries exported
        """
        entries = chronological(await self.load_all())
        await asyncio.to_thread(self._write_csv, Path(filepath), entries)
        return len(entries)

    @staticmethod
    def _write_csv(csv_path: Path, entries: List[WeightEntry]) -> None:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(csv_path, 'w', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=['date', 'weight', 'timestamp'])
            writer.writeheader()
            for entry in entries:
                row = entry.to_dict()
                row['timestamp'] = entry.recorded_at.isoformat()
                writer.writerow(row)

    async def _read_blob(self) -> Optional[str]:
        try:
            return await self.adapter.get(self.key)
        except StorageFailure:
            store_logger.error("storage_read_failed", key=self.key)
            raise
        except Exception as e:
            store_logger.error("storage_read_failed", key=self.key, error=str(e))
            raise StorageFailure('read', self.key, e) from e

    async def _write_entries(self, entries: List[WeightEntry]) -> None:
        blob = encode_entries(entries)
        try:
            await self.adapter.set(self.key, blob)
        except StorageFailure:
            store_logger.error("storage_write_failed", key=self.key)
            raise
        except Exception as e:
            store_logger.error("storage_write_failed", key=self.key, error=str(e))
            raise StorageFailure('write', self.key, e) from e
