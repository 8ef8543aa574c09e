from __future__ import annotations

import logging
import threading
from collections.abc import Collection, Iterable, Sequence
from dataclasses import replace
from datetime import datetime, timezone

from roster_dedupe.errors import StaleGroup
from roster_dedupe.models import AttendeeRecord

logger = logging.getLogger(__name__)


class InMemoryRosterStore:
    """Reference host store.

    Every mutation builds a new list and swaps it in under a lock, so readers
    never observe a half-applied change.
    """

    def __init__(self, records: Sequence[AttendeeRecord] = ()) -> None:
        ids = [record.id for record in records]
        if len(set(ids)) != len(ids):
            raise ValueError("Record ids must be unique")
        self._records: list[AttendeeRecord] = list(records)
        self._lock = threading.Lock()

    def list_records(self) -> list[AttendeeRecord]:
        return list(self._records)

    def get(self, record_id: str) -> AttendeeRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def missing_ids(self, record_ids: Iterable[str]) -> list[str]:
        present = {record.id for record in self._records}
        return [record_id for record_id in record_ids if record_id not in present]

    def add(self, record: AttendeeRecord) -> None:
        with self._lock:
            if any(existing.id == record.id for existing in self._records):
                raise ValueError(f"Record id {record.id!r} already exists")
            self._records = [record, *self._records]

    def remove(self, record_id: str) -> bool:
        with self._lock:
            remaining = [record for record in self._records if record.id != record_id]
            removed = len(remaining) != len(self._records)
            self._records = remaining
        return removed

    def check_in(self, record_id: str, when: datetime | None = None) -> AttendeeRecord | None:
        """Use one session. Records with no sessions left are returned unchanged."""
        with self._lock:
            updated: AttendeeRecord | None = None
            records: list[AttendeeRecord] = []
            for record in self._records:
                if record.id == record_id:
                    if record.sessions_remaining > 0:
                        record = replace(
                            record,
                            sessions_remaining=record.sessions_remaining - 1,
                            last_check_in=when or datetime.now(timezone.utc),
                        )
                    updated = record
                records.append(record)
            self._records = records
        return updated

    def replace(
        self,
        remove_ids: Collection[str],
        record: AttendeeRecord,
        expected: Sequence[AttendeeRecord] = (),
    ) -> None:
        """Remove ``remove_ids`` and put ``record`` first, or change nothing.

        ``remove_ids`` is expected to include the id of the record being
        replaced. ``expected`` holds the snapshots the replacement was computed
        from. Raises :class:`StaleGroup` when any id is gone or any snapshot no
        longer matches the stored record.
        """
        with self._lock:
            missing = self.missing_ids(remove_ids)
            current = {r.id: r for r in self._records}
            changed = [snap.id for snap in expected if snap.id in current and current[snap.id] != snap]
            if missing or changed:
                logger.warning("Refusing stale resolution; missing ids %s, changed ids %s", missing, changed)
                raise StaleGroup(missing, changed)
            involved = set(remove_ids) | {record.id}
            self._records = [record, *(r for r in self._records if r.id not in involved)]
        logger.info("Replaced %d records with %s", len(involved), record.id)
