from __future__ import annotations

from typing import Collection, Iterable, Protocol, Sequence

from roster_dedupe.models import AttendeeRecord, DuplicateGroup, Resolution


class NameCleaner(Protocol):
    """Map a display name to the form used for comparison."""

    def normalize(self, name: str) -> str:
        ...


class DuplicateGrouper(Protocol):
    """Partition a roster into disjoint duplicate-candidate groups."""

    def group(self, records: Sequence[AttendeeRecord]) -> list[DuplicateGroup]:
        ...


class GroupResolver(Protocol):
    """Turn an operator's choice for one group into a resolution."""

    def resolve(self, group: DuplicateGroup, survivor_id: str, merge_sessions: bool) -> Resolution:
        ...


class RecordStore(Protocol):
    """Authoritative roster owned by the host."""

    def list_records(self) -> list[AttendeeRecord]:
        ...

    def missing_ids(self, record_ids: Iterable[str]) -> list[str]:
        ...

    def replace(
        self,
        remove_ids: Collection[str],
        record: AttendeeRecord,
        expected: Sequence[AttendeeRecord] = (),
    ) -> None:
        """Remove ``remove_ids`` and insert ``record`` as one unit.

        Fails without changes if a record in ``expected`` no longer matches.
        """
        ...
