from __future__ import annotations

import logging
from dataclasses import replace

from roster_dedupe.errors import InvalidSelection
from roster_dedupe.models import AttendeeRecord, DuplicateGroup, Resolution

logger = logging.getLogger(__name__)


class MergeResolver:
    """Keep one record of a duplicate group, optionally folding the others into it."""

    def __init__(self, notes_separator: str = "; ", merged_prefix: str = "Merged: ") -> None:
        self._notes_separator = notes_separator
        self._merged_prefix = merged_prefix

    def resolve(self, group: DuplicateGroup, survivor_id: str, merge_sessions: bool) -> Resolution:
        survivor, victims = self._partition(group, survivor_id)

        final_record = replace(survivor)
        if merge_sessions:
            final_record = replace(
                final_record,
                sessions_remaining=survivor.sessions_remaining + sum(v.sessions_remaining for v in victims),
                total_sessions=survivor.total_sessions + sum(v.total_sessions for v in victims),
                notes=self._merge_notes(survivor.notes, victims),
            )

        removed_ids = tuple(victim.id for victim in victims)
        logger.debug(
            "Resolved group %s: survivor=%s removed=%s merge_sessions=%s",
            group.group_id,
            survivor_id,
            list(removed_ids),
            merge_sessions,
        )
        return Resolution(final_record=final_record, removed_ids=removed_ids, source_records=group.members)

    def preview_sessions_remaining(self, group: DuplicateGroup, survivor_id: str, merge_sessions: bool) -> int:
        """Remaining sessions the survivor would end up with."""
        survivor, victims = self._partition(group, survivor_id)
        if not merge_sessions:
            return survivor.sessions_remaining
        return survivor.sessions_remaining + sum(v.sessions_remaining for v in victims)

    def _partition(
        self, group: DuplicateGroup, survivor_id: str
    ) -> tuple[AttendeeRecord, list[AttendeeRecord]]:
        survivor: AttendeeRecord | None = None
        victims: list[AttendeeRecord] = []
        for member in group.members:
            if survivor is None and member.id == survivor_id:
                survivor = member
            else:
                victims.append(member)
        if survivor is None:
            raise InvalidSelection(
                f"Record {survivor_id!r} is not a member of duplicate group {group.group_id}",
                survivor_id=survivor_id,
                group_id=group.group_id,
            )
        return survivor, victims

    def _merge_notes(self, survivor_notes: str | None, victims: list[AttendeeRecord]) -> str | None:
        carried = self._notes_separator.join(victim.notes for victim in victims if victim.notes)
        if not carried:
            return survivor_notes
        merged = f"{self._merged_prefix}{carried}"
        if survivor_notes:
            return f"{survivor_notes}{self._notes_separator}{merged}"
        return merged
