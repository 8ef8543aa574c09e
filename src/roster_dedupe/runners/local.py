from __future__ import annotations

import logging
from collections.abc import Iterable

from roster_dedupe.errors import InvalidSelection, StaleGroup
from roster_dedupe.interfaces import DuplicateGrouper, GroupResolver, RecordStore
from roster_dedupe.models import DuplicateGroup, Resolution
from roster_dedupe.steps.exclusion import apply_exclusion
from roster_dedupe.steps.merge import MergeResolver
from roster_dedupe.steps.similarity import SimilarityGrouper

logger = logging.getLogger(__name__)


def apply_resolution(store: RecordStore, resolution: Resolution) -> None:
    """Remove the survivor's old record and the victims, then insert the final record.

    The store performs the removal and insert in one ``replace`` call and
    rejects it if the grouped records were changed in the meantime.
    """
    missing = store.missing_ids(resolution.affected_ids)
    if missing:
        raise StaleGroup(missing)
    store.replace(
        remove_ids=resolution.affected_ids,
        record=resolution.final_record,
        expected=resolution.source_records,
    )


class LocalResolutionSession:
    """Operator workflow over a single in-process store."""

    def __init__(
        self,
        store: RecordStore,
        grouper: DuplicateGrouper | None = None,
        resolver: GroupResolver | None = None,
    ) -> None:
        self._store = store
        self._grouper = grouper or SimilarityGrouper()
        self._resolver = resolver or MergeResolver()
        self._ignored: set[str] = set()
        self._groups: list[DuplicateGroup] | None = None

    @property
    def ignored_ids(self) -> frozenset[str]:
        return frozenset(self._ignored)

    def scan(self) -> list[DuplicateGroup]:
        groups = self._grouper.group(self._store.list_records())
        self._groups = apply_exclusion(groups, self._ignored)
        return list(self._groups)

    def ignore(self, record_ids: Iterable[str]) -> list[DuplicateGroup]:
        self._ignored.update(record_ids)
        if self._groups is None:
            return self.scan()
        self._groups = apply_exclusion(self._groups, self._ignored)
        return list(self._groups)

    def resolve(self, group_id: int, survivor_id: str | None = None, merge_sessions: bool = False) -> Resolution:
        group = self._find_group(group_id)
        if survivor_id is None:
            survivor_id = group.members[0].id

        resolution = self._resolver.resolve(group, survivor_id, merge_sessions)
        try:
            apply_resolution(self._store, resolution)
        except StaleGroup:
            self._groups = None
            raise

        # Sibling groups may reference records this apply just replaced.
        self._groups = None
        logger.info(
            "Applied resolution for %r: kept %s, removed %d",
            group.display_name,
            resolution.survivor_id,
            len(resolution.removed_ids),
        )
        return resolution

    def _find_group(self, group_id: int) -> DuplicateGroup:
        if self._groups is None:
            raise InvalidSelection("No current grouping pass; call scan() first", group_id=group_id)
        for group in self._groups:
            if group.group_id == group_id:
                return group
        raise InvalidSelection(f"No duplicate group with id {group_id} in the current pass", group_id=group_id)
