from __future__ import annotations

import logging
from collections.abc import Sequence

from roster_dedupe.interfaces import NameCleaner
from roster_dedupe.models import AttendeeRecord, DuplicateGroup
from roster_dedupe.steps.cleanup import NameNormalizer

logger = logging.getLogger(__name__)


class SimilarityGrouper:
    """Group attendees whose names are equal or within a few edits of each other.

    Anchors are taken longest normalized name first, so a full name such as
    "Jonathan Smith" absorbs its shorter variants rather than the reverse.
    Membership is decided against the anchor only, and every record lands in
    at most one group.
    """

    def __init__(
        self,
        normalizer: NameCleaner | None = None,
        min_fuzzy_length: int = 4,
        long_name_length: int = 7,
        long_name_max_edits: int = 2,
        short_name_max_edits: int = 1,
    ) -> None:
        self._normalizer = normalizer or NameNormalizer()
        self._min_fuzzy_length = min_fuzzy_length
        self._long_name_length = long_name_length
        self._long_name_max_edits = long_name_max_edits
        self._short_name_max_edits = short_name_max_edits

    def group(self, records: Sequence[AttendeeRecord]) -> list[DuplicateGroup]:
        names = [self._normalizer.normalize(record.name) for record in records]
        # sorted() is stable, so equal lengths keep input order.
        order = sorted(range(len(records)), key=lambda idx: -len(names[idx]))

        visited = [False] * len(records)
        groups: list[DuplicateGroup] = []
        for pos, anchor_idx in enumerate(order):
            if visited[anchor_idx]:
                continue
            visited[anchor_idx] = True
            members = [records[anchor_idx]]
            anchor_name = names[anchor_idx]

            for candidate_idx in order[pos + 1 :]:
                if visited[candidate_idx]:
                    continue
                if self.names_match(anchor_name, names[candidate_idx]):
                    visited[candidate_idx] = True
                    members.append(records[candidate_idx])

            if len(members) < 2:
                continue
            groups.append(
                DuplicateGroup(
                    group_id=len(groups),
                    display_name=records[anchor_idx].name,
                    members=tuple(members),
                )
            )

        logger.debug("Grouped %d records into %d duplicate groups", len(records), len(groups))
        return groups

    def names_match(self, anchor: str, candidate: str) -> bool:
        """Match rule on already-normalized names."""
        if anchor == candidate:
            return True
        if len(anchor) < self._min_fuzzy_length or len(candidate) < self._min_fuzzy_length:
            return False
        max_edits = self.max_edits_for(anchor)
        return levenshtein(anchor, candidate, max_distance=max_edits) <= max_edits

    def max_edits_for(self, anchor: str) -> int:
        if len(anchor) >= self._long_name_length:
            return self._long_name_max_edits
        return self._short_name_max_edits


def levenshtein(left: str, right: str, max_distance: int | None = None) -> int:
    """Edit distance between two strings.

    With ``max_distance`` set, any result above it is reported as
    ``max_distance + 1`` so hopeless pairs stop after the first row that
    cannot get back under the bound.
    """
    if left == right:
        return 0
    ceiling = None if max_distance is None else max_distance + 1
    if ceiling is not None and abs(len(left) - len(right)) >= ceiling:
        return ceiling
    if not left or not right:
        return len(left) or len(right)

    # Keep the shorter string in the row.
    if len(right) > len(left):
        left, right = right, left
    row = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        diagonal, row[0] = row[0], i
        for j, right_char in enumerate(right, start=1):
            substitution = diagonal + (left_char != right_char)
            diagonal = row[j]
            row[j] = min(row[j] + 1, row[j - 1] + 1, substitution)
        if ceiling is not None and min(row) >= ceiling:
            return ceiling
    if ceiling is not None:
        return min(row[-1], ceiling)
    return row[-1]
