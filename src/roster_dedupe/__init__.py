"""Duplicate detection and resolution for class attendance rosters."""

from __future__ import annotations

from collections.abc import Sequence

from roster_dedupe.errors import InvalidSelection, RosterDedupeError, StaleGroup
from roster_dedupe.models import AttendeeRecord, DuplicateGroup, PaymentStatus, Resolution
from roster_dedupe.steps.exclusion import apply_exclusion
from roster_dedupe.steps.merge import MergeResolver
from roster_dedupe.steps.similarity import SimilarityGrouper


def group(records: Sequence[AttendeeRecord]) -> list[DuplicateGroup]:
    return SimilarityGrouper().group(records)


def resolve(group: DuplicateGroup, survivor_id: str, merge_sessions: bool) -> Resolution:
    return MergeResolver().resolve(group, survivor_id, merge_sessions)


__all__ = [
    "AttendeeRecord",
    "DuplicateGroup",
    "PaymentStatus",
    "Resolution",
    "RosterDedupeError",
    "InvalidSelection",
    "StaleGroup",
    "apply_exclusion",
    "group",
    "resolve",
]
