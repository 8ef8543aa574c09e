from __future__ import annotations

from collections.abc import Iterable


class RosterDedupeError(Exception):
    """Base class for duplicate resolution failures."""


class InvalidSelection(RosterDedupeError):
    """The chosen survivor (or group) is not part of the current selection."""

    def __init__(self, message: str, *, survivor_id: str | None = None, group_id: int | None = None) -> None:
        super().__init__(message)
        self.survivor_id = survivor_id
        self.group_id = group_id


class StaleGroup(RosterDedupeError):
    """Records referenced by a resolution were removed or changed since grouping."""

    def __init__(self, missing_ids: Iterable[str] = (), changed_ids: Iterable[str] = ()) -> None:
        self.missing_ids = tuple(missing_ids)
        self.changed_ids = tuple(changed_ids)
        problems = []
        if self.missing_ids:
            problems.append("missing record ids: " + ", ".join(self.missing_ids))
        if self.changed_ids:
            problems.append("changed record ids: " + ", ".join(self.changed_ids))
        super().__init__("Duplicate group is stale; " + "; ".join(problems) + ". Discard the group and regroup.")


class RosterFormatError(RosterDedupeError):
    """A roster file could not be parsed into attendee records."""
