from __future__ import annotations

from collections.abc import Collection, Sequence

from roster_dedupe.models import DuplicateGroup


def apply_exclusion(groups: Sequence[DuplicateGroup], excluded_ids: Collection[str]) -> list[DuplicateGroup]:
    """Drop ignored records from already computed groups.

    Groups left with fewer than two members are dropped. ``group_id`` is kept so
    selections made against the unfiltered pass still line up; the display name
    follows the first remaining member.
    """
    excluded = set(excluded_ids)
    if not excluded:
        return list(groups)

    filtered: list[DuplicateGroup] = []
    for group in groups:
        members = tuple(member for member in group.members if member.id not in excluded)
        if len(members) < 2:
            continue
        if len(members) == len(group.members):
            filtered.append(group)
            continue
        filtered.append(
            DuplicateGroup(group_id=group.group_id, display_name=members[0].name, members=members)
        )
    return filtered
