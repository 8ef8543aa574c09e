from __future__ import annotations

import random
from dataclasses import replace

from roster_dedupe.datasets.profiles import CLASS_TYPES
from roster_dedupe.models import AttendeeRecord, PaymentStatus

_FIRST_NAMES = [
    "Dominique",
    "Luke",
    "Alexandra",
    "Sofia",
    "Maya",
    "Daniel",
    "Emma",
    "Christopher",
    "Olivia",
    "Noah",
]
_LAST_NAMES = [
    "Smith",
    "Johnson",
    "Brown",
    "Taylor",
    "Wilson",
    "Davies",
    "Martin",
    "Thomas",
]
_NOTES = ["", "", "", "VIP", "Injured knee", "Owes invoice", "Prefers mornings"]


class ReferenceRosterGenerator:
    """Generate synthetic rosters (with intentional dupes) for tests and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(self, size: int, duplicate_rate: float = 0.15) -> list[AttendeeRecord]:
        if size <= 0:
            return []

        unique_count = int(size * (1.0 - duplicate_rate))
        unique_count = max(1, min(unique_count, size))

        records = [self._attendee(i) for i in range(unique_count)]
        while len(records) < size:
            source = self._rng.choice(records[:unique_count])
            records.append(self._duplicate(source, len(records)))

        self._rng.shuffle(records)
        return records

    def _attendee(self, idx: int) -> AttendeeRecord:
        name = f"{self._rng.choice(_FIRST_NAMES)} {self._rng.choice(_LAST_NAMES)}"
        total = self._rng.choice([5, 10, 20])
        return AttendeeRecord(
            id=f"att_{idx:07d}",
            name=name,
            class_type=self._rng.choice(CLASS_TYPES),
            total_sessions=total,
            sessions_remaining=self._rng.randint(0, total),
            payment_status=self._rng.choice(list(PaymentStatus)),
            notes=self._rng.choice(_NOTES) or None,
        )

    def _duplicate(self, source: AttendeeRecord, idx: int) -> AttendeeRecord:
        total = self._rng.choice([5, 10])
        return replace(
            source,
            id=f"att_{idx:07d}",
            name=self._name_variant(source.name),
            total_sessions=total,
            sessions_remaining=self._rng.randint(0, total),
            notes=self._rng.choice(_NOTES) or None,
        )

    def _name_variant(self, name: str) -> str:
        variant = self._rng.choice(["upper", "lower", "padded", "typo"])
        if variant == "upper":
            return name.upper()
        if variant == "lower":
            return name.lower()
        if variant == "padded":
            return f"  {name} "
        pos = self._rng.randrange(len(name))
        return name[:pos] + name[pos + 1 :]
