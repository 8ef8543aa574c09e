from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Mapping


class PaymentStatus(StrEnum):
    PAID = "Paid"
    PENDING = "Pending"
    OVERDUE = "Overdue"


@dataclass(frozen=True, slots=True)
class AttendeeRecord:
    """One attendee on the class roster."""

    id: str
    name: str
    class_type: str = ""
    total_sessions: int = 0
    sessions_remaining: int = 0
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    last_check_in: datetime | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AttendeeRecord":
        last_check_in = payload.get("lastCheckIn")
        notes = payload.get("notes")
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name") or ""),
            class_type=str(payload.get("classType") or ""),
            total_sessions=int(payload.get("totalSessions") or 0),
            sessions_remaining=int(payload.get("sessionsRemaining") or 0),
            payment_status=PaymentStatus(payload.get("paymentStatus") or PaymentStatus.PENDING),
            notes=str(notes) if notes else None,
            last_check_in=datetime.fromisoformat(last_check_in) if last_check_in else None,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "classType": self.class_type,
            "totalSessions": self.total_sessions,
            "sessionsRemaining": self.sessions_remaining,
            "paymentStatus": self.payment_status.value,
        }
        if self.notes:
            payload["notes"] = self.notes
        if self.last_check_in is not None:
            payload["lastCheckIn"] = self.last_check_in.isoformat()
        return payload


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Records that likely refer to the same attendee.

    Only meaningful within the grouping pass that produced it; ``group_id`` is
    the group's position in that pass's output.
    """

    group_id: int
    display_name: str
    members: tuple[AttendeeRecord, ...]

    @property
    def member_ids(self) -> list[str]:
        return [member.id for member in self.members]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one duplicate group.

    ``source_records`` are the group members as they were when grouped; the
    host refuses to apply the resolution if any of them has changed since.
    """

    final_record: AttendeeRecord
    removed_ids: tuple[str, ...] = field(default_factory=tuple)
    source_records: tuple[AttendeeRecord, ...] = field(default_factory=tuple)

    @property
    def survivor_id(self) -> str:
        return self.final_record.id

    @property
    def affected_ids(self) -> tuple[str, ...]:
        return (self.final_record.id, *self.removed_ids)
