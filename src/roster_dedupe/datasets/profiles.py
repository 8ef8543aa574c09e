from __future__ import annotations

from roster_dedupe.models import AttendeeRecord, PaymentStatus

CLASS_TYPES = ["Pilates Advanced", "Boxing", "Yoga", "Climbing", "Spin", "Barre"]

ROSTER_COLUMNS = [
    "id",
    "name",
    "classType",
    "totalSessions",
    "sessionsRemaining",
    "paymentStatus",
    "notes",
    "lastCheckIn",
]

# Default roster a fresh install starts with.
SAMPLE_ROSTER = [
    AttendeeRecord(
        id="1",
        name="Sarah Connor",
        class_type="Pilates Advanced",
        total_sessions=10,
        sessions_remaining=8,
        payment_status=PaymentStatus.PAID,
    ),
    AttendeeRecord(
        id="2",
        name="John Wick",
        class_type="Boxing",
        total_sessions=20,
        sessions_remaining=2,
        payment_status=PaymentStatus.PAID,
    ),
    AttendeeRecord(
        id="3",
        name="Elena Fisher",
        class_type="Yoga",
        total_sessions=5,
        sessions_remaining=5,
        payment_status=PaymentStatus.PENDING,
    ),
    AttendeeRecord(
        id="4",
        name="Nathan Drake",
        class_type="Climbing",
        total_sessions=10,
        sessions_remaining=0,
        payment_status=PaymentStatus.OVERDUE,
    ),
]
