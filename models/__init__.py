# Models module - Pydantic models for events, payloads and student triage state
from models.student_event import StudentEvent, EventType
from models.event_payload import MilestonePayload
from models.urgency import UrgencyTier
from models.student_record import (
    StudentRecord,
    StudentRecordView,
    StoreStats,
    NO_RECENT_ACTIVITY,
)

__all__ = [
    "StudentEvent",
    "EventType",
    "MilestonePayload",
    "UrgencyTier",
    "StudentRecord",
    "StudentRecordView",
    "StoreStats",
    "NO_RECENT_ACTIVITY",
]
