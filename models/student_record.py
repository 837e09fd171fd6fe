from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from models.student_event import StudentEvent

NO_RECENT_ACTIVITY = "No recent activity."


class StudentRecord(BaseModel):
    """Per-student triage state kept by the StudentEventStore"""
    student_id: str
    first_name: str
    last_name: str
    recent_events: List[StudentEvent] = []  # Newest first, at most 3
    last_updated: datetime
    urgency: int = Field(default=0, ge=0, le=99)
    summary: str = NO_RECENT_ACTIVITY
    acknowledged: int = Field(default=0, ge=0, le=1)  # 0 or 1

    class Config:
        from_attributes = True
        validate_assignment = True

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.student_id})"


class StudentRecordView(BaseModel):
    """Read-only shape of a student returned to the dashboard and outreach writer"""
    id: str
    name: str
    first_name: str
    last_name: str
    urgency_score: int
    recent_events: List[StudentEvent]
    event_count: int
    last_updated: datetime
    summary: str
    acknowledged: int

    @classmethod
    def from_record(cls, record: StudentRecord) -> "StudentRecordView":
        return cls(
            id=record.student_id,
            name=record.display_name,
            first_name=record.first_name,
            last_name=record.last_name,
            urgency_score=record.urgency,
            recent_events=list(record.recent_events),
            event_count=len(record.recent_events),
            last_updated=record.last_updated,
            summary=record.summary,
            acknowledged=record.acknowledged,
        )


class StoreStats(BaseModel):
    totalStudents: int
    totalEvents: int
    initialized: bool
