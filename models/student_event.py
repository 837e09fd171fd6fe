from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from utils.value_parser import ValueParser


class EventType(str, Enum):
    CALL_TRANSCRIPT = "call_transcript"
    MESSAGE = "message"
    EXAM_SCORE = "exam_score"
    MILESTONE = "milestone"
    VIDEO_WATCHED = "video_watched"


class StudentEvent(BaseModel):
    event_id: str
    student_id: str
    first_name: str
    last_name: str
    type: str  # See EventType; unknown types are kept and scored 0
    value: str  # Free text, integer, percentage, or JSON milestone depending on type
    timestamp: datetime

    class Config:
        frozen = True
        from_attributes = True

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        # Upstream sometimes sends bare numbers for exam scores
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        parsed = ValueParser.parse_datetime(v)
        if parsed is None:
            raise ValueError(f"Invalid event timestamp: {v!r}")
        return parsed

    @property
    def kind(self) -> Optional[EventType]:
        """The event's EventType, or None for types this service does not know"""
        try:
            return EventType(self.type)
        except ValueError:
            return None
