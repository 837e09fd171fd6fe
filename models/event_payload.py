from pydantic import BaseModel, ValidationError, field_validator
from typing import Optional
from datetime import datetime
from utils.value_parser import ValueParser
import json


class MilestonePayload(BaseModel):
    """Decoded value of a milestone event, e.g. {"name": "GED Math", "date": "2025-11-01"}"""
    date: datetime
    name: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        parsed = ValueParser.parse_datetime(v)
        if parsed is None:
            raise ValueError(f"Invalid milestone date: {v!r}")
        return parsed

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @classmethod
    def parse(cls, value: str) -> Optional["MilestonePayload"]:
        """Decode a milestone JSON string, returning None when it is unusable"""
        try:
            data = json.loads(value)
        except (TypeError, ValueError):
            return None

        if not isinstance(data, dict):
            return None

        try:
            return cls(**data)
        except ValidationError:
            return None
