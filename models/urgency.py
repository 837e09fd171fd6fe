from enum import Enum


class UrgencyTier(str, Enum):
    """Coarse display bucket for an urgency score (0-99)"""
    CRISIS = "CRISIS"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @classmethod
    def from_score(cls, score: int) -> "UrgencyTier":
        if score >= 90:
            return cls.CRISIS
        if score >= 60:
            return cls.HIGH
        if score >= 30:
            return cls.MEDIUM
        return cls.LOW
