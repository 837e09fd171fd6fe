from datetime import datetime
from typing import Optional
from models.student_event import StudentEvent, EventType
from models.event_payload import MilestonePayload
from processors.keyword_matcher import KeywordMatcher
from processors.scoring_config import SCORING_CONFIG
from utils.value_parser import ValueParser, utc_now
import math
import logging

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def whole_days_between(start: datetime, end: datetime) -> int:
    """Floor of (end - start) in days; negative when end is before start"""
    return math.floor((end - start).total_seconds() / SECONDS_PER_DAY)


class EventScorer:
    """Maps a single student event to an urgency score between 0 and 99"""

    def __init__(self, keyword_matcher: KeywordMatcher = None, config: dict = None):
        self.keyword_matcher = keyword_matcher or KeywordMatcher()
        self.config = config or SCORING_CONFIG

        # One scorer per EventType; every member must be present
        self._scorers = {
            EventType.CALL_TRANSCRIPT: lambda event, now: self.score_call_transcript(event.value),
            EventType.MESSAGE: lambda event, now: self.score_message(event.value),
            EventType.EXAM_SCORE: lambda event, now: self.score_exam_score(event.value),
            EventType.MILESTONE: lambda event, now: self.score_milestone(event.value, now),
            EventType.VIDEO_WATCHED: lambda event, now: self.score_video_watched(
                event.value, event.timestamp, now
            ),
        }

    def supported_types(self) -> set:
        return set(self._scorers)

    def score_event(self, event: StudentEvent, now: Optional[datetime] = None) -> int:
        """Score one event by routing on its type

        Args:
            event: The event to score
            now: Reference time for date-based rules (defaults to current UTC time)

        Returns:
            Integer urgency in [0, 99]; 0 for unknown types or unusable payloads
        """
        now = now or utc_now()
        kind = event.kind

        if kind is None:
            logger.warning(f"Unknown event type '{event.type}' for event {event.event_id}")
            return 0

        score = self._scorers[kind](event, now)
        return max(0, min(99, score))

    def score_call_transcript(self, value: str) -> int:
        """Keyword match on the transcript; ambiguous (50) when nothing matches"""
        return self._score_text(value)

    def score_message(self, value: str) -> int:
        """Keyword match on the message; ambiguous (50) when nothing matches"""
        return self._score_text(value)

    def score_exam_score(self, value: str) -> int:
        """Score an exam result

        - below 50: urgent (90)
        - below 75: medium (75)
        - 75 and up: low (5)
        """
        score = ValueParser.parse_int(value)
        exam = self.config["exam"]

        if score is None:
            logger.warning(f"Invalid exam score: {value!r}")
            return 0

        if score < exam["urgent_threshold"]:
            return exam["urgent_score"]
        if score < exam["medium_threshold"]:
            return exam["medium_score"]
        return exam["low_score"]

    def score_milestone(self, value: str, now: Optional[datetime] = None) -> int:
        """Score a milestone by days until its date

        - already passed: low (5)
        - within 7 days: urgent (80)
        - within 14 days: medium (40)
        - further out: low (5)
        """
        milestone = MilestonePayload.parse(value)
        config = self.config["milestone"]

        if milestone is None:
            logger.warning(f"Error parsing milestone: {value!r}")
            return 0

        days_until = whole_days_between(now or utc_now(), milestone.date)

        if days_until < 0:
            return config["low_score"]
        if days_until <= config["urgent_days"]:
            return config["urgent_score"]
        if days_until <= config["medium_days"]:
            return config["medium_score"]
        return config["low_score"]

    def score_video_watched(
        self,
        value: str,
        timestamp: datetime,
        now: Optional[datetime] = None
    ) -> int:
        """Score a video watch by completion and how long ago it was watched

        A complete video (>= 95%) is low urgency. An incomplete one becomes
        urgent after more than 2 days and medium after more than 1 day.
        """
        completion = ValueParser.parse_percentage(value)
        video = self.config["video"]

        if completion is None:
            logger.warning(f"Invalid video completion: {value!r}")
            return 0

        if completion >= video["completion_threshold"]:
            return video["low_score"]

        days_ago = whole_days_between(timestamp, now or utc_now())

        if days_ago > video["urgent_days"]:
            return video["urgent_score"]
        if days_ago > video["medium_days"]:
            return video["medium_score"]
        return video["low_score"]

    def _score_text(self, value: str) -> int:
        keyword_score = self.keyword_matcher.find_match(value)
        if keyword_score is not None:
            return keyword_score
        return self.config["text_default_score"]
