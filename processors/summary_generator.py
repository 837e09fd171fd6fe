from datetime import datetime
from typing import List, Optional
from models.student_event import StudentEvent, EventType
from models.event_payload import MilestonePayload
from models.student_record import NO_RECENT_ACTIVITY
from models.urgency import UrgencyTier
from processors.event_scorer import EventScorer, whole_days_between
from utils.value_parser import ValueParser, utc_now
import logging

logger = logging.getLogger(__name__)

GENERIC_EVENT_SUMMARY = "Had an event update."

CALL_SUMMARIES = {
    UrgencyTier.CRISIS: "Experienced a crisis situation during a call.",
    UrgencyTier.HIGH: "Reported significant blockers during a call.",
    UrgencyTier.MEDIUM: "Expressed concerns or confusion during a call.",
    UrgencyTier.LOW: "Had a positive or neutral call interaction.",
}

MESSAGE_SUMMARIES = {
    UrgencyTier.CRISIS: "Sent a message indicating a crisis situation.",
    UrgencyTier.HIGH: "Sent a message about significant blockers.",
    UrgencyTier.MEDIUM: "Sent a message expressing concerns or needing help.",
    UrgencyTier.LOW: "Sent a positive or routine message.",
}

EXAM_SUMMARIES = {
    UrgencyTier.CRISIS: "Experienced a critically low exam score ({score}).",
    UrgencyTier.HIGH: "Received a concerning exam score ({score}).",
    UrgencyTier.MEDIUM: "Scored below expectations on an exam ({score}).",
    UrgencyTier.LOW: "Performed well on an exam ({score}).",
}
EXAM_UNPARSED_SUMMARY = "Received an exam score."

MILESTONE_SUMMARIES = {
    UrgencyTier.CRISIS: "Has an urgent upcoming {name} ({days} days away).",
    UrgencyTier.HIGH: "Has an approaching {name} ({days} days away).",
    UrgencyTier.MEDIUM: "Has a {name} coming up ({days} days away).",
    UrgencyTier.LOW: "Has a {name} scheduled ({days} days away).",
}
MILESTONE_PASSED_SUMMARY = "Completed a {name}."
MILESTONE_UNPARSED_SUMMARIES = {
    UrgencyTier.CRISIS: "Has an urgent upcoming milestone.",
    UrgencyTier.HIGH: "Has an approaching milestone.",
    UrgencyTier.MEDIUM: "Has a milestone coming up.",
    UrgencyTier.LOW: "Has a milestone scheduled.",
}

VIDEO_SUMMARIES = {
    UrgencyTier.CRISIS: "Has an incomplete video ({completion}% watched) that needs attention.",
    UrgencyTier.HIGH: "Has an incomplete video ({completion}% watched) that may need follow-up.",
    UrgencyTier.MEDIUM: "Watched part of a video ({completion}% complete).",
    UrgencyTier.LOW: "Completed watching a video ({completion}% watched).",
}
VIDEO_UNPARSED_SUMMARIES = {
    UrgencyTier.CRISIS: "Has an incomplete video that needs attention.",
    UrgencyTier.HIGH: "Has an incomplete video that may need follow-up.",
    UrgencyTier.MEDIUM: "Watched part of a video.",
    UrgencyTier.LOW: "Completed watching a video.",
}


class SummaryGenerator:
    """Builds human-readable summaries of student events

    Each event is scored with the same EventScorer used for urgency, the score
    is bucketed with UrgencyTier (>=90 / >=60 / >=30), and a fixed sentence is
    picked for the (event type, tier) pair.
    """

    def __init__(self, scorer: EventScorer = None):
        self.scorer = scorer or EventScorer()

        self._builders = {
            EventType.CALL_TRANSCRIPT: lambda event, tier, now: CALL_SUMMARIES[tier],
            EventType.MESSAGE: lambda event, tier, now: MESSAGE_SUMMARIES[tier],
            EventType.EXAM_SCORE: self._summarize_exam,
            EventType.MILESTONE: self._summarize_milestone,
            EventType.VIDEO_WATCHED: self._summarize_video,
        }

    def supported_types(self) -> set:
        return set(self._builders)

    def generate_event_summary(
        self,
        event: StudentEvent,
        now: Optional[datetime] = None
    ) -> str:
        """Summarize a single event in one sentence"""
        now = now or utc_now()
        kind = event.kind

        if kind is None:
            return GENERIC_EVENT_SUMMARY

        tier = UrgencyTier.from_score(self.scorer.score_event(event, now))
        return self._builders[kind](event, tier, now)

    def generate_student_summary(
        self,
        events: List[StudentEvent],
        now: Optional[datetime] = None
    ) -> str:
        """Join per-event summaries in window order (newest first)"""
        if not events:
            return NO_RECENT_ACTIVITY

        now = now or utc_now()
        return " ".join(self.generate_event_summary(event, now) for event in events)

    def _summarize_exam(self, event: StudentEvent, tier: UrgencyTier, now: datetime) -> str:
        score = ValueParser.parse_int(event.value)
        if score is None:
            return EXAM_UNPARSED_SUMMARY
        return EXAM_SUMMARIES[tier].format(score=score)

    def _summarize_milestone(self, event: StudentEvent, tier: UrgencyTier, now: datetime) -> str:
        milestone = MilestonePayload.parse(event.value)
        if milestone is None:
            return MILESTONE_UNPARSED_SUMMARIES[tier]

        days_until = whole_days_between(now, milestone.date)
        name = milestone.name or "milestone"

        if tier == UrgencyTier.LOW and days_until < 0:
            return MILESTONE_PASSED_SUMMARY.format(name=name)
        return MILESTONE_SUMMARIES[tier].format(name=name, days=days_until)

    def _summarize_video(self, event: StudentEvent, tier: UrgencyTier, now: datetime) -> str:
        completion = ValueParser.parse_percentage(event.value)
        if completion is None:
            return VIDEO_UNPARSED_SUMMARIES[tier]
        return VIDEO_SUMMARIES[tier].format(completion=completion)
