from datetime import datetime
from typing import List, Optional
from models.student_event import StudentEvent
from processors.event_scorer import EventScorer
from processors.scoring_config import SCORING_CONFIG
from utils.value_parser import utc_now
import math
import logging

logger = logging.getLogger(__name__)


class UrgencyAggregator:
    """Combines a student's recent event scores into one urgency score"""

    def __init__(self, scorer: EventScorer = None, weights: List[float] = None):
        """Initialize urgency aggregator

        Args:
            scorer: EventScorer used for the individual events
            weights: Positional weights, most recent first.
                Defaults to [0.5, 0.3, 0.2].
        """
        self.scorer = scorer or EventScorer()
        self.weights = weights or SCORING_CONFIG["recency_weights"]

    def calculate_urgency(
        self,
        events: List[StudentEvent],
        now: Optional[datetime] = None
    ) -> int:
        """Calculate overall urgency for a student (0-99)

        Args:
            events: Recent events, newest first
            now: Reference time passed through to the event scorer

        Returns:
            Recency-weighted average of the event scores, rounded half up and
            clamped to [0, 99]

        Formula: sum(score_i * w_i) / sum(w_i) over the positions present.
        With a full window the weights already sum to 1.0; with one or two
        events the division renormalizes so the result is still an average.

        Examples:
        - [90]: 90 * 0.5 / 0.5 = 90
        - [90, 10]: (45 + 3) / 0.8 = 60
        - [90, 70, 5]: 45 + 21 + 1 = 67
        """
        if not events:
            return 0

        now = now or utc_now()
        scores = [self.scorer.score_event(event, now) for event in events]
        return self.combine_scores(scores)

    def combine_scores(self, scores: List[int]) -> int:
        """Apply the recency weights to already computed event scores"""
        if not scores:
            return 0

        used_weights = self.weights[:len(scores)]
        weighted_score = sum(
            score * weight for score, weight in zip(scores, used_weights)
        )

        if len(scores) < len(self.weights):
            weighted_score = weighted_score / sum(used_weights)

        # Round half up (Python's round() would send 52.5 to 52)
        rounded = math.floor(weighted_score + 0.5)
        urgency = max(0, min(99, rounded))

        logger.debug(f"Combined scores {scores} into urgency {urgency}")
        return urgency
