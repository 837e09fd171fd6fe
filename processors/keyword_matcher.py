from typing import List, Dict, Optional
from processors.scoring_config import URGENCY_KEYWORDS
import logging

logger = logging.getLogger(__name__)


class KeywordMatcher:
    """Classifies free text (call transcripts, messages) by urgency keywords"""

    def __init__(self, keyword_tiers: List[Dict] = None):
        """Initialize keyword matcher

        Args:
            keyword_tiers: Ordered list of {'tier', 'score', 'keywords'} dicts,
                highest priority first. Defaults to URGENCY_KEYWORDS.
        """
        self.keyword_tiers = keyword_tiers if keyword_tiers is not None else URGENCY_KEYWORDS

    def find_match(self, text: str) -> Optional[int]:
        """Return the score of the first tier with a keyword in the text

        Tiers are checked in priority order (CRISIS > HIGH > MEDIUM > LOW), so a
        text that mentions both a crisis and a thank-you still scores as crisis.
        Matching is case-insensitive substring containment.

        Returns:
            The tier's score, or None when no keyword matches
        """
        if not text:
            return None

        text_lower = text.lower()

        for tier in self.keyword_tiers:
            for keyword in tier["keywords"]:
                if keyword in text_lower:
                    logger.debug(f"Keyword '{keyword}' matched tier {tier['tier']}")
                    return tier["score"]

        return None
