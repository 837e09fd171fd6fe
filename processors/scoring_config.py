"""Thresholds, scores and keyword lists used to classify student events.

All scores are on the 0-99 urgency scale.
"""

SCORING_CONFIG = {
    "exam": {
        "urgent_threshold": 50,  # Below this = urgent
        "medium_threshold": 75,  # Below this = medium
        "urgent_score": 90,
        "medium_score": 75,
        "low_score": 5,
    },
    "milestone": {
        "urgent_days": 7,  # Within 7 days = urgent
        "medium_days": 14,  # Within 14 days = medium
        "urgent_score": 80,
        "medium_score": 40,
        "low_score": 5,
    },
    "video": {
        "urgent_days": 2,  # Incomplete and more than 2 days old = urgent
        "medium_days": 1,  # Incomplete and more than 1 day old = medium
        "completion_threshold": 95,  # Below 95% = incomplete
        "urgent_score": 80,
        "medium_score": 40,
        "low_score": 5,
    },
    # Text with no keyword match is treated as ambiguous
    "text_default_score": 50,
    # [most recent, middle, oldest]
    "recency_weights": [0.5, 0.3, 0.2],
}

# Checked in this order; the first tier with any substring hit wins.
# Matching is plain substring containment on lower-cased text, so short
# terms carry padding ('po ') to avoid matching inside other words.
URGENCY_KEYWORDS = [
    {
        "tier": "CRISIS",
        "score": 90,
        "keywords": [
            "lost job", "lost my job", "fired", "laid off",
            "funeral", "died", "death", "passed away", "bereavement", "family member",
            "emergency", "hospitalized", "hospital",
            "eviction", "evicted", "homeless",
            "car accident", "injured",
            "court", "hearing", "meet my po", "po ",
        ],
    },
    {
        "tier": "HIGH",
        "score": 70,
        "keywords": [
            "childcare", "babysitter", "kids", "fell through", "take care of",
            "transport", "car broke", "no ride", "bus",
            "wifi", "wi-fi", "internet", "connection", "connectivity", "keeps dropping",
            "phone cut off", "no service", "phone disconnected", "phone got cut off", "disconnected",
            "computer broke", "laptop",
            "no response", "tried to reach",
            "doctor", "illness", "not feeling well", "need rest",
            "financial hardship", "financial stress", "can't pay",
            "limited access", "offline materials",
        ],
    },
    {
        "tier": "MEDIUM",
        "score": 50,
        "keywords": [
            "don't understand", "don't get",
            "confused", "confusing",
            "lost", "stuck",
            "not sure how", "help with",
            "what does", "how do i",
            "struggling", "having trouble", "can't",
            "nervous", "anxiety", "freeze up", "panic", "worried",
            "feels behind", "feels flat", "plateau",
            "forgot", "postpone", "what if i fail",
        ],
    },
    {
        "tier": "LOW",
        "score": 5,
        "keywords": [
            "good week", "feeling better", "feeling good", "all good",
            "confident", "ready", "excited",
            "thank", "thanks", "scores are going up",
            "doing well", "on track", "keeping pace",
            "no blockers", "steady improvement", "ahead of schedule",
            "committed to", "try to get back", "studied more",
            "reviewed progress", "check-in", "organized calendar",
            "extra practice", "plan to review", "coping techniques", "breathing plan",
            "targeted practice", "reduce workload",
        ],
    },
]
