"""Tests for EventScorer"""
import json
import logging
import pytest
from datetime import timedelta
from models.student_event import EventType
from processors.event_scorer import EventScorer, whole_days_between
from tests.fixtures.event_fixtures import NOW, make_event, milestone_value


@pytest.fixture
def scorer():
    return EventScorer()


class TestTextScoring:
    """Call transcripts and messages are scored by keyword"""

    def test_message_with_crisis_keyword(self, scorer):
        assert scorer.score_message("There was a death in my family") == 90

    def test_call_transcript_with_high_keyword(self, scorer):
        assert scorer.score_call_transcript("Student says the babysitter fell through again") == 70

    def test_message_without_keywords_defaults_to_50(self, scorer):
        assert scorer.score_message("See you next session") == 50

    def test_call_transcript_without_keywords_defaults_to_50(self, scorer):
        assert scorer.score_call_transcript("") == 50

    def test_crisis_and_low_keyword_scores_crisis(self, scorer):
        event = make_event(event_type="call_transcript", value="Thanks, but I got evicted")
        assert scorer.score_event(event, NOW) == 90


class TestExamScoring:
    """Exam scores map to urgency by threshold"""

    def test_failing_exam_is_urgent(self, scorer):
        assert scorer.score_exam_score("40") == 90

    def test_middling_exam_is_medium(self, scorer):
        assert scorer.score_exam_score("60") == 75

    def test_passing_exam_is_low(self, scorer):
        assert scorer.score_exam_score("80") == 5

    def test_threshold_boundaries(self, scorer):
        assert scorer.score_exam_score("49") == 90
        assert scorer.score_exam_score("50") == 75
        assert scorer.score_exam_score("74") == 75
        assert scorer.score_exam_score("75") == 5

    def test_non_numeric_exam_scores_zero(self, scorer, caplog):
        with caplog.at_level(logging.WARNING):
            assert scorer.score_exam_score("abc") == 0
        assert "Invalid exam score" in caplog.text

    def test_leading_integer_is_used(self, scorer):
        assert scorer.score_exam_score("82/100") == 5
        assert scorer.score_exam_score(" 45 ") == 90


class TestMilestoneScoring:
    """Milestones are scored by days until their date"""

    def test_milestone_within_a_week_is_urgent(self, scorer):
        assert scorer.score_milestone(milestone_value(7), NOW) == 80

    def test_milestone_within_two_weeks_is_medium(self, scorer):
        assert scorer.score_milestone(milestone_value(10), NOW) == 40

    def test_milestone_far_away_is_low(self, scorer):
        assert scorer.score_milestone(milestone_value(20), NOW) == 5

    def test_past_milestone_is_low(self, scorer):
        assert scorer.score_milestone(milestone_value(-3), NOW) == 5

    def test_day_boundaries(self, scorer):
        assert scorer.score_milestone(milestone_value(0), NOW) == 80
        assert scorer.score_milestone(milestone_value(7.9), NOW) == 80  # floors to 7
        assert scorer.score_milestone(milestone_value(8), NOW) == 40
        assert scorer.score_milestone(milestone_value(14), NOW) == 40
        assert scorer.score_milestone(milestone_value(15), NOW) == 5

    def test_later_today_is_not_past(self, scorer):
        """Test a milestone a few hours ahead counts as 0 days away"""
        assert scorer.score_milestone(milestone_value(0.2), NOW) == 80

    def test_earlier_today_is_past(self, scorer):
        """Test a milestone a few hours ago floors to -1 days"""
        assert scorer.score_milestone(milestone_value(-0.2), NOW) == 5

    def test_date_only_milestone(self, scorer):
        value = json.dumps({"name": "Orientation", "date": "2025-10-25"})
        # Midnight UTC on the 25th is 4.5 days after NOW
        assert scorer.score_milestone(value, NOW) == 80

    def test_milestone_without_name(self, scorer):
        value = json.dumps({"date": (NOW + timedelta(days=3)).isoformat()})
        assert scorer.score_milestone(value, NOW) == 80

    def test_malformed_json_scores_zero(self, scorer, caplog):
        with caplog.at_level(logging.WARNING):
            assert scorer.score_milestone("{not json", NOW) == 0
        assert "Error parsing milestone" in caplog.text

    def test_missing_or_invalid_date_scores_zero(self, scorer):
        assert scorer.score_milestone(json.dumps({"name": "Test"}), NOW) == 0
        assert scorer.score_milestone(json.dumps({"date": "someday"}), NOW) == 0
        assert scorer.score_milestone(json.dumps(["2025-10-25"]), NOW) == 0


class TestVideoScoring:
    """Video watches are scored by completion and age"""

    def test_incomplete_video_three_days_old_is_urgent(self, scorer):
        assert scorer.score_video_watched("50%", NOW - timedelta(days=3), NOW) == 80

    def test_incomplete_video_two_days_old_is_medium(self, scorer):
        assert scorer.score_video_watched("50%", NOW - timedelta(days=2), NOW) == 40

    def test_incomplete_video_one_day_old_is_low(self, scorer):
        """Test daysAgo=1 is not more than 1 day"""
        assert scorer.score_video_watched("50%", NOW - timedelta(days=1), NOW) == 5

    def test_partial_days_are_floored(self, scorer):
        assert scorer.score_video_watched("50", NOW - timedelta(days=2, hours=23), NOW) == 40
        assert scorer.score_video_watched("50", NOW - timedelta(days=3, minutes=1), NOW) == 80

    def test_complete_video_is_low_regardless_of_age(self, scorer):
        assert scorer.score_video_watched("97%", NOW - timedelta(days=30), NOW) == 5
        assert scorer.score_video_watched("95", NOW - timedelta(days=30), NOW) == 5

    def test_non_numeric_completion_scores_zero(self, scorer, caplog):
        with caplog.at_level(logging.WARNING):
            assert scorer.score_video_watched("most of it", NOW - timedelta(days=5), NOW) == 0
        assert "Invalid video completion" in caplog.text


class TestScoreEventRouting:
    """score_event routes on event type"""

    def test_every_event_type_has_a_scorer(self, scorer):
        assert scorer.supported_types() == set(EventType)

    def test_routes_exam(self, scorer):
        event = make_event(event_type="exam_score", value="40")
        assert scorer.score_event(event, NOW) == 90

    def test_routes_milestone(self, scorer):
        event = make_event(event_type="milestone", value=milestone_value(10))
        assert scorer.score_event(event, NOW) == 40

    def test_routes_video_using_event_timestamp(self, scorer):
        event = make_event(
            event_type="video_watched",
            value="50%",
            timestamp=NOW - timedelta(days=3),
        )
        assert scorer.score_event(event, NOW) == 80

    def test_unknown_type_scores_zero(self, scorer, caplog):
        event = make_event(event_type="attendance", value="absent")
        with caplog.at_level(logging.WARNING):
            assert scorer.score_event(event, NOW) == 0
        assert "Unknown event type" in caplog.text

    def test_scores_stay_in_range(self, scorer):
        config = {
            **scorer.config,
            "exam": {**scorer.config["exam"], "urgent_score": 150},
        }
        custom = EventScorer(config=config)
        event = make_event(event_type="exam_score", value="10")
        assert custom.score_event(event, NOW) == 99


def test_whole_days_between_floors_toward_negative():
    """Test day differences floor rather than truncate"""
    assert whole_days_between(NOW, NOW + timedelta(hours=36)) == 1
    assert whole_days_between(NOW, NOW - timedelta(hours=1)) == -1
    assert whole_days_between(NOW, NOW) == 0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
