"""Tests for event models and payload parsing"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError
from models import StudentEvent, EventType, MilestonePayload
from utils.value_parser import ValueParser


def raw_event(**overrides):
    data = {
        "event_id": "e-1",
        "student_id": "S-1",
        "first_name": "Ana",
        "last_name": "Diaz",
        "type": "exam_score",
        "value": "72",
        "timestamp": "2025-10-19T15:30:00Z",
    }
    data.update(overrides)
    return data


class TestStudentEvent:

    def test_parses_zulu_timestamp(self):
        event = StudentEvent(**raw_event())
        assert event.timestamp == datetime(2025, 10, 19, 15, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        event = StudentEvent(**raw_event(timestamp="2025-10-19T15:30:00"))
        assert event.timestamp.tzinfo is not None
        assert event.timestamp == datetime(2025, 10, 19, 15, 30, tzinfo=timezone.utc)

    def test_invalid_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            StudentEvent(**raw_event(timestamp="yesterday"))

    def test_numeric_value_is_coerced_to_string(self):
        event = StudentEvent(**raw_event(value=72))
        assert event.value == "72"

    def test_kind_resolves_known_types(self):
        assert StudentEvent(**raw_event()).kind == EventType.EXAM_SCORE
        assert StudentEvent(**raw_event(type="video_watched")).kind == EventType.VIDEO_WATCHED

    def test_kind_is_none_for_unknown_types(self):
        assert StudentEvent(**raw_event(type="attendance")).kind is None

    def test_events_are_immutable(self):
        event = StudentEvent(**raw_event())
        with pytest.raises(ValidationError):
            event.value = "99"


class TestMilestonePayload:

    def test_parse_full_payload(self):
        milestone = MilestonePayload.parse('{"name": "GED Math", "date": "2025-11-01"}')
        assert milestone.name == "GED Math"
        assert milestone.date == datetime(2025, 11, 1, tzinfo=timezone.utc)

    def test_parse_without_name(self):
        milestone = MilestonePayload.parse('{"date": "2025-11-01T09:00:00-05:00"}')
        assert milestone.name is None
        assert milestone.date == datetime(2025, 11, 1, 14, 0, tzinfo=timezone.utc)

    def test_blank_name_is_none(self):
        assert MilestonePayload.parse('{"name": "  ", "date": "2025-11-01"}').name is None

    @pytest.mark.parametrize("value", [
        "not json",
        "",
        "[]",
        '"2025-11-01"',
        '{"name": "GED Math"}',
        '{"date": "soon"}',
        '{"date": null}',
    ])
    def test_unusable_payloads_return_none(self, value):
        assert MilestonePayload.parse(value) is None


class TestValueParser:

    def test_parse_int(self):
        assert ValueParser.parse_int("85") == 85
        assert ValueParser.parse_int(" 85 points") == 85
        assert ValueParser.parse_int("-3") == -3
        assert ValueParser.parse_int("85.9") == 85
        assert ValueParser.parse_int("abc") is None
        assert ValueParser.parse_int("") is None
        assert ValueParser.parse_int(None) is None

    def test_parse_percentage(self):
        assert ValueParser.parse_percentage("97%") == 97
        assert ValueParser.parse_percentage("%40") == 40
        assert ValueParser.parse_percentage("40") == 40
        assert ValueParser.parse_percentage("%") is None

    def test_parse_datetime(self):
        assert ValueParser.parse_datetime("2025-11-01") == datetime(2025, 11, 1, tzinfo=timezone.utc)
        assert ValueParser.parse_datetime("2025-11-01T10:00:00.000Z") == datetime(
            2025, 11, 1, 10, 0, tzinfo=timezone.utc
        )
        assert ValueParser.parse_datetime("not a date") is None
        assert ValueParser.parse_datetime("") is None
        assert ValueParser.parse_datetime(None) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
