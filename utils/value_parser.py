import re
from datetime import datetime, timezone
from typing import Optional, Union

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


class ValueParser:
    """Lenient parsers for the string payloads carried by student events.

    Every method returns None instead of raising so callers pick their own
    fallback.
    """

    @staticmethod
    def parse_int(value: str) -> Optional[int]:
        """Parse the leading integer of a string ("82/100" -> 82, " 7 days" -> 7)"""
        if not isinstance(value, str):
            return None
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None

    @staticmethod
    def parse_percentage(value: str) -> Optional[int]:
        """Parse a percentage-like value such as "85%" or "85" """
        if not isinstance(value, str):
            return None
        return ValueParser.parse_int(value.replace("%", "", 1))

    @staticmethod
    def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
        """Parse an ISO-8601 date or datetime into an aware UTC datetime

        Accepts a trailing 'Z' and date-only strings ("2025-11-01" is midnight UTC).
        Naive values are treated as UTC.
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str) and value.strip():
            text = value.strip()
            if text[-1] in ("Z", "z"):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                return None
        else:
            return None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
