from typing import List
from pydantic import ValidationError
from config import settings
from models.student_event import StudentEvent
import requests
import logging

logger = logging.getLogger(__name__)


class EventSourceError(Exception):
    """Raised when the upstream event batch cannot be fetched or decoded"""


def parse_event_batch(body) -> List[StudentEvent]:
    """Validate an upstream body of the form {"data": [event, ...]}

    Raises:
        EventSourceError: if there is no data list or any event is malformed
    """
    raw_events = body.get("data") if isinstance(body, dict) else None
    if not isinstance(raw_events, list):
        raise EventSourceError("Event source response has no 'data' list")

    try:
        return [StudentEvent(**raw) for raw in raw_events]
    except (ValidationError, TypeError) as e:
        logger.error(f"Event source returned malformed events: {e}")
        raise EventSourceError(f"Malformed event in batch: {e}") from e


class EventSourceClient:
    """Fetches raw student event batches from the upstream activity log API"""

    def __init__(
        self,
        url: str = None,
        api_key: str = None,
        timeout: float = None,
        session: requests.Session = None,
    ):
        self.url = url or settings.EVENT_SOURCE_URL
        self.api_key = api_key if api_key is not None else settings.EVENT_SOURCE_API_KEY
        self.timeout = timeout or settings.EVENT_SOURCE_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def fetch_events(self) -> List[StudentEvent]:
        """Fetch and validate the full event batch

        The response body is expected to be {"data": [event, ...]}. The whole
        batch is validated before anything is returned, so a single malformed
        event fails the fetch instead of producing a partial batch.

        Raises:
            EventSourceError: on network errors, non-2xx responses, or a body
                that is not a valid event batch
        """
        headers = {}
        if self.api_key:
            headers["X-API-Key"] = self.api_key

        try:
            response = self.session.get(self.url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching student event data: {e}")
            raise EventSourceError(f"Failed to reach event source: {e}") from e

        if not response.ok:
            logger.error(f"Event source returned {response.status_code} {response.reason}")
            raise EventSourceError(
                f"Failed to fetch student event data: {response.status_code} {response.reason}"
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Event source returned invalid JSON: {e}")
            raise EventSourceError("Event source returned invalid JSON") from e

        events = parse_event_batch(body)

        logger.info(f"Fetched {len(events)} events from event source")
        return events
