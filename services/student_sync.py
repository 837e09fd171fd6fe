from services.event_source import EventSourceClient
from services.student_store import StudentEventStore
import logging

logger = logging.getLogger(__name__)


class StudentSync:
    """Fetches the upstream event batch and merges it into the store

    The fetch happens before the store is touched, so a failed fetch leaves
    every student record exactly as it was.
    """

    def __init__(self, store: StudentEventStore, source: EventSourceClient = None):
        self.store = store
        self.source = source or EventSourceClient()

    def sync(self) -> dict:
        """Run one fetch-and-ingest pass

        Returns:
            {'events_fetched': int, 'events_ingested': int, 'total_students': int}

        Raises:
            EventSourceError: propagated from the source; the store is unchanged
        """
        logger.info("Syncing student events from event source")

        events = self.source.fetch_events()
        ingested = self.store.ingest(events)
        self.store.mark_initialized()

        stats = self.store.get_stats()
        logger.info(
            f"Sync complete: {len(events)} fetched, {ingested} new, "
            f"{stats.totalStudents} students tracked"
        )

        return {
            "events_fetched": len(events),
            "events_ingested": ingested,
            "total_students": stats.totalStudents,
        }
