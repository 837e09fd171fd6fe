from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Set
from models.student_event import StudentEvent
from models.student_record import (
    StudentRecord,
    StudentRecordView,
    StoreStats,
    NO_RECENT_ACTIVITY,
)
from processors.event_scorer import EventScorer
from processors.urgency_aggregator import UrgencyAggregator
from processors.summary_generator import SummaryGenerator
from utils.value_parser import utc_now
import threading
import logging

logger = logging.getLogger(__name__)

MAX_RECENT_EVENTS = 3


def format_student_name(record: StudentRecord) -> str:
    """Display name used on the dashboard, e.g. 'Ana Diaz (S-102)'"""
    return record.display_name


class StudentEventStore:
    """In-memory owner of every student's triage state

    Keeps, per student, the 3 most recent distinct events (newest first) with
    the urgency score and summary derived from them. Every event_id ever
    admitted for a student is remembered, so an event that has already aged
    out of the window is still recognised when a refresh delivers it again.
    Records are created on the first event for a student and never evicted.

    Mutations are serialized per student: creating a record takes the
    store-wide lock briefly, merging events and acknowledging take that
    student's own lock. Reads return copies.
    """

    def __init__(
        self,
        aggregator: UrgencyAggregator = None,
        summary_generator: SummaryGenerator = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        scorer = EventScorer()
        self.aggregator = aggregator or UrgencyAggregator(scorer)
        self.summary_generator = summary_generator or SummaryGenerator(scorer)
        self.clock = clock

        self._students: Dict[str, StudentRecord] = {}
        self._student_locks: Dict[str, threading.Lock] = {}
        self._seen_event_ids: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()
        self._initialized = False

        logger.info("StudentEventStore initialized")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def mark_initialized(self) -> None:
        """Record that at least one full batch from the event source was ingested"""
        self._initialized = True

    def ingest(self, events: Iterable[StudentEvent]) -> int:
        """Merge a batch of events into the per-student windows

        Events whose event_id was already admitted for the student are skipped,
        even after they have aged out of the window.
        Every admitted event re-sorts and truncates the window, recomputes
        urgency and summary together, and clears the acknowledgment.

        Args:
            events: Events in any order; may be empty

        Returns:
            Number of events admitted
        """
        admitted = 0

        for event in events:
            record, lock = self._get_or_create(event)
            with lock:
                if self._merge_event(record, event):
                    admitted += 1

        if admitted:
            logger.info(f"Ingested {admitted} new events")
        return admitted

    def acknowledge(self, student_id: str) -> bool:
        """Mark a student as reviewed

        Returns:
            True if the student exists, False otherwise (nothing changes)
        """
        record, lock = self._lookup(student_id)
        if record is None:
            logger.info(f"Acknowledge requested for unknown student {student_id}")
            return False

        with lock:
            record.acknowledged = 1

        logger.info(f"Student {student_id} acknowledged")
        return True

    def get_student(self, student_id: str) -> Optional[StudentRecordView]:
        """Snapshot of one student, or None if the student is unknown"""
        record, lock = self._lookup(student_id)
        if record is None:
            return None

        with lock:
            return StudentRecordView.from_record(record)

    def list_students(
        self,
        unacknowledged_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[StudentRecordView]:
        """Snapshots of all students ranked for triage

        Ordered by urgency (highest first), then by last_updated (most recent
        first).

        Args:
            unacknowledged_only: Drop students already acknowledged
            limit: Return at most this many students
        """
        views = []
        for record, lock in self._all_records():
            with lock:
                if unacknowledged_only and record.acknowledged:
                    continue
                views.append(StudentRecordView.from_record(record))

        views.sort(key=lambda v: (v.urgency_score, v.last_updated), reverse=True)

        if limit is not None:
            views = views[:max(0, limit)]
        return views

    def get_stats(self) -> StoreStats:
        total_events = 0
        records = self._all_records()
        for record, lock in records:
            with lock:
                total_events += len(record.recent_events)

        return StoreStats(
            totalStudents=len(records),
            totalEvents=total_events,
            initialized=self._initialized,
        )

    def _merge_event(self, record: StudentRecord, event: StudentEvent) -> bool:
        """Admit one event into a record's window; caller holds the student lock"""
        seen = self._seen_event_ids[record.student_id]
        if event.event_id in seen:
            logger.debug(f"Skipping duplicate event {event.event_id} for {record.student_id}")
            return False

        seen.add(event.event_id)
        window = record.recent_events + [event]
        window.sort(key=lambda e: e.timestamp, reverse=True)
        window = window[:MAX_RECENT_EVENTS]

        now = self.clock()
        urgency = self.aggregator.calculate_urgency(window, now)
        summary = self.summary_generator.generate_student_summary(window, now)

        record.recent_events = window
        record.last_updated = now
        record.urgency = urgency
        record.summary = summary
        record.acknowledged = 0

        logger.debug(f"Student {record.student_id} now at urgency {urgency} with {len(window)} events")
        return True

    def _get_or_create(self, event: StudentEvent):
        with self._lock:
            record = self._students.get(event.student_id)
            if record is None:
                record = StudentRecord(
                    student_id=event.student_id,
                    first_name=event.first_name,
                    last_name=event.last_name,
                    recent_events=[],
                    last_updated=self.clock(),
                    urgency=0,
                    summary=NO_RECENT_ACTIVITY,
                    acknowledged=0,
                )
                self._students[event.student_id] = record
                self._student_locks[event.student_id] = threading.Lock()
                self._seen_event_ids[event.student_id] = set()
                logger.debug(f"Created record for student {event.student_id}")
            return record, self._student_locks[event.student_id]

    def _lookup(self, student_id: str):
        with self._lock:
            return self._students.get(student_id), self._student_locks.get(student_id)

    def _all_records(self):
        with self._lock:
            return [
                (record, self._student_locks[student_id])
                for student_id, record in self._students.items()
            ]
