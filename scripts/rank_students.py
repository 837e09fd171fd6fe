#!/usr/bin/env python3
"""
Rank students from an event batch without starting the API

Scores a batch of student events the same way the service does and prints
the triage queue. Useful for checking keyword or threshold changes against a
saved batch.

Usage:
    # Rank a saved batch ({"data": [event, ...]}, same shape as the event source)
    python scripts/rank_students.py --file events.json

    # Fetch the live batch from the configured event source
    python scripts/rank_students.py --fetch

    # Top 10 as JSON
    python scripts/rank_students.py --file events.json --limit 10 --json
"""

import sys
import os
import argparse
import json

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.event_source import EventSourceClient, EventSourceError, parse_event_batch
from services.student_store import StudentEventStore
import logging

# Set up logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def load_events_file(path: str):
    """Load and validate a saved event batch."""
    with open(path, 'r') as f:
        body = json.load(f)
    return parse_event_batch(body)


def rank_events(events, limit: int = None):
    """Ingest events into a fresh store and return the ranked views."""
    store = StudentEventStore()
    store.ingest(events)
    return store.list_students(limit=limit)


def print_ranking(students):
    """Print the triage queue."""
    print(f"\n{'='*60}")
    print(f"Triage queue ({len(students)} students)")
    print(f"{'='*60}\n")

    for rank, student in enumerate(students, 1):
        print(f"{rank:>3}. [{student.urgency_score:>2}] {student.name}")
        print(f"       {student.summary}")

    print()


def main():
    parser = argparse.ArgumentParser(
        description='Rank students by urgency from an event batch'
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--file',
        help='Path to a saved event batch ({"data": [...]})'
    )
    source.add_argument(
        '--fetch',
        action='store_true',
        help='Fetch the batch from the configured event source'
    )

    parser.add_argument(
        '--limit',
        type=int,
        help='Only show the top N students'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output the ranking as JSON'
    )

    args = parser.parse_args()

    try:
        events = EventSourceClient().fetch_events() if args.fetch else load_events_file(args.file)
        students = rank_events(events, limit=args.limit)

        if args.json:
            print(json.dumps([s.model_dump(mode="json") for s in students], indent=2))
        else:
            print_ranking(students)

        sys.exit(0)

    except (EventSourceError, OSError, ValueError) as e:
        logger.error(f"Failed to rank students: {e}")
        print(f"\nError: {e}\n")
        sys.exit(1)


if __name__ == '__main__':
    main()
