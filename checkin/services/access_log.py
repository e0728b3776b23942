# services/access_log.py
"""
Bounded history of access decisions, most recent first.
Entries are only ever added at the front or dropped from the tail.
"""

import json
import logging
import threading
from datetime import datetime

from checkin.models.log_entry import Decision, LogEntry

logger = logging.getLogger('access_log')

DEFAULT_RETENTION = 500


class AccessLog:
    """Most-recent-first decision log persisted under one blob key."""

    def __init__(self, blob_store, key='access-log', retention=DEFAULT_RETENTION):
        if retention < 1:
            raise ValueError("retention must be at least 1")

        self.blob_store = blob_store
        self.key = key
        self.retention = retention
        self._entries = []
        self._lock = threading.Lock()

    def load(self):
        raw = self.blob_store.get(self.key)
        entries = [LogEntry.from_dict(item) for item in json.loads(raw)] if raw else []
        self._entries = entries[:self.retention]
        logger.info(f"Loaded {len(self._entries)} log entries from '{self.key}'")

    def _commit(self, entries):
        payload = json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)
        self.blob_store.set(self.key, payload)
        self._entries = entries

    def append(self, entry):
        """Insert entry at the front and drop whatever exceeds the retention limit."""
        with self._lock:
            entries = [entry] + self._entries
            dropped = len(entries) - self.retention
            self._commit(entries[:self.retention])

        if dropped > 0:
            logger.debug(f"Access log over retention, dropped {dropped} oldest entries")

    def clear(self):
        with self._lock:
            self._commit([])
        logger.info("Access log cleared")

    def all(self):
        """Entries, most recent first."""
        return list(self._entries)

    def filter_by_status(self, decision):
        """Number of entries with the given decision."""
        return sum(1 for entry in self._entries if entry.decision == decision)

    def count_today(self, today=None):
        """Number of entries whose local calendar date is today."""
        today = today or datetime.now().date()
        return sum(1 for entry in self._entries if entry.timestamp.date() == today)

    def stats(self, people_count=None, today=None):
        """Dashboard counters."""
        result = {
            'total': len(self._entries),
            'granted': self.filter_by_status(Decision.GRANTED),
            'denied': self.filter_by_status(Decision.DENIED),
            'today': self.count_today(today)
        }
        if people_count is not None:
            result['people'] = people_count
        return result

    def __len__(self):
        return len(self._entries)
