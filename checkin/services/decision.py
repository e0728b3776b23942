# services/decision.py
"""
Access decisions.

A presented code is granted when it matches an active person in the directory
and denied otherwise. There is no scoring, rate limiting or time window:
an active person's code is accepted any number of times.
"""

from datetime import datetime

from checkin.models.log_entry import UNKNOWN_PERSON, Decision, LogEntry

# Vibration patterns (ms) for the presentation layer
GRANTED_ALERT = [200]
DENIED_ALERT = [100, 50, 100]


def evaluate(code, directory, now=None):
    """
    Decide whether a presented code is granted.

    Does not touch the access log; the caller appends the returned entry.

    Args:
        code: Raw presented code string
        directory: Object with find_by_code (DirectoryStore)
        now: Decision time, defaults to now

    Returns:
        LogEntry: the decision record
    """
    person = directory.find_by_code(code)
    timestamp = now or datetime.now()

    if person:
        return LogEntry(
            presented_code=code,
            decision=Decision.GRANTED,
            person_id=person.id,
            person_name=person.name,
            timestamp=timestamp
        )

    return LogEntry(
        presented_code=code,
        decision=Decision.DENIED,
        person_id=None,
        person_name=UNKNOWN_PERSON,
        timestamp=timestamp
    )


class ScanResult:
    """What the scanner screen shows after a decision."""

    def __init__(self, entry):
        self.entry = entry
        self.success = entry.granted
        self.person_name = entry.person_name if entry.granted else None
        self.time = entry.timestamp.strftime('%H:%M:%S')
        self.alert = GRANTED_ALERT if entry.granted else DENIED_ALERT

    @property
    def message(self):
        if self.success:
            return f'Access granted: {self.person_name}'
        return 'Access denied: unauthorized code'

    def to_dict(self):
        return {
            'success': self.success,
            'decision': self.entry.decision,
            'person_name': self.person_name,
            'time': self.time,
            'alert': self.alert,
            'message': self.message,
            'entry': self.entry.to_dict()
        }
