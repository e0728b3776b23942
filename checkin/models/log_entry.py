# models/log_entry.py
import uuid
from datetime import datetime

from checkin.utils.data_processing import parse_timestamp

UNKNOWN_PERSON = 'unknown'


class Decision:
    """Access decision values, as stored in the 'status' field."""
    GRANTED = 'granted'
    DENIED = 'denied'

    ALL = (GRANTED, DENIED)

    LABELS = {
        GRANTED: 'Permitido',
        DENIED: 'Denegado'
    }

    @classmethod
    def label(cls, decision):
        return cls.LABELS.get(decision, decision)


class LogEntry:
    """One evaluated presentation of a code. Never mutated after creation."""

    def __init__(self, presented_code, decision, person_id=None, person_name=UNKNOWN_PERSON,
                 id=None, timestamp=None):
        if decision not in Decision.ALL:
            raise ValueError(f"Unknown decision: {decision}")

        self.id = id or str(uuid.uuid4())
        self.person_id = person_id
        self.person_name = person_name
        self.presented_code = presented_code
        self.timestamp = timestamp or datetime.now()
        self.decision = decision

    @property
    def granted(self):
        return self.decision == Decision.GRANTED

    def to_dict(self):
        """Serialize using the keys of the stored 'access-log' array."""
        return {
            'id': self.id,
            'userId': self.person_id,
            'userName': self.person_name,
            'qrCode': self.presented_code,
            'timestamp': self.timestamp.isoformat(),
            'status': self.decision
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            person_id=data.get('userId', data.get('person_id')),
            person_name=data.get('userName', data.get('person_name', UNKNOWN_PERSON)),
            presented_code=data.get('qrCode', data.get('presented_code', '')),
            timestamp=parse_timestamp(data['timestamp']),
            decision=data.get('status', data.get('decision'))
        )

    def __eq__(self, other):
        if not isinstance(other, LogEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'<LogEntry {self.decision} {self.presented_code}>'
