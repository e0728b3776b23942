# models/person.py
import uuid
from datetime import datetime

from checkin.utils.data_processing import parse_timestamp


class Person:
    """A registered attendee. Lives in the directory blob, not in a table."""

    def __init__(self, name, code, email='', id=None, created_at=None, active=True):
        self.id = id or str(uuid.uuid4())
        self.name = name
        self.email = email or ''
        self.code = code
        self.created_at = created_at or datetime.now()
        self.active = bool(active)

    def to_dict(self):
        """Serialize using the keys of the stored 'users' array."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'qrCode': self.code,
            'createdAt': self.created_at.isoformat(),
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data):
        """Build a Person from a stored or exported record."""
        code = data.get('qrCode') or data.get('code')
        created_at = data.get('createdAt') or data.get('created_at')
        return cls(
            id=str(data['id']),
            name=data['name'],
            email=data.get('email') or '',
            code=code,
            created_at=parse_timestamp(created_at) if created_at else None,
            active=data.get('active', True)
        )

    def copy(self, **changes):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'code': self.code,
            'created_at': self.created_at,
            'active': self.active
        }
        data.update(changes)
        return Person(**data)

    def __eq__(self, other):
        if not isinstance(other, Person):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'<Person {self.name} {self.code}>'
