# models/__init__.py
from .base import BaseModel
from .stored_blob import StoredBlob
from .person import Person
from .log_entry import LogEntry, Decision, UNKNOWN_PERSON

__all__ = [
    'BaseModel',
    'StoredBlob',
    'Person',
    'LogEntry',
    'Decision',
    'UNKNOWN_PERSON'
]
