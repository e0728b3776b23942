# models/stored_blob.py
from checkin.extensions import db
from .base import BaseModel


class StoredBlob(BaseModel):
    """One JSON document stored under a string key ('users', 'access-log')."""

    __tablename__ = 'stored_blob'

    key = db.Column(db.String(100), nullable=False, unique=True, index=True)
    value = db.Column(db.Text, nullable=True)

    @classmethod
    def get_value(cls, key):
        blob = cls.query.filter_by(key=key).first()
        return blob.value if blob else None

    @classmethod
    def set_value(cls, key, value):
        """Overwrite the document stored under key."""
        blob = cls.query.filter_by(key=key).first() or cls(key=key)
        blob.value = value
        return blob.save()

    def __repr__(self):
        return f'<StoredBlob {self.key}>'
