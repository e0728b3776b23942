# models/base.py
from datetime import datetime
import uuid
from checkin.extensions import db


class BaseModel(db.Model):
    """Base model class with common columns."""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    def save(self):
        """Save the model instance."""
        db.session.add(self)
        db.session.commit()
        return self
