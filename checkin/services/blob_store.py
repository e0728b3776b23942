# services/blob_store.py
"""
Key-value blob persistence for the check-in stores.
Each key holds one JSON document that is read once at startup and
overwritten wholesale on every mutation.
"""

import os
import re
import logging
import tempfile
import threading

from checkin.errors import PersistenceError

logger = logging.getLogger('blob_store')


class BlobStore:
    """Get/set-by-key storage of serialized documents."""

    def get(self, key):
        """Return the document stored under key, or None."""
        raise NotImplementedError

    def set(self, key, value):
        """Overwrite the document stored under key."""
        raise NotImplementedError


class MemoryBlobStore(BlobStore):
    """Process-local store used by tests and throwaway runs."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            return self._data.get(key)

    def set(self, key, value):
        with self._lock:
            self._data[key] = value

    def keys(self):
        with self._lock:
            return list(self._data)


class DatabaseBlobStore(BlobStore):
    """Stores documents in the stored_blob table. Needs an application context."""

    def get(self, key):
        from checkin.models.stored_blob import StoredBlob
        return StoredBlob.get_value(key)

    def set(self, key, value):
        from sqlalchemy.exc import SQLAlchemyError
        from checkin.extensions import db
        from checkin.models.stored_blob import StoredBlob

        try:
            StoredBlob.set_value(key, value)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error writing blob '{key}': {str(e)}")
            raise PersistenceError(f"Could not store '{key}'", key=key) from e


class JsonFileBlobStore(BlobStore):
    """
    One file per key inside a directory.

    Writes go to a temporary file in the same directory, are moved into place
    with os.replace and then read back; a mismatch raises PersistenceError.
    """

    def __init__(self, directory):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)
        self._lock = threading.Lock()

    def path_for(self, key):
        safe_key = re.sub(r'[^A-Za-z0-9_.-]', '_', key)
        return os.path.join(self.directory, f"{safe_key}.json")

    def get(self, key):
        path = self.path_for(key)
        if not os.path.isfile(path):
            return None

        with open(path, 'r', encoding='utf-8') as handle:
            return handle.read()

    def set(self, key, value):
        path = self.path_for(key)

        with self._lock:
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{os.path.basename(path)}.")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                    handle.write(value)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_path, path)
            except OSError as e:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                logger.error(f"Error writing blob file {path}: {str(e)}")
                raise PersistenceError(f"Could not store '{key}'", key=key) from e

            stored = self.get(key)
            if stored != value:
                logger.error(f"Read-back mismatch for blob '{key}' at {path}")
                raise PersistenceError(f"Stored '{key}' could not be verified", key=key)
