# services/directory.py
"""
Directory of registered attendees.

The full list is persisted under one blob key after every mutation. Mutations
build a new list, write it, and only then replace the in-memory list, so a
failed write leaves the directory as it was.
"""

import json
import logging
import threading

from checkin.errors import CodeCollisionError, NotFoundError, ValidationError
from checkin.models.person import Person
from checkin.services.code_service import DEFAULT_PREFIX, current_millis, demo_code, generate_code
from checkin.utils.data_processing import clean_email, normalize_name

logger = logging.getLogger('directory_store')

DEMO_PEOPLE = [
    ('Juan Pérez', 'juan@ejemplo.com'),
    ('María García', 'maria@ejemplo.com'),
]


class ImportResult:
    """Outcome of a bulk import."""

    def __init__(self, people, skipped=0, errors=None):
        self.people = people
        self.skipped = skipped
        self.errors = errors or []

    @property
    def count(self):
        return len(self.people)

    def to_dict(self):
        return {
            'success': True,
            'imported': self.count,
            'skipped': self.skipped,
            'errors': self.errors,
            'people': [person.to_dict() for person in self.people]
        }


class DirectoryStore:
    """Registered people keyed by id, with unique codes."""

    def __init__(self, blob_store, key='users', prefix=DEFAULT_PREFIX, max_attempts=25, clock=None):
        self.blob_store = blob_store
        self.key = key
        self.prefix = prefix
        self.max_attempts = max_attempts
        self.clock = clock or current_millis
        self._people = []
        self._lock = threading.Lock()

    # Loading and persistence

    def load(self, seed_demo=False):
        """
        Read the stored directory.

        Args:
            seed_demo: Install the demo people when nothing is stored yet

        Returns:
            bool: True if demo people were installed
        """
        raw = self.blob_store.get(self.key)
        if raw is None:
            self._people = []
            if seed_demo:
                self.seed_demo()
                return True
            return False

        self._people = [Person.from_dict(item) for item in json.loads(raw)]
        logger.info(f"Loaded {len(self._people)} people from '{self.key}'")
        return False

    def seed_demo(self):
        """Replace the directory with the two demo people."""
        people = [
            Person(name=name, email=email, code=demo_code(index, email, prefix=self.prefix))
            for index, (name, email) in enumerate(DEMO_PEOPLE, start=1)
        ]
        with self._lock:
            self._commit(people)
        logger.info(f"Seeded {len(people)} demo people")
        return people

    def _commit(self, people):
        payload = json.dumps([person.to_dict() for person in people], ensure_ascii=False)
        self.blob_store.set(self.key, payload)
        self._people = people

    # Mutations

    def add(self, name, email=''):
        """
        Register a person.

        Raises:
            ValidationError: name is empty after trimming
            CodeCollisionError: no free code within the retry budget
        """
        clean_name = normalize_name(name)
        if not clean_name:
            raise ValidationError('Name is required', field='name')
        email = clean_email(email)

        with self._lock:
            taken = {person.code for person in self._people}
            code = self._unique_code(clean_name, email, taken, self.clock())
            person = Person(name=clean_name, email=email, code=code)
            self._commit(self._people + [person])

        logger.info(f"Registered {person.name} with code {person.code}")
        return person

    def bulk_add(self, rows):
        """
        Register every row that has a non-empty name.

        Rows are mappings with 'name' and optional 'email'. Rows without a name
        are skipped; a row whose code cannot be made unique is reported and the
        rest of the batch is still stored.

        Returns:
            ImportResult: created people, skipped row count and row errors
        """
        created = []
        skipped = 0
        errors = []

        with self._lock:
            taken = {person.code for person in self._people}
            batch_stamp = self.clock()

            for index, row in enumerate(rows, start=1):
                name = normalize_name(row.get('name'))
                if not name:
                    skipped += 1
                    continue

                email = clean_email(row.get('email'))
                try:
                    code = self._unique_code(name, email, taken, batch_stamp, row_index=index)
                except CodeCollisionError as e:
                    errors.append(f"Row {index} ({name}): {e.message}")
                    continue

                taken.add(code)
                created.append(Person(name=name, email=email, code=code))

            if created:
                self._commit(self._people + created)

        logger.info(f"Bulk import: {len(created)} added, {skipped} skipped, {len(errors)} errors")
        return ImportResult(created, skipped=skipped, errors=errors)

    def toggle_active(self, person_id):
        """
        Flip a person's active flag.

        Raises:
            NotFoundError: unknown id
        """
        with self._lock:
            index = self._index_of(person_id)
            updated = self._people[index].copy(active=not self._people[index].active)
            people = list(self._people)
            people[index] = updated
            self._commit(people)

        logger.info(f"{updated.name} is now {'active' if updated.active else 'inactive'}")
        return updated

    def remove(self, person_id):
        """
        Delete a person. Historical log entries are untouched.

        Raises:
            NotFoundError: unknown id
        """
        with self._lock:
            index = self._index_of(person_id)
            removed = self._people[index]
            self._commit(self._people[:index] + self._people[index + 1:])

        logger.info(f"Removed {removed.name} ({removed.code})")
        return removed

    # Queries

    def find_by_code(self, code):
        """Exact code match among active people only."""
        for person in self._people:
            if person.active and person.code == code:
                return person
        return None

    def get(self, person_id):
        for person in self._people:
            if person.id == person_id:
                return person
        return None

    def all(self):
        return list(self._people)

    def active(self):
        return [person for person in self._people if person.active]

    def __len__(self):
        return len(self._people)

    def __iter__(self):
        return iter(list(self._people))

    # Helpers

    def _index_of(self, person_id):
        for index, person in enumerate(self._people):
            if person.id == person_id:
                return index
        raise NotFoundError(f'Person {person_id} not found', person_id=person_id)

    def _unique_code(self, name, email, taken, stamp, row_index=None):
        for attempt in range(self.max_attempts):
            code = generate_code(
                name, email,
                timestamp_ms=stamp + attempt,
                row_index=row_index,
                prefix=self.prefix
            )
            if code not in taken:
                return code

        logger.error(f"No unique code for {name} after {self.max_attempts} attempts")
        raise CodeCollisionError(f'Could not generate a unique code for {name}')
