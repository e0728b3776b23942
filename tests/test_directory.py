"""Unit tests for the directory store."""

import json

import pytest

from checkin.errors import CodeCollisionError, NotFoundError, PersistenceError, ValidationError
from checkin.services.blob_store import MemoryBlobStore
from checkin.services.directory import DirectoryStore

from conftest import FIXED_MILLIS, FailingBlobStore, people_blob


def test_add_creates_active_person_and_persists(directory, blob_store) -> None:
    person = directory.add('  Juan   Pérez ', ' Juan@Ejemplo.com ')

    assert person.name == 'Juan Pérez'
    assert person.email == 'juan@ejemplo.com'
    assert person.active is True
    assert person.code == 'ACC-123456-anVhbkBl'

    stored = json.loads(blob_store.get('users'))
    assert [item['id'] for item in stored] == [person.id]
    assert stored[0]['qrCode'] == person.code


@pytest.mark.parametrize('name', ['', '   ', None])
def test_add_rejects_empty_name_without_state_change(directory, blob_store, name) -> None:
    with pytest.raises(ValidationError):
        directory.add(name, 'x@example.com')

    assert len(directory) == 0
    assert blob_store.get('users') is None


def test_add_never_reuses_an_existing_code(directory) -> None:
    # Fixed clock: the base code is identical every time, so each add must retry.
    codes = [directory.add('Ana', 'ana@x.com').code for _ in range(5)]
    assert len(set(codes)) == 5
    assert codes[0] == 'ACC-123456-YW5hQHgu'
    assert codes[1] == 'ACC-123457-YW5hQHgu'


def test_add_gives_up_after_max_attempts(blob_store) -> None:
    directory = DirectoryStore(blob_store, clock=lambda: FIXED_MILLIS, max_attempts=1)
    directory.add('Ana', 'ana@x.com')

    with pytest.raises(CodeCollisionError):
        directory.add('Ana', 'ana@x.com')
    assert len(directory) == 1


def test_find_by_code_skips_inactive_people(directory) -> None:
    person = directory.add('Ana', 'ana@x.com')
    assert directory.find_by_code(person.code) == person

    directory.toggle_active(person.id)
    assert directory.find_by_code(person.code) is None


def test_find_by_code_is_exact(directory) -> None:
    person = directory.add('Ana', 'ana@x.com')
    assert directory.find_by_code(person.code.lower()) is None
    assert directory.find_by_code(person.code + ' ') is None


def test_toggle_twice_restores_original_state(directory) -> None:
    person = directory.add('Ana', 'ana@x.com')

    once = directory.toggle_active(person.id)
    assert once.active is False
    twice = directory.toggle_active(person.id)

    assert twice == person
    assert directory.get(person.id).to_dict() == person.to_dict()


def test_toggle_unknown_id_raises_and_keeps_state(directory) -> None:
    person = directory.add('Ana', 'ana@x.com')
    with pytest.raises(NotFoundError):
        directory.toggle_active('missing')
    assert directory.all() == [person]


def test_remove_deletes_person(directory, blob_store) -> None:
    ana = directory.add('Ana', 'ana@x.com')
    luis = directory.add('Luis', 'luis@x.com')

    removed = directory.remove(ana.id)

    assert removed == ana
    assert directory.all() == [luis]
    assert [item['id'] for item in json.loads(blob_store.get('users'))] == [luis.id]

    with pytest.raises(NotFoundError):
        directory.remove(ana.id)


def test_directory_reloads_from_blob_store(directory, blob_store) -> None:
    ana = directory.add('Ana', 'ana@x.com')
    directory.toggle_active(ana.id)

    reloaded = DirectoryStore(blob_store)
    reloaded.load()

    assert len(reloaded) == 1
    assert reloaded.get(ana.id).active is False
    assert reloaded.get(ana.id).code == ana.code


def test_load_seeds_demo_people_only_when_nothing_stored(blob_store) -> None:
    directory = DirectoryStore(blob_store)
    assert directory.load(seed_demo=True) is True
    assert [p.name for p in directory.all()] == ['Juan Pérez', 'María García']
    assert directory.all()[0].code == 'ACC-001-anVhbkBl'

    again = DirectoryStore(blob_store)
    assert again.load(seed_demo=True) is False
    assert [p.id for p in again.all()] == [p.id for p in directory.all()]


def test_load_accepts_stored_records() -> None:
    store = MemoryBlobStore({'users': people_blob(('Juan Pérez', 'ACC-001-XXXX', True))})
    directory = DirectoryStore(store)
    directory.load()
    assert directory.find_by_code('ACC-001-XXXX').name == 'Juan Pérez'


def test_bulk_add_skips_rows_without_name(directory) -> None:
    rows = [
        {'name': 'Ana', 'email': 'ana@x.com'},
        {'name': '', 'email': 'nobody@x.com'},
        {'name': 'Luis'},
        {'name': '   ', 'email': ''},
        {'email': 'missing@x.com'},
        {'name': 'Ana', 'email': 'ana@x.com'},
    ]

    result = directory.bulk_add(rows)

    assert result.count == 3
    assert result.skipped == 3
    assert result.errors == []
    assert len(directory) == 3
    assert [p.name for p in result.people] == ['Ana', 'Luis', 'Ana']


def test_bulk_add_codes_are_pairwise_distinct(directory) -> None:
    result = directory.bulk_add([{'name': 'Ana', 'email': 'ana@x.com'} for _ in range(10)])

    codes = [person.code for person in result.people]
    assert len(set(codes)) == 10
    assert codes[0].endswith('-1')
    assert codes[9].endswith('-10')


def test_bulk_add_keeps_partial_results_on_row_errors(blob_store) -> None:
    directory = DirectoryStore(blob_store, clock=lambda: FIXED_MILLIS, max_attempts=1)
    directory.bulk_add([{'name': 'Ana', 'email': 'ana@x.com'}])

    result = directory.bulk_add([
        {'name': 'Ana', 'email': 'ana@x.com'},
        {'name': 'Luis', 'email': 'luis@x.com'},
    ])

    assert result.count == 1
    assert len(result.errors) == 1
    assert [p.name for p in directory.all()] == ['Ana', 'Luis']


def test_bulk_add_with_no_valid_rows_writes_nothing(directory, blob_store) -> None:
    result = directory.bulk_add([{'name': ''}, {'name': None}])
    assert result.count == 0
    assert blob_store.get('users') is None


@pytest.fixture
def failing_directory():
    store = FailingBlobStore()
    directory = DirectoryStore(store, clock=lambda: FIXED_MILLIS)
    directory.add('Ana', 'ana@x.com')
    directory.add('Luis', 'luis@x.com')
    store.failing = True
    return directory, store


@pytest.mark.parametrize('mutation', [
    lambda d: d.add('Marta', 'marta@x.com'),
    lambda d: d.bulk_add([{'name': 'Marta'}, {'name': 'Pablo'}]),
    lambda d: d.toggle_active(d.all()[0].id),
    lambda d: d.remove(d.all()[1].id),
])
def test_failed_write_leaves_directory_unchanged(failing_directory, mutation) -> None:
    directory, store = failing_directory
    before = directory.all()
    stored_before = store.get('users')

    with pytest.raises(PersistenceError):
        mutation(directory)

    assert directory.all() == before
    assert all(person.active for person in directory.all())
    assert store.get('users') == stored_before
