"""Unit tests for the bounded access log."""

import json
from datetime import date, datetime, timedelta

import pytest

from checkin.errors import PersistenceError
from checkin.models.log_entry import Decision, LogEntry
from checkin.services.access_log import AccessLog

from conftest import FIXED_NOW, FailingBlobStore


def make_entry(number, decision=Decision.GRANTED, timestamp=None):
    return LogEntry(
        id=f'entry-{number}',
        presented_code=f'ACC-{number:03d}-TEST',
        decision=decision,
        person_id=str(number) if decision == Decision.GRANTED else None,
        person_name=f'Person {number}' if decision == Decision.GRANTED else 'unknown',
        timestamp=timestamp or FIXED_NOW + timedelta(seconds=number)
    )


def test_append_puts_newest_first(access_log) -> None:
    for number in range(1, 4):
        access_log.append(make_entry(number))

    assert [entry.id for entry in access_log.all()] == ['entry-3', 'entry-2', 'entry-1']


def test_append_persists_truncated_sequence(blob_store) -> None:
    log = AccessLog(blob_store, retention=2)
    for number in range(1, 4):
        log.append(make_entry(number))

    stored = json.loads(blob_store.get('access-log'))
    assert [item['id'] for item in stored] == ['entry-3', 'entry-2']
    assert stored[0]['status'] == 'granted'


def test_retention_keeps_most_recent_500_of_501(access_log) -> None:
    for number in range(1, 502):
        access_log.append(make_entry(number))

    entries = access_log.all()
    assert len(entries) == 500
    assert [entry.id for entry in entries] == [f'entry-{n}' for n in range(501, 1, -1)]


@pytest.mark.parametrize('retention,appends', [(1, 5), (10, 25), (100, 101)])
def test_retention_limit_is_configurable(blob_store, retention, appends) -> None:
    log = AccessLog(blob_store, retention=retention)
    for number in range(1, appends + 1):
        log.append(make_entry(number))

    assert len(log) == retention
    assert log.all()[0].id == f'entry-{appends}'
    assert log.all()[-1].id == f'entry-{appends - retention + 1}'


def test_retention_must_be_positive(blob_store) -> None:
    with pytest.raises(ValueError):
        AccessLog(blob_store, retention=0)


def test_filter_by_status_counts_decisions(access_log) -> None:
    access_log.append(make_entry(1))
    access_log.append(make_entry(2, Decision.DENIED))
    access_log.append(make_entry(3))

    assert access_log.filter_by_status(Decision.GRANTED) == 2
    assert access_log.filter_by_status(Decision.DENIED) == 1


def test_count_today_uses_calendar_date(access_log) -> None:
    today = date(2026, 10, 19)
    access_log.append(make_entry(1, timestamp=datetime(2026, 10, 18, 23, 59, 59)))
    access_log.append(make_entry(2, timestamp=datetime(2026, 10, 19, 0, 0, 0)))
    access_log.append(make_entry(3, timestamp=datetime(2026, 10, 19, 23, 59, 59)))

    assert access_log.count_today(today) == 2


def test_stats(access_log) -> None:
    access_log.append(make_entry(1))
    access_log.append(make_entry(2, Decision.DENIED))

    stats = access_log.stats(people_count=7, today=FIXED_NOW.date())
    assert stats == {'total': 2, 'granted': 1, 'denied': 1, 'today': 2, 'people': 7}


def test_load_restores_entries(blob_store) -> None:
    log = AccessLog(blob_store)
    log.append(make_entry(1))
    log.append(make_entry(2, Decision.DENIED))

    reloaded = AccessLog(blob_store)
    reloaded.load()
    assert reloaded.all() == log.all()


def test_load_reads_browser_timestamps(blob_store) -> None:
    blob_store.set('access-log', json.dumps([{
        'id': '1700000000000',
        'userId': None,
        'userName': 'Desconocido',
        'qrCode': 'ACC-999-ZZZZ',
        'timestamp': '2026-10-19T15:00:00.000Z',
        'status': 'denied',
    }]))

    log = AccessLog(blob_store)
    log.load()

    entry = log.all()[0]
    assert entry.decision == Decision.DENIED
    assert entry.timestamp.tzinfo is None


def test_clear_empties_log(access_log, blob_store) -> None:
    access_log.append(make_entry(1))
    access_log.clear()
    assert access_log.all() == []
    assert json.loads(blob_store.get('access-log')) == []


def test_failed_write_leaves_log_unchanged() -> None:
    store = FailingBlobStore()
    log = AccessLog(store, retention=2)
    log.append(make_entry(1))
    log.append(make_entry(2))
    store.failing = True

    with pytest.raises(PersistenceError):
        log.append(make_entry(3))

    assert [entry.id for entry in log.all()] == ['entry-2', 'entry-1']
    assert [item['id'] for item in json.loads(store.get('access-log'))] == ['entry-2', 'entry-1']


def test_failed_write_on_empty_log_keeps_it_empty() -> None:
    store = FailingBlobStore()
    log = AccessLog(store)
    store.failing = True

    with pytest.raises(PersistenceError):
        log.append(make_entry(1))

    assert log.all() == []
    assert store.get('access-log') is None
