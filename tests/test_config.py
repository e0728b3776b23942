"""Tests for configuration helpers."""

import pytest

from checkin.config import Config, ProductionConfig


@pytest.mark.parametrize('value, expected', [
    (None, None),
    ('', None),
    ('/dev/log', '/dev/log'),
    ('logs.example.com:514', ('logs.example.com', 514)),
])
def test_syslog_address(value, expected) -> None:
    assert ProductionConfig.syslog_address(value) == expected


def test_production_config_defines_syslog_server() -> None:
    assert hasattr(ProductionConfig, 'SYSLOG_SERVER')


@pytest.mark.parametrize('filename, allowed', [
    ('asistentes.csv', True),
    ('asistentes.XLSX', True),
    ('asistentes.xls', True),
    ('asistentes.pdf', False),
    ('sin_extension', False),
    (None, False),
])
def test_allowed_file(filename, allowed) -> None:
    assert Config.allowed_file(filename) is allowed
