"""
Pytest configuration: makes the packages under services/ importable from the
repo root and keeps bridge environment settings from leaking into tests.
"""

import os
import sys

import pytest

_REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_REPO, "services"))

_BRIDGE_ENV = (
    "BRIDGE_CONFIG",
    "BRIDGE_TAGS",
    "LOG_FILE",
    "LOG_LEVEL",
    "OUTPUT_FORMAT",
    "SUPPRESS_JSON_REPARSE",
    "SYSLOG_EXPORT_SCHEMA_PATH",
    "VALIDATE_EXPORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Run every test without bridge settings from the host environment."""
    for name in _BRIDGE_ENV:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def plain_line():
    return b"<4>2016-03-08T14:59:36.293816+00:00 host.example.com kernel: test\n"


@pytest.fixture
def cee_line():
    return b'<4>2016-03-08T14:59:36.293816+00:00 host.example.com test[12]: @cee:{"a":1}\n'
