import pytest
import sys
import os
import logging
from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

# Ensure the project root is in the Python path for imports in tests
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

MOSCOW = ZoneInfo("Europe/Moscow")


@pytest.fixture(autouse=True)
def configure_logging(caplog):
    """Ensure logging is configured to capture DEBUG level messages for all tests."""
    caplog.set_level(logging.DEBUG, logger="root")


@pytest.fixture
def ctime():
    """Creation time of a note posted on 23.09.2017 at 01:58 Moscow time."""
    return datetime(2017, 9, 23, 1, 58, tzinfo=MOSCOW)


@pytest.fixture
def resolve_picture():
    """Picture resolver that names pictures like the real downloader without any I/O."""
    resolver = MagicMock(side_effect=lambda src, date_str, number: f"{date_str}.{number}.jpg")
    return resolver


@pytest.fixture
def config(tmp_path):
    return {
        'cache_dir': str(tmp_path / 'cache'),
        'pictures_dir': str(tmp_path / 'pictures'),
        'avatars_dir': str(tmp_path / 'avatars'),
        'log_file': str(tmp_path / 'migration.log'),
        'user_agent': 'Test User Agent',
        'request_timeout_seconds': 5,
        'source_timezone': 'Europe/Moscow',
    }
