"""Shared fixtures for the contact backend tests."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Project root holds the modules under test
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from mail_client import MailConfig  # noqa: E402


@pytest.fixture
def config():
    return MailConfig(api_key='re_test_key', mail_to='kontakt@example.com', mail_from=None)


@pytest.fixture
def valid_payload():
    return {
        'name': 'Anna Muster',
        'email': 'anna@example.com',
        'phone': '030123456',
        'message': 'Ich interessiere mich für eine Beratung zur BU.',
        'consent': True,
    }


def make_session(status_code=200, text='{"id": "abc"}'):
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=status_code, text=text)
    return session


@pytest.fixture
def ok_session():
    return make_session()


@pytest.fixture
def failing_session():
    return make_session(status_code=422, text='{"message": "invalid from"}')
