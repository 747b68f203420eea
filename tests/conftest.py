"""Shared pytest fixtures for resend-sync tests.

Fixture Organization:
    - Config fixtures: Reset the cached configuration singleton between tests
    - Sample data fixtures: Pre-configured Resend list pages
"""

import pytest

from resend_sync.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Clear the get_config() cache before and after every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_page():
    """Single Resend list page with three emails and more to come."""
    return {
        "object": "list",
        "has_more": True,
        "data": [
            {"id": "em_1", "to": ["a@example.com"], "subject": "Hello"},
            {"id": "em_2", "to": ["b@example.com"], "subject": "Receipt"},
            {"id": "em_3", "to": ["c@example.com"], "subject": "Reminder"},
        ],
    }
