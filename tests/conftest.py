"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Make the source checkout importable without an editable install."""
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture
def credentials():
    return {
        "apiKey": "sk-test",
        "organizationId": "",
        "url": "http://litellm.local:4000/v1",
    }
