"""Shared test setup: make the fakes importable from every test area."""

import os
import sys

import pytest

# Test areas live in hyphenated directories that are not packages, so the
# fakes are imported as top-level modules.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "fakes"))


@pytest.fixture
def git_identity(monkeypatch):
    """Give git a commit identity regardless of the host configuration."""
    for prefix in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{prefix}_NAME", "Test")
        monkeypatch.setenv(f"{prefix}_EMAIL", "test@test.com")
