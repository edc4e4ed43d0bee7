"""
Test configuration and fixtures for the ValoHub backend test suite.

Provides:
- A fresh WishlistStore per test (deterministic ids and clock)
- FastAPI TestClient fixture wrapping an app built around that store
- assert_consistent helper for the forward/reverse index invariant
"""
import itertools
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.core.config import settings
from backend.core.store import WishlistStore


def assert_consistent(store: WishlistStore) -> None:
    """Fail with the list of mismatches if the two indexes disagree."""
    problems = store.check_consistency()
    assert problems == [], "\n".join(problems)


def _sequential_ids():
    counter = itertools.count(1)
    return lambda: f"anon_{next(counter):016d}"


def _fixed_clock():
    counter = itertools.count()
    return lambda: f"2026-01-01T00:00:{next(counter) % 60:02d}+00:00"


@pytest.fixture()
def store():
    """Isolated store with predictable user ids."""
    return WishlistStore(id_factory=_sequential_ids(), clock=_fixed_clock())


@pytest.fixture()
def client(store):
    """TestClient for an app that owns the `store` fixture."""
    from backend.api.main import create_app

    with TestClient(create_app(store)) as c:
        yield c


@pytest.fixture()
def production():
    """Run with worker auth enforced and a known key."""
    with patch.object(settings, "APP_ENV", "production"), \
         patch.object(settings, "WORKER_API_KEY", "worker-secret"):
        yield settings
