"""Shared fixtures: an in-memory backend and a store that records its notifications."""

from __future__ import annotations

from datetime import date

import pytest

from models.seed import seed_expenses
from services.expenses_service import ExpenseStore
from utils.storage import InMemoryBackend

TODAY = date(2025, 3, 29)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def seed():
    return seed_expenses()


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def notifications() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def store(backend: InMemoryBackend, notifications: list[tuple[str, str]]) -> ExpenseStore:
    """A store hydrated from the seed dataset (the backend starts empty)."""
    return ExpenseStore(backend, notify=lambda level, message: notifications.append((level, message)))
