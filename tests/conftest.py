"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field, replace
from uuid import uuid4

import pytest

from nutrient_engine.config import Settings
from nutrient_engine.domain.journal import JournalEntry
from nutrient_engine.domain.profiles import UserProfile
from nutrient_engine.services.journal import JournalRepository, JournalService


@dataclass
class InMemoryJournalRepository(JournalRepository):
    """In-memory journal repository for tests."""

    entries: dict[str, dict[str, JournalEntry]] = field(default_factory=dict)

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        return list(self.entries.get(user_id, {}).values())

    def create_entry(self, user_id: str, entry: JournalEntry) -> str:
        entry_id = str(uuid4())
        self.entries.setdefault(user_id, {})[entry_id] = replace(
            entry, entry_id=entry_id
        )
        return entry_id

    def replace_entry(self, user_id: str, entry_id: str, entry: JournalEntry) -> None:
        user_entries = self.entries[user_id]
        if entry_id not in user_entries:
            raise KeyError(entry_id)
        user_entries[entry_id] = entry

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        del self.entries[user_id][entry_id]


def make_entry(**overrides: object) -> JournalEntry:
    """Build a journal entry with sensible defaults."""
    values: dict[str, object] = {
        "date": "2024-03-01",
        "time": "1:00 PM",
        "meal_type": "Lunch",
        "protein": 10,
        "carbs": 20,
        "fat": 0,
        "calories": 200,
    }
    values.update(overrides)
    return JournalEntry(**values)


@pytest.fixture(autouse=True)
def _reset_engine_logger():
    yield
    logger = logging.getLogger("nutrient_engine")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test")


@pytest.fixture
def journal_repository() -> InMemoryJournalRepository:
    return InMemoryJournalRepository()


@pytest.fixture
def journal_service(journal_repository: InMemoryJournalRepository) -> JournalService:
    return JournalService(journal_repository)


@pytest.fixture
def severe_profile() -> UserProfile:
    return UserProfile(age=75, gender="female", covid_severity="severe")
