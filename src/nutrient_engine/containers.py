"""Dependency container wiring for the engine."""

from dataclasses import dataclass

from nutrient_engine.app_logging import configure_logging
from nutrient_engine.config import Settings
from nutrient_engine.services.journal import JournalRepository, JournalService


@dataclass
class EngineContainer:
    """Holds engine-wide dependencies."""

    settings: Settings
    journal_service: JournalService


def build_container(
    repository: JournalRepository, settings: Settings | None = None
) -> EngineContainer:
    """Create the default dependency container around a journal repository."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level.upper())
    journal_service = JournalService(
        repository=repository,
        suspicious_percent=resolved_settings.suspicious_percent,
        efficiency_window_days=resolved_settings.efficiency_window_days,
        default_bucketing=resolved_settings.default_bucketing,
    )
    return EngineContainer(
        settings=resolved_settings,
        journal_service=journal_service,
    )
