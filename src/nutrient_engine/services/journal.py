"""Food journal service: scoring on write, summaries on read."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from nutrient_engine.domain.journal import BucketTotals, Bucketing, JournalEntry
from nutrient_engine.domain.nutrients import BASE_RDA, RDAEntry
from nutrient_engine.domain.profiles import UserProfile
from nutrient_engine.domain.reports import EnergySplit, MacroTargets, NutrientReportRow
from nutrient_engine.services.aggregation import aggregate
from nutrient_engine.services.classification import (
    DEFAULT_SUSPICIOUS_PERCENT,
    build_report,
)
from nutrient_engine.services.efficiency import recent_efficiency, score
from nutrient_engine.services.macro_targets import macro_targets
from nutrient_engine.services.profiles import resolve_profile_defaults
from nutrient_engine.services.rda import personalize
from nutrient_engine.services.servings import rescale_entry

_logger = logging.getLogger(__name__)


class JournalRepository(Protocol):
    """Persistence interface for food journal entries."""

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        """Return all journal entries for a user."""

    def create_entry(self, user_id: str, entry: JournalEntry) -> str:
        """Store a new entry and return its id."""

    def replace_entry(self, user_id: str, entry_id: str, entry: JournalEntry) -> None:
        """Replace an existing entry in full."""

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete an entry by id."""


@dataclass(frozen=True)
class JournalSummary:
    """Aggregated intake compared against personalized targets."""

    rda: dict[str, RDAEntry]
    macro_targets: MacroTargets
    buckets: dict[str, BucketTotals]
    reports: dict[str, list[NutrientReportRow]]


@dataclass
class JournalService:
    """Application service for logging meals and summarizing intake."""

    repository: JournalRepository
    suspicious_percent: float = DEFAULT_SUSPICIOUS_PERCENT
    efficiency_window_days: int = 7
    default_bucketing: Bucketing = Bucketing.DAY

    def log_entry(
        self, user_id: str, entry: JournalEntry, profile: UserProfile | None
    ) -> JournalEntry:
        """Score a new entry, persist it and return the stored entry."""
        scored = replace(entry, metabolic_efficiency=score(entry, profile))
        entry_id = self.repository.create_entry(user_id, scored)
        _logger.info(
            "Logged %s entry %s with efficiency %.1f",
            scored.meal_type,
            entry_id,
            scored.metabolic_efficiency,
        )
        return replace(scored, entry_id=entry_id)

    def edit_entry(
        self,
        user_id: str,
        entry_id: str,
        entry: JournalEntry,
        profile: UserProfile | None,
    ) -> JournalEntry:
        """Re-score an edited entry and replace the stored one."""
        scored = replace(
            entry, entry_id=entry_id, metabolic_efficiency=score(entry, profile)
        )
        self.repository.replace_entry(user_id, entry_id, scored)
        return scored

    def resize_entry(  # noqa: PLR0913
        self,
        user_id: str,
        entry_id: str,
        entry: JournalEntry,
        serving: object,
        profile: UserProfile | None,
        unit: str | None = "g",
    ) -> JournalEntry:
        """Rescale an entry to a new serving size and save it."""
        return self.edit_entry(
            user_id, entry_id, rescale_entry(entry, serving, unit), profile
        )

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete an entry."""
        self.repository.delete_entry(user_id, entry_id)

    def summarize(  # noqa: PLR0913
        self,
        user_id: str,
        profile: UserProfile | None,
        window_start: date,
        window_end: date,
        bucketing: Bucketing | str | None = None,
    ) -> JournalSummary:
        """Aggregate a window of entries and report intake against RDA."""
        mode = self.default_bucketing if bucketing is None else Bucketing(bucketing)
        resolved = resolve_profile_defaults(profile)
        rda = personalize(BASE_RDA, resolved)
        entries = self.repository.list_entries(user_id)
        buckets = aggregate(entries, window_start, window_end, mode)
        reports = {
            key: build_report(totals.micros, rda, self.suspicious_percent)
            for key, totals in buckets.items()
        }
        return JournalSummary(
            rda=rda,
            macro_targets=macro_targets(resolved),
            buckets=buckets,
            reports=reports,
        )

    def efficiency_history(
        self, user_id: str, profile: UserProfile | None, today: date
    ) -> list[tuple[JournalEntry, EnergySplit]]:
        """Return recent meals with their efficiency and energy split."""
        entries = self.repository.list_entries(user_id)
        return recent_efficiency(
            entries, profile, today, days=self.efficiency_window_days
        )
