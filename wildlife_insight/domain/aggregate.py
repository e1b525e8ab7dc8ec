"""Per-period aggregates and the frequency reductions over sightings.

Frequency maps preserve first-encounter order, and ranking uses a stable
sort, so species with equal counts keep the order they were first seen in.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from pydantic import BaseModel, Field

from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.domain.period import Period
from wildlife_insight.domain.records import HazardReport, Sighting, Task

TOP_SPECIES_LIMIT = 3


def species_frequency(sightings: Iterable[Sighting]) -> dict[str, int]:
    """Map species → number of sightings."""
    return dict(Counter(s.species for s in sightings))


def severity_frequency(sightings: Iterable[Sighting]) -> dict[str, int]:
    """Map severity level → number of sightings."""
    return dict(Counter(s.severity.value for s in sightings))


def top_species(
    frequency: dict[str, int], limit: int = TOP_SPECIES_LIMIT,
) -> list[tuple[str, int]]:
    """Rank species by count descending; ties keep encounter order."""
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


class PeriodAggregate(BaseModel):
    """Everything the pipeline knows about one period.

    ``failed_sources`` lists the record kinds whose fetch failed; their
    lists are empty but that emptiness does not mean zero activity.
    """

    period_name: str
    label: str
    sightings: list[Sighting] = Field(default_factory=list)
    hazards: list[HazardReport] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    species_frequency: dict[str, int] = Field(default_factory=dict)
    severity_frequency: dict[str, int] = Field(default_factory=dict)
    failed_sources: list[RecordKind] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        period: Period,
        sightings: list[Sighting],
        hazards: list[HazardReport],
        tasks: list[Task],
        failed_sources: list[RecordKind] | None = None,
    ) -> PeriodAggregate:
        return cls(
            period_name=period.name,
            label=period.label,
            sightings=sightings,
            hazards=hazards,
            tasks=tasks,
            species_frequency=species_frequency(sightings),
            severity_frequency=severity_frequency(sightings),
            failed_sources=failed_sources or [],
        )

    @property
    def is_complete(self) -> bool:
        return not self.failed_sources

    def top_species(self, limit: int = TOP_SPECIES_LIMIT) -> list[tuple[str, int]]:
        return top_species(self.species_frequency, limit)
