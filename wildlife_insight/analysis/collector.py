"""Data collector: fetches each period's records from a RecordReader.

A failed query for one record kind degrades to an empty list for that
kind and is recorded on the aggregate; it never fails the aggregation.
Only StoreUnavailableError (no backend at all) propagates.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from wildlife_insight.domain.aggregate import PeriodAggregate
from wildlife_insight.domain.enums import RecordKind
from wildlife_insight.domain.period import Period
from wildlife_insight.domain.records import HazardReport, Sighting, Task
from wildlife_insight.store.base import RecordReader, StoreUnavailableError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


async def _fetch(
    reader: RecordReader,
    kind: RecordKind,
    since: datetime,
    model: type[RecordT],
) -> tuple[list[RecordT], bool]:
    """Fetch and validate rows of one kind.  Returns (records, failed)."""
    try:
        rows = await reader.fetch_since(kind, since)
    except StoreUnavailableError:
        raise
    except Exception as exc:
        logger.warning("Fetching %s since %s failed: %s — treating as empty",
                       kind.value, since.isoformat(), exc)
        return [], True

    records: list[RecordT] = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping malformed %s row %s: %s",
                           kind.value, row.get("id", "?"), exc.errors()[0].get("msg"))
    return records, False


async def collect_period(reader: RecordReader, period: Period) -> PeriodAggregate:
    """Gather sightings, hazards and tasks created since the period start."""
    (sightings, s_failed), (hazards, h_failed), (tasks, t_failed) = await asyncio.gather(
        _fetch(reader, RecordKind.SIGHTINGS, period.start, Sighting),
        _fetch(reader, RecordKind.HAZARDS, period.start, HazardReport),
        _fetch(reader, RecordKind.TASKS, period.start, Task),
    )
    failed = [
        kind for kind, flag in (
            (RecordKind.SIGHTINGS, s_failed),
            (RecordKind.HAZARDS, h_failed),
            (RecordKind.TASKS, t_failed),
        ) if flag
    ]
    aggregate = PeriodAggregate.build(period, sightings, hazards, tasks, failed)
    logger.debug(
        "Collected %s: sightings=%d hazards=%d tasks=%d failed=%s",
        period.name, len(sightings), len(hazards), len(tasks),
        [k.value for k in failed],
    )
    return aggregate


async def collect_all(reader: RecordReader, periods: list[Period]) -> list[PeriodAggregate]:
    """Collect every period concurrently; result order follows *periods*."""
    return list(await asyncio.gather(*(collect_period(reader, p) for p in periods)))
