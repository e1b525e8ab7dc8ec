"""Tests for the rolling lookback window generator."""

from datetime import datetime, timedelta, timezone

import pytest

from wildlife_insight.domain.period import PERIOD_NAMES, Period, generate_periods
from wildlife_insight.foundation.clock import fixed_clock

_T = datetime(2026, 3, 1, 8, 30, 0, tzinfo=timezone.utc)


class TestGeneratePeriods:
    def test_seven_periods_in_declaration_order(self) -> None:
        periods = generate_periods(_T)
        assert [p.name for p in periods] == list(PERIOD_NAMES)
        assert [p.span_days for p in periods] == [2, 3, 7, 30, 90, 180, 365]

    def test_start_is_now_minus_span(self) -> None:
        for period in generate_periods(_T):
            assert period.start == _T - timedelta(days=period.span_days)

    @pytest.mark.parametrize("now", [
        _T,
        datetime(2024, 2, 29, 0, 0, 0, tzinfo=timezone.utc),
        datetime(2026, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
    ])
    def test_spans_strictly_increase_and_starts_not_after_now(self, now: datetime) -> None:
        periods = generate_periods(now)
        spans = [p.span_days for p in periods]
        assert spans == sorted(set(spans))
        starts = [p.start for p in periods]
        assert starts == sorted(starts, reverse=True)
        assert all(start <= now for start in starts)

    def test_periods_do_not_compound(self) -> None:
        """Each window is measured from now, not from the previous window's start."""
        periods = {p.name: p for p in generate_periods(_T)}
        assert periods["last_3_days"].start == _T - timedelta(days=3)
        assert periods["last_365_days"].start == _T - timedelta(days=365)

    def test_reproducible_with_fixed_clock(self) -> None:
        clock = fixed_clock(_T)
        assert generate_periods(clock()) == generate_periods(clock())

    def test_fixed_clock_assumes_utc_for_naive(self) -> None:
        clock = fixed_clock(datetime(2026, 3, 1, 8, 30, 0))
        assert clock() == _T


class TestPeriod:
    def test_span_must_be_positive(self) -> None:
        with pytest.raises(Exception):
            Period(name="bad", label="bad", span_days=0, start=_T)
