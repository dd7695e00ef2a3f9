"""
Rental pricing engine.

Pure functions over plain records: no ORM access, no I/O. Seasons adjust the
daily rate by the calendar window of the trip start, duration brackets
discount the daily rate by trip length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, NamedTuple, Sequence

ONE = Decimal("1")

# February is always 29 days so Feb 29 has an ordinal in every year.
DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class SeasonRule:
    id: int | None
    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    price_multiplier: Decimal = ONE
    discount_label: str | None = None

    @property
    def start_ordinal(self) -> int:
        return day_of_year(self.start_month, self.start_day)

    @property
    def end_ordinal(self) -> int:
        return day_of_year(self.end_month, self.end_day)

    @property
    def wraps_year_end(self) -> bool:
        return self.start_ordinal > self.end_ordinal

    def contains(self, month: int, day: int) -> bool:
        current = day_of_year(month, day)
        start, end = self.start_ordinal, self.end_ordinal
        if start <= end:
            return start <= current <= end
        return current >= start or current <= end


@dataclass(frozen=True)
class DurationBracket:
    id: int | None
    name: str
    min_days: int
    max_days: int | None = None
    price_multiplier: Decimal = ONE
    discount_label: str | None = None

    @property
    def is_open_ended(self) -> bool:
        return self.max_days is None

    def contains(self, days: int) -> bool:
        if self.max_days is None:
            return days >= self.min_days
        return self.min_days <= days <= self.max_days


class DurationMatch(NamedTuple):
    multiplier: Decimal
    duration: DurationBracket | None


class PriceBreakdown(NamedTuple):
    daily_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class PricingResult:
    daily_price: Decimal
    total_price: Decimal
    days: int
    season_multiplier: Decimal = ONE
    duration_multiplier: Decimal = ONE
    season_name: str | None = None
    duration_name: str | None = None

    def as_dict(self) -> dict:
        return {
            "days": self.days,
            "daily_price": str(self.daily_price),
            "total_price": str(self.total_price),
            "season_multiplier": str(self.season_multiplier),
            "duration_multiplier": str(self.duration_multiplier),
            "season_name": self.season_name,
            "duration_name": self.duration_name,
        }


def day_of_year(month: int, day: int) -> int:
    """Return the 1-based ordinal of (month, day) using the fixed month table."""
    return sum(DAYS_IN_MONTH[: month - 1]) + day


def find_season(on_date: date, seasons: Iterable[SeasonRule]) -> SeasonRule | None:
    """
    Return the first season whose window contains the month/day of ``on_date``.

    The year of ``on_date`` is ignored. Overlapping seasons are not an error:
    input order decides.
    """
    for season in seasons:
        if season.contains(on_date.month, on_date.day):
            return season
    return None


def resolve_duration(days: int, durations: Iterable[DurationBracket]) -> DurationMatch:
    """
    Pick the discount bracket for a trip of ``days`` days.

    Brackets are scanned by ascending ``min_days`` (ties keep input order), so
    a bracket starting lower wins over a later catch-all that also matches.
    """
    for duration in sorted(durations, key=lambda item: item.min_days):
        if duration.contains(days):
            return DurationMatch(to_decimal(duration.price_multiplier), duration)
    return DurationMatch(ONE, None)


def compose(base_price, season_multiplier, days: int, duration_multiplier) -> PriceBreakdown:
    """
    Apply both multipliers to the daily rate, then multiply by the day count.

    The duration discount is a rate discount: the daily price already
    includes it.
    """
    daily_price = to_decimal(base_price) * to_decimal(season_multiplier) * to_decimal(duration_multiplier)
    total_price = daily_price * days
    return PriceBreakdown(daily_price, total_price)


def _as_datetime(value: date, tzinfo=None) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day, tzinfo=tzinfo)


def rental_days(start: date, end: date) -> int:
    """
    Rental length in days; any started day counts as a whole one. Not floored at zero.

    A plain date counts as midnight, in the time zone of the other bound when
    that one is an aware datetime.
    """
    tzinfo = getattr(end, "tzinfo", None) or getattr(start, "tzinfo", None)
    elapsed = _as_datetime(end, tzinfo) - _as_datetime(start, tzinfo)
    return math.ceil(elapsed / timedelta(days=1))


def calculate(
    base_price,
    start: date,
    end: date,
    seasons: Sequence[SeasonRule],
    durations: Sequence[DurationBracket],
) -> PricingResult:
    """
    Price a rental from ``start`` to ``end``.

    The season of the start date governs the whole stay. Returns multipliers
    of 1 when no season or bracket matches.
    """
    days = rental_days(start, end)

    season = find_season(start, seasons)
    season_multiplier = to_decimal(season.price_multiplier) if season is not None else ONE

    duration_multiplier, duration = resolve_duration(days, durations)

    daily_price, total_price = compose(base_price, season_multiplier, days, duration_multiplier)

    return PricingResult(
        daily_price=daily_price,
        total_price=total_price,
        days=days,
        season_multiplier=season_multiplier,
        duration_multiplier=duration_multiplier,
        season_name=season.name if season is not None else None,
        duration_name=duration.name if duration is not None else None,
    )


def average_days_for_duration(duration: DurationBracket) -> int:
    """Representative trip length for a bracket, used by the pricing matrix."""
    if duration.max_days is None:
        return duration.min_days + 2
    return math.ceil((duration.min_days + duration.max_days) / 2)
