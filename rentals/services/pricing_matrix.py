from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Sequence

from django.conf import settings

from .pricing import (
    ONE,
    DurationBracket,
    SeasonRule,
    average_days_for_duration,
    compose,
    to_decimal,
)

STANDARD_SEASON = SeasonRule(
    id=None,
    name="Standard price",
    start_month=1,
    start_day=1,
    end_month=12,
    end_day=31,
    price_multiplier=ONE,
)


@dataclass(frozen=True)
class MatrixCell:
    duration_name: str
    days: int
    daily_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class MatrixRow:
    season_name: str
    period: str
    multiplier: Decimal
    markup_label: str
    cells: list[MatrixCell] = field(default_factory=list)


@dataclass(frozen=True)
class PricingMatrix:
    base_price: Decimal
    durations: list[DurationBracket]
    rows: list[MatrixRow]

    def as_dict(self) -> dict:
        return {
            "base_price": str(self.base_price),
            "durations": [
                {
                    "id": duration.id,
                    "name": duration.name,
                    "min_days": duration.min_days,
                    "max_days": duration.max_days,
                    "sample_days": average_days_for_duration(duration),
                }
                for duration in self.durations
            ],
            "rows": [
                {
                    "season": row.season_name,
                    "period": row.period,
                    "multiplier": str(row.multiplier),
                    "markup": row.markup_label,
                    "cells": [
                        {
                            "duration": cell.duration_name,
                            "days": cell.days,
                            "daily_price": str(cell.daily_price),
                            "total_price": str(cell.total_price),
                        }
                        for cell in row.cells
                    ],
                }
                for row in self.rows
            ],
        }


def season_period_label(season: SeasonRule) -> str:
    return (
        f"{season.start_month:02d}/{season.start_day:02d} - "
        f"{season.end_month:02d}/{season.end_day:02d}"
    )


def season_markup_label(season: SeasonRule) -> str:
    """Operator label if set, otherwise the markup as a signed percentage."""
    if season.discount_label:
        return season.discount_label
    multiplier = to_decimal(season.price_multiplier)
    if multiplier == ONE:
        return "Base rate"
    # Halves round towards +infinity: +12.5% shows as +13%, -12.5% as -12%.
    rounding = ROUND_HALF_UP if multiplier > ONE else ROUND_HALF_DOWN
    percent = ((multiplier - ONE) * 100).quantize(Decimal("1"), rounding=rounding)
    if multiplier > ONE:
        return f"+{percent}%"
    # Adding zero turns -0 into 0.
    return f"{percent + 0}%"


def build_pricing_matrix(
    base_price,
    seasons: Sequence[SeasonRule],
    durations: Sequence[DurationBracket],
    max_seasons: int | None = None,
    max_durations: int | None = None,
) -> PricingMatrix:
    """
    Price every season against every duration bracket at the bracket's sample length.

    Durations are shown in ascending ``min_days`` order, seasons in the order
    given. Without seasons a single standard row is produced.
    """
    if max_seasons is None:
        max_seasons = settings.PRICING_MATRIX_MAX_SEASONS
    if max_durations is None:
        max_durations = settings.PRICING_MATRIX_MAX_DURATIONS

    base = to_decimal(base_price)
    shown_seasons = list(seasons)[:max_seasons] or [STANDARD_SEASON]
    shown_durations = sorted(durations, key=lambda item: item.min_days)[:max_durations]

    rows = []
    for season in shown_seasons:
        cells = []
        for duration in shown_durations:
            days = average_days_for_duration(duration)
            daily_price, total_price = compose(base, season.price_multiplier, days, duration.price_multiplier)
            cells.append(
                MatrixCell(
                    duration_name=duration.name,
                    days=days,
                    daily_price=daily_price,
                    total_price=total_price,
                )
            )
        rows.append(
            MatrixRow(
                season_name=season.name,
                period=season_period_label(season),
                multiplier=to_decimal(season.price_multiplier),
                markup_label=season_markup_label(season),
                cells=cells,
            )
        )

    return PricingMatrix(base_price=base, durations=shown_durations, rows=rows)
