import logging
from datetime import date
from typing import NamedTuple

from ..models import Car, Company, RentalDuration, Season
from .pricing import DurationBracket, PricingResult, SeasonRule, calculate, rental_days

logger = logging.getLogger(__name__)


class PricingError(ValueError):
    """Raised when a quote cannot be produced from the given car and dates."""


class PricingRules(NamedTuple):
    seasons: tuple[SeasonRule, ...]
    durations: tuple[DurationBracket, ...]


EMPTY_RULES = PricingRules(seasons=(), durations=())


def load_pricing_rules(company: Company | None) -> PricingRules:
    """Load a company's seasons (in precedence order) and duration brackets as engine records."""
    if company is None:
        return EMPTY_RULES
    seasons = tuple(
        season.to_rule() for season in Season.objects.filter(company=company).order_by("position", "id")
    )
    durations = tuple(
        duration.to_bracket()
        for duration in RentalDuration.objects.filter(company=company).order_by("min_days", "id")
    )
    return PricingRules(seasons=seasons, durations=durations)


def quote_rental(
    car: Car | None,
    start_date: date | None,
    end_date: date | None,
    rules: PricingRules | None = None,
) -> PricingResult:
    """
    Price a rental of ``car`` using the rules of the car's company.

    Pass ``rules`` to reuse an already loaded rule set.
    """
    if car is None:
        raise PricingError("A car is required to calculate the price.")
    if not start_date or not end_date:
        raise PricingError("Start and end dates are required.")
    if rental_days(start_date, end_date) <= 0:
        raise PricingError("End date must be after start date.")

    if rules is None:
        rules = load_pricing_rules(car.company)

    result = calculate(car.daily_rate, start_date, end_date, rules.seasons, rules.durations)
    logger.debug(
        "Quoted car %s for %s days: daily=%s total=%s season=%s duration=%s",
        car.plate_number,
        result.days,
        result.daily_price,
        result.total_price,
        result.season_name,
        result.duration_name,
    )
    return result
