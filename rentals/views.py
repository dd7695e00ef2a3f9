import csv
import logging
from datetime import datetime

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.encoding import smart_str
from django.views.decorators.http import require_GET

from .models import Car, Company
from .services.pricing_matrix import build_pricing_matrix
from .services.quotes import PricingError, load_pricing_rules, quote_rental

logger = logging.getLogger(__name__)

DATETIME_QUERY_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]


def _parse_date(value):
    """Parse a date or datetime query value; plain dates stay ``date`` objects."""
    value = (value or "").strip()
    if not value:
        return None
    for fmt in DATETIME_QUERY_FORMATS + list(settings.DATETIME_INPUT_FORMATS):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    for fmt in settings.DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _serialize_season(season):
    return {
        "id": season.id,
        "name": season.name,
        "period": season.period_label,
        "start_month": season.start_month,
        "start_day": season.start_day,
        "end_month": season.end_month,
        "end_day": season.end_day,
        "price_multiplier": str(season.price_multiplier),
        "discount_label": season.discount_label or "",
        "position": season.position,
    }


def _serialize_duration(duration):
    return {
        "id": duration.id,
        "name": duration.name,
        "min_days": duration.min_days,
        "max_days": duration.max_days,
        "price_multiplier": str(duration.price_multiplier),
        "discount_label": duration.discount_label or "",
    }


@login_required
@require_GET
def pricing_quote(request, pk: int):
    """
    Price a car for ``?start=...&end=...``. Powers the booking form's live
    "per day / total" preview.
    """
    car = get_object_or_404(Car.objects.select_related("company"), pk=pk)
    raw_start = request.GET.get("start")
    raw_end = request.GET.get("end")
    start = _parse_date(raw_start)
    end = _parse_date(raw_end)
    if start is None or end is None:
        logger.info("Quote rejected for car %s: bad dates start=%r end=%r", car.pk, raw_start, raw_end)
        return JsonResponse({"error": "Provide valid start and end dates."}, status=400)

    try:
        result = quote_rental(car, start, end)
    except PricingError as exc:
        logger.info("Quote rejected for car %s: %s", car.pk, exc)
        return JsonResponse({"error": str(exc)}, status=400)

    payload = result.as_dict()
    payload.update(
        {
            "car": car.id,
            "base_price": str(car.daily_rate),
            "currency": car.company.currency_symbol,
        }
    )
    return JsonResponse(payload)


@login_required
@require_GET
def car_pricing_matrix(request, pk: int):
    car = get_object_or_404(Car.objects.select_related("company"), pk=pk)
    rules = load_pricing_rules(car.company)
    matrix = build_pricing_matrix(car.daily_rate, rules.seasons, rules.durations)
    payload = matrix.as_dict()
    payload["car"] = car.id
    payload["currency"] = car.company.currency_symbol
    return JsonResponse(payload)


@login_required
@require_GET
def export_pricing_matrix_csv(request, pk: int):
    car = get_object_or_404(Car.objects.select_related("company"), pk=pk)
    rules = load_pricing_rules(car.company)
    matrix = build_pricing_matrix(car.daily_rate, rules.seasons, rules.durations)

    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="pricing_{car.plate_number}.csv"'

    writer = csv.writer(response)
    header = ["season", "period", "markup"]
    for duration in matrix.durations:
        header.extend([f"{duration.name} per day", f"{duration.name} total"])
    writer.writerow([smart_str(value) for value in header])

    for row in matrix.rows:
        line = [smart_str(row.season_name), row.period, smart_str(row.markup_label)]
        for cell in row.cells:
            line.extend([f"{cell.daily_price:.2f}", f"{cell.total_price:.2f}"])
        writer.writerow(line)

    return response


@login_required
@require_GET
def company_pricing_rules(request, pk: int):
    company = get_object_or_404(Company, pk=pk)
    return JsonResponse(
        {
            "company": company.id,
            "seasons": [_serialize_season(season) for season in company.seasons.order_by("position", "id")],
            "durations": [
                _serialize_duration(duration) for duration in company.durations.order_by("min_days", "id")
            ],
        }
    )
