"""
Reading season and duration rule sets from CSV/XLSX files.

Rows carry a ``kind`` column (``season`` or ``duration``); the remaining
columns map onto the model fields. Every row is validated through the model
forms before it is stored.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

import openpyxl
from django.db import transaction

from ..forms import RentalDurationForm, SeasonForm
from ..models import Company

logger = logging.getLogger(__name__)

SEASON_FIELDS = [
    "name",
    "start_month",
    "start_day",
    "end_month",
    "end_day",
    "price_multiplier",
    "discount_label",
    "position",
]
DURATION_FIELDS = ["name", "min_days", "max_days", "price_multiplier", "discount_label"]


@dataclass
class ImportReport:
    seasons: int = 0
    durations: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.errors)


def _clean_cell(value):
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def read_csv_rows(upload) -> list[dict]:
    raw = upload.read()
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8-sig")
    return list(csv.DictReader(io.StringIO(raw)))


def read_xlsx_rows(upload) -> list[dict]:
    upload.seek(0)
    wb = openpyxl.load_workbook(upload, read_only=True, data_only=True)
    ws = wb.active
    rows = []
    header = []
    for idx, row in enumerate(ws.iter_rows(values_only=True)):
        if idx == 0:
            header = [_clean_cell(cell).lower() for cell in row]
            continue
        if not header:
            break
        rows.append({name: row[col] if col < len(row) else "" for col, name in enumerate(header)})
    wb.close()
    return rows


def load_rows(upload, filename: str) -> list[dict]:
    if filename.lower().endswith(".xlsx"):
        return read_xlsx_rows(upload)
    return read_csv_rows(upload)


def _lowered_keys(row: dict) -> dict:
    return {str(key).strip().lower(): value for key, value in row.items() if key is not None}


def _normalize(row: dict, fields: list[str]) -> dict:
    data = {name: _clean_cell(row.get(name)) for name in fields}
    multiplier = data.get("price_multiplier")
    if multiplier:
        try:
            data["price_multiplier"] = str(Decimal(multiplier.replace(",", ".")))
        except InvalidOperation:
            pass
    if "position" in data and not data["position"]:
        data["position"] = "0"
    return data


def import_pricing_rules(company: Company, rows: list[dict], replace: bool = False) -> ImportReport:
    """
    Store the rows as seasons and durations of ``company``.

    With ``replace`` the company's existing rules are removed first. Invalid
    rows are skipped and reported, rows with no values are ignored, and valid
    ones are saved.
    """
    report = ImportReport()
    with transaction.atomic():
        if replace:
            company.seasons.all().delete()
            company.durations.all().delete()

        for line_number, row in enumerate(rows, start=2):
            row = _lowered_keys(row)
            if not any(_clean_cell(value) for value in row.values()):
                continue
            kind = _clean_cell(row.get("kind")).lower()
            if kind == "season":
                form_class, fields = SeasonForm, SEASON_FIELDS
            elif kind == "duration":
                form_class, fields = RentalDurationForm, DURATION_FIELDS
            else:
                report.errors.append(f"Row {line_number}: unknown kind {kind!r}.")
                continue

            data = _normalize(row, fields)
            data["company"] = company.pk
            form = form_class(data=data)
            if not form.is_valid():
                problems = "; ".join(
                    f"{name}: {' '.join(messages)}" for name, messages in form.errors.items()
                )
                report.errors.append(f"Row {line_number}: {problems}")
                continue

            form.save()
            if kind == "season":
                report.seasons += 1
            else:
                report.durations += 1

    logger.info(
        "Pricing rules imported for %s: seasons=%s durations=%s skipped=%s",
        company.slug,
        report.seasons,
        report.durations,
        report.skipped,
    )
    return report
