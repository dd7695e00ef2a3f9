from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from rentals.models import Company
from rentals.services.rule_import import import_pricing_rules, load_rows


class Command(BaseCommand):
    help = "Import seasons and rental durations for a company from a CSV/XLSX file."

    def add_arguments(self, parser):
        parser.add_argument("company", type=str, help="Company slug.")
        parser.add_argument(
            "path",
            type=str,
            help="Path to the file. Columns: kind (season/duration) plus the rule fields.",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete the company's existing seasons and durations first.",
        )

    def handle(self, *args, **options):
        try:
            company = Company.objects.get(slug=options["company"])
        except Company.DoesNotExist as exc:
            raise CommandError(f"Unknown company: {options['company']}") from exc

        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        if not path.is_file():
            raise CommandError(f"Not a file: {path}")

        with path.open("rb") as upload:
            try:
                rows = load_rows(upload, path.name)
            except Exception as exc:  # noqa: BLE001
                raise CommandError(f"Failed to read file: {path}. Error: {exc}") from exc

        if not rows:
            self.stdout.write(self.style.WARNING("No rows found (empty file)."))
            return

        report = import_pricing_rules(company, rows, replace=options["replace"])

        for error in report.errors:
            self.stdout.write(self.style.WARNING(error))
        self.stdout.write(
            self.style.SUCCESS(f"Imported seasons: {report.seasons}, durations: {report.durations}")
        )
        self.stdout.write(f"Skipped rows: {report.skipped}")
