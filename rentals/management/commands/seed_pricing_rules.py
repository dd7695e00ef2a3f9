from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from rentals.models import Company, RentalDuration, Season

DEFAULT_SEASONS = [
    # (name, start_month, start_day, end_month, end_day, multiplier)
    ("Winter holidays", 12, 20, 1, 20, Decimal("1.30")),
    ("High season", 5, 6, 10, 20, Decimal("1.20")),
]

DEFAULT_DURATIONS = [
    # (name, min_days, max_days, multiplier)
    ("1-3 days", 1, 3, Decimal("1.00")),
    ("4-7 days", 4, 7, Decimal("0.95")),
    ("8-14 days", 8, 14, Decimal("0.90")),
    ("15-30 days", 15, 30, Decimal("0.85")),
    ("31-60 days", 31, 60, Decimal("0.80")),
    ("61+ days", 61, None, Decimal("0.75")),
]


class Command(BaseCommand):
    help = "Create the default seasons and rental duration brackets for a company."

    def add_arguments(self, parser):
        parser.add_argument("company", type=str, help="Company slug.")
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete the company's existing seasons and durations first.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        try:
            company = Company.objects.get(slug=options["company"])
        except Company.DoesNotExist as exc:
            raise CommandError(f"Unknown company: {options['company']}") from exc

        if options["replace"]:
            company.seasons.all().delete()
            company.durations.all().delete()

        created_count = 0
        existing_count = 0

        for position, (name, start_month, start_day, end_month, end_day, multiplier) in enumerate(DEFAULT_SEASONS):
            _, created = Season.objects.get_or_create(
                company=company,
                name=name,
                defaults={
                    "start_month": start_month,
                    "start_day": start_day,
                    "end_month": end_month,
                    "end_day": end_day,
                    "price_multiplier": multiplier,
                    "position": position,
                },
            )
            if created:
                created_count += 1
                self.stdout.write(f"  Created season: {name}")
            else:
                existing_count += 1

        for name, min_days, max_days, multiplier in DEFAULT_DURATIONS:
            _, created = RentalDuration.objects.get_or_create(
                company=company,
                name=name,
                defaults={"min_days": min_days, "max_days": max_days, "price_multiplier": multiplier},
            )
            if created:
                created_count += 1
                self.stdout.write(f"  Created duration: {name}")
            else:
                existing_count += 1

        self.stdout.write(
            self.style.SUCCESS(f"Pricing rules ready for {company.name}. Created: {created_count}, existing: {existing_count}")
        )
