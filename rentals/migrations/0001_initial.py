from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("currency_symbol", models.CharField(blank=True, default="฿", max_length=5)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "companies",
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(max_length=100)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(max_length=30)),
                ("license_number", models.CharField(max_length=50)),
            ],
        ),
        migrations.CreateModel(
            name="Car",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("plate_number", models.CharField(max_length=20, unique=True)),
                ("make", models.CharField(max_length=50)),
                ("model", models.CharField(max_length=50)),
                ("year", models.PositiveIntegerField()),
                (
                    "daily_rate",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Base price per day before season and duration multipliers.",
                        max_digits=8,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cars",
                        to="rentals.company",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Season",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                (
                    "start_month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                (
                    "start_day",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(31),
                        ]
                    ),
                ),
                (
                    "end_month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                (
                    "end_day",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(31),
                        ]
                    ),
                ),
                (
                    "price_multiplier",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("1.000"),
                        help_text=">1 for peak seasons, <1 for off-peak.",
                        max_digits=6,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.1"), "Multiplier must be at least 0.1."),
                            django.core.validators.MaxValueValidator(Decimal("10"), "Multiplier is too large."),
                        ],
                    ),
                ),
                ("discount_label", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "position",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Lower positions are checked first when seasons overlap.",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seasons",
                        to="rentals.company",
                    ),
                ),
            ],
            options={
                "ordering": ["company", "position", "id"],
            },
        ),
        migrations.CreateModel(
            name="RentalDuration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                (
                    "min_days",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1, "Minimum days must be at least 1.")]
                    ),
                ),
                (
                    "max_days",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Leave empty for an open-ended bracket (e.g. 29+ days).",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1, "Maximum days must be at least 1.")],
                    ),
                ),
                (
                    "price_multiplier",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("1.000"),
                        max_digits=6,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.1"), "Multiplier must be at least 0.1."),
                            django.core.validators.MaxValueValidator(Decimal("10"), "Multiplier is too large."),
                        ],
                    ),
                ),
                ("discount_label", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="durations",
                        to="rentals.company",
                    ),
                ),
            ],
            options={
                "ordering": ["company", "min_days", "id"],
            },
        ),
        migrations.CreateModel(
            name="Rental",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "contract_number",
                    models.CharField(
                        blank=True,
                        help_text="Generated 5-digit contract number.",
                        max_length=5,
                        null=True,
                        unique=True,
                    ),
                ),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("daily_rate", models.DecimalField(decimal_places=2, max_digits=10)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("season_multiplier", models.DecimalField(decimal_places=3, default=Decimal("1.000"), max_digits=6)),
                ("duration_multiplier", models.DecimalField(decimal_places=3, default=Decimal("1.000"), max_digits=6)),
                ("season_name", models.CharField(blank=True, default="", max_length=100)),
                ("duration_name", models.CharField(blank=True, default="", max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("active", "Active"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("car", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="rentals.car")),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="rentals.customer")),
            ],
        ),
    ]
