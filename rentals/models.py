import calendar
import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import IntegrityError, models, transaction

from .services.pricing import DurationBracket, PricingResult, SeasonRule

User = get_user_model()

MULTIPLIER_VALIDATORS = [
    MinValueValidator(Decimal("0.1"), "Multiplier must be at least 0.1."),
    MaxValueValidator(Decimal("10"), "Multiplier is too large."),
]
MONTH_VALIDATORS = [MinValueValidator(1), MaxValueValidator(12)]
DAY_VALIDATORS = [MinValueValidator(1), MaxValueValidator(31)]


def _max_day_in_month(month: int) -> int:
    # Leap year so that Feb 29 is accepted for recurring windows.
    return calendar.monthrange(2000, month)[1]


class Company(models.Model):
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    currency_symbol = models.CharField(max_length=5, blank=True, default="฿")

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "companies"

    def __str__(self):
        return self.name


class Car(models.Model):
    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name="cars")
    plate_number = models.CharField(max_length=20, unique=True)
    make = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    year = models.PositiveIntegerField()
    daily_rate = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Base price per day before season and duration multipliers.",
    )
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.plate_number} - {self.make} {self.model} ({self.year})"

    def quote(self, start_date, end_date) -> PricingResult:
        from .services.quotes import quote_rental

        return quote_rental(self, start_date, end_date)


class Customer(models.Model):
    full_name = models.CharField(max_length=100)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=30)
    license_number = models.CharField(max_length=50)

    def __str__(self):
        return self.full_name


class Season(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="seasons")
    name = models.CharField(max_length=100)
    start_month = models.PositiveSmallIntegerField(validators=MONTH_VALIDATORS)
    start_day = models.PositiveSmallIntegerField(validators=DAY_VALIDATORS)
    end_month = models.PositiveSmallIntegerField(validators=MONTH_VALIDATORS)
    end_day = models.PositiveSmallIntegerField(validators=DAY_VALIDATORS)
    price_multiplier = models.DecimalField(
        max_digits=6,
        decimal_places=3,
        default=Decimal("1.000"),
        validators=MULTIPLIER_VALIDATORS,
        help_text=">1 for peak seasons, <1 for off-peak.",
    )
    discount_label = models.CharField(max_length=50, blank=True, null=True)
    position = models.PositiveIntegerField(
        default=0,
        help_text="Lower positions are checked first when seasons overlap.",
    )

    class Meta:
        ordering = ["company", "position", "id"]

    def __str__(self):
        return f"{self.name} ({self.period_label})"

    @property
    def period_label(self) -> str:
        return f"{self.start_month:02d}/{self.start_day:02d} - {self.end_month:02d}/{self.end_day:02d}"

    def clean(self):
        super().clean()
        errors = {}
        for month_field, day_field in (("start_month", "start_day"), ("end_month", "end_day")):
            month = getattr(self, month_field)
            day = getattr(self, day_field)
            if not month or not day or not 1 <= month <= 12:
                continue
            if day > _max_day_in_month(month):
                errors[day_field] = f"Day {day} does not exist in month {month}."
        if errors:
            raise ValidationError(errors)

    def to_rule(self) -> SeasonRule:
        return SeasonRule(
            id=self.pk,
            name=self.name,
            start_month=self.start_month,
            start_day=self.start_day,
            end_month=self.end_month,
            end_day=self.end_day,
            price_multiplier=self.price_multiplier,
            discount_label=self.discount_label or None,
        )


class RentalDuration(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="durations")
    name = models.CharField(max_length=100)
    min_days = models.PositiveIntegerField(validators=[MinValueValidator(1, "Minimum days must be at least 1.")])
    max_days = models.PositiveIntegerField(
        blank=True,
        null=True,
        validators=[MinValueValidator(1, "Maximum days must be at least 1.")],
        help_text="Leave empty for an open-ended bracket (e.g. 29+ days).",
    )
    price_multiplier = models.DecimalField(
        max_digits=6,
        decimal_places=3,
        default=Decimal("1.000"),
        validators=MULTIPLIER_VALIDATORS,
    )
    discount_label = models.CharField(max_length=50, blank=True, null=True)

    class Meta:
        ordering = ["company", "min_days", "id"]

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        if self.min_days and self.max_days and self.max_days < self.min_days:
            raise ValidationError(
                {"max_days": "Maximum days must be greater than or equal to minimum days."}
            )

    def to_bracket(self) -> DurationBracket:
        return DurationBracket(
            id=self.pk,
            name=self.name,
            min_days=self.min_days,
            max_days=self.max_days,
            price_multiplier=self.price_multiplier,
            discount_label=self.discount_label or None,
        )


class Rental(models.Model):
    STATUS_CHOICES = [
        ("draft", "Draft"),
        ("active", "Active"),
        ("completed", "Completed"),
        ("cancelled", "Cancelled"),
    ]

    car = models.ForeignKey(Car, on_delete=models.PROTECT)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT)
    contract_number = models.CharField(
        max_length=5,
        unique=True,
        blank=True,
        null=True,
        help_text="Generated 5-digit contract number.",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    season_multiplier = models.DecimalField(max_digits=6, decimal_places=3, default=Decimal("1.000"))
    duration_multiplier = models.DecimalField(max_digits=6, decimal_places=3, default=Decimal("1.000"))
    season_name = models.CharField(max_length=100, blank=True, default="")
    duration_name = models.CharField(max_length=100, blank=True, default="")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="draft")
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL)

    def __str__(self):
        contract = self.contract_number or "-----"
        date_piece = self.start_date.strftime("%Y-%m-%d") if self.start_date else ""
        return f"{contract}/{self.car.plate_number}/{date_piece}"

    @staticmethod
    def _generate_contract_number() -> str:
        return f"{random.randint(10000, 99999):05d}"

    @classmethod
    def generate_unique_contract_number(cls) -> str:
        for _ in range(50):
            candidate = cls._generate_contract_number()
            if not cls.objects.filter(contract_number=candidate).exists():
                return candidate
        raise RuntimeError("Could not generate a unique contract number.")

    def apply_pricing(self, result: PricingResult):
        """Copy a pricing result onto the contract, rounded to cents."""
        cents = Decimal("0.01")
        self.daily_rate = result.daily_price.quantize(cents)
        self.total_price = result.total_price.quantize(cents)
        self.season_multiplier = result.season_multiplier
        self.duration_multiplier = result.duration_multiplier
        self.season_name = result.season_name or ""
        self.duration_name = result.duration_name or ""

    def save(self, *args, **kwargs):
        attempts = 0
        while attempts < 3:
            if not self.contract_number:
                self.contract_number = self.generate_unique_contract_number()
            try:
                with transaction.atomic():
                    return super().save(*args, **kwargs)
            except IntegrityError:
                # Contract number collision, try again with a fresh number.
                self.contract_number = None
                attempts += 1
        return super().save(*args, **kwargs)
