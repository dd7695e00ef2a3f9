from datetime import date, timedelta

from django import forms

from .models import Car, Rental, RentalDuration, Season
from .services.quotes import PricingError, quote_rental


class StyledModelForm(forms.ModelForm):
    """Apply basic Bootstrap classes to all widgets."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            widget = field.widget
            css = widget.attrs.get("class", "")
            if isinstance(widget, forms.CheckboxInput):
                widget.attrs["class"] = f"form-check-input {css}".strip()
            else:
                widget.attrs["class"] = f"form-control {css}".strip()


class CarForm(StyledModelForm):
    class Meta:
        model = Car
        fields = ["company", "plate_number", "make", "model", "year", "daily_rate", "is_active"]
        labels = {"daily_rate": "Base daily rate"}
        help_texts = {"daily_rate": "Season and duration multipliers are applied on top of this rate."}

    def clean_plate_number(self):
        plate = self.cleaned_data.get("plate_number") or ""
        return plate.strip().replace(" ", "").upper()


class SeasonForm(StyledModelForm):
    class Meta:
        model = Season
        fields = [
            "company",
            "name",
            "start_month",
            "start_day",
            "end_month",
            "end_day",
            "price_multiplier",
            "discount_label",
            "position",
        ]
        help_texts = {
            "start_month": "A start after the end (e.g. 12/20 - 01/20) spans the new year.",
            "discount_label": "Shown in the pricing matrix instead of the percentage.",
        }

    def clean_name(self):
        return (self.cleaned_data.get("name") or "").strip()


class RentalDurationForm(StyledModelForm):
    class Meta:
        model = RentalDuration
        fields = ["company", "name", "min_days", "max_days", "price_multiplier", "discount_label"]
        labels = {"max_days": "Maximum days (empty = no limit)"}

    def clean_name(self):
        return (self.cleaned_data.get("name") or "").strip()


class RentalForm(StyledModelForm):
    """
    Rental contract form. Prices are never typed in: they are recalculated
    from the car's base rate and its company's seasons and durations whenever
    the car or dates change.
    """

    class Meta:
        model = Rental
        fields = ["car", "customer", "start_date", "end_date", "status"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pricing = None
        if not self.is_bound:
            today = date.today()
            self.initial.setdefault("start_date", today)
            self.initial.setdefault("end_date", today + timedelta(days=1))
        for name in ("start_date", "end_date"):
            widget = self.fields[name].widget
            widget.input_type = "date"
            widget.attrs.setdefault("placeholder", "YYYY-MM-DD")
        self.fields["car"].queryset = Car.objects.filter(is_active=True).select_related("company")

    def clean(self):
        cleaned_data = super().clean()

        start_date = cleaned_data.get("start_date")
        end_date = cleaned_data.get("end_date")
        car = cleaned_data.get("car")

        if start_date and end_date and end_date <= start_date:
            self.add_error("end_date", "End date must be after start date.")
            return cleaned_data

        recalc_needed = not self.instance.pk or any(
            field in self.changed_data for field in ("car", "start_date", "end_date")
        )
        if recalc_needed and car and start_date and end_date:
            try:
                self.pricing = quote_rental(car, start_date, end_date)
            except PricingError as exc:
                self.add_error(None, str(exc))
        return cleaned_data

    def save(self, commit=True):
        # Runs full_clean() on a form not validated yet, which sets self.pricing.
        instance = super().save(commit=False)
        if self.pricing is not None:
            instance.apply_pricing(self.pricing)
        if commit:
            instance.save()
            self.save_m2m()
        return instance
