from django.contrib import admin

from .forms import CarForm, RentalDurationForm, RentalForm, SeasonForm
from .models import Car, Company, Customer, Rental, RentalDuration, Season


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "currency_symbol")
    prepopulated_fields = {"slug": ("name",)}
    search_fields = ("name", "slug")


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    form = CarForm
    list_display = ("plate_number", "company", "make", "model", "year", "daily_rate", "is_active")
    list_filter = ("company", "is_active")
    search_fields = ("plate_number", "make", "model")


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("full_name", "phone", "email", "license_number")
    search_fields = ("full_name", "email", "phone", "license_number")


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    form = SeasonForm
    list_display = ("name", "company", "period_label", "price_multiplier", "discount_label", "position")
    list_editable = ("position",)
    list_filter = ("company",)
    search_fields = ("name",)


@admin.register(RentalDuration)
class RentalDurationAdmin(admin.ModelAdmin):
    form = RentalDurationForm
    list_display = ("name", "company", "min_days", "max_days", "price_multiplier", "discount_label")
    list_filter = ("company",)
    search_fields = ("name",)


@admin.register(Rental)
class RentalAdmin(admin.ModelAdmin):
    form = RentalForm
    list_display = (
        "contract_number",
        "car",
        "customer",
        "start_date",
        "end_date",
        "daily_rate",
        "total_price",
        "season_name",
        "duration_name",
        "status",
    )
    list_filter = ("status", "start_date", "end_date")
    readonly_fields = (
        "contract_number",
        "daily_rate",
        "total_price",
        "season_multiplier",
        "duration_multiplier",
        "season_name",
        "duration_name",
    )
    search_fields = ("contract_number", "car__plate_number", "customer__full_name")

    def save_model(self, request, obj, form, change):
        if not change and not obj.created_by_id:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
