from django.urls import path

from . import views

app_name = "rentals"

urlpatterns = [
    path("cars/<int:pk>/quote/", views.pricing_quote, name="pricing_quote"),
    path("cars/<int:pk>/pricing-matrix/", views.car_pricing_matrix, name="car_pricing_matrix"),
    path(
        "cars/<int:pk>/pricing-matrix/export/",
        views.export_pricing_matrix_csv,
        name="export_pricing_matrix_csv",
    ),
    path(
        "companies/<int:pk>/pricing-rules/",
        views.company_pricing_rules,
        name="company_pricing_rules",
    ),
]
