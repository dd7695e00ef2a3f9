from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from rentals.models import Car
from rentals.tests.factories import PricingRulesTestMixin


class PricingViewsTestBase(PricingRulesTestMixin, TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="tester", password="pass")
        self.client.force_login(self.user)
        self.company = self.create_company_with_rules()
        self.car = Car.objects.create(
            company=self.company,
            plate_number="A001AA",
            make="Toyota",
            model="Corolla",
            year=2022,
            daily_rate=Decimal("1000.00"),
        )


class PricingQuoteViewTests(PricingViewsTestBase):
    def setUp(self):
        super().setUp()
        self.url = reverse("rentals:pricing_quote", args=[self.car.pk])

    def test_quote(self):
        response = self.client.get(self.url, {"start": "2025-07-01", "end": "2025-07-06"})
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["days"], 5)
        self.assertEqual(Decimal(payload["daily_price"]), Decimal("1080"))
        self.assertEqual(Decimal(payload["total_price"]), Decimal("5400"))
        self.assertEqual(payload["season_name"], "High season")
        self.assertEqual(payload["duration_name"], "4-7 days")
        self.assertEqual(payload["car"], self.car.pk)

    def test_partial_day_counts(self):
        response = self.client.get(self.url, {"start": "2025-11-01T10:00", "end": "2025-11-02T12:00"})
        payload = response.json()
        self.assertEqual(payload["days"], 2)
        self.assertIsNone(payload["season_name"])
        self.assertEqual(Decimal(payload["total_price"]), Decimal("2000"))

    def test_european_date_format(self):
        response = self.client.get(self.url, {"start": "01.07.2025", "end": "06.07.2025"})
        self.assertEqual(response.json()["days"], 5)

    def test_bad_dates(self):
        response = self.client.get(self.url, {"start": "soon", "end": "2025-07-06"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_empty_range(self):
        response = self.client.get(self.url, {"start": "2025-07-06", "end": "2025-07-01"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "End date must be after start date.")

    def test_unknown_car(self):
        url = reverse("rentals:pricing_quote", args=[self.car.pk + 100])
        response = self.client.get(url, {"start": "2025-07-01", "end": "2025-07-06"})
        self.assertEqual(response.status_code, 404)

    def test_login_required(self):
        self.client.logout()
        response = self.client.get(self.url, {"start": "2025-07-01", "end": "2025-07-06"})
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response["Location"].startswith(reverse("admin:login")))

        response = self.client.get(self.url, {"start": "2025-07-01", "end": "2025-07-06"}, follow=True)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.redirect_chain[-1][1], 302)


class PricingMatrixViewTests(PricingViewsTestBase):
    def test_matrix(self):
        response = self.client.get(reverse("rentals:car_pricing_matrix", args=[self.car.pk]))
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual([row["season"] for row in payload["rows"]], ["Winter holidays", "High season"])
        self.assertEqual([item["name"] for item in payload["durations"]], ["1-3 days", "4-7 days", "29+ days"])

        high_season = payload["rows"][1]
        self.assertEqual(high_season["markup"], "+20%")
        week = high_season["cells"][1]
        self.assertEqual(week["days"], 6)
        self.assertEqual(Decimal(week["daily_price"]), Decimal("1080"))
        self.assertEqual(Decimal(week["total_price"]), Decimal("6480"))

    def test_csv_export(self):
        response = self.client.get(reverse("rentals:export_pricing_matrix_csv", args=[self.car.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/csv")
        lines = response.content.decode().splitlines()
        self.assertEqual(lines[0].split(",")[:4], ["season", "period", "markup", "1-3 days per day"])
        self.assertTrue(lines[2].startswith("High season,05/06 - 10/20,+20%,1200.00,2400.00"))


class CompanyPricingRulesViewTests(PricingViewsTestBase):
    def test_rules_listing(self):
        response = self.client.get(reverse("rentals:company_pricing_rules", args=[self.company.pk]))
        payload = response.json()
        self.assertEqual(payload["seasons"][0]["name"], "Winter holidays")
        self.assertEqual(payload["seasons"][0]["period"], "12/20 - 01/20")
        self.assertIsNone(payload["durations"][-1]["max_days"])
