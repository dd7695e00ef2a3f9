from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from rentals.services.pricing import DurationBracket, SeasonRule
from rentals.services.pricing_matrix import build_pricing_matrix, season_markup_label


def make_season(name, multiplier, label=None):
    return SeasonRule(
        id=None,
        name=name,
        start_month=5,
        start_day=6,
        end_month=10,
        end_day=20,
        price_multiplier=Decimal(multiplier),
        discount_label=label,
    )


class PricingMatrixTests(SimpleTestCase):
    def setUp(self):
        self.durations = [
            DurationBracket(id=2, name="61+ days", min_days=61, max_days=None, price_multiplier=Decimal("0.75")),
            DurationBracket(id=1, name="1-3 days", min_days=1, max_days=3, price_multiplier=Decimal("1.00")),
        ]

    def test_cells_use_sample_days(self):
        matrix = build_pricing_matrix(Decimal("100"), [make_season("High season", "1.2")], self.durations)

        self.assertEqual([duration.name for duration in matrix.durations], ["1-3 days", "61+ days"])
        row = matrix.rows[0]
        self.assertEqual(row.season_name, "High season")
        self.assertEqual(row.period, "05/06 - 10/20")
        self.assertEqual(row.markup_label, "+20%")

        short, long = row.cells
        self.assertEqual(short.days, 2)
        self.assertEqual(short.daily_price, Decimal("120"))
        self.assertEqual(short.total_price, Decimal("240"))
        self.assertEqual(long.days, 63)
        self.assertEqual(long.daily_price, Decimal("90"))
        self.assertEqual(long.total_price, Decimal("5670"))

    def test_standard_row_without_seasons(self):
        matrix = build_pricing_matrix(50, [], self.durations)
        self.assertEqual(len(matrix.rows), 1)
        row = matrix.rows[0]
        self.assertEqual(row.season_name, "Standard price")
        self.assertEqual(row.period, "01/01 - 12/31")
        self.assertEqual(row.markup_label, "Base rate")
        self.assertEqual(row.cells[0].daily_price, Decimal("50"))

    def test_limits(self):
        seasons = [make_season(f"Season {idx}", "1.1") for idx in range(3)]
        matrix = build_pricing_matrix(100, seasons, self.durations, max_seasons=2, max_durations=1)
        self.assertEqual(len(matrix.rows), 2)
        self.assertEqual([cell.duration_name for cell in matrix.rows[0].cells], ["1-3 days"])

    @override_settings(PRICING_MATRIX_MAX_SEASONS=1, PRICING_MATRIX_MAX_DURATIONS=6)
    def test_limits_default_to_settings(self):
        seasons = [make_season("First", "1.1"), make_season("Second", "1.2")]
        matrix = build_pricing_matrix(100, seasons, self.durations)
        self.assertEqual([row.season_name for row in matrix.rows], ["First"])

    def test_markup_labels(self):
        self.assertEqual(season_markup_label(make_season("Low", "0.85")), "-15%")
        self.assertEqual(season_markup_label(make_season("Base", "1.0")), "Base rate")
        self.assertEqual(season_markup_label(make_season("Peak", "1.5", label="Peak rate")), "Peak rate")

    def test_markup_half_percent_rounds_up(self):
        self.assertEqual(season_markup_label(make_season("Peak", "1.125")), "+13%")
        self.assertEqual(season_markup_label(make_season("Shoulder", "1.135")), "+14%")
        self.assertEqual(season_markup_label(make_season("Low", "0.875")), "-12%")
        self.assertEqual(season_markup_label(make_season("Almost base", "0.995")), "0%")

    def test_as_dict(self):
        matrix = build_pricing_matrix(Decimal("100"), [make_season("High season", "1.2")], self.durations)
        payload = matrix.as_dict()
        self.assertEqual(payload["durations"][1]["sample_days"], 63)
        self.assertIsNone(payload["durations"][1]["max_days"])
        self.assertEqual(Decimal(payload["rows"][0]["cells"][0]["total_price"]), Decimal("240"))
