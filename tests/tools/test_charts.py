"""Tests for the daily chart series."""

from datetime import date
from decimal import Decimal

import pytest

from tests.helpers import make_transaction
from tools.charts import build_daily_series, days_in_month


class TestBuildDailySeries:
    """Tests for build_daily_series."""

    @pytest.mark.parametrize(
        "year,month,expected",
        [
            (2024, 2, 29),
            (2023, 2, 28),
            (2024, 4, 30),
            (2024, 12, 31),
            (1900, 2, 28),
            (2000, 2, 29),
        ],
    )
    def test_one_point_per_day(self, year, month, expected):
        """Test both series have exactly one point per day of the month."""
        series = build_daily_series([], year, month)

        assert days_in_month(year, month) == expected
        assert len(series.income_points) == expected
        assert len(series.expense_points) == expected
        assert [p.day for p in series.income_points] == list(range(1, expected + 1))

    def test_empty_month_is_all_zero(self):
        """Test a month without activity gives zero points."""
        series = build_daily_series([], 2024, 3)

        assert all(p.value == Decimal("0") for p in series.income_points)
        assert all(p.value == Decimal("0") for p in series.expense_points)

    def test_sums_per_day(self):
        """Test same-day transactions are summed into one bucket."""
        ledger = [
            make_transaction("expense", "10", day=date(2024, 3, 5)),
            make_transaction("expense", "2.5", day=date(2024, 3, 5)),
            make_transaction("income", "100", day=date(2024, 3, 1)),
            make_transaction("expense", "99", day=date(2024, 3, 31)),
        ]

        series = build_daily_series(ledger, 2024, 3)

        assert series.expense_points[4].value == Decimal("12.5")
        assert series.income_points[0].value == Decimal("100")
        assert series.expense_points[30].value == Decimal("99")
        assert series.income_points[4].value == Decimal("0")

    def test_ignores_other_months_and_excluded(self):
        """Test only counted transactions of the month are plotted."""
        ledger = [
            make_transaction("expense", "10", day=date(2024, 4, 5)),
            make_transaction("expense", "20", day=date(2024, 3, 5), excluded=True),
            make_transaction("expense", "30", day=None),
        ]

        series = build_daily_series(ledger, 2024, 3)

        assert sum(p.value for p in series.expense_points) == Decimal("0")

    def test_independent_of_arrival_order(self):
        """Test the series is the same whatever order transactions arrive in."""
        ledger = [
            make_transaction(
                "income" if n % 3 else "expense", str(n), day=date(2024, 3, 1 + n % 31)
            )
            for n in range(1, 60)
        ]

        forward = build_daily_series(ledger, 2024, 3)
        backward = build_daily_series(list(reversed(ledger)), 2024, 3)

        assert forward == backward

    def test_excluding_equals_removing(self):
        """Test an excluded transaction leaves every point unchanged."""
        ledger = [
            make_transaction("income", "40", day=date(2024, 3, 2)),
            make_transaction("expense", "15", day=date(2024, 3, 9)),
        ]
        excluded = make_transaction("expense", "999", day=date(2024, 3, 9), excluded=True)

        with_excluded = build_daily_series(ledger + [excluded], 2024, 3)
        without = build_daily_series(ledger, 2024, 3)

        assert with_excluded == without
        assert with_excluded.expense_points[8].value == Decimal("15")

    def test_invalid_month_raises(self):
        """Test month 13 is rejected."""
        with pytest.raises(ValueError):
            build_daily_series([], 2024, 13)

    def test_to_dict(self):
        """Test the serializable form lists (day, value) pairs."""
        series = build_daily_series(
            [make_transaction("income", "5", day=date(2024, 2, 2))], 2024, 2
        )

        data = series.to_dict()

        assert len(data["income"]) == 29
        assert data["income"][1] == (2, Decimal("5"))
