"""Tests for account and category reference resolution."""

from tests.helpers import make_account, make_category
from tools.resolver import (
    FALLBACK_ACCOUNT_ICON,
    FALLBACK_CATEGORY_ICON,
    NEUTRAL_COLOR,
    resolve_account,
    resolve_account_display,
    resolve_category,
    resolve_category_display,
)


class TestResolveAccount:
    """Tests for resolve_account."""

    def test_first_name_match_wins(self):
        """Test duplicate names resolve to the first account."""
        first = make_account("Wallet")
        second = make_account("Wallet")

        assert resolve_account("Wallet", [first, second]) is first

    def test_id_match_wins(self):
        """Test an existing id beats the name."""
        first = make_account("Wallet", id="acc_1")
        other = make_account("Bank", id="acc_2")

        assert resolve_account("Wallet", [first, other], "acc_2") is other

    def test_unknown_name(self):
        """Test a stale name resolves to nothing."""
        assert resolve_account("Old Wallet", [make_account("Wallet")]) is None
        assert resolve_account(None, [make_account("Wallet")]) is None

    def test_name_is_case_sensitive(self):
        """Test names match exactly."""
        assert resolve_account("wallet", [make_account("Wallet")]) is None


class TestResolveCategory:
    """Tests for resolve_category."""

    def test_type_must_match(self):
        """Test a same-named category of the other type does not match."""
        income = make_category("Bonus", "income")

        assert resolve_category("Bonus", "expense", [income]) is None
        assert resolve_category("Bonus", "income", [income]) is income

    def test_id_of_other_type_ignored(self):
        """Test an id pointing at a category of the other type is not used."""
        income = make_category("Gift", "income", id="cat_1")
        expense = make_category("Gift", "expense", id="cat_2")

        assert resolve_category("Gift", "expense", [income, expense], "cat_1") is expense


class TestDisplay:
    """Tests for display fallbacks."""

    def test_category_display_from_category(self):
        """Test a resolved category supplies its icon and color."""
        food = make_category("Food", icon="restaurant-outline", color="#e74c3c")

        display = resolve_category_display("Food", "expense", [food])

        assert display.icon == "restaurant-outline"
        assert display.color == "#e74c3c"

    def test_category_display_fallback_by_type(self):
        """Test unresolved categories get the per-type color."""
        expense = resolve_category_display("Gone", "expense", [])
        income = resolve_category_display("Gone", "income", [])
        other = resolve_category_display("Gone", "transfer", [])

        assert expense.icon == FALLBACK_CATEGORY_ICON
        assert expense.color == "#e74c3c"
        assert income.color == "#27ae60"
        assert other.color == NEUTRAL_COLOR

    def test_account_display(self):
        """Test account display follows the account type."""
        cash = make_account("Wallet", "cash")
        bank = make_account("Bank", "bank")

        assert resolve_account_display("Wallet", [cash, bank]).icon == "cash-outline"
        assert resolve_account_display("Bank", [cash, bank]).color == "#3498db"

        missing = resolve_account_display("Old Wallet", [cash, bank])
        assert missing.icon == FALLBACK_ACCOUNT_ICON
        assert missing.color == NEUTRAL_COLOR
