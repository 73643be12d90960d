from datetime import date
from decimal import Decimal

import pytest

from services.accounts import AccountInUseError
from store.base import WriteRejectedError


class TestAccountService:
    """Tests for AccountService."""

    def test_create_account(self, services, workspace):
        """Test creating a new account."""
        account = services.accounts.create(
            workspace.id, "user_1", "Wallet", "cash", initial_balance="150.25"
        )

        assert account.id.startswith("acc_")
        assert account.workspace_id == workspace.id
        assert account.name == "Wallet"
        assert account.type == "cash"
        assert account.initial_balance == Decimal("150.25")
        assert account.user_id == "user_1"
        assert account.created_at is not None

    def test_create_strips_name(self, services, workspace):
        """Test surrounding whitespace is removed from names."""
        account = services.accounts.create(workspace.id, "user_1", "  Bank  ", "bank")

        assert account.name == "Bank"

    @pytest.mark.parametrize(
        "name,account_type,balance",
        [
            ("", "cash", "0"),
            ("   ", "cash", "0"),
            ("Wallet", "crypto", "0"),
            ("Wallet", "cash", "lots"),
        ],
    )
    def test_create_rejects_invalid_input(
        self, services, workspace, name, account_type, balance
    ):
        """Test validation errors on create."""
        with pytest.raises(ValueError):
            services.accounts.create(
                workspace.id, "user_1", name, account_type, initial_balance=balance
            )

        assert services.accounts.find_all(workspace.id) == []

    def test_find_account_by_id(self, services, workspace):
        """Test finding an account by ID."""
        created = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        found = services.accounts.find(workspace.id, created.id)

        assert found is not None
        assert found.id == created.id
        assert found.name == "Wallet"

    def test_find_account_by_id_not_found(self, services, workspace):
        """Test finding a non-existent account by ID returns None."""
        assert services.accounts.find(workspace.id, "acc_missing") is None

    def test_find_by_name_first_wins(self, services, workspace):
        """Test duplicate names resolve to the earliest account."""
        first = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")
        services.accounts.create(workspace.id, "user_1", "Wallet", "bank")

        found = services.accounts.find_by_name(workspace.id, "Wallet")

        assert found.id == first.id

    def test_find_by_name_case_sensitive(self, services, workspace):
        """Test that account name lookup is case-sensitive."""
        services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        assert services.accounts.find_by_name(workspace.id, "wallet") is None

    def test_find_all_in_creation_order(self, services, workspace):
        """Test accounts are listed in creation order."""
        for name in ("Zeta", "Alpha", "Mid"):
            services.accounts.create(workspace.id, "user_1", name, "cash")

        names = [a.name for a in services.accounts.find_all(workspace.id)]

        assert names == ["Zeta", "Alpha", "Mid"]

    def test_accounts_are_scoped_to_workspace(self, services, workspace):
        """Test another workspace does not see the accounts."""
        other = services.workspaces.create("user_1", "Business")
        services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        assert services.accounts.find_all(other.id) == []

    def test_update_account(self, services, workspace):
        """Test updating name, note and initial balance."""
        account = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        updated = services.accounts.update(
            workspace.id,
            account.id,
            name="Pocket",
            note="daily spending",
            initial_balance="20",
        )

        assert updated.name == "Pocket"
        assert updated.note == "daily spending"
        assert updated.initial_balance == Decimal("20")

    def test_update_rejects_unknown_fields(self, services, workspace):
        """Test unsupported fields are rejected."""
        account = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        with pytest.raises(ValueError, match="Unsupported"):
            services.accounts.update(workspace.id, account.id, colour="red")

    def test_update_missing_account(self, services, workspace):
        """Test updating an unknown account is rejected by the store."""
        with pytest.raises(WriteRejectedError):
            services.accounts.update(workspace.id, "acc_missing", name="X")

    def test_delete_unused_account(self, services, workspace):
        """Test deleting an account without transactions."""
        account = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")

        assert services.accounts.delete(workspace.id, account.id) is True
        assert services.accounts.find(workspace.id, account.id) is None

    def test_delete_missing_account(self, services, workspace):
        """Test deleting a non-existent account returns False."""
        assert services.accounts.delete(workspace.id, "acc_missing") is False

    def test_delete_refused_while_referenced(self, services, workspace):
        """Test an account with transactions is kept unless forced."""
        account = services.accounts.create(workspace.id, "user_1", "Wallet", "cash")
        txn = services.transactions.create(
            workspace.id, "user_1", "expense", "5", "Coffee", "Food", "Wallet",
            date(2024, 3, 1),
        )

        with pytest.raises(AccountInUseError) as exc_info:
            services.accounts.delete(workspace.id, account.id)
        assert exc_info.value.count == 1

        assert services.accounts.delete(workspace.id, account.id, force=True) is True
        # Transactions are never cascaded
        assert services.transactions.find(workspace.id, txn.id) is not None

    def test_ensure_defaults_seeds_empty_workspace(self, services, workspace):
        """Test the default accounts are created once."""
        created = services.accounts.ensure_defaults(workspace.id, "user_1")

        accounts = services.accounts.find_all(workspace.id)
        assert created == 5
        assert [a.name for a in accounts] == [
            "Wallet",
            "Bank",
            "Cash",
            "Credit Card",
            "Savings",
        ]
        assert accounts[0].id == "acc_default_wallet"

    def test_ensure_defaults_is_idempotent(self, services, workspace):
        """Test seeding twice does not duplicate accounts."""
        services.accounts.ensure_defaults(workspace.id, "user_1")

        assert services.accounts.ensure_defaults(workspace.id, "user_1") == 0
        assert len(services.accounts.find_all(workspace.id)) == 5

    def test_ensure_defaults_skips_workspace_with_accounts(self, services, workspace):
        """Test a workspace that already has accounts is left alone."""
        services.accounts.create(workspace.id, "user_1", "Mine", "cash")

        assert services.accounts.ensure_defaults(workspace.id, "user_1") == 0
        assert len(services.accounts.find_all(workspace.id)) == 1
