import pytest


class TestWorkspaceService:
    """Tests for WorkspaceService."""

    def test_create_workspace(self, services):
        """Test creating a workspace for a user."""
        workspace = services.workspaces.create("user_1", "Household", "EUR")

        assert workspace.id.startswith("user_1_")
        assert workspace.name == "Household"
        assert workspace.currency == "EUR"
        assert workspace.user_id == "user_1"
        assert workspace.is_active is True

    def test_create_uses_default_currency(self, services):
        """Test the configured currency is used when none is given."""
        workspace = services.workspaces.create("user_1", "Household")

        assert workspace.currency == services.config.default_currency

    @pytest.mark.parametrize("user_id,name", [("", "Household"), ("user_1", "  ")])
    def test_create_validates(self, services, user_id, name):
        """Test a user and a name are required."""
        with pytest.raises(ValueError):
            services.workspaces.create(user_id, name)

    def test_find_for_user(self, services):
        """Test users only see their own workspaces, in creation order."""
        first = services.workspaces.create("user_1", "Household")
        services.workspaces.create("user_2", "Theirs")
        second = services.workspaces.create("user_1", "Business")

        found = services.workspaces.find_for_user("user_1")

        assert [w.id for w in found] == [first.id, second.id]

    def test_find(self, services):
        """Test finding a workspace by ID."""
        created = services.workspaces.create("user_1", "Household")

        assert services.workspaces.find(created.id).name == "Household"
        assert services.workspaces.find("missing") is None
