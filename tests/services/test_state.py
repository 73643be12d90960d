from services.state import LocalStateService


class TestLocalStateService:
    """Tests for LocalStateService."""

    def test_defaults_without_file(self, tmp_path):
        """Test a missing state file means a fresh device."""
        state = LocalStateService(tmp_path / "state.toml")

        assert state.has_completed_onboarding() is False
        assert state.current_workspace_id() is None

    def test_values_persist(self, tmp_path):
        """Test values survive a new service instance."""
        path = tmp_path / "nested" / "state.toml"
        state = LocalStateService(path)
        state.complete_onboarding()
        state.set_current_workspace_id("ws_1")

        reloaded = LocalStateService(path)

        assert reloaded.has_completed_onboarding() is True
        assert reloaded.current_workspace_id() == "ws_1"

    def test_clear(self, tmp_path):
        """Test sign-out forgets both keys."""
        state = LocalStateService(tmp_path / "state.toml")
        state.complete_onboarding()
        state.set_current_workspace_id("ws_1")

        state.clear()

        assert state.has_completed_onboarding() is False
        assert state.current_workspace_id() is None

    def test_unreadable_file_is_ignored(self, tmp_path):
        """Test a corrupt state file reads as empty."""
        path = tmp_path / "state.toml"
        path.write_text("this is = = not toml")

        state = LocalStateService(path)

        assert state.current_workspace_id() is None
        state.set_current_workspace_id("ws_2")
        assert state.current_workspace_id() == "ws_2"
