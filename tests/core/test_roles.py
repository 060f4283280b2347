"""
Test suite for role resolution.

System role: Verification of the permission source of truth
"""

from flowshare.core.roles import Role, can_edit, resolve_role
from flowshare.models.diagram import AccessEntry


class TestResolveRole:
    """Test suite for resolve_role()."""

    def test_owner_is_editor(self, sample_diagram) -> None:
        assert resolve_role(sample_diagram, "u1") is Role.EDITOR

    def test_owner_is_editor_even_with_viewer_entry(self, sample_diagram, now) -> None:
        """Owner override wins over a stale access entry."""
        sample_diagram.access["u1"] = AccessEntry(
            role=Role.VIEWER, email="owner@example.com", added_at=now
        )

        assert resolve_role(sample_diagram, "u1") is Role.EDITOR

    def test_listed_user_gets_entry_role(self, sample_diagram) -> None:
        assert resolve_role(sample_diagram, "u2") is Role.VIEWER
        assert resolve_role(sample_diagram, "u3") is Role.EDITOR

    def test_unlisted_user_has_no_role(self, sample_diagram) -> None:
        assert resolve_role(sample_diagram, "u9") is None

    def test_empty_access_map(self, sample_diagram) -> None:
        sample_diagram.access = {}

        assert resolve_role(sample_diagram, "u2") is None
        assert resolve_role(sample_diagram, "u1") is Role.EDITOR


class TestCanEdit:
    """Test suite for can_edit()."""

    def test_only_editor_can_edit(self) -> None:
        assert can_edit(Role.EDITOR) is True
        assert can_edit(Role.VIEWER) is False
        assert can_edit(None) is False

    def test_role_values_match_stored_strings(self) -> None:
        assert Role("editor") is Role.EDITOR
        assert Role.VIEWER.value == "viewer"
