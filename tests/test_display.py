"""Tests for display string derivation."""

from enumer.codegen.core.display import derive_display


class TestDeriveDisplay:
    def test_declared_name_by_default(self):
        assert derive_display("Pending") == "Pending"

    def test_trim_prefix_removes_one_leading_occurrence(self):
        assert derive_display("DirectionNorth", "Direction") == "North"
        assert derive_display("DirDirNorth", "Dir") == "DirNorth"

    def test_trim_prefix_without_match_is_noop(self):
        assert derive_display("North", "Direction") == "North"
        assert derive_display("NorthDirection", "Direction") == "NorthDirection"

    def test_empty_prefix_is_noop(self):
        assert derive_display("North", "") == "North"

    def test_comment_replaces_name(self):
        assert derive_display("Red", "", "red", True) == "red"

    def test_comment_supersedes_trim_prefix(self):
        assert derive_display("ColorRed", "Color", "crimson", True) == "crimson"

    def test_comment_ignored_when_disabled(self):
        assert derive_display("ColorRed", "Color", "crimson", False) == "Red"

    def test_blank_comment_falls_back_to_name(self):
        assert derive_display("ColorRed", "Color", "   ", True) == "Red"
        assert derive_display("ColorRed", "Color", None, True) == "Red"

    def test_comment_text_is_trimmed(self):
        assert derive_display("Red", "", "  dark red  ", True) == "dark red"
