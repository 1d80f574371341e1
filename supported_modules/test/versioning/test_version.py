"""Tests for supported_modules.versioning.version."""

from __future__ import annotations

import pytest

from supported_modules.versioning import (
    Version,
    branch_major,
    branch_sort_key,
    is_major_branch,
    is_numeric_branch,
    parse_version,
    stable_tag_minor,
)


class TestVersion:
    def test_parse_components(self) -> None:
        v = Version.parse("5.1.2")
        assert v.parts == (5, 1, 2)
        assert v.major == 5
        assert v.prerelease is None

    def test_parse_prerelease(self) -> None:
        v = Version.parse("5.1.0-beta1")
        assert v.prerelease == "beta1"

    def test_parse_invalid_raises(self) -> None:
        with pytest.raises(ValueError, match="invalid version"):
            Version.parse("main")

    def test_missing_components_count_as_zero(self) -> None:
        assert Version.parse("5") == Version.parse("5.0.0")
        assert hash(Version.parse("5")) == hash(Version.parse("5.0"))

    def test_numeric_ordering(self) -> None:
        assert Version.parse("4.13") < Version.parse("5")
        assert Version.parse("5.1") > Version.parse("5.0.9")
        assert Version.parse("4.10") > Version.parse("4.9")

    def test_prerelease_ordering(self) -> None:
        ordered = ["5.0.0-dev", "5.0.0-alpha1", "5.0.0-beta1", "5.0.0-beta2", "5.0.0-rc1", "5.0.0"]
        versions = [Version.parse(v) for v in ordered]
        assert sorted(reversed(versions)) == versions

    def test_unknown_prerelease_sorts_below_dev(self) -> None:
        assert Version.parse("5.0.0-foo") < Version.parse("5.0.0-dev")

    def test_unknown_prerelease_number_compares_numerically(self) -> None:
        assert Version.parse("5.0.0-foo9") < Version.parse("5.0.0-foo10")

    def test_unknown_prerelease_labels_are_distinct(self) -> None:
        assert Version.parse("5.0.0-bar1") != Version.parse("5.0.0-foo1")
        assert Version.parse("5.0.0-bar1") < Version.parse("5.0.0-foo1")

    def test_prerelease_aliases_are_equal(self) -> None:
        assert Version.parse("5.0.0-a1") == Version.parse("5.0.0-alpha1")

    def test_str(self) -> None:
        assert str(Version((5, 1), "beta1")) == "5.1-beta1"
        assert str(Version.parse("4.13.11")) == "4.13.11"

    def test_compare_with_other_type(self) -> None:
        assert Version.parse("5") != "5"

    def test_frozen(self) -> None:
        v = Version.parse("5")
        with pytest.raises(AttributeError):
            v.parts = (6,)  # type: ignore[misc]


class TestParseVersion:
    def test_accepts_v_prefix(self) -> None:
        assert parse_version("v5.1.0") == Version((5, 1, 0))

    def test_strips_whitespace(self) -> None:
        assert parse_version(" 5.1 ") == Version((5, 1))

    @pytest.mark.parametrize("label", ["", "main", "5.x", "pulls/5/fix", "5..1"])
    def test_rejects_non_versions(self, label: str) -> None:
        assert parse_version(label) is None


class TestBranchLabels:
    @pytest.mark.parametrize("branch", ["5", "5.1", "10.22"])
    def test_numeric_branches(self, branch: str) -> None:
        assert is_numeric_branch(branch)

    @pytest.mark.parametrize("branch", ["main", "5.1.2", "5.x", "pulls/5/fix", "5.1-release"])
    def test_non_numeric_branches(self, branch: str) -> None:
        assert not is_numeric_branch(branch)

    def test_major_branch(self) -> None:
        assert is_major_branch("5")
        assert not is_major_branch("5.1")
        assert not is_major_branch("main")

    def test_branch_major(self) -> None:
        assert branch_major("5") == 5
        assert branch_major("4.13") == 4
        assert branch_major("main") is None

    def test_sort_key_puts_major_after_its_minors(self) -> None:
        branches = ["5", "5.1", "4", "6", "4.13", "5.0", "4.9"]
        assert sorted(branches, key=branch_sort_key) == ["4.9", "4.13", "4", "5.0", "5.1", "5", "6"]

    def test_sort_key_rejects_non_numeric(self) -> None:
        with pytest.raises(ValueError, match="not a numeric branch"):
            branch_sort_key("main")


class TestStableTagMinor:
    def test_stable_tag(self) -> None:
        assert stable_tag_minor("4.13.11") == ("4", "4.13")

    def test_leading_zeros_normalised(self) -> None:
        assert stable_tag_minor("05.01.0") == ("5", "5.1")

    @pytest.mark.parametrize("tag", ["5.1.0-beta1", "5.1.0-rc1", "v5.1.0", "5.1", "latest"])
    def test_ignored_tags(self, tag: str) -> None:
        assert stable_tag_minor(tag) is None
