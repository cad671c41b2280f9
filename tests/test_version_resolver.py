"""Tests for constraint resolution against candidate version lists."""

import itertools

import pytest

from versioning.errors import EmptyVersionList, MalformedVersion, NoMatchingVersion, UnsupportedSnapshot
from versioning.models import ConstraintKind, VersionConstraint
from versioning.parser import parse_constraint
from versioning.resolver import is_snapshot, is_wildcard, resolve, resolve_latest, satisfies
from versioning.version import parse_version, unqualified_floor


class TestWildcard:
    """'floor.+' constraints."""

    def test_picks_highest_within_floor(self):
        picked = resolve(["1.5.0", "1.5.1", "1.6.0"], VersionConstraint.wildcard("1.5.+"))
        assert picked.raw == "1.5.1"

    def test_accepts_plain_floor(self):
        assert resolve(["1.4.9", "1.5", "1.6"], VersionConstraint.wildcard("1.5.+")).raw == "1.5"

    def test_includes_qualified_versions_above_floor(self):
        picked = resolve(["1.5.1", "1.5.2-rc1", "1.6.0-alpha"], VersionConstraint.wildcard("1.5.+"))
        assert picked.raw == "1.5.2-rc1"

    def test_excludes_prereleases_of_floor(self):
        with pytest.raises(NoMatchingVersion):
            resolve(["1.5.0-alpha", "1.4"], VersionConstraint.wildcard("1.5.+"))

    def test_major_wildcard(self):
        picked = resolve(["1.0", "1.9.3", "2.0", "0.9"], VersionConstraint.wildcard("1.+"))
        assert picked.raw == "1.9.3"

    def test_zero_component_is_part_of_the_prefix(self):
        picked = resolve(["1.0.3", "1.1.0", "1"], VersionConstraint.wildcard("1.0.+"))
        assert picked.raw == "1.0.3"

    def test_ties_keep_first_encountered(self):
        picked = resolve(["1.5.1", "1.5.1.0", "1.5.0"], VersionConstraint.wildcard("1.5.+"))
        assert picked.raw == "1.5.1"

    def test_no_match_reports_candidates(self):
        with pytest.raises(NoMatchingVersion) as excinfo:
            resolve(["2.0", "3.0"], VersionConstraint.wildcard("1.5.+"))
        assert excinfo.value.target == "1.5.+"
        assert excinfo.value.candidates == ("2.0", "3.0")

    def test_accepts_any_iterable(self):
        picked = resolve(iter(["1.5.3", "1.5.10"]), parse_constraint("1.5.+"))
        assert picked.raw == "1.5.10"


class TestExact:
    """Exact constraints."""

    def test_returns_equal_candidate(self):
        assert resolve(["1.0", "1.1", "1.2"], VersionConstraint.exact("1.1")).raw == "1.1"

    def test_matches_by_value(self):
        assert resolve(["1.0", "1.1"], VersionConstraint.exact("1.1.0")).raw == "1.1"

    def test_missing_version(self):
        with pytest.raises(NoMatchingVersion):
            resolve(["1.0", "1.1"], VersionConstraint.exact("1.3"))


class TestFailures:
    """Conditions that never resolve."""

    def test_empty_candidates(self):
        with pytest.raises(EmptyVersionList):
            resolve([], VersionConstraint.wildcard("1.5.+"))
        with pytest.raises(EmptyVersionList):
            resolve([], VersionConstraint.exact("1.0"))

    def test_snapshot_is_unsupported(self):
        with pytest.raises(UnsupportedSnapshot):
            resolve(["1.0-SNAPSHOT"], parse_constraint("1.0-SNAPSHOT"))

    def test_snapshot_check_in_satisfies(self):
        with pytest.raises(UnsupportedSnapshot):
            satisfies(parse_version("1.0"), VersionConstraint.snapshot("1.0-SNAPSHOT"))

    def test_malformed_candidate_propagates(self):
        with pytest.raises(MalformedVersion):
            resolve(["1.0", ""], VersionConstraint.exact("2.0"))


class TestConstraintParsing:
    """Classification of version text."""

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("1.5.+", ConstraintKind.WILDCARD),
            ("1.0-+", ConstraintKind.WILDCARD),
            ("1.0-SNAPSHOT", ConstraintKind.SNAPSHOT),
            ("1.0-alpha-1-snapshot", ConstraintKind.SNAPSHOT),
            ("1.0", ConstraintKind.EXACT),
            ("1.0-rc1", ConstraintKind.EXACT),
        ],
    )
    def test_kinds(self, text, kind):
        constraint = parse_constraint(text)
        assert constraint.kind is kind
        assert str(constraint) == text

    def test_predicates(self):
        assert is_wildcard(parse_version("1.5.+"))
        assert not is_wildcard(parse_version("1.5"))
        assert is_snapshot(parse_version("2.0-SNAPSHOT"))
        assert not is_snapshot(parse_version("2.0"))


class TestUnqualifiedFloor:
    """Lower bound derivation."""

    @pytest.mark.parametrize(
        "raw, canonical",
        [
            ("1.5.+", "[1,5]"),
            ("1.0-+", "[1]"),
            ("2.0.1-xyz", "[2,0,1]"),
            ("2.0-1", "[2,[1]]"),
            ("1.0-alpha-1", "[1,[alpha,[1]]]"),
            ("1.0.0", "[1]"),
        ],
    )
    def test_floor(self, raw, canonical):
        assert unqualified_floor(parse_version(raw)).canonical == canonical

    def test_floor_raw_text(self):
        assert unqualified_floor("1.5.+").raw == "1.5"


class TestLatest:
    """Latest-available selection."""

    def test_skips_snapshots(self):
        assert resolve_latest(["1.0", "2.0-SNAPSHOT", "1.5"]).raw == "1.5"

    def test_includes_snapshots_on_request(self):
        assert resolve_latest(["1.0", "2.0-SNAPSHOT"], include_snapshots=True).raw == "2.0-SNAPSHOT"

    def test_falls_back_to_snapshots(self):
        assert resolve_latest(["1.0-SNAPSHOT", "1.1-SNAPSHOT"]).raw == "1.1-SNAPSHOT"

    def test_empty(self):
        with pytest.raises(EmptyVersionList):
            resolve_latest([])

    def test_independent_of_input_order(self):
        """'1-1' > '1' > '1.RC1' > '1-1' forms a cycle; the pick must not depend on order."""
        picks = {resolve_latest(list(order)).raw for order in itertools.permutations(["1.RC1", "1", "1-1"])}
        assert picks == {"1"}

    def test_wildcard_independent_of_input_order(self):
        versions = ["1-1", "1.sp1", "1", "1.0-1"]
        picks = {resolve(list(order), parse_constraint("1.+")).raw for order in itertools.permutations(versions)}
        assert picks == {"1.sp1"}
