"""Pick the best candidate version for a constraint."""

from itertools import zip_longest
from typing import Iterable, List, Optional

from .compare import compare_tokens
from .errors import EmptyVersionList, NoMatchingVersion, UnsupportedSnapshot
from .models import ConstraintKind, VersionConstraint
from .tokens import WILDCARD, ListToken, Token, TokenType, trailing_token
from .version import ParsedVersion, parse_version, unqualified_floor

SNAPSHOT_QUALIFIER = "snapshot"


def _is_wildcard_marker(token: Optional[Token]) -> bool:
    return token is not None and token.type is TokenType.STRING and token.value == WILDCARD


def _compare_to_ceiling(candidate: Optional[Token], ceiling: Optional[Token]) -> int:
    """Compare like compare_tokens, except the wildcard marker outranks anything at its position."""
    if _is_wildcard_marker(ceiling):
        return -1
    if ceiling is not None and ceiling.type is TokenType.LIST:
        if candidate is None:
            candidate = ListToken(())
        if candidate.type is TokenType.LIST:
            for left, right in zip_longest(candidate.items, ceiling.items):
                result = _compare_to_ceiling(left, right)
                if result:
                    return result
            return 0
    return compare_tokens(candidate, ceiling)


def is_wildcard(version: ParsedVersion) -> bool:
    """True when the version's trailing qualifier is the '+' marker."""
    return _is_wildcard_marker(trailing_token(version.items))


def is_snapshot(version: ParsedVersion) -> bool:
    token = trailing_token(version.items)
    return token is not None and token.type is TokenType.STRING and token.value == SNAPSHOT_QUALIFIER


def satisfies(candidate: ParsedVersion, constraint: VersionConstraint) -> bool:
    """Return whether a candidate meets an exact or wildcard constraint."""
    target = constraint.target
    if constraint.kind is ConstraintKind.EXACT:
        return candidate == target
    if constraint.kind is ConstraintKind.WILDCARD:
        floor = unqualified_floor(target)
        return candidate >= floor and _compare_to_ceiling(candidate.items, target.items) <= 0
    raise UnsupportedSnapshot(target.raw)


def _highest(pool: List[ParsedVersion]) -> ParsedVersion:
    """Return the highest version in pool, independent of input order.

    Mixed shapes such as '1-1', '1' and '1.rc1' do not compare transitively,
    so the scan runs over a canonical ordering. Equal versions keep their
    input order and the first one seen wins.
    """
    ordered = sorted(pool, key=lambda version: version.canonical)
    best = ordered[0]
    for candidate in ordered[1:]:
        if candidate > best:
            best = candidate
    return best


def resolve(candidates: Iterable[str], constraint: VersionConstraint) -> ParsedVersion:
    """Resolve a constraint against candidate version strings.

    Exact constraints return the first candidate equal to the target.
    Wildcard constraints return the highest candidate between the target's
    unqualified floor and the target itself; on ties the first one seen wins.

    Raises:
        EmptyVersionList: No candidates.
        NoMatchingVersion: Nothing satisfies the constraint.
        UnsupportedSnapshot: Snapshot constraints are never resolved here.
        MalformedVersion: A candidate cannot be parsed.
    """
    raw_candidates: List[str] = list(candidates)
    target = constraint.target.raw
    if not raw_candidates:
        raise EmptyVersionList(target)
    if constraint.kind is ConstraintKind.SNAPSHOT:
        raise UnsupportedSnapshot(target, raw_candidates)

    matches: List[ParsedVersion] = []
    for raw in raw_candidates:
        candidate = parse_version(raw)
        if not satisfies(candidate, constraint):
            continue
        if constraint.kind is ConstraintKind.EXACT:
            return candidate
        matches.append(candidate)

    if not matches:
        raise NoMatchingVersion(target, raw_candidates)
    return _highest(matches)


def resolve_latest(candidates: Iterable[str], include_snapshots: bool = False) -> ParsedVersion:
    """Return the highest candidate.

    Snapshots are skipped unless requested or nothing else is available.

    Raises:
        EmptyVersionList: No candidates.
    """
    parsed = [parse_version(raw) for raw in candidates]
    if not parsed:
        raise EmptyVersionList()
    pool = parsed if include_snapshots else [v for v in parsed if not is_snapshot(v)]
    if not pool:
        pool = parsed
    return _highest(pool)
