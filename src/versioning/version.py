"""Parsed version values, comparison and the semantic projection."""

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Optional, Union

from .compare import compare_tokens
from .tokenizer import tokenize
from .tokens import ListToken, TokenType, normalize, render_version


@total_ordering
@dataclass(frozen=True, eq=False)
class ParsedVersion:
    """Immutable parsed version.

    Equality and hashing use the canonical rendering of the normalized token
    tree; ordering uses the token comparator. The two agree.
    """
    raw: str
    items: ListToken = field(repr=False)
    canonical: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "items", normalize(self.items))
        object.__setattr__(self, "canonical", str(self.items))

    @classmethod
    def from_tokens(cls, items: ListToken, raw: Optional[str] = None) -> "ParsedVersion":
        """Build a version from an externally constructed token tree.

        Without raw text the version is rendered from the normalized tree.
        """
        if raw is None:
            raw = render_version(normalize(items))
        return cls(raw, items)

    def __eq__(self, other):
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        return self.canonical == other.canonical

    def __lt__(self, other):
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        return compare_tokens(self.items, other.items) < 0

    def __hash__(self):
        return hash(self.canonical)

    def __str__(self):
        return self.raw


@dataclass(frozen=True)
class SemanticVersion:
    """Conventional major.minor.incremental-build/qualifier view.

    Display only; never use it to order versions.
    """
    major: int = 0
    minor: int = 0
    incremental: int = 0
    build: int = 0
    qualifier: Optional[str] = None


VersionLike = Union[ParsedVersion, str]


def parse_version(raw: str) -> ParsedVersion:
    """Parse a version string.

    Raises:
        MalformedVersion: If the string cannot be tokenized.
    """
    return ParsedVersion(raw, tokenize(raw))


def _as_version(value: VersionLike) -> ParsedVersion:
    if isinstance(value, ParsedVersion):
        return value
    return parse_version(value)


def compare(left: VersionLike, right: VersionLike) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    return compare_tokens(_as_version(left).items, _as_version(right).items)


def to_semantic(version: VersionLike) -> SemanticVersion:
    """Project a parsed version onto its conventional fields."""
    version = _as_version(version)
    items = version.items.items
    pos = 0

    numbers = []
    while pos < len(items) and items[pos].type is TokenType.INTEGER:
        if len(numbers) < 3:
            numbers.append(items[pos].value)
        pos += 1
    numbers.extend([0] * (3 - len(numbers)))

    # A build number is a "-###" group holding exactly one integer.
    build = None
    if pos < len(items) and items[pos].type is TokenType.LIST:
        group = items[pos]
        if len(group) == 1 and group[0].type is TokenType.INTEGER:
            build = group[0].value
            pos += 1

    qualifier = None
    raw = version.raw.strip()
    if build is None and "-" in raw:
        qualifier = raw.split("-", 1)[1]
    elif pos < len(items) and items[pos].type is TokenType.STRING:
        qualifier = items[pos].value

    return SemanticVersion(
        major=numbers[0],
        minor=numbers[1],
        incremental=numbers[2],
        build=build or 0,
        qualifier=qualifier,
    )


def unqualified_floor(version: VersionLike) -> ParsedVersion:
    """Strip the trailing qualifier, keeping a numeric build group.

    Drops a trailing string token, or a trailing single-item group whose item
    is not an integer.
    """
    version = _as_version(version)
    items = list(version.items.items)
    if items:
        last = items[-1]
        if last.type is TokenType.STRING:
            items.pop()
        elif last.type is TokenType.LIST and len(last) == 1 and last[0].type is not TokenType.INTEGER:
            items.pop()
    return ParsedVersion.from_tokens(ListToken(tuple(items)))
