"""Token model for parsed Maven versions.

A version is a tree of three token variants: integers, qualifier strings and
nested lists. Lists are hyphen-delimited sub-groups; the root list is the
whole version.

Adapted from the Apache Maven versioning rules:
https://cwiki.apache.org/confluence/display/MAVENOLD/Versioning
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Iterator, List, Tuple, Union


class TokenType(Enum):
    """Discriminator for the token variants."""
    INTEGER = "integer"
    STRING = "string"
    LIST = "list"


# Qualifier ordering, ascending. The empty string is the plain release.
QUALIFIERS: Tuple[str, ...] = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")

# a1 = alpha-1, b1 = beta-1, m1 = milestone-1
SHORT_ALIASES = MappingProxyType({"a": "alpha", "b": "beta", "m": "milestone"})

ALIASES = MappingProxyType({"ga": "", "final": "", "cr": "rc"})

RELEASE_RANK = str(QUALIFIERS.index(""))

# Qualifier marking a "this floor or anything above it" request, e.g. 1.5.+
WILDCARD = "+"

# Largest value an integer item may hold (signed 64-bit).
MAX_INTEGER = 2 ** 63 - 1


def qualifier_rank(qualifier: str) -> str:
    """Return the sortable rank key for a qualifier.

    Known qualifiers rank by their table index; unknown ones sort after every
    known qualifier, lexicographically among themselves.
    """
    try:
        return str(QUALIFIERS.index(qualifier))
    except ValueError:
        return f"{len(QUALIFIERS)}-{qualifier}"


@dataclass(frozen=True)
class IntegerToken:
    """Numeric version item."""
    value: int = 0

    type: ClassVar[TokenType] = TokenType.INTEGER

    def is_null(self) -> bool:
        return self.value == 0

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringToken:
    """Qualifier version item, stored after alias expansion."""
    value: str = ""

    type: ClassVar[TokenType] = TokenType.STRING

    @classmethod
    def of(cls, text: str, followed_by_digit: bool = False) -> "StringToken":
        """Build a token from scanned text, applying the alias tables."""
        if followed_by_digit and len(text) == 1:
            text = SHORT_ALIASES.get(text, text)
        return cls(ALIASES.get(text, text))

    @property
    def rank(self) -> str:
        return qualifier_rank(self.value)

    def is_null(self) -> bool:
        return self.rank == RELEASE_RANK

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ListToken:
    """Ordered group of tokens; the root of a version or a hyphen sub-group."""
    items: Tuple["Token", ...] = ()

    type: ClassVar[TokenType] = TokenType.LIST

    def is_null(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Token"]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __str__(self) -> str:
        return "[" + ",".join(str(item) for item in self.items) + "]"


Token = Union[IntegerToken, StringToken, ListToken]


def strip_trailing_nulls(items: List[Token]) -> None:
    """Drop null items from the end of a mutable item list, in place."""
    while items and items[-1].is_null():
        items.pop()


def normalize(token: Token) -> Token:
    """Return the token with every list stripped of trailing null items.

    Applies recursively, so an inner list that normalizes to empty becomes
    null itself and is removed when it trails. Idempotent.
    """
    if token.type is not TokenType.LIST:
        return token
    items = [normalize(item) for item in token.items]
    strip_trailing_nulls(items)
    return ListToken(tuple(items))


def trailing_token(token: Token) -> Union[IntegerToken, StringToken, None]:
    """Return the last scalar token, descending into trailing sub-lists."""
    while token.type is TokenType.LIST:
        if not token.items:
            return None
        token = token.items[-1]
    return token


def render_version(token: ListToken) -> str:
    """Render a token list back into dotted/hyphenated version text."""
    out = []
    for index, item in enumerate(token.items):
        if item.type is TokenType.LIST:
            out.append("-" + render_version(item))
        else:
            out.append(("." if index else "") + str(item))
    return "".join(out)
