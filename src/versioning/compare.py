"""Total ordering over version tokens."""

from itertools import zip_longest
from typing import Optional

from .tokens import IntegerToken, ListToken, StringToken, Token, TokenType

# Cross-type precedence: integers outrank qualifiers, qualifiers outrank lists.
_TYPE_PRECEDENCE = {
    TokenType.INTEGER: 2,
    TokenType.STRING: 1,
    TokenType.LIST: 0,
}

_ZERO = {
    TokenType.INTEGER: IntegerToken(0),
    TokenType.STRING: StringToken(""),
    TokenType.LIST: ListToken(()),
}


def _sign(left, right) -> int:
    return (left > right) - (left < right)


def compare_tokens(left: Optional[Token], right: Optional[Token]) -> int:
    """Compare two tokens, either of which may be absent.

    An absent token compares as the zero value of the other side's type, so
    a list padded with zeros, release qualifiers or empty groups equals the
    shorter list.

    Returns:
        -1, 0 or 1.
    """
    if left is None and right is None:
        return 0
    if left is None:
        return -compare_tokens(right, _ZERO[right.type])
    if right is None:
        return compare_tokens(left, _ZERO[left.type])

    if left.type is not right.type:
        return _sign(_TYPE_PRECEDENCE[left.type], _TYPE_PRECEDENCE[right.type])

    if left.type is TokenType.INTEGER:
        return _sign(left.value, right.value)
    if left.type is TokenType.STRING:
        return _sign(left.rank, right.rank)

    for left_item, right_item in zip_longest(left.items, right.items):
        result = compare_tokens(left_item, right_item)
        if result:
            return result
    return 0
