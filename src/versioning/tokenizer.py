"""Tokenizer turning a raw version string into a normalized token tree."""

from typing import Callable, List, Tuple, Union

from .errors import MalformedVersion
from .tokens import (
    MAX_INTEGER,
    IntegerToken,
    ListToken,
    StringToken,
    Token,
    TokenType,
)

SEPARATORS = (".", "-")

# Items under construction: finished tokens or nested builders.
_Builder = List[Union[Token, list]]


def _is_digit(char: str) -> bool:
    return char.isdecimal()


def _is_text(char: str) -> bool:
    return not char.isdecimal() and char not in SEPARATORS


def _consume(text: str, start: int, predicate: Callable[[str], bool]) -> Tuple[str, int]:
    """Consume characters while predicate holds; return (run, end offset)."""
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return text[start:end], end


def _last_is_integer(builder: _Builder) -> bool:
    if not builder:
        return False
    last = builder[-1]
    return not isinstance(last, list) and last.type is TokenType.INTEGER


def _is_null(item) -> bool:
    if isinstance(item, list):
        return not item
    return item.is_null()


def _strip_trailing_nulls(builder: _Builder) -> None:
    while builder and _is_null(builder[-1]):
        builder.pop()


def _freeze(builder: _Builder) -> ListToken:
    return ListToken(tuple(_freeze(item) if isinstance(item, list) else item for item in builder))


def tokenize(raw: str) -> ListToken:
    """Parse a version string into its normalized root list.

    '.' separates items within the current list; '-' opens a nested list one
    level deeper. Digit runs become integers, other runs become qualifiers.

    Raises:
        MalformedVersion: empty input, an unconsumable run or an integer
            outside the supported range.
    """
    if raw is None or not raw.strip():
        raise MalformedVersion(raw or "", "version string is empty")

    text = raw.strip().lower()
    root: _Builder = []
    current = root
    stack: List[_Builder] = [root]

    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == "-":
            pos += 1
            if _last_is_integer(current):
                _strip_trailing_nulls(current)
            # Redundant separators after trailing zeros must not open empty groups.
            if current:
                nested: _Builder = []
                current.append(nested)
                current = nested
                stack.append(current)
        elif char == ".":
            pos += 1
        elif _is_digit(char):
            run, end = _consume(text, pos, _is_digit)
            if not run:
                raise MalformedVersion(raw, "unable to consume digits", pos, text[pos:pos + 6])
            try:
                value = int(run)
            except ValueError as exc:
                raise MalformedVersion(raw, "invalid integer", pos, run) from exc
            if value > MAX_INTEGER:
                raise MalformedVersion(raw, "integer overflow", pos, run)
            current.append(IntegerToken(value))
            pos = end
        else:
            run, end = _consume(text, pos, _is_text)
            if not run:
                raise MalformedVersion(raw, "unable to consume non-digits", pos, text[pos:pos + 6])
            followed_by_digit = end < len(text) and _is_digit(text[end])
            current.append(StringToken.of(run, followed_by_digit))
            pos = end

    # Innermost first so an emptied sub-list is stripped from its parent.
    while stack:
        _strip_trailing_nulls(stack.pop())

    return _freeze(root)
