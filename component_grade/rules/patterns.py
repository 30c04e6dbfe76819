"""Shared matching helpers for rule detectors.

Detectors approximate structure with bounded pattern matching instead of a
parser. Every helper here runs in time proportional to the input and never
raises for string input.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

# Longest argument span scanned for a single call expression.
MAX_CALL_SPAN = 4000

_QUOTES = {"'", '"', "`"}
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_PAREN = re.compile(r"[()]")
_LINE_BREAK = re.compile(r"\n")


@dataclass(frozen=True, slots=True)
class CallMatch:
    """A located call expression such as ``cn(...)``."""

    text: str
    args: str
    start: int


@dataclass(frozen=True, slots=True)
class TagMatch:
    """A located opening tag such as ``<button type="button">``."""

    text: str
    start: int


class LineLocator:
    """Resolve 1-based lines of first occurrences within one source text.

    Newline offsets are computed once and each distinct text is searched for
    once.
    """

    def __init__(self, code: str) -> None:
        self._code = code
        self._breaks: list[int] | None = None
        self._seen: dict[str, int | None] = {}

    def line_of(self, match: str, known_index: int | None = None) -> int | None:
        """Line of the first occurrence of ``match``.

        ``known_index`` is a position where ``match`` is already known to
        occur; the search stops there.
        """
        if not match:
            return None
        if match in self._seen:
            return self._seen[match]
        end = len(self._code) if known_index is None else known_index + len(match)
        index = self._code.find(match, 0, end)
        line = None if index == -1 else self.line_at(index)
        self._seen[match] = line
        return line

    def line_at(self, index: int) -> int:
        if self._breaks is None:
            self._breaks = [match.start() for match in _LINE_BREAK.finditer(self._code)]
        return bisect_left(self._breaks, index) + 1


def find_line_number(code: str, match: str) -> int | None:
    """Return the 1-based line of the first occurrence of ``match``."""
    if not match:
        return None
    index = code.find(match)
    if index == -1:
        return None
    return code.count("\n", 0, index) + 1


def count_matches(pattern: re.Pattern[str], code: str) -> list[str]:
    """Return every whole-pattern match in order of appearance."""
    return [match.group(0) for match in pattern.finditer(code)]


@lru_cache(maxsize=32)
def _opener_pattern(opener: str) -> re.Pattern[str]:
    return re.compile(opener)


def iter_spans(code: str, opener: str, closer: str) -> Iterator[tuple[re.Match[str], int]]:
    """Yield each ``opener`` match with the index of the next ``closer``.

    Spans never overlap: openers inside an earlier span are skipped, and
    scanning stops once no ``closer`` remains.
    """
    close = -1
    for match in _opener_pattern(opener).finditer(code):
        if match.start() <= close:
            continue
        close = code.find(closer, match.end())
        if close == -1:
            return
        yield match, close


def iter_tags(code: str, name_pattern: str = r"\w+") -> Iterator[TagMatch]:
    """Yield opening-tag spans whose element name matches ``name_pattern``.

    A tag span ends at the first ``>``, so attributes holding arrow functions
    cut the span short. That is a known approximation.
    """
    for match, close in iter_spans(code, rf"<(?:{name_pattern})", ">"):
        yield TagMatch(text=code[match.start() : close + 1], start=match.start())


def has_attribute(tag: str, attribute: str) -> bool:
    return f"{attribute}=" in tag


@lru_cache(maxsize=8)
def _call_pattern(callee: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(callee)}\(")


def paren_pairs(code: str) -> dict[int, tuple[int, int]]:
    """Map each closed ``(`` index to ``(closing index, nesting height)``.

    Height 1 means no parentheses inside; each enclosed level adds one.
    Unbalanced ``)`` are ignored and unclosed ``(`` are left out.
    """
    pairs: dict[int, tuple[int, int]] = {}
    stack: list[list[int]] = []
    for match in _PAREN.finditer(code):
        if match.group(0) == "(":
            stack.append([match.start(), 1])
            continue
        if not stack:
            continue
        open_index, height = stack.pop()
        pairs[open_index] = (match.start(), height)
        if stack and stack[-1][1] < height + 1:
            stack[-1][1] = height + 1
    return pairs


def iter_calls(code: str, callee: str, *, max_depth: int = 2) -> Iterator[CallMatch]:
    """Yield ``callee(...)`` calls with their raw argument text.

    Parentheses are balanced up to ``max_depth`` levels (the call itself plus
    one nested call). Deeper nesting, unclosed calls and spans longer than
    ``MAX_CALL_SPAN`` are skipped. Calls nested inside an already matched call
    are not reported separately.
    """
    pairs: dict[int, tuple[int, int]] | None = None
    consumed_until = 0
    for match in _call_pattern(callee).finditer(code):
        if match.start() < consumed_until:
            continue
        if pairs is None:
            pairs = paren_pairs(code)
        open_index = match.end() - 1
        close = find_closing_paren(code, open_index, max_depth=max_depth, pairs=pairs)
        if close is None:
            continue
        consumed_until = close + 1
        yield CallMatch(
            text=code[match.start() : close + 1],
            args=code[open_index + 1 : close],
            start=match.start(),
        )


def find_closing_paren(
    code: str,
    open_index: int,
    *,
    max_depth: int,
    pairs: dict[int, tuple[int, int]] | None = None,
) -> int | None:
    """Return the index of the ``)`` closing the ``(`` at ``open_index``.

    Gives up (``None``) past ``max_depth`` nesting levels, when the enclosed
    text is ``MAX_CALL_SPAN`` characters or longer, or when the paren never
    closes. Pass ``pairs`` from :func:`paren_pairs` when resolving many
    parens in the same text.
    """
    if pairs is None:
        pairs = paren_pairs(code)
    found = pairs.get(open_index)
    if found is None:
        return None
    close, height = found
    if height > max_depth or close - open_index - 1 >= MAX_CALL_SPAN:
        return None
    return close


def split_args(args: str) -> list[str]:
    """Split argument text on top-level commas.

    Commas inside quotes or nested brackets do not split. Empty trailing
    arguments are dropped.
    """
    parts: list[str] = []
    closers: list[str] = []
    quote: str | None = None
    current: list[str] = []
    for char in args:
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            closers.append(_OPENERS[char])
        elif closers and char == closers[-1]:
            closers.pop()
        elif char == "," and not closers:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def is_string_literal(arg: str) -> bool:
    return bool(arg) and arg[0] in _QUOTES


def to_kebab_case(value: str) -> str:
    """Convert ``cardHeader`` style values to ``card-header``."""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", value).lower()


def is_camel_case(value: str) -> bool:
    return _CAMEL_BOUNDARY.search(value) is not None
