"""Splitting, line breaking, ordering and parsing helpers for string views."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from aktext.strutils import convert_to_int, convert_to_uint, equals_ignoring_case

__all__ = [
    "iter_split_view",
    "split_view",
    "split_view_if",
    "lines",
    "compare",
    "to_int",
    "to_uint",
    "is_one_of",
    "is_one_of_ignoring_case",
]


def iter_split_view(string: str, separator: str, keep_empty: bool = False) -> Iterator[str]:
    """Yield the parts of ``string`` between occurrences of ``separator``.

    Empty parts are skipped unless ``keep_empty`` is set. An empty ``string``
    yields nothing at all.
    """
    if not separator:
        raise ValueError("separator must not be empty")
    if not string:
        return

    rest = string
    index = rest.find(separator)
    while index >= 0:
        if keep_empty or index > 0:
            yield rest[:index]
        rest = rest[index + len(separator):]
        index = rest.find(separator)
    if keep_empty or rest:
        yield rest


def split_view(string: str, separator: str, keep_empty: bool = False) -> list[str]:
    """The parts of ``string`` between occurrences of ``separator``."""
    return list(iter_split_view(string, separator, keep_empty))


def split_view_if(
    string: str,
    predicate: Callable[[str], bool],
    keep_empty: bool = False,
) -> list[str]:
    """Split ``string`` at every character for which ``predicate`` holds."""
    if not string:
        return []

    parts: list[str] = []
    start = 0
    for index, ch in enumerate(string):
        if predicate(ch):
            if index > start or keep_empty:
                parts.append(string[start:index])
            start = index + 1
    if start < len(string) or keep_empty:
        parts.append(string[start:])
    return parts


def lines(string: str, consider_cr: bool = True) -> list[str]:
    """Split ``string`` into lines.

    With ``consider_cr`` a line ends at a newline, a carriage return, or a
    carriage return followed by a newline; a final line ending adds no empty
    line. Without it only newlines split, and empty parts are kept.
    """
    if not string:
        return []
    if not consider_cr:
        return split_view(string, "\n", True)

    result: list[str] = []
    start = 0
    last_was_cr = False
    for index, ch in enumerate(string):
        split_here = False
        if ch == "\n":
            split_here = True
            if last_was_cr:
                start = index + 1
                split_here = False
        if ch == "\r":
            split_here = True
            last_was_cr = True
        else:
            last_was_cr = False
        if split_here:
            result.append(string[start:index])
            start = index + 1
    if start < len(string):
        result.append(string[start:])
    return result


def compare(a: str | None, b: str | None) -> int:
    """Three-way ordering: -1, 0 or 1. A missing string sorts before any other."""
    if a is None:
        return 0 if b is None else -1
    if b is None:
        return 1
    if a == b:
        return 0
    return -1 if a < b else 1


def to_int(string: str) -> int | None:
    """Parse a signed 32-bit decimal integer, ignoring surrounding whitespace."""
    return convert_to_int(string)


def to_uint(string: str) -> int | None:
    """Parse an unsigned 32-bit decimal integer, ignoring surrounding whitespace."""
    return convert_to_uint(string)


def is_one_of(string: str, *args: str) -> bool:
    """Whether ``string`` equals any of ``args``."""
    return any(string == candidate for candidate in args)


def is_one_of_ignoring_case(string: str, *args: str) -> bool:
    """Whether ``string`` equals any of ``args`` when ASCII case is ignored."""
    return any(equals_ignoring_case(string, candidate) for candidate in args)