"""ASCII-oriented string helpers: wildcard masks, integer parsing, trimming and searching."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

__all__ = [
    "CaseSensitivity",
    "TrimMode",
    "TrimWhitespace",
    "SearchDirection",
    "MaskSpan",
    "matches",
    "match_spans",
    "convert_to_int",
    "convert_to_uint",
    "convert_to_uint_from_hex",
    "convert_to_uint_from_octal",
    "equals_ignoring_case",
    "starts_with",
    "ends_with",
    "contains",
    "is_whitespace",
    "trim",
    "trim_whitespace",
    "find",
    "find_last",
    "find_all",
    "find_any_of",
    "to_snakecase",
    "to_titlecase",
    "replace",
    "count",
]


class CaseSensitivity(enum.Enum):
    CASE_INSENSITIVE = enum.auto()
    CASE_SENSITIVE = enum.auto()


class TrimMode(enum.Enum):
    LEFT = enum.auto()
    RIGHT = enum.auto()
    BOTH = enum.auto()


class TrimWhitespace(enum.Enum):
    YES = enum.auto()
    NO = enum.auto()


class SearchDirection(enum.Enum):
    FORWARD = enum.auto()
    BACKWARD = enum.auto()


@dataclass(frozen=True)
class MaskSpan:
    """The part of a matched string covered by one wildcard of a mask."""

    start: int
    length: int


_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_TO_LOWER = str.maketrans(_UPPER, _LOWER)
_TO_UPPER = str.maketrans(_LOWER, _UPPER)
_WHITESPACE = " \n\t\v\f\r"
_SUPPORTED_BITS = (8, 16, 32, 64)


def _ascii_lower(text: str) -> str:
    return text.translate(_TO_LOWER)


def _ascii_upper(text: str) -> str:
    return text.translate(_TO_UPPER)


def _is_lower_alpha(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_upper_alpha(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _same_char(a: str, b: str, case_sensitivity: CaseSensitivity) -> bool:
    if case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
        return a == b
    return _ascii_lower(a) == _ascii_lower(b)


def _match(
    text: str | None,
    mask: str | None,
    case_sensitivity: CaseSensitivity,
    spans: list[MaskSpan] | None,
) -> bool:
    def record(start: int, length: int) -> None:
        if spans is not None:
            spans.append(MaskSpan(start, length))

    if text is None or mask is None:
        return text is None and mask is None

    if mask == "*":
        record(0, len(text))
        return True

    text_end, mask_end = len(text), len(mask)
    sp = mp = 0
    while sp < text_end and mp < mask_end:
        token = mask[mp]
        if token == "*":
            if mp == mask_end - 1:
                record(sp, text_end - sp)
                return True
            start = sp
            rest = mask[mp + 1:]
            while sp < text_end and not _match(text[sp:], rest, case_sensitivity, None):
                sp += 1
            record(start, sp - start)
            sp -= 1
        elif token == "?":
            record(sp, 1)
        elif not _same_char(token, text[sp], case_sensitivity):
            return False
        sp += 1
        mp += 1

    if sp == text_end:
        # A trailing '*' may match nothing.
        while mp < mask_end and mask[mp] == "*":
            record(sp, 0)
            mp += 1

    return sp == text_end and mp == mask_end


def matches(
    string: str | None,
    mask: str | None,
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_INSENSITIVE,
) -> bool:
    """Whether ``string`` matches a mask where '*' is any run and '?' any character."""
    return _match(string, mask, case_sensitivity, None)


def match_spans(
    string: str | None,
    mask: str | None,
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_INSENSITIVE,
) -> list[MaskSpan] | None:
    """The spans covered by the mask's wildcards, or None if the string does not match."""
    spans: list[MaskSpan] = []
    if not _match(string, mask, case_sensitivity, spans):
        return None
    return spans


def _check_bits(bits: int) -> None:
    if bits not in _SUPPORTED_BITS:
        raise ValueError(f"unsupported integer width: {bits} bits")


def _prepared(string: str, trim_ws: TrimWhitespace) -> str:
    return _trim(string, _WHITESPACE, TrimMode.BOTH) if trim_ws is TrimWhitespace.YES else string


def convert_to_int(
    string: str,
    bits: int = 32,
    trim_whitespace: TrimWhitespace = TrimWhitespace.YES,
) -> int | None:
    """Parse a signed decimal integer of the given width; None if invalid or out of range."""
    _check_bits(bits)
    text = _prepared(string, trim_whitespace)
    if not text:
        return None

    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    sign = 1
    digits = text
    if text[0] in "+-":
        if len(text) == 1:
            return None
        if text[0] == "-":
            sign = -1
        digits = text[1:]

    value = 0
    for ch in digits:
        if not "0" <= ch <= "9":
            return None
        value *= 10
        if not low <= value <= high:
            return None
        value += sign * (ord(ch) - ord("0"))
        if not low <= value <= high:
            return None
    return value


def convert_to_uint(
    string: str,
    bits: int = 32,
    trim_whitespace: TrimWhitespace = TrimWhitespace.YES,
) -> int | None:
    """Parse an unsigned decimal integer of the given width; None if invalid or out of range."""
    _check_bits(bits)
    text = _prepared(string, trim_whitespace)
    if not text:
        return None

    high = (1 << bits) - 1
    value = 0
    for ch in text:
        if not "0" <= ch <= "9":
            return None
        value *= 10
        if value > high:
            return None
        value += ord(ch) - ord("0")
        if value > high:
            return None
    return value


def _convert_radix(string: str, bits: int, trim_ws: TrimWhitespace, shift: int, digits: str) -> int | None:
    _check_bits(bits)
    text = _prepared(string, trim_ws)
    if not text:
        return None

    limit = ((1 << bits) - 1) >> shift
    value = 0
    for ch in text:
        if value > limit:
            return None
        digit = digits.find(ch)
        if digit < 0:
            return None
        value = (value << shift) + digit
    return value


def convert_to_uint_from_hex(
    string: str,
    bits: int = 32,
    trim_whitespace: TrimWhitespace = TrimWhitespace.YES,
) -> int | None:
    """Parse an unsigned hexadecimal integer (no prefix) of the given width."""
    _check_bits(bits)
    text = _prepared(string, trim_whitespace)
    return _convert_radix(
        _ascii_lower(text) if text.isascii() else text,
        bits,
        TrimWhitespace.NO,
        4,
        "0123456789abcdef",
    )


def convert_to_uint_from_octal(
    string: str,
    bits: int = 32,
    trim_whitespace: TrimWhitespace = TrimWhitespace.YES,
) -> int | None:
    """Parse an unsigned octal integer (no prefix) of the given width."""
    return _convert_radix(string, bits, trim_whitespace, 3, "01234567")


def equals_ignoring_case(a: str, b: str) -> bool:
    """Equality that folds ASCII letters only."""
    return len(a) == len(b) and _ascii_lower(a) == _ascii_lower(b)


def starts_with(
    string: str,
    prefix: str,
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE,
) -> bool:
    if not prefix:
        return True
    if not string or len(prefix) > len(string):
        return False
    head = string[: len(prefix)]
    if case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
        return head == prefix
    return _ascii_lower(head) == _ascii_lower(prefix)


def ends_with(
    string: str,
    suffix: str,
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE,
) -> bool:
    if not suffix:
        return True
    if not string or len(suffix) > len(string):
        return False
    tail = string[len(string) - len(suffix):]
    if case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
        return tail == suffix
    return _ascii_lower(tail) == _ascii_lower(suffix)


def contains(
    string: str | None,
    needle: str | None,
    case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE,
) -> bool:
    """Whether ``needle`` occurs in ``string``; an empty string contains nothing."""
    if string is None or needle is None or not string or len(needle) > len(string):
        return False
    if not needle:
        return True
    if case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
        return needle in string

    text = _ascii_lower(string)
    pattern = _ascii_lower(needle)
    size = len(text)
    si = 0
    while si < size:
        if text[si] == pattern[0]:
            ni = 0
            while si + ni < size:
                if text[si + ni] != pattern[ni]:
                    if ni > 0:
                        si += ni - 1
                    break
                if ni + 1 == len(pattern):
                    return True
                ni += 1
        si += 1
    return False


def is_whitespace(string: str) -> bool:
    """Whether every character is ASCII whitespace (true for the empty string)."""
    return all(ch in _WHITESPACE for ch in string)


def _trim(text: str, characters: str, mode: TrimMode) -> str:
    start = 0
    length = len(text)

    if mode in (TrimMode.LEFT, TrimMode.BOTH):
        for ch in text:
            if length == 0:
                return ""
            if ch not in characters:
                break
            start += 1
            length -= 1

    if mode in (TrimMode.RIGHT, TrimMode.BOTH):
        if not text:
            return ""
        # The first character is never looked at from the right.
        for ch in reversed(text[1:]):
            if length == 0:
                return ""
            if ch not in characters:
                break
            length -= 1

    return text[start:start + length]


def trim(string: str, characters: str, mode: TrimMode = TrimMode.BOTH) -> str:
    """Strip any of ``characters`` from the chosen ends of ``string``."""
    return _trim(string, characters, mode)


def trim_whitespace(string: str, mode: TrimMode = TrimMode.BOTH) -> str:
    """Strip ASCII whitespace from the chosen ends of ``string``."""
    return _trim(string, _WHITESPACE, mode)


def find(haystack: str, needle: str, start: int = 0) -> int | None:
    """Index of the first ``needle`` at or after ``start``, or None."""
    if start > len(haystack):
        return None
    index = haystack.find(needle, start)
    return None if index < 0 else index


def find_last(haystack: str, needle: str) -> int | None:
    """Index of the last ``needle``, or None."""
    index = haystack.rfind(needle)
    return None if index < 0 else index


def _iter_positions(haystack: str, needle: str) -> Iterator[int]:
    position = 0
    while position <= len(haystack):
        found = haystack.find(needle, position)
        if found < 0:
            return
        yield found
        position = found + 1


def find_all(haystack: str, needle: str) -> list[int]:
    """Every index where ``needle`` starts, overlapping occurrences included."""
    return list(_iter_positions(haystack, needle))


def find_any_of(
    haystack: str,
    needles: str,
    direction: SearchDirection = SearchDirection.FORWARD,
) -> int | None:
    """Index of the first (or last) character of ``haystack`` found in ``needles``."""
    if not haystack or not needles:
        return None
    indexed = enumerate(haystack)
    if direction is SearchDirection.BACKWARD:
        indexed = reversed(list(indexed))
    return next((index for index, ch in indexed if ch in needles), None)


def to_snakecase(string: str) -> str:
    """Convert CamelCase words to snake_case, lowering ASCII letters."""
    last = len(string) - 1

    def needs_underscore(index: int, ch: str) -> bool:
        if index == 0:
            return False
        if _is_lower_alpha(string[index - 1]) and _is_upper_alpha(ch):
            return True
        if index >= last:
            return False
        return _is_upper_alpha(ch) and _is_lower_alpha(string[index + 1])

    pieces: list[str] = []
    for index, ch in enumerate(string):
        if needs_underscore(index, ch):
            pieces.append("_")
        pieces.append(_ascii_lower(ch))
    return "".join(pieces)


def to_titlecase(string: str) -> str:
    """Upper-case the first letter of each space-separated word and lower the rest."""
    pieces: list[str] = []
    upper_next = True
    for ch in string:
        pieces.append(_ascii_upper(ch) if upper_next else _ascii_lower(ch))
        upper_next = ch == " "
    return "".join(pieces)


def replace(string: str, needle: str, replacement: str, all_occurrences: bool = False) -> str:
    """Replace the first, or every, occurrence of ``needle``."""
    if not string:
        return string

    if all_occurrences:
        positions = find_all(string, needle)
    else:
        first = find(string, needle)
        positions = [] if first is None else [first]
    if not positions:
        return string

    pieces: list[str] = []
    last = 0
    for position in positions:
        if position < last:
            raise ValueError("overlapping occurrences of the needle cannot be replaced")
        pieces.append(string[last:position])
        pieces.append(replacement)
        last = position + len(needle)
    pieces.append(string[last:])
    return "".join(pieces)


def count(string: str, needle: str) -> int:
    """Number of occurrences of ``needle``, overlapping ones included."""
    if not needle:
        return len(string)
    return sum(
        1 for index in range(len(string) - len(needle) + 1) if string.startswith(needle, index)
    )