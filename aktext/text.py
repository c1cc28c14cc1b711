"""Building strings piece by piece, and whole-string helpers: splitting, repetition, numbering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from aktext.formatter import formatted

__all__ = [
    "StringBuilder",
    "split",
    "split_limit",
    "repeated",
    "bijective_base_from",
    "roman_number_from",
    "escape_html_entities",
    "reverse",
]

_REPLACEMENT_CHARACTER = "\ufffd"
_MAX_CODE_POINT = 0x10FFFF
_DEFAULT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_MAX_ROMAN = 3999

_JSON_ESCAPES = {
    "\b": "\\b",
    "\n": "\\n",
    "\t": "\\t",
    '"': '\\"',
    "\\": "\\\\",
}

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)

_HTML_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
}


class StringBuilder:
    """Accumulates text and hands it out as one string."""

    def __init__(self) -> None:
        self._pieces: list[str] = []
        self._length = 0

    def __len__(self) -> int:
        """Number of characters appended so far."""
        return self._length

    def __str__(self) -> str:
        return self.to_string()

    def append(self, value: str) -> None:
        """Append a string (or a single character)."""
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        if value:
            self._pieces.append(value)
            self._length += len(value)

    def append_code_point(self, code_point: int) -> None:
        """Append a code point; one outside Unicode becomes U+FFFD."""
        if 0 <= code_point <= _MAX_CODE_POINT:
            self.append(chr(code_point))
        else:
            self.append(_REPLACEMENT_CHARACTER)

    def append_as_lowercase(self, ch: str) -> None:
        """Append a character, lowering it if it is an ASCII capital."""
        if "A" <= ch <= "Z":
            self.append(chr(ord(ch) + 0x20))
        else:
            self.append(ch)

    def append_escaped_for_json(self, string: str) -> None:
        """Append ``string`` escaped for use inside a JSON string literal."""
        out: list[str] = []
        for ch in string:
            escaped = _JSON_ESCAPES.get(ch)
            if escaped is not None:
                out.append(escaped)
            elif ord(ch) <= 0x1F:
                out.append(formatted("\\u{:04x}", ord(ch)))
            else:
                out.append(ch)
        self.append("".join(out))

    def appendff(self, fmtstr: str, *args: Any) -> None:
        """Append ``fmtstr`` formatted with ``args``."""
        self.append(formatted(fmtstr, *args))

    def join(self, separator: str, collection: Iterable[Any], fmtstr: str = "{}") -> None:
        """Append every item formatted with ``fmtstr``, with ``separator`` between them."""
        for position, item in enumerate(collection):
            if position:
                self.append(separator)
            self.appendff(fmtstr, item)

    def to_string(self) -> str:
        """Everything appended so far."""
        text = "".join(self._pieces)
        if len(self._pieces) > 1:
            self._pieces = [text]
        return text

    def clear(self) -> None:
        """Drop everything appended so far."""
        self._pieces.clear()
        self._length = 0

    def trim(self, count: int) -> None:
        """Drop the last ``count`` characters."""
        if count < 0 or count > self._length:
            raise ValueError(f"cannot trim {count} characters from {self._length}")
        text = self.to_string()[: self._length - count]
        self._pieces = [text] if text else []
        self._length = len(text)


def split(string: str, separator: str, keep_empty: bool = False) -> list[str]:
    """Split ``string`` at every ``separator`` character."""
    return split_limit(string, separator, 0, keep_empty)


def split_limit(string: str, separator: str, limit: int, keep_empty: bool = False) -> list[str]:
    """Split ``string`` at ``separator`` into at most ``limit`` parts (0 means no limit).

    Empty parts are dropped unless ``keep_empty`` is set; an empty string gives no parts.
    """
    if not string:
        return []

    parts: list[str] = []
    start = 0
    for index, ch in enumerate(string):
        if len(parts) + 1 == limit:
            break
        if ch == separator:
            if index > start or keep_empty:
                parts.append(string[start:index])
            start = index + 1
    if start < len(string) or keep_empty:
        parts.append(string[start:])
    return parts


def repeated(string: str, count: int) -> str:
    """``string`` repeated ``count`` times."""
    if count < 0:
        raise ValueError("count must not be negative")
    if not count or not string:
        return ""
    return string * count


def bijective_base_from(value: int, base: int = 26, alphabet: str | None = None) -> str:
    """Spreadsheet-style column name for ``value``: 0 is A, 25 is Z, 26 is AA."""
    if alphabet is None:
        alphabet = _DEFAULT_ALPHABET
    if not 2 <= base <= len(alphabet):
        raise ValueError(f"base must be between 2 and {len(alphabet)}")
    if value < 0:
        raise ValueError("value must not be negative")

    digits: list[str] = []
    while True:
        value, digit = divmod(value, base)
        digits.append(alphabet[digit])
        if value == 0:
            break

    # The leading digit runs 1..base-1 rather than 0..base-1 when there are several.
    if len(digits) > 1:
        digits[-1] = chr(ord(digits[-1]) - 1)

    return "".join(reversed(digits))


def roman_number_from(value: int) -> str:
    """``value`` in Roman numerals; above 3999 it is written in decimal."""
    if value < 0:
        raise ValueError("value must not be negative")
    if value > _MAX_ROMAN:
        return str(value)

    out: list[str] = []
    for amount, numeral in _ROMAN_NUMERALS:
        times, value = divmod(value, amount)
        out.append(numeral * times)
    return "".join(out)


def escape_html_entities(html: str) -> str:
    """Replace ``<``, ``>``, ``&`` and ``"`` with their HTML entities."""
    return "".join(_HTML_ENTITIES.get(ch, ch) for ch in html)


def reverse(string: str) -> str:
    """The characters of ``string`` in reverse order."""
    return string[::-1]