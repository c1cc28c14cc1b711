"""A small hand-written lexer over a string, with predicate helpers."""

from __future__ import annotations

from collections.abc import Callable

__all__ = [
    "GenericLexer",
    "is_any_of",
    "is_not_any_of",
    "is_path_separator",
    "is_quote",
]

Predicate = Callable[[str], bool]

_DEFAULT_ESCAPE_MAP = "n\nr\rt\tb\bf\f"


class GenericLexer:
    """Cursor over a string that consumes characters, runs and delimited pieces.

    Reading past the end yields ``"\\0"`` from :meth:`peek`; consuming a single
    character at the end, or retreating before the start, raises ``IndexError``.
    """

    def __init__(self, text: str) -> None:
        self._input = text
        self._index = 0

    def tell(self) -> int:
        """Current position in the input."""
        return self._index

    def tell_remaining(self) -> int:
        """Number of characters left to consume."""
        return len(self._input) - self._index

    def remaining(self) -> str:
        """The unconsumed rest of the input."""
        return self._input[self._index:]

    def is_eof(self) -> bool:
        return self._index >= len(self._input)

    def peek(self, offset: int = 0) -> str:
        """The character ``offset`` places ahead, or ``"\\0"`` past the end."""
        position = self._index + offset
        return self._input[position] if position < len(self._input) else "\0"

    def next_is(self, expected: str | Predicate) -> bool:
        """Whether the input continues with ``expected`` (a string or a character predicate)."""
        if callable(expected):
            return bool(expected(self.peek()))
        return all(self.peek(offset) == ch for offset, ch in enumerate(expected))

    def retreat(self, count: int = 1) -> None:
        """Step back ``count`` characters."""
        if self._index < count:
            raise IndexError("cannot retreat before the start of the input")
        self._index -= count

    def consume(self, count: int | None = None) -> str:
        """Consume one character, or up to ``count`` characters when given."""
        if count is None:
            if self.is_eof():
                raise IndexError("cannot consume past the end of the input")
            ch = self._input[self._index]
            self._index += 1
            return ch
        if count <= 0:
            return ""
        start = self._index
        length = min(count, len(self._input) - start)
        self._index += length
        return self._input[start:start + length]

    def consume_specific(self, expected: str) -> bool:
        """Consume ``expected`` if the input continues with it."""
        if not self.next_is(expected):
            return False
        self.ignore(len(expected))
        return True

    def consume_escaped_character(
        self,
        escape_char: str = "\\",
        escape_map: str = _DEFAULT_ESCAPE_MAP,
    ) -> str:
        """Consume one character, translating an escape sequence through ``escape_map``.

        ``escape_map`` holds pairs: an escape letter followed by what it stands for.
        """
        if not self.consume_specific(escape_char):
            return self.consume()
        ch = self.consume()
        pairs = dict(zip(escape_map[0::2], escape_map[1::2]))
        return pairs.get(ch, ch)

    def consume_all(self) -> str:
        """Consume and return the rest of the input."""
        if self.is_eof():
            return ""
        rest = self._input[self._index:]
        self._index = len(self._input)
        return rest

    def consume_line(self) -> str:
        """Consume up to the end of the line and skip its terminator."""
        start = self._index
        while not self.is_eof() and self.peek() not in ("\r", "\n"):
            self._index += 1
        line = self._input[start:self._index]
        self.consume_specific("\r")
        self.consume_specific("\n")
        return line

    def consume_until(self, stop: str | Predicate) -> str:
        """Consume until ``stop`` (a string or a character predicate) is next."""
        start = self._index
        while not self.is_eof() and not self.next_is(stop):
            self._index += 1
        return self._input[start:self._index]

    def consume_quoted_string(self, escape_char: str | None = None) -> str:
        """Consume a single- or double-quoted string and return its contents.

        With ``escape_char`` an escaped quote does not end the string; the escape
        character stays in the result. An unterminated string consumes nothing.
        """
        if not self.next_is(is_quote):
            return ""

        quote_char = self.consume()
        start = self._index
        while not self.is_eof():
            if escape_char is not None and self.next_is(escape_char):
                self._index += 1
            elif self.next_is(quote_char):
                break
            self._index += 1
        length = self._index - start

        if self.peek() != quote_char:
            self._index = start - 1
            return ""

        self.ignore()
        return self._input[start:start + length]

    def consume_while(self, predicate: Predicate) -> str:
        """Consume characters while ``predicate`` holds."""
        start = self._index
        while not self.is_eof() and predicate(self.peek()):
            self._index += 1
        return self._input[start:self._index]

    def ignore(self, count: int = 1) -> None:
        """Skip up to ``count`` characters."""
        self._index += max(0, min(count, len(self._input) - self._index))

    def ignore_until(self, stop: str | Predicate) -> None:
        """Skip until ``stop``; a string stop is skipped too, a predicate's match is not."""
        while not self.is_eof() and not self.next_is(stop):
            self._index += 1
        if not callable(stop):
            self.ignore(len(stop))

    def ignore_while(self, predicate: Predicate) -> None:
        """Skip characters while ``predicate`` holds."""
        while not self.is_eof() and predicate(self.peek()):
            self._index += 1


def is_any_of(values: str) -> Predicate:
    """A predicate true for any single character in ``values``."""
    return lambda ch: ch != "" and ch in values


def is_not_any_of(values: str) -> Predicate:
    """A predicate true for any single character not in ``values``."""
    return lambda ch: not (ch != "" and ch in values)


def is_path_separator(ch: str) -> bool:
    return ch != "" and ch in "/\\"


def is_quote(ch: str) -> bool:
    return ch != "" and ch in "'\""