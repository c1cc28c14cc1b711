"""Parsing of format strings and of the specification inside a replacement field."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from aktext.builder import Align, SignMode
from aktext.lexer import GenericLexer, is_any_of

__all__ = [
    "USE_NEXT_INDEX",
    "FormatError",
    "Mode",
    "FormatSpecifier",
    "FormatParams",
    "FormatParser",
    "StandardFormatter",
]

USE_NEXT_INDEX = -1
"""Index of a replacement field that names no argument and takes the next one."""


class FormatError(ValueError):
    """A format string or specification is malformed or does not suit its argument."""


class Mode(enum.Enum):
    DEFAULT = enum.auto()
    BINARY = enum.auto()
    BINARY_UPPERCASE = enum.auto()
    DECIMAL = enum.auto()
    OCTAL = enum.auto()
    HEXADECIMAL = enum.auto()
    HEXADECIMAL_UPPERCASE = enum.auto()
    CHARACTER = enum.auto()
    STRING = enum.auto()
    POINTER = enum.auto()
    FLOAT = enum.auto()
    HEXFLOAT = enum.auto()
    HEXFLOAT_UPPERCASE = enum.auto()
    HEX_DUMP = enum.auto()


_MODE_TOKENS = (
    ("b", Mode.BINARY),
    ("B", Mode.BINARY_UPPERCASE),
    ("d", Mode.DECIMAL),
    ("o", Mode.OCTAL),
    ("x", Mode.HEXADECIMAL),
    ("X", Mode.HEXADECIMAL_UPPERCASE),
    ("c", Mode.CHARACTER),
    ("s", Mode.STRING),
    ("p", Mode.POINTER),
    ("f", Mode.FLOAT),
    ("a", Mode.HEXFLOAT),
    ("A", Mode.HEXFLOAT_UPPERCASE),
    ("hex-dump", Mode.HEX_DUMP),
)

_is_brace = is_any_of("{}")


@dataclass(frozen=True)
class FormatSpecifier:
    """One replacement field: the text after its ':' and the argument index."""

    flags: str
    index: int


class FormatParams:
    """The arguments of one formatting call and the cursor over them."""

    def __init__(self, parameters: Iterable[Any] = ()) -> None:
        self._parameters = tuple(parameters)
        self._next_index = 0

    def __len__(self) -> int:
        return len(self._parameters)

    def take_next_index(self) -> int:
        """Hand out the next automatic argument index."""
        index = self._next_index
        self._next_index += 1
        return index

    def parameter(self, index: int) -> Any:
        """The argument at ``index``."""
        if not 0 <= index < len(self._parameters):
            raise FormatError(f"no argument at index {index}")
        return self._parameters[index]

    def size_at(self, index: int) -> int:
        """The argument at ``index`` read as a width or precision."""
        value = self.parameter(index)
        if isinstance(value, bool) or not isinstance(value, int):
            raise FormatError(f"argument {index} is not an integer size")
        if value < 0:
            raise FormatError(f"argument {index} is a negative size")
        return value


class FormatParser(GenericLexer):
    """Lexer over a format string or a field's specification."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self._text = text

    def consume_literal(self) -> str:
        """Consume literal text up to the next single brace; doubled braces stay doubled."""
        begin = self.tell()
        while not self.is_eof():
            if self.consume_specific("{{") or self.consume_specific("}}"):
                continue
            if self.next_is(_is_brace):
                return self._text[begin:self.tell()]
            self.consume()
        return self._text[begin:]

    def consume_number(self) -> int | None:
        """Consume a run of decimal digits, or return None if there is none."""
        digits = self.consume_while(lambda ch: "0" <= ch <= "9")
        return int(digits) if digits else None

    def consume_specifier(self) -> FormatSpecifier | None:
        """Consume a replacement field, or return None if none starts here."""
        if self.next_is("}"):
            raise FormatError("unmatched '}' in format string")
        if not self.consume_specific("{"):
            return None

        index = self.consume_number()
        if index is None:
            index = USE_NEXT_INDEX

        if self.consume_specific(":"):
            begin = self.tell()
            level = 1
            while level > 0:
                if self.is_eof():
                    raise FormatError("unterminated replacement field")
                if self.consume_specific("{"):
                    level += 1
                    continue
                if self.consume_specific("}"):
                    level -= 1
                    continue
                self.consume()
            flags = self._text[begin:self.tell() - 1]
        else:
            if not self.consume_specific("}"):
                raise FormatError("replacement field is not closed")
            flags = ""

        return FormatSpecifier(flags, index)

    def consume_replacement_field(self) -> int | None:
        """Consume a nested ``{n}`` or ``{}`` field and return its index, or None."""
        if not self.consume_specific("{"):
            return None
        index = self.consume_number()
        if index is None:
            index = USE_NEXT_INDEX
        if not self.consume_specific("}"):
            raise FormatError("nested replacement field is not closed")
        return index


@dataclass
class StandardFormatter:
    """The options of a format specification: fill, align, sign, '#', '0', width, precision, mode."""

    align: Align = Align.DEFAULT
    sign_mode: SignMode = SignMode.ONLY_IF_NEEDED
    mode: Mode = Mode.DEFAULT
    alternative_form: bool = False
    fill: str = " "
    zero_pad: bool = False
    width: int | None = None
    precision: int | None = None

    def _size(self, params: FormatParams, parser: FormatParser) -> int | None:
        index = parser.consume_replacement_field()
        if index is not None:
            if index == USE_NEXT_INDEX:
                index = params.take_next_index()
            return params.size_at(index)
        return parser.consume_number()

    def parse(self, params: FormatParams, parser: FormatParser) -> None:
        """Read the whole specification from ``parser``."""
        if parser.peek(1) in "<^>":
            if parser.next_is(_is_brace):
                raise FormatError("a brace cannot be the fill character")
            self.fill = parser.consume()

        if parser.consume_specific("<"):
            self.align = Align.LEFT
        elif parser.consume_specific("^"):
            self.align = Align.CENTER
        elif parser.consume_specific(">"):
            self.align = Align.RIGHT

        if parser.consume_specific("-"):
            self.sign_mode = SignMode.ONLY_IF_NEEDED
        elif parser.consume_specific("+"):
            self.sign_mode = SignMode.ALWAYS
        elif parser.consume_specific(" "):
            self.sign_mode = SignMode.RESERVED

        if parser.consume_specific("#"):
            self.alternative_form = True

        if parser.consume_specific("0"):
            self.zero_pad = True

        width = self._size(params, parser)
        if width is not None:
            self.width = width

        if parser.consume_specific("."):
            precision = self._size(params, parser)
            if precision is not None:
                self.precision = precision

        for token, mode in _MODE_TOKENS:
            if parser.consume_specific(token):
                self.mode = mode
                break

        if not parser.is_eof():
            raise FormatError(f"unexpected {parser.remaining()!r} in format specification")