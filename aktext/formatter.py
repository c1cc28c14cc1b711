"""Formatting of values through ``{}`` format strings, and output helpers."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, TextIO

from aktext.builder import Align, FormatBuilder, SignMode
from aktext.spec import (
    USE_NEXT_INDEX,
    FormatError,
    FormatParams,
    FormatParser,
    Mode,
    StandardFormatter,
)

__all__ = [
    "register_formatter",
    "format_value",
    "vformat",
    "formatted",
    "out",
    "outln",
    "warn",
    "warnln",
    "dbgln",
    "set_debug_enabled",
]

FormatFunction = Callable[[StandardFormatter, FormatBuilder, Any], None]

_POINTER_WIDTH = 16
_DEFAULT_HEX_DUMP_WIDTH = 32
_DEFAULT_FLOAT_PRECISION = 6

_INTEGER_BASES = {
    Mode.DEFAULT: (10, False),
    Mode.DECIMAL: (10, False),
    Mode.BINARY: (2, False),
    Mode.BINARY_UPPERCASE: (2, True),
    Mode.OCTAL: (8, False),
    Mode.HEXADECIMAL: (16, False),
    Mode.HEXADECIMAL_UPPERCASE: (16, True),
}
_NUMERIC_MODES = frozenset(_INTEGER_BASES) - {Mode.DEFAULT}
_FLOAT_BASES = {
    Mode.DEFAULT: (10, False),
    Mode.FLOAT: (10, False),
    Mode.HEXFLOAT: (16, False),
    Mode.HEXFLOAT_UPPERCASE: (16, True),
}
_TEXT_MODES = frozenset({Mode.DEFAULT, Mode.STRING, Mode.CHARACTER, Mode.HEX_DUMP})

_FORMATTERS: dict[type, FormatFunction] = {}


@dataclass
class _DebugSwitch:
    enabled: bool = True


_DEBUG = _DebugSwitch()


def register_formatter(value_type: type, function: FormatFunction) -> None:
    """Use ``function(spec, builder, value)`` for values of ``value_type`` and its subclasses."""
    _FORMATTERS[value_type] = function


def format_value(spec: StandardFormatter, builder: FormatBuilder, value: Any) -> None:
    """Write ``value`` to ``builder`` as ``spec`` describes."""
    spec = replace(spec)
    for cls in type(value).__mro__:
        function = _FORMATTERS.get(cls)
        if function is not None:
            function(spec, builder, value)
            return
    raise FormatError(f"no formatter for values of type {type(value).__name__}")


def _put_text(spec: StandardFormatter, builder: FormatBuilder, text: str, raw: bytes | None = None) -> None:
    if spec.sign_mode is not SignMode.ONLY_IF_NEEDED:
        raise FormatError("a sign option does not apply to text")
    if spec.alternative_form:
        raise FormatError("'#' does not apply to text")
    if spec.zero_pad:
        raise FormatError("'0' does not apply to text")
    if spec.mode not in _TEXT_MODES:
        raise FormatError(f"mode {spec.mode.name} does not apply to text")

    width = spec.width or 0
    if spec.mode is Mode.HEX_DUMP:
        data = raw if raw is not None else text.encode("utf-8")
        builder.put_hexdump(data, width, spec.fill)
        return
    builder.put_string(text, spec.align, width, spec.precision, spec.fill)


def _format_int(spec: StandardFormatter, builder: FormatBuilder, value: int) -> None:
    if spec.mode is Mode.CHARACTER:
        if not 0 <= value <= 127:
            raise FormatError("only ASCII code points can be formatted as characters")
        _put_text(replace(spec, mode=Mode.STRING), builder, chr(value))
        return

    if spec.precision is not None:
        raise FormatError("a precision does not apply to integers")

    if spec.mode is Mode.POINTER:
        if (
            spec.sign_mode is not SignMode.ONLY_IF_NEEDED
            or spec.align is not Align.DEFAULT
            or spec.alternative_form
            or spec.width is not None
        ):
            raise FormatError("pointers take no sign, alignment, '#' or width")
        spec = replace(
            spec,
            mode=Mode.HEXADECIMAL,
            alternative_form=True,
            width=_POINTER_WIDTH,
            zero_pad=True,
        )

    if spec.mode is Mode.HEX_DUMP:
        width = _DEFAULT_HEX_DUMP_WIDTH if spec.width is None else spec.width
        try:
            data = value.to_bytes(8, "little", signed=True)
        except OverflowError as error:
            raise FormatError("integer does not fit in 64 bits") from error
        builder.put_hexdump(data, width, spec.fill)
        return

    base_info = _INTEGER_BASES.get(spec.mode)
    if base_info is None:
        raise FormatError(f"mode {spec.mode.name} does not apply to integers")
    base, upper_case = base_info
    builder.put_i64(
        value,
        base,
        spec.alternative_form,
        upper_case,
        spec.zero_pad,
        spec.align,
        spec.width or 0,
        spec.fill,
        spec.sign_mode,
    )


def _format_bool(spec: StandardFormatter, builder: FormatBuilder, value: bool) -> None:
    if spec.mode in _NUMERIC_MODES:
        _format_int(spec, builder, int(value))
    elif spec.mode is Mode.HEX_DUMP:
        width = _DEFAULT_HEX_DUMP_WIDTH if spec.width is None else spec.width
        builder.put_hexdump(bytes([int(value)]), width, spec.fill)
    else:
        _put_text(spec, builder, "true" if value else "false")


def _format_str(spec: StandardFormatter, builder: FormatBuilder, value: str) -> None:
    if spec.mode in _NUMERIC_MODES and len(value) == 1:
        _format_int(spec, builder, ord(value))
        return
    _put_text(spec, builder, value)


def _format_bytes(spec: StandardFormatter, builder: FormatBuilder, value: bytes | bytearray | memoryview) -> None:
    if spec.mode is Mode.POINTER:
        _format_int(spec, builder, id(value))
        return
    data = bytes(value)
    if spec.mode is Mode.DEFAULT:
        spec = replace(spec, mode=Mode.HEX_DUMP)
    _put_text(spec, builder, data.decode("latin-1"), data)


def _format_float(spec: StandardFormatter, builder: FormatBuilder, value: float) -> None:
    base_info = _FLOAT_BASES.get(spec.mode)
    if base_info is None:
        raise FormatError(f"mode {spec.mode.name} does not apply to floats")
    base, upper_case = base_info
    precision = _DEFAULT_FLOAT_PRECISION if spec.precision is None else spec.precision
    builder.put_f64(
        value,
        base,
        upper_case,
        spec.zero_pad,
        spec.align,
        spec.width or 0,
        precision,
        spec.fill,
        spec.sign_mode,
    )


def _format_sequence(spec: StandardFormatter, builder: FormatBuilder, value: list | tuple) -> None:
    if spec.mode is Mode.POINTER:
        _format_int(spec, builder, id(value))
        return
    if spec.sign_mode is not SignMode.ONLY_IF_NEEDED or spec.alternative_form or spec.zero_pad:
        raise FormatError("sequences take no sign, '#' or '0'")
    if spec.mode is not Mode.DEFAULT:
        raise FormatError(f"mode {spec.mode.name} does not apply to sequences")
    if spec.width is not None and spec.precision is not None:
        raise FormatError("sequences take a width or a precision, not both")

    builder.put_literal("[ ")
    for position, item in enumerate(value):
        if position:
            builder.put_literal(", ")
        format_value(StandardFormatter(), builder, item)
    builder.put_literal(" ]")


def _format_none(spec: StandardFormatter, builder: FormatBuilder, value: None) -> None:
    if spec.mode is Mode.DEFAULT:
        spec = replace(spec, mode=Mode.POINTER)
    _format_int(spec, builder, 0)


register_formatter(int, _format_int)
register_formatter(bool, _format_bool)
register_formatter(str, _format_str)
register_formatter(bytes, _format_bytes)
register_formatter(bytearray, _format_bytes)
register_formatter(memoryview, _format_bytes)
register_formatter(float, _format_float)
register_formatter(list, _format_sequence)
register_formatter(tuple, _format_sequence)
register_formatter(type(None), _format_none)


def vformat(builder: FormatBuilder, fmtstr: str, params: FormatParams) -> None:
    """Write ``fmtstr`` with its replacement fields filled from ``params``."""
    parser = FormatParser(fmtstr)
    while True:
        builder.put_literal(parser.consume_literal())
        specifier = parser.consume_specifier()
        if specifier is None:
            return
        index = specifier.index
        if index == USE_NEXT_INDEX:
            index = params.take_next_index()
        value = params.parameter(index)
        spec = StandardFormatter()
        spec.parse(params, FormatParser(specifier.flags))
        format_value(spec, builder, value)


def formatted(fmtstr: str, *args: Any) -> str:
    """The text of ``fmtstr`` formatted with ``args``."""
    builder = FormatBuilder()
    vformat(builder, fmtstr, FormatParams(args))
    return builder.to_string()


def out(fmtstr: str = "", *args: Any, file: TextIO | None = None) -> None:
    """Write formatted text to ``file`` (standard output by default)."""
    (file if file is not None else sys.stdout).write(formatted(fmtstr, *args))


def outln(fmtstr: str = "", *args: Any, file: TextIO | None = None) -> None:
    """Write formatted text and a newline to ``file`` (standard output by default)."""
    (file if file is not None else sys.stdout).write(formatted(fmtstr, *args) + "\n")


def warn(fmtstr: str = "", *args: Any) -> None:
    """Write formatted text to standard error."""
    out(fmtstr, *args, file=sys.stderr)


def warnln(fmtstr: str = "", *args: Any) -> None:
    """Write formatted text and a newline to standard error."""
    outln(fmtstr, *args, file=sys.stderr)


def dbgln(fmtstr: str = "", *args: Any) -> None:
    """Write a formatted debug line to standard error unless debug output is off."""
    if not _DEBUG.enabled:
        return
    sys.stderr.write(formatted(fmtstr, *args) + "\n")


def set_debug_enabled(value: bool) -> None:
    """Turn debug output from :func:`dbgln` on or off."""
    _DEBUG.enabled = bool(value)