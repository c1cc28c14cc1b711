"""Low-level text output for formatted values: padding, integers, floats and hex dumps."""

from __future__ import annotations

import enum
import math

__all__ = [
    "Align",
    "SignMode",
    "FormatBuilder",
    "convert_unsigned_to_string",
]

_LOWER_DIGITS = "0123456789abcdef"
_UPPER_DIGITS = "0123456789ABCDEF"


class Align(enum.Enum):
    DEFAULT = enum.auto()
    LEFT = enum.auto()
    CENTER = enum.auto()
    RIGHT = enum.auto()


class SignMode(enum.Enum):
    ONLY_IF_NEEDED = enum.auto()
    ALWAYS = enum.auto()
    RESERVED = enum.auto()
    DEFAULT = ONLY_IF_NEEDED


def convert_unsigned_to_string(value: int, base: int = 10, upper_case: bool = False) -> str:
    """Digits of a non-negative integer in a base from 2 to 16."""
    if not 2 <= base <= 16:
        raise ValueError(f"unsupported base: {base}")
    if value < 0:
        raise ValueError("value must not be negative")
    lookup = _UPPER_DIGITS if upper_case else _LOWER_DIGITS
    if value == 0:
        return "0"
    digits: list[str] = []
    while value > 0:
        value, digit = divmod(value, base)
        digits.append(lookup[digit])
    return "".join(reversed(digits))


def _split_padding(amount: int) -> tuple[int, int]:
    """Left and right padding for centred text; the extra one goes right."""
    return amount // 2, -(-amount // 2)


class FormatBuilder:
    """Accumulates formatted output."""

    def __init__(self) -> None:
        self._pieces: list[str] = []

    def __str__(self) -> str:
        return self.to_string()

    def _append(self, text: str) -> None:
        if text:
            self._pieces.append(text)

    def to_string(self) -> str:
        """Everything written so far."""
        return "".join(self._pieces)

    def put_padding(self, fill: str, amount: int) -> None:
        """Write ``fill`` ``amount`` times."""
        if amount > 0:
            self._append(fill * amount)

    def put_literal(self, value: str) -> None:
        """Write literal text, collapsing each doubled brace to one."""
        out: list[str] = []
        chars = iter(value)
        for ch in chars:
            out.append(ch)
            if ch in "{}":
                next(chars, None)
        self._append("".join(out))

    def put_string(
        self,
        value: str,
        align: Align = Align.LEFT,
        min_width: int = 0,
        max_width: int | None = None,
        fill: str = " ",
    ) -> None:
        """Write ``value`` truncated to ``max_width`` and padded to ``min_width``."""
        used_by_string = len(value) if max_width is None else min(max_width, len(value))
        used_by_padding = max(min_width, used_by_string) - used_by_string
        value = value[:used_by_string]

        if align in (Align.LEFT, Align.DEFAULT):
            self._append(value)
            self.put_padding(fill, used_by_padding)
        elif align is Align.CENTER:
            left, right = _split_padding(used_by_padding)
            self.put_padding(fill, left)
            self._append(value)
            self.put_padding(fill, right)
        elif align is Align.RIGHT:
            self.put_padding(fill, used_by_padding)
            self._append(value)

    def put_u64(
        self,
        value: int,
        base: int = 10,
        prefix: bool = False,
        upper_case: bool = False,
        zero_pad: bool = False,
        align: Align = Align.RIGHT,
        min_width: int = 0,
        fill: str = " ",
        sign_mode: SignMode = SignMode.ONLY_IF_NEEDED,
        is_negative: bool = False,
    ) -> None:
        """Write an unsigned magnitude with optional sign, radix prefix and padding."""
        if value < 0:
            raise ValueError("put_u64 takes a non-negative magnitude")
        if align is Align.DEFAULT:
            align = Align.RIGHT

        digits = convert_unsigned_to_string(value, base, upper_case)

        used_by_prefix = 0
        if not (align is Align.RIGHT and zero_pad):
            # With right-aligned zero padding the sign and prefix do not count
            # towards the width, so "{:#08x}" of 32 gives "0x00000020".
            if is_negative or sign_mode is not SignMode.ONLY_IF_NEEDED:
                used_by_prefix += 1
            if prefix:
                if base == 8:
                    used_by_prefix += 1
                elif base in (2, 16):
                    used_by_prefix += 2

        used_by_field = used_by_prefix + len(digits)
        used_by_padding = max(used_by_field, min_width) - used_by_field

        lead: list[str] = []
        if is_negative:
            lead.append("-")
        elif sign_mode is SignMode.ALWAYS:
            lead.append("+")
        elif sign_mode is SignMode.RESERVED:
            lead.append(" ")
        if prefix:
            if base == 2:
                lead.append("0B" if upper_case else "0b")
            elif base == 8:
                lead.append("0")
            elif base == 16:
                lead.append("0X" if upper_case else "0x")
        lead_text = "".join(lead)

        if align is Align.LEFT:
            self._append(lead_text)
            self._append(digits)
            self.put_padding(fill, used_by_padding)
        elif align is Align.CENTER:
            left, right = _split_padding(used_by_padding)
            self.put_padding(fill, left)
            self._append(lead_text)
            self._append(digits)
            self.put_padding(fill, right)
        elif align is Align.RIGHT:
            if zero_pad:
                self._append(lead_text)
                self.put_padding("0", used_by_padding)
                self._append(digits)
            else:
                self.put_padding(fill, used_by_padding)
                self._append(lead_text)
                self._append(digits)

    def put_i64(
        self,
        value: int,
        base: int = 10,
        prefix: bool = False,
        upper_case: bool = False,
        zero_pad: bool = False,
        align: Align = Align.RIGHT,
        min_width: int = 0,
        fill: str = " ",
        sign_mode: SignMode = SignMode.ONLY_IF_NEEDED,
    ) -> None:
        """Write a signed integer."""
        self.put_u64(
            abs(value), base, prefix, upper_case, zero_pad, align, min_width, fill, sign_mode, value < 0
        )

    def put_fixed_point(
        self,
        integer_value: int,
        fraction_value: int,
        fraction_one: int,
        base: int = 10,
        upper_case: bool = False,
        zero_pad: bool = False,
        align: Align = Align.RIGHT,
        min_width: int = 0,
        precision: int = 6,
        fill: str = " ",
        sign_mode: SignMode = SignMode.ONLY_IF_NEEDED,
    ) -> None:
        """Write a fixed-point number given as integer part and ``fraction_value / fraction_one``."""
        inner = FormatBuilder()
        is_negative = integer_value < 0
        if is_negative:
            integer_value = -integer_value

        inner.put_u64(integer_value, base, False, upper_case, False, Align.RIGHT, 0, " ", sign_mode, is_negative)

        if precision > 0:
            scale = 10**precision
            fraction = (scale * fraction_value) // fraction_one
            if is_negative:
                fraction = scale - fraction
            while fraction != 0 and fraction % 10 == 0:
                fraction //= 10

            visible_precision = 0
            remaining = fraction
            while visible_precision < precision and remaining != 0:
                remaining //= 10
                visible_precision += 1

            inner._write_fraction(
                fraction, visible_precision, precision, base, upper_case, zero_pad, with_dot=zero_pad
            )

        self.put_string(inner.to_string(), align, min_width, None, fill)

    def _write_fraction(
        self,
        digits_value: int,
        visible_precision: int,
        precision: int,
        base: int,
        upper_case: bool,
        zero_pad: bool,
        with_dot: bool,
    ) -> None:
        if with_dot or visible_precision > 0:
            self._append(".")
        if visible_precision > 0:
            self.put_u64(digits_value, base, False, upper_case, True, Align.RIGHT, visible_precision)
        if zero_pad and precision - visible_precision > 0:
            self.put_u64(0, base, False, False, True, Align.RIGHT, precision - visible_precision)

    def _put_non_finite(
        self, value: float, upper_case: bool, align: Align, min_width: int, fill: str, sign_mode: SignMode
    ) -> None:
        text: list[str] = []
        if value < 0.0:
            text.append("-")
        elif sign_mode is SignMode.ALWAYS:
            text.append("+")
        elif sign_mode is SignMode.RESERVED:
            text.append(" ")
        if math.isnan(value):
            text.append("NAN" if upper_case else "nan")
        else:
            text.append("INF" if upper_case else "inf")
        self.put_string("".join(text), align, min_width, None, fill)

    def _float_body(
        self,
        value: float,
        base: int,
        upper_case: bool,
        zero_pad: bool,
        precision: int,
        sign_mode: SignMode,
        dot_when_zero_pad: bool,
    ) -> str:
        inner = FormatBuilder()
        is_negative = value < 0.0
        if is_negative:
            value = -value

        inner.put_u64(int(value), base, False, upper_case, False, Align.RIGHT, 0, " ", sign_mode, is_negative)

        if precision > 0:
            value -= int(value)
            epsilon = 0.5
            for _ in range(precision):
                epsilon /= 10.0

            visible_precision = 0
            while visible_precision < precision:
                if value - int(value) < epsilon:
                    break
                value *= 10.0
                epsilon *= 10.0
                visible_precision += 1

            inner._write_fraction(
                int(value),
                visible_precision,
                precision,
                base,
                upper_case,
                zero_pad,
                with_dot=dot_when_zero_pad and zero_pad,
            )
        return inner.to_string()

    def put_f64(
        self,
        value: float,
        base: int = 10,
        upper_case: bool = False,
        zero_pad: bool = False,
        align: Align = Align.RIGHT,
        min_width: int = 0,
        precision: int = 6,
        fill: str = " ",
        sign_mode: SignMode = SignMode.ONLY_IF_NEEDED,
    ) -> None:
        """Write a float with at most ``precision`` fractional digits, trailing zeros dropped unless zero-padded."""
        if math.isnan(value) or math.isinf(value):
            self._put_non_finite(value, upper_case, align, min_width, fill, sign_mode)
            return
        body = self._float_body(value, base, upper_case, zero_pad, precision, sign_mode, True)
        self.put_string(body, align, min_width, None, fill)

    def put_f80(
        self,
        value: float,
        base: int = 10,
        upper_case: bool = False,
        align: Align = Align.RIGHT,
        min_width: int = 0,
        precision: int = 6,
        fill: str = " ",
        sign_mode: SignMode = SignMode.ONLY_IF_NEEDED,
    ) -> None:
        """Write an extended-precision float; never zero-pads the fraction."""
        if math.isnan(value) or math.isinf(value):
            self._put_non_finite(value, upper_case, align, min_width, fill, sign_mode)
            return
        body = self._float_body(value, base, upper_case, False, precision, sign_mode, False)
        self.put_string(body, align, min_width, None, fill)

    def put_hexdump(self, data: bytes, width: int, fill: str = " ") -> None:
        """Write bytes as hex pairs; every ``width`` bytes a printable view and a newline follow."""
        data = bytes(data)

        def put_char_view(end: int) -> None:
            self.put_padding(fill, 4)
            self._append("".join(chr(b) if 32 <= b <= 127 else "." for b in data[end - width:end]))

        for index, byte in enumerate(data):
            if width > 0 and index and index % width == 0:
                put_char_view(index)
                self.put_literal("\n")
            self.put_u64(byte, 16, False, False, True, Align.RIGHT, 2)

        if width > 0 and data and len(data) % width == 0:
            put_char_view(len(data))