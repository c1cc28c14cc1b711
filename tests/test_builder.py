import math

import pytest

from aktext.builder import Align, FormatBuilder, SignMode, convert_unsigned_to_string


def build(method, *args, **kwargs):
    builder = FormatBuilder()
    getattr(builder, method)(*args, **kwargs)
    return builder.to_string()


def test_convert_zero():
    assert convert_unsigned_to_string(0, 10, False) == "0"


@pytest.mark.parametrize("base", [2, 3, 8, 10, 13, 16])
@pytest.mark.parametrize("value", [1, 7, 255, 4096, 2**64 - 1])
def test_convert_round_trip(value, base):
    text = convert_unsigned_to_string(value, base, False)
    assert int(text, base) == value
    assert convert_unsigned_to_string(value, base, True) == text.upper()


@pytest.mark.parametrize("base", [1, 17, 0])
def test_convert_bad_base(base):
    with pytest.raises(ValueError):
        convert_unsigned_to_string(5, base, False)


def test_zero_padded_prefix_not_counted():
    text = build("put_u64", 32, 16, True, False, True, Align.RIGHT, 8)
    assert text == "0x00000020"


def test_binary_upper_prefix():
    text = build("put_u64", 5, 2, True, True)
    assert text.startswith("0B")
    assert int(text[2:], 2) == 5


def test_default_align_is_right():
    assert build("put_u64", 7, min_width=5) == str(7).rjust(5)
    assert build("put_u64", 7, align=Align.DEFAULT, min_width=5) == str(7).rjust(5)


def test_left_align_u64():
    assert build("put_u64", 7, align=Align.LEFT, min_width=4, fill="*") == "7".ljust(4, "*")


def test_negative_u64_rejected():
    with pytest.raises(ValueError):
        build("put_u64", -1)


@pytest.mark.parametrize("value", [-42, 0, 42, -(2**63)])
def test_i64_decimal(value):
    assert build("put_i64", value) == str(value)


def test_i64_sign_modes():
    assert build("put_i64", 5, sign_mode=SignMode.ALWAYS) == "+" + str(5)
    assert build("put_i64", 5, sign_mode=SignMode.RESERVED) == " " + str(5)
    assert build("put_i64", -5, sign_mode=SignMode.ALWAYS) == str(-5)


def test_put_string_alignments():
    value = "ab"
    left = build("put_string", value, Align.LEFT, 6, None, "*")
    right = build("put_string", value, Align.RIGHT, 6, None, "*")
    center = build("put_string", value, Align.CENTER, 5, None, "*")
    assert len(left) == len(right) == 6
    assert left.startswith(value) and right.endswith(value)
    assert center == "*ab**"


def test_put_string_truncates():
    assert build("put_string", "abcdef", max_width=3) == "abcdef"[:3]


def test_put_literal_collapses_braces():
    assert build("put_literal", "a{{b}}c") == "a{b}c"


@pytest.mark.parametrize("value", [0.25, 2.75, 100.0, -3.5, 1.5])
def test_f64_round_trip(value):
    assert float(build("put_f64", value)) == value


def test_f64_zero_pad_matches_fixed():
    assert build("put_f64", 1.5, zero_pad=True, precision=3) == f"{1.5:.3f}"


def test_f64_non_finite():
    assert build("put_f64", math.nan) == "nan"
    assert build("put_f64", math.inf, upper_case=True) == "INF"
    assert build("put_f64", -math.inf) == "-inf"
    assert build("put_f64", math.inf, sign_mode=SignMode.ALWAYS) == "+inf"


def test_f64_width():
    text = build("put_f64", 2.75, align=Align.RIGHT, min_width=10)
    assert len(text) == 10
    assert float(text) == 2.75


def test_f80_round_trip():
    assert float(build("put_f80", 1.5)) == 1.5
    assert build("put_f80", 3.0) == str(3)


def test_fixed_point_half():
    assert float(build("put_fixed_point", 3, 1, 2)) == 3.5


def test_fixed_point_zero_pad():
    assert build("put_fixed_point", 3, 1, 2, zero_pad=True, precision=3) == f"{3.5:.3f}"


def test_hexdump_no_width():
    data = b"\x00\x10\xff"
    assert build("put_hexdump", data, 0) == data.hex()


def test_hexdump_one_row():
    data = b"ABCD"
    assert build("put_hexdump", data, 4) == data.hex() + " " * 4 + "ABCD"


def test_hexdump_rows_and_nonprintable():
    data = b"ABC\x01EF"
    expected = b"ABC".hex() + " " * 4 + "ABC" + "\n" + b"\x01EF".hex() + " " * 4 + ".EF"
    assert build("put_hexdump", data, 3) == expected


def test_builder_accumulates():
    builder = FormatBuilder()
    builder.put_string("x")
    builder.put_i64(-1)
    assert builder.to_string() == "x" + str(-1)
    assert str(builder) == builder.to_string()