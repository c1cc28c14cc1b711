import pytest

from aktext.builder import Align, SignMode
from aktext.spec import (
    USE_NEXT_INDEX,
    FormatError,
    FormatParams,
    FormatParser,
    FormatSpecifier,
    Mode,
    StandardFormatter,
)


def parse(flags, *args):
    spec = StandardFormatter()
    spec.parse(FormatParams(args), FormatParser(flags))
    return spec


def test_consume_literal_keeps_doubled_braces():
    parser = FormatParser("ab{{c}}d{0}")
    assert parser.consume_literal() == "ab{{c}}d"
    assert parser.remaining() == "{0}"


def test_consume_literal_to_end():
    parser = FormatParser("plain")
    assert parser.consume_literal() == "plain"
    assert parser.is_eof()


def test_consume_specifier_with_index():
    parser = FormatParser("{0}")
    assert parser.consume_specifier() == FormatSpecifier("", 0)


def test_consume_specifier_next_index_and_flags():
    parser = FormatParser("{:x}")
    assert parser.consume_specifier() == FormatSpecifier("x", USE_NEXT_INDEX)


def test_consume_specifier_nested_braces():
    parser = FormatParser("{2:{}}rest")
    spec = parser.consume_specifier()
    assert spec == FormatSpecifier("{}", 2)
    assert parser.remaining() == "rest"


def test_consume_specifier_none_at_end():
    assert FormatParser("").consume_specifier() is None


def test_consume_specifier_unmatched_close():
    with pytest.raises(FormatError):
        FormatParser("}").consume_specifier()


def test_consume_specifier_unterminated():
    with pytest.raises(FormatError):
        FormatParser("{:x").consume_specifier()
    with pytest.raises(FormatError):
        FormatParser("{0").consume_specifier()


def test_consume_number():
    parser = FormatParser("123x")
    assert parser.consume_number() == 123
    assert parser.consume_number() is None
    assert parser.remaining() == "x"


def test_consume_replacement_field():
    assert FormatParser("{}").consume_replacement_field() == USE_NEXT_INDEX
    assert FormatParser("{4}").consume_replacement_field() == 4
    assert FormatParser("4").consume_replacement_field() is None
    with pytest.raises(FormatError):
        FormatParser("{4").consume_replacement_field()


def test_params_take_next_index():
    params = FormatParams(["a", "b"])
    assert [params.take_next_index() for _ in range(3)] == [0, 1, 2]


def test_params_parameter_out_of_range():
    params = FormatParams(["a"])
    assert params.parameter(0) == "a"
    with pytest.raises(FormatError):
        params.parameter(1)


def test_params_size_at_rejects_bad_values():
    params = FormatParams([7, -1, "x"])
    assert params.size_at(0) == 7
    with pytest.raises(FormatError):
        params.size_at(1)
    with pytest.raises(FormatError):
        params.size_at(2)


def test_parse_defaults():
    spec = parse("")
    assert spec == StandardFormatter()
    assert spec.width is None and spec.precision is None


def test_parse_fill_align_width():
    spec = parse("*^10")
    assert (spec.fill, spec.align, spec.width) == ("*", Align.CENTER, 10)


def test_parse_align_without_fill():
    spec = parse(">")
    assert (spec.fill, spec.align) == (" ", Align.RIGHT)


def test_parse_fill_same_as_align():
    spec = parse("<<5")
    assert (spec.fill, spec.align, spec.width) == ("<", Align.LEFT, 5)


def test_parse_sign_alt_zero_mode():
    spec = parse("+#010x")
    assert spec.sign_mode is SignMode.ALWAYS
    assert spec.alternative_form and spec.zero_pad
    assert spec.width == 10
    assert spec.mode is Mode.HEXADECIMAL


def test_parse_reserved_sign():
    assert parse(" d").sign_mode is SignMode.RESERVED


def test_parse_precision_and_float():
    spec = parse(".3f")
    assert (spec.precision, spec.mode) == (3, Mode.FLOAT)


def test_parse_width_and_precision_from_arguments():
    spec = parse("{}.{1}", 12, 4)
    assert (spec.width, spec.precision) == (12, 4)


@pytest.mark.parametrize(
    "flags,mode",
    [
        ("b", Mode.BINARY),
        ("B", Mode.BINARY_UPPERCASE),
        ("o", Mode.OCTAL),
        ("X", Mode.HEXADECIMAL_UPPERCASE),
        ("c", Mode.CHARACTER),
        ("s", Mode.STRING),
        ("p", Mode.POINTER),
        ("a", Mode.HEXFLOAT),
        ("A", Mode.HEXFLOAT_UPPERCASE),
        ("hex-dump", Mode.HEX_DUMP),
    ],
)
def test_parse_modes(flags, mode):
    assert parse(flags).mode is mode


def test_parse_rejects_trailing_text():
    with pytest.raises(FormatError):
        parse("q")
    with pytest.raises(FormatError):
        parse("xx")


def test_parse_rejects_brace_fill():
    with pytest.raises(FormatError):
        parse("{<")