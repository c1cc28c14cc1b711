import pytest

from aktext.lexer import (
    GenericLexer,
    is_any_of,
    is_not_any_of,
    is_path_separator,
    is_quote,
)


def test_tell_and_remaining_track_consumption():
    lexer = GenericLexer("hello")
    assert lexer.consume() == "h"
    assert lexer.tell() == 1
    assert lexer.tell_remaining() == len("hello") - 1
    assert lexer.remaining() == "ello"


def test_peek_past_end_is_nul():
    lexer = GenericLexer("ab")
    assert lexer.peek(1) == "b"
    assert lexer.peek(2) == "\0"


def test_consume_at_eof_raises():
    lexer = GenericLexer("")
    assert lexer.is_eof()
    with pytest.raises(IndexError):
        lexer.consume()


def test_consume_count_is_clamped():
    lexer = GenericLexer("abc")
    assert lexer.consume(10) == "abc"
    assert lexer.is_eof()
    assert lexer.consume(0) == ""


def test_retreat():
    lexer = GenericLexer("abc")
    lexer.consume(2)
    lexer.retreat()
    assert lexer.remaining() == "bc"
    with pytest.raises(IndexError):
        lexer.retreat(5)


def test_next_is_string_and_predicate():
    lexer = GenericLexer("foobar")
    assert lexer.next_is("foo")
    assert not lexer.next_is("bar")
    assert lexer.next_is(str.isalpha)


def test_consume_specific():
    lexer = GenericLexer("{{x}}")
    assert lexer.consume_specific("{{")
    assert not lexer.consume_specific("}}")
    assert lexer.remaining() == "x}}"


def test_consume_escaped_character():
    lexer = GenericLexer("\\nq\\z")
    assert lexer.consume_escaped_character() == "\n"
    assert lexer.consume_escaped_character() == "q"
    assert lexer.consume_escaped_character() == "z"
    assert lexer.is_eof()


def test_consume_all():
    lexer = GenericLexer("key=value")
    lexer.consume_until("=")
    lexer.ignore()
    assert lexer.consume_all() == "value"
    assert lexer.consume_all() == ""


def test_consume_line_handles_crlf():
    lexer = GenericLexer("first\r\nsecond\nthird")
    assert lexer.consume_line() == "first"
    assert lexer.consume_line() == "second"
    assert lexer.consume_line() == "third"
    assert lexer.is_eof()


def test_consume_until_char_string_and_predicate():
    lexer = GenericLexer("abc-->def 42")
    assert lexer.consume_until("-->") == "abc"
    lexer.ignore(3)
    assert lexer.consume_until(str.isdigit) == "def "
    assert lexer.consume_until("x") == "42"


def test_consume_quoted_string():
    lexer = GenericLexer('"hello" rest')
    assert lexer.consume_quoted_string() == "hello"
    assert lexer.remaining() == " rest"


def test_consume_quoted_string_with_escape():
    lexer = GenericLexer("'it\\'s'")
    assert lexer.consume_quoted_string("\\") == "it\\'s"
    assert lexer.is_eof()


def test_unterminated_quoted_string_restores_position():
    lexer = GenericLexer('"open')
    assert lexer.consume_quoted_string() == ""
    assert lexer.tell() == 0


def test_consume_while_and_ignore_while():
    lexer = GenericLexer("   123abc")
    lexer.ignore_while(str.isspace)
    assert lexer.consume_while(str.isdigit) == "123"
    assert lexer.remaining() == "abc"


def test_ignore_until_string_skips_stop():
    lexer = GenericLexer("junk;data")
    lexer.ignore_until(";")
    assert lexer.remaining() == "data"


def test_ignore_until_predicate_keeps_stop():
    lexer = GenericLexer("junk;data")
    lexer.ignore_until(is_any_of(";"))
    assert lexer.remaining() == ";data"


def test_predicates():
    assert is_any_of("<^>")("^")
    assert not is_any_of("<^>")("a")
    assert is_not_any_of("{}")("a")
    assert is_path_separator("/") and is_path_separator("\\")
    assert not is_path_separator(":")
    assert is_quote("'") and is_quote('"')
    assert not is_quote("`")