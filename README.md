# aktext

Text-handling building blocks for Python, with no dependencies beyond the
standard library.

- `aktext.strutils`: glob-style mask matching (`matches`, and `match_spans` for the
  spans each wildcard covered), integer parsing bounded to 8, 16, 32 or 64 bits
  (`convert_to_int`, `convert_to_uint`, `convert_to_uint_from_hex`,
  `convert_to_uint_from_octal`), ASCII case-aware `starts_with`, `ends_with`,
  `contains` and `equals_ignoring_case`, `trim` and `trim_whitespace`, searching
  (`find`, `find_last`, `find_all`, `find_any_of`), `to_snakecase`, `to_titlecase`,
  `replace` and `count`. Options are the enums `CaseSensitivity`, `TrimMode`,
  `TrimWhitespace` and `SearchDirection`.
- `aktext.lexer`: `GenericLexer`, a cursor over a string with `peek`, `next_is`,
  `consume`, `consume_specific`, `consume_until`, `consume_while`, `consume_line`,
  `consume_quoted_string`, `consume_escaped_character`, `ignore`, `ignore_until`,
  `ignore_while` and `retreat`, plus the predicates `is_any_of`, `is_not_any_of`,
  `is_path_separator` and `is_quote`.
- `aktext.utf8`: `Utf8View`, a lenient UTF-8 view over bytes (or a `str`, which it
  encodes) that yields U+FFFD for each malformed byte, with `validate`,
  `valid_bytes`, `trim`, `starts_with`, `contains`, `substring_view` and
  `unicode_substring_view`; `Utf8CodePointIterator` iterates it and can `peek`.
- `aktext.builder`: `FormatBuilder`, the low-level writer for padded strings,
  integers, fixed-point numbers, floats and hex dumps, with the enums `Align` and
  `SignMode` and the helper `convert_unsigned_to_string`.
- `aktext.spec`: parsing of format strings (`FormatParser`) and of a field's
  specification (`StandardFormatter`); malformed input raises `FormatError`, a
  `ValueError`.
- `aktext.formatter`: a brace-style format language (`{}`, `{0}`, `{:>8}`, `{:#x}`,
  `{:08b}`, `{:.3}`, `{:{}}`, `{:hex-dump}` and more) for `int`, `bool`, `str`,
  `bytes`, `float`, `list`, `tuple` and `None`, with `formatted`, `vformat`,
  `out`, `outln`, `warn`, `warnln`, `dbgln` and `set_debug_enabled`.
  `register_formatter` adds support for further types.
- `aktext.view`: `split_view` and `iter_split_view` on a separator, `split_view_if`
  on a predicate, `lines` following CommonMark line endings, `compare`, `to_int`
  and `to_uint` (32-bit), `is_one_of` and `is_one_of_ignoring_case`.
- `aktext.text`: `StringBuilder` (with `append`, `appendff`, `join`,
  `append_escaped_for_json` and more), `split`, `split_limit`, `repeated`,
  `bijective_base_from`, `roman_number_from`, `escape_html_entities` and `reverse`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from aktext.formatter import formatted
from aktext.strutils import matches, convert_to_int
from aktext.text import roman_number_from, bijective_base_from

formatted("{:>6}|{:#x}|{:.2}", "ab", 255, 1.5)   # '    ab|0xff|1.5'
matches("hello.txt", "*.TXT")                     # True (case-insensitive by default)
convert_to_int("300", bits=8)                     # None, out of range
roman_number_from(1994)                           # 'MCMXCIV'
bijective_base_from(26)                           # 'AA'
```

```python
from aktext.lexer import GenericLexer

lexer = GenericLexer('key = "some value"')
key = lexer.consume_until(" ")                    # 'key'
lexer.ignore_until("=")
lexer.ignore_while(str.isspace)
value = lexer.consume_quoted_string()             # 'some value'
```

```python
from aktext.utf8 import Utf8View

view = Utf8View("héllo".encode())
len(view)                                          # 5
list(Utf8View(b"a\xffb"))                          # [97, 65533, 98]
```

## What it does not do

This is a library only: it installs no command-line tool. Case folding,
whitespace tests and the snake/title case conversions act on ASCII letters only,
and float formatting is a simple approximation rather than shortest
round-trip output.