"""Lenient UTF-8 decoding over bytes, with code point based slicing."""

from __future__ import annotations

from aktext.strutils import TrimMode

__all__ = ["Utf8CodePointIterator", "Utf8View"]

REPLACEMENT_CHARACTER = 0xFFFD
_MAX_CODE_POINT = 0x10FFFF


def _decode_first_byte(byte: int) -> tuple[int, int] | None:
    """Length of the sequence a lead byte starts and its value bits, or None."""
    if byte & 0x80 == 0:
        return 1, byte
    if byte & 0x40 == 0:
        return None
    if byte & 0x20 == 0:
        return 2, byte & 0x1F
    if byte & 0x10 == 0:
        return 3, byte & 0x0F
    if byte & 0x08 == 0:
        return 4, byte & 0x07
    return None


def _is_continuation(byte: int) -> bool:
    return byte >> 6 == 2


class Utf8CodePointIterator:
    """Iterates code points; malformed input yields U+FFFD one byte at a time."""

    def __init__(self, data: bytes, position: int = 0) -> None:
        self._data = data
        self._position = position

    def _remaining(self) -> int:
        return len(self._data) - self._position

    def _done(self) -> bool:
        return self._remaining() <= 0

    def _copy(self) -> Utf8CodePointIterator:
        return Utf8CodePointIterator(self._data, self._position)

    def _current(self) -> int:
        decoded = _decode_first_byte(self._data[self._position])
        if decoded is None:
            return REPLACEMENT_CHARACTER
        length, value = decoded
        if length > self._remaining():
            return REPLACEMENT_CHARACTER
        for byte in self._data[self._position + 1:self._position + length]:
            if not _is_continuation(byte):
                return REPLACEMENT_CHARACTER
            value = (value << 6) | (byte & 0x3F)
        return value

    def _advance(self) -> None:
        self._position += self.underlying_code_point_length_in_bytes()

    def __iter__(self) -> Utf8CodePointIterator:
        return self

    def __next__(self) -> int:
        if self._done():
            raise StopIteration
        value = self._current()
        self._advance()
        return value

    def peek(self, offset: int = 0) -> int | None:
        """The code point ``offset`` places ahead, or None at or past the end."""
        probe = self._copy()
        for _ in range(offset):
            if probe._done():
                return None
            probe._advance()
        if probe._done():
            return None
        return probe._current()

    def underlying_code_point_length_in_bytes(self) -> int:
        """Bytes the current code point occupies; 1 for a malformed sequence."""
        if self._done():
            raise IndexError("iterator is at the end")
        decoded = _decode_first_byte(self._data[self._position])
        if decoded is None:
            return 1
        length, _ = decoded
        if length > self._remaining():
            return 1
        continuation = self._data[self._position + 1:self._position + length]
        if not all(_is_continuation(byte) for byte in continuation):
            return 1
        return length

    def underlying_code_point_bytes(self) -> bytes:
        """The raw bytes of the current code point."""
        length = self.underlying_code_point_length_in_bytes()
        return self._data[self._position:self._position + length]


class Utf8View:
    """An immutable view of UTF-8 bytes that is iterated by code point."""

    def __init__(self, data: bytes | str = b"") -> None:
        self._data = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._length: int | None = None

    def __bytes__(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"Utf8View({self._data!r})"

    def __iter__(self) -> Utf8CodePointIterator:
        return Utf8CodePointIterator(self._data)

    def __len__(self) -> int:
        """Number of code points, counting each malformed byte as one."""
        if self._length is None:
            self._length = sum(1 for _ in self)
        return self._length

    def _positions(self):
        iterator = Utf8CodePointIterator(self._data)
        while not iterator._done():
            yield iterator._copy()
            iterator._advance()

    def iterator_at_byte_offset(self, byte_offset: int) -> Utf8CodePointIterator:
        """Iterator at the first code point starting at or after ``byte_offset``."""
        for iterator in self._positions():
            if iterator._position >= byte_offset:
                return iterator
        return Utf8CodePointIterator(self._data, len(self._data))

    def byte_offset_of(self, code_point_offset: int) -> int:
        """Byte offset where the given code point starts (clamped to the end)."""
        for index, iterator in enumerate(self._positions()):
            if index == code_point_offset:
                return iterator._position
        return len(self._data)

    def substring_view(self, byte_offset: int, byte_length: int | None = None) -> Utf8View:
        """View of a byte range."""
        if byte_length is None:
            byte_length = len(self._data) - byte_offset
        if byte_offset < 0 or byte_length < 0 or byte_offset + byte_length > len(self._data):
            raise IndexError("byte range is outside the view")
        return Utf8View(self._data[byte_offset:byte_offset + byte_length])

    def unicode_substring_view(self, code_point_offset: int, code_point_length: int | None = None) -> Utf8View:
        """View of a range of code points."""
        if code_point_length is None:
            code_point_length = len(self) - code_point_offset
        if code_point_length == 0:
            return Utf8View()

        last = code_point_offset + code_point_length - 1
        start = 0
        for index, iterator in enumerate(self._positions()):
            if index == code_point_offset:
                start = iterator._position
            if index == last:
                end = iterator._position + iterator.underlying_code_point_length_in_bytes()
                return self.substring_view(start, end - start)
        raise IndexError("code point range is outside the view")

    def is_empty(self) -> bool:
        return not self._data

    def starts_with(self, other: Utf8View | str | bytes) -> bool:
        """Whether this view begins with the code points of ``other``."""
        prefix = other if isinstance(other, Utf8View) else Utf8View(other)
        if prefix.is_empty():
            return True
        if self.is_empty() or len(prefix) > len(self):
            return False
        return all(a == b for a, b in zip(self, prefix))

    def contains(self, code_point: int) -> bool:
        return any(value == code_point for value in self)

    def trim(self, characters: Utf8View | str | bytes, mode: TrimMode = TrimMode.BOTH) -> Utf8View:
        """Strip code points found in ``characters`` from the chosen ends."""
        strip = characters if isinstance(characters, Utf8View) else Utf8View(characters)
        start = 0
        length = len(self._data)

        if mode in (TrimMode.LEFT, TrimMode.BOTH):
            for iterator in self._positions():
                if length == 0:
                    return Utf8View()
                if not strip.contains(iterator._current()):
                    break
                size = iterator.underlying_code_point_length_in_bytes()
                start += size
                length -= size

        if mode in (TrimMode.RIGHT, TrimMode.BOTH):
            trailing = 0
            for iterator in self._positions():
                if strip.contains(iterator._current()):
                    trailing += iterator.underlying_code_point_length_in_bytes()
                else:
                    trailing = 0
            if trailing >= length:
                return Utf8View()
            length -= trailing

        return self.substring_view(start, length)

    def _check(self) -> tuple[bool, int]:
        valid = 0
        data = self._data
        position = 0
        while position < len(data):
            decoded = _decode_first_byte(data[position])
            if decoded is None:
                return False, valid
            length, value = decoded
            for offset in range(1, length):
                if position + offset >= len(data):
                    return False, valid
                byte = data[position + offset]
                if not _is_continuation(byte):
                    return False, valid
                value = (value << 6) | (byte & 0x3F)
            if value > _MAX_CODE_POINT:
                return False, valid
            valid += length
            position += length
        return True, valid

    def validate(self) -> bool:
        """Whether the whole view is well-formed UTF-8."""
        return self._check()[0]

    def valid_bytes(self) -> int:
        """Length of the well-formed prefix, in bytes."""
        return self._check()[1]