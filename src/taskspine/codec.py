"""Binary codec for stored values.

A compact, non-self-describing little-endian format. Stored executors rely
on one property of it: a sequence encodes as a compact length prefix followed
by the concatenated item encodings, so a host can read the length or append
an item without decoding any item.

Compact integers use the two low bits of the first byte as a mode tag:

- ``0b00``: single byte, values below ``2**6``.
- ``0b01``: two bytes, values below ``2**14``.
- ``0b10``: four bytes, values below ``2**30``.
- ``0b11``: big-integer mode; the upper six bits hold ``byte_count - 4``.

Example:
    >>> from taskspine.codec import encode_compact, encode_sequence, decode_length
    >>> encode_compact(1)
    b'\\x04'
    >>> encode_compact(64)
    b'\\x01\\x01'
    >>> data = encode_sequence([b"\\x0a", b"\\x14"])
    >>> decode_length(data)
    2
"""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, BinaryIO, Protocol, TypeVar, runtime_checkable

from taskspine.core.exceptions import CodecError

T = TypeVar("T")

MAX_COMPACT_U32 = 2**32 - 1

# Big-integer mode stores the byte count minus four in six bits.
_MAX_BIG_INT_BYTES = 4 + 0b111111


def read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read exactly ``n`` bytes.

    Raises:
        CodecError: If the stream ends early.
    """
    data = stream.read(n)
    if len(data) != n:
        raise CodecError(f"Not enough data to fill buffer: wanted {n}, got {len(data)}")
    return data


def ensure_consumed(stream: BinaryIO) -> None:
    """Raise if any bytes remain in ``stream``."""
    if stream.read(1):
        raise CodecError("Input buffer has trailing bytes")


# =============================================================================
# Compact integers
# =============================================================================


def encode_compact(value: int) -> bytes:
    """Encode a non-negative int in compact form.

    Example:
        >>> encode_compact(0)
        b'\\x00'
        >>> encode_compact(16383)
        b'\\xfd\\xff'
        >>> encode_compact(2**30)
        b'\\x03\\x00\\x00\\x00@'
    """
    if value < 0:
        raise CodecError(f"Compact encoding requires a non-negative int, got {value}")
    if value < 1 << 6:
        return bytes([value << 2])
    if value < 1 << 14:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < 1 << 30:
        return ((value << 2) | 0b10).to_bytes(4, "little")

    size = (value.bit_length() + 7) // 8
    if size > _MAX_BIG_INT_BYTES:
        raise CodecError(f"Value too large for compact encoding: {size} bytes")
    return bytes([((size - 4) << 2) | 0b11]) + value.to_bytes(size, "little")


def decode_compact(stream: BinaryIO) -> int:
    """Decode a compact int, rejecting non-canonical encodings.

    Example:
        >>> import io
        >>> decode_compact(io.BytesIO(b"\\x01\\x01"))
        64
        >>> decode_compact(io.BytesIO(b"\\x01\\x00"))
        Traceback (most recent call last):
        ...
        taskspine.core.exceptions.CodecError: Out of range compact value
    """
    prefix = read_exact(stream, 1)[0]
    mode = prefix & 0b11

    if mode == 0b00:
        return prefix >> 2
    if mode == 0b01:
        value = int.from_bytes(bytes([prefix]) + read_exact(stream, 1), "little") >> 2
        if value < 1 << 6:
            raise CodecError("Out of range compact value")
        return value
    if mode == 0b10:
        value = int.from_bytes(bytes([prefix]) + read_exact(stream, 3), "little") >> 2
        if value < 1 << 14:
            raise CodecError("Out of range compact value")
        return value

    size = (prefix >> 2) + 4
    value = int.from_bytes(read_exact(stream, size), "little")
    if value < 1 << 30 or (value.bit_length() + 7) // 8 != size:
        raise CodecError("Out of range compact value")
    return value


# =============================================================================
# Field codecs
# =============================================================================


@runtime_checkable
class Codec(Protocol):
    """Encodes one value and decodes it back from a stream."""

    def encode(self, value: Any) -> bytes:
        """Encode ``value``."""
        ...

    def decode(self, stream: BinaryIO) -> Any:
        """Decode one value from ``stream``."""
        ...


@dataclass(frozen=True)
class FixedInt:
    """Fixed-width little-endian unsigned integer.

    Example:
        >>> import io
        >>> U16.encode(258)
        b'\\x02\\x01'
        >>> U16.decode(io.BytesIO(b"\\x02\\x01"))
        258
    """

    bits: int

    @property
    def size(self) -> int:
        return self.bits // 8

    def encode(self, value: int) -> bytes:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CodecError(f"u{self.bits} expects an int, got {type(value).__name__}")
        if not 0 <= value < 1 << self.bits:
            raise CodecError(f"Value {value} out of range for u{self.bits}")
        return value.to_bytes(self.size, "little")

    def decode(self, stream: BinaryIO) -> int:
        return int.from_bytes(read_exact(stream, self.size), "little")


@dataclass(frozen=True)
class BoolCodec:
    """Single byte, ``0x00`` or ``0x01``."""

    def encode(self, value: bool) -> bytes:
        return b"\x01" if value else b"\x00"

    def decode(self, stream: BinaryIO) -> bool:
        byte = read_exact(stream, 1)[0]
        if byte > 1:
            raise CodecError(f"Invalid boolean representation: {byte:#04x}")
        return byte == 1


@dataclass(frozen=True)
class CompactCodec:
    """Compact integer with an optional upper bound."""

    max_value: int | None = None

    def encode(self, value: int) -> bytes:
        if self.max_value is not None and value > self.max_value:
            raise CodecError(f"Compact value {value} exceeds {self.max_value}")
        return encode_compact(value)

    def decode(self, stream: BinaryIO) -> int:
        value = decode_compact(stream)
        if self.max_value is not None and value > self.max_value:
            raise CodecError(f"Compact value {value} exceeds {self.max_value}")
        return value


@dataclass(frozen=True)
class BytesCodec:
    """Compact length followed by raw bytes."""

    def encode(self, value: bytes) -> bytes:
        return encode_compact(len(value)) + bytes(value)

    def decode(self, stream: BinaryIO) -> bytes:
        return read_exact(stream, decode_compact(stream))


@dataclass(frozen=True)
class StrCodec:
    """UTF-8 text with a compact byte-length prefix."""

    def encode(self, value: str) -> bytes:
        return BYTES.encode(value.encode("utf-8"))

    def decode(self, stream: BinaryIO) -> str:
        raw = BYTES.decode(stream)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError(f"Invalid UTF-8 string: {e}") from e


U8 = FixedInt(8)
U16 = FixedInt(16)
U32 = FixedInt(32)
U64 = FixedInt(64)
BOOL = BoolCodec()
COMPACT = CompactCodec()
COMPACT_U32 = CompactCodec(max_value=MAX_COMPACT_U32)
BYTES = BytesCodec()
STR = StrCodec()


# =============================================================================
# Sequences
# =============================================================================


def encode_sequence(encoded_items: Iterable[bytes]) -> bytes:
    """Concatenate already-encoded items behind a compact u32 length.

    Example:
        >>> encode_sequence([])
        b'\\x00'
        >>> encode_sequence([b"a", b"b"])
        b'\\x08ab'
    """
    items = list(encoded_items)
    return COMPACT_U32.encode(len(items)) + b"".join(items)


def decode_sequence(stream: BinaryIO, decode_item: Callable[[BinaryIO], T]) -> list[T]:
    """Decode a length-prefixed sequence using ``decode_item`` per element."""
    count = COMPACT_U32.decode(stream)
    return [decode_item(stream) for _ in range(count)]


def decode_length(encoded: bytes) -> int:
    """Read a sequence's length from its prefix without touching any item.

    Raises:
        CodecError: If the prefix is missing or malformed.

    Example:
        >>> decode_length(b"\\x0c" + b"junk that is never read")
        3
    """
    return COMPACT_U32.decode(io.BytesIO(encoded))


def append_encoded(encoded: bytes | None, item: bytes) -> bytes:
    """Append an encoded item to an encoded sequence without decoding it.

    The prefix is re-emitted with the incremented count; the original item
    bytes are copied as-is. A missing or empty ``encoded`` starts a new
    one-element sequence.

    Raises:
        CodecError: If the existing prefix is malformed or the new length
            does not fit a compact u32.

    Example:
        >>> seq = append_encoded(None, b"a")
        >>> seq
        b'\\x04a'
        >>> append_encoded(seq, b"b")
        b'\\x08ab'
    """
    if not encoded:
        return encode_sequence([item])

    stream = io.BytesIO(encoded)
    count = COMPACT_U32.decode(stream)
    if count >= MAX_COMPACT_U32:
        raise CodecError("Sequence length would overflow a compact u32")
    return encode_compact(count + 1) + encoded[stream.tell():] + item
