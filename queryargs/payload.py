"""
Length-prefixed serializer for the plaintext carried inside a token.

Encoding
- Count: u32 little-endian number of pairs
- Pair: key string || value string
- String: unsigned LEB128 varint(byte length) || UTF-8 bytes

This is the layout produced by a .NET BinaryWriter (Write(int) followed by
Write(string) calls), so tokens interoperate with producers built on it.
Lengths are explicit, so keys and values may contain any character.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .constants import COUNT_STRUCT, TEXT_ENCODING
from .errors import MalformedPayload


# 32-bit length prefix is the most a BinaryWriter string can declare
_MAX_VARINT_SHIFT = 28


def _varint_encode(n: int) -> bytes:
    if n < 0:
        raise ValueError("varint: negative not supported")
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            break
    return bytes(out)


def _varint_decode(data: bytes, pos: int) -> Tuple[int, int]:
    shift = 0
    result = 0
    while True:
        if pos >= len(data):
            raise MalformedPayload("varint: truncated")
        b = data[pos]
        pos += 1
        # The 5th byte holds only the top 4 bits of a 32-bit length
        if shift == _MAX_VARINT_SHIFT and b > 0x0F:
            raise MalformedPayload("varint: too large")
        result |= (b & 0x7F) << shift
        if not (b & 0x80):
            return result, pos
        shift += 7


def _encode_str(s: str) -> bytes:
    raw = s.encode(TEXT_ENCODING)
    return _varint_encode(len(raw)) + raw


def _decode_str(data: bytes, pos: int) -> Tuple[str, int]:
    ln, pos = _varint_decode(data, pos)
    end = pos + ln
    if end > len(data):
        raise MalformedPayload("string length out of range")
    try:
        return data[pos:end].decode(TEXT_ENCODING), end
    except UnicodeDecodeError as exc:
        raise MalformedPayload(f"string is not valid UTF-8: {exc.reason}") from exc


def dumps_pairs(pairs: Iterable[Tuple[str, str]]) -> bytes:
    body = bytearray()
    count = 0
    for key, value in pairs:
        body += _encode_str(key)
        body += _encode_str(value)
        count += 1
    return COUNT_STRUCT.pack(count) + bytes(body)


def loads_pairs(data: bytes) -> List[Tuple[str, str]]:
    """Parse a serialized payload back into ordered ``(key, value)`` pairs.

    Raises MalformedPayload when the buffer ends before the declared number of
    pairs, when a length prefix points past the end, when a key repeats, or
    when bytes remain after the last pair.
    """
    if len(data) < COUNT_STRUCT.size:
        raise MalformedPayload("payload too short for pair count")
    (count,) = COUNT_STRUCT.unpack_from(data, 0)
    pos = COUNT_STRUCT.size
    n = len(data)
    # Every pair needs at least two length bytes
    if count > (n - pos) // 2:
        raise MalformedPayload(f"pair count {count} inconsistent with {n - pos} payload bytes")

    pairs: List[Tuple[str, str]] = []
    seen = set()
    for _ in range(count):
        key, pos = _decode_str(data, pos)
        value, pos = _decode_str(data, pos)
        if key in seen:
            raise MalformedPayload(f"duplicate key in payload: {key!r}")
        seen.add(key)
        pairs.append((key, value))
    if pos != n:
        raise MalformedPayload(f"{n - pos} trailing bytes after last pair")
    return pairs
