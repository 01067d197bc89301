from __future__ import annotations

import base64
from dataclasses import dataclass
from urllib.parse import quote_plus, unquote_plus

from .checksum import checksum16
from .constants import CHECKSUM_SIZE, CHECKSUM_STRUCT, HEADER_SIZE, SALT_SIZE
from .errors import IntegrityCheckFailed, MalformedPayload


@dataclass
class Envelope:
    checksum: int
    salt: bytes
    ciphertext: bytes

    def covered(self) -> bytes:
        """Bytes the header checksum is computed over (salt || ciphertext)."""
        return self.salt + self.ciphertext


def pack_envelope(salt: bytes, ciphertext: bytes) -> bytes:
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes")
    body = salt + ciphertext
    return CHECKSUM_STRUCT.pack(checksum16(body)) + body


def unpack_envelope(raw: bytes) -> Envelope:
    if len(raw) < HEADER_SIZE:
        raise MalformedPayload(f"token too short: {len(raw)} bytes, need at least {HEADER_SIZE}")
    (stored,) = CHECKSUM_STRUCT.unpack_from(raw, 0)
    return Envelope(
        checksum=stored,
        salt=raw[CHECKSUM_SIZE:HEADER_SIZE],
        ciphertext=raw[HEADER_SIZE:],
    )


def verify_envelope(env: Envelope) -> None:
    actual = checksum16(env.covered())
    if actual != env.checksum:
        raise IntegrityCheckFailed(f"checksum mismatch: stored {env.checksum:#06x}, computed {actual:#06x}")


def to_text(raw: bytes, *, url_encode: bool) -> str:
    text = base64.b64encode(raw).decode("ascii")
    return quote_plus(text) if url_encode else text


def from_text(text: str, *, url_decode: bool) -> bytes:
    if not isinstance(text, str):
        raise MalformedPayload(f"token must be str, not {type(text).__name__}")
    if url_decode:
        text = unquote_plus(text)
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as exc:
        # binascii.Error, or non-ASCII input
        raise MalformedPayload(f"token is not valid base64: {exc}") from exc
