"""
queryargs — password-protected key/value tokens for URL query strings.

Features:

- Ordered str -> str mapping (ArgumentEncryptor) that encrypts itself into a
  single base64 token, optionally percent-encoded for use as a query value.
- Length-prefixed binary payload, so keys and values may hold any text.
- PBKDF2-HMAC-SHA1 key derivation and Triple-DES/CBC via PyCryptodomex, with a
  fresh random salt per token that also serves as the IV.
- 16-bit rolling checksum over salt and ciphertext to reject corrupted tokens
  before decryption.

The checksum detects corruption; it does not authenticate. See
queryargs/envelope.py and queryargs/payload.py for the byte layouts.
"""

from .encryptor import ArgumentEncryptor
from .errors import (
    QueryArgsError,
    InvalidConfiguration,
    DecodeError,
    MalformedPayload,
    IntegrityCheckFailed,
    PaddingOrCipherError,
)

__version__ = "0.1"

__all__ = [
    "ArgumentEncryptor",
    "QueryArgsError",
    "InvalidConfiguration",
    "DecodeError",
    "MalformedPayload",
    "IntegrityCheckFailed",
    "PaddingOrCipherError",
]
