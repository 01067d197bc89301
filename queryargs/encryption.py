from __future__ import annotations

from Cryptodome.Cipher import DES3
from Cryptodome.Hash import SHA1
from Cryptodome.Protocol.KDF import PBKDF2
from Cryptodome.Random import get_random_bytes
from Cryptodome.Util.Padding import pad, unpad

from .constants import (
    BLOCK_SIZE,
    KDF_ITERATIONS,
    KEY_SIZE,
    PADDING_STYLE,
    SALT_SIZE,
    TEXT_ENCODING,
)
from .errors import InvalidConfiguration, PaddingOrCipherError


def derive_key(password: str, salt: bytes) -> bytes:
    """PBKDF2-HMAC-SHA1 over the UTF-8 password; matches Rfc2898DeriveBytes.GetBytes(16)."""
    if not isinstance(password, str) or not password.strip():
        raise InvalidConfiguration("No password specified")
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes")
    try:
        secret = password.encode(TEXT_ENCODING)
    except UnicodeEncodeError as exc:
        raise InvalidConfiguration(f"Password is not encodable as UTF-8: {exc.reason}") from exc
    return PBKDF2(
        secret,
        salt,
        dkLen=KEY_SIZE,
        count=KDF_ITERATIONS,
        hmac_hash_module=SHA1,
    )


class EncryptionContext:
    """Triple-DES/CBC with PKCS#7 padding; the salt doubles as the IV."""

    def __init__(self, key: bytes, salt: bytes):
        self.key = key
        self.salt = salt

    @classmethod
    def create(cls, password: str) -> "EncryptionContext":
        salt = get_random_bytes(SALT_SIZE)
        return cls(derive_key(password, salt), salt)

    @classmethod
    def from_salt(cls, password: str, salt: bytes) -> "EncryptionContext":
        return cls(derive_key(password, salt), salt)

    def _cipher(self):
        try:
            return DES3.new(self.key, DES3.MODE_CBC, iv=self.salt)
        except ValueError as exc:
            # Key halves that collapse to single DES are rejected by the backend
            raise PaddingOrCipherError(f"cipher rejected derived key: {exc}") from exc

    def encrypt(self, plaintext: bytes) -> bytes:
        return self._cipher().encrypt(pad(plaintext, BLOCK_SIZE, style=PADDING_STYLE))

    def decrypt(self, ciphertext: bytes) -> bytes:
        if not ciphertext or len(ciphertext) % BLOCK_SIZE:
            raise PaddingOrCipherError(
                f"ciphertext length {len(ciphertext)} is not a positive multiple of {BLOCK_SIZE}"
            )
        padded = self._cipher().decrypt(ciphertext)
        try:
            return unpad(padded, BLOCK_SIZE, style=PADDING_STYLE)
        except ValueError as exc:
            raise PaddingOrCipherError("invalid padding (wrong password or corrupted data)") from exc
