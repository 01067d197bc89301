from __future__ import annotations

from collections.abc import MutableMapping
from typing import Dict, Iterator, Optional

from .encryption import EncryptionContext
from .envelope import from_text, pack_envelope, to_text, unpack_envelope, verify_envelope
from .constants import TEXT_ENCODING
from .errors import DecodeError, InvalidConfiguration
from .log import get_logger
from .payload import dumps_pairs, loads_pairs


log = get_logger("encryptor")


def _check_text(what: str, s: object) -> None:
    if not isinstance(s, str):
        raise TypeError(f"{what} must be str, not {type(s).__name__}")
    try:
        s.encode(TEXT_ENCODING)
    except UnicodeEncodeError as exc:
        # Lone surrogates cannot be serialized
        raise ValueError(f"{what} is not encodable as UTF-8: {exc.reason}") from exc


class ArgumentEncryptor(MutableMapping):
    """Ordered str -> str mapping that seals itself into a URL-safe token.

    ``encrypt()`` serializes the pairs, encrypts them under a key derived from
    the password and a fresh salt, and returns base64 text (percent-encoded
    unless ``url_encode=False``). ``decrypt()`` replaces the contents with the
    pairs recovered from such a token, or leaves the mapping empty and raises
    a DecodeError subclass. ``try_decrypt()`` reports failure as ``False``.
    """

    def __init__(self, password: str, encrypted_data: Optional[str] = None, url_decode: bool = True):
        if not isinstance(password, str) or not password.strip():
            raise InvalidConfiguration("No password specified")
        try:
            password.encode(TEXT_ENCODING)
        except UnicodeEncodeError as exc:
            raise InvalidConfiguration(f"Password is not encodable as UTF-8: {exc.reason}") from exc
        self._password = password
        self._items: Dict[str, str] = {}
        if encrypted_data is not None:
            self.decrypt(encrypted_data, url_decode)

    @property
    def password(self) -> str:
        return self._password

    # -------- mapping protocol --------

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __setitem__(self, key: str, value: str) -> None:
        _check_text("key", key)
        _check_text("value", value)
        self._items[key] = value

    def __delitem__(self, key: str) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def add(self, key: str, value: str) -> None:
        """Insert a new pair; an existing key is an error rather than an overwrite."""
        _check_text("key", key)
        if key in self._items:
            raise ValueError(f"An item with the same key has already been added: {key!r}")
        self[key] = value

    def clear(self) -> None:
        self._items.clear()

    # -------- token codec --------

    def encrypt(self, url_encode: bool = True) -> str:
        payload = dumps_pairs(self._items.items())
        ctx = EncryptionContext.create(self._password)
        raw = pack_envelope(ctx.salt, ctx.encrypt(payload))
        log.debug("encrypted %d pair(s): payload=%d bytes token=%d bytes", len(self._items), len(payload), len(raw))
        return to_text(raw, url_encode=url_encode)

    def decrypt(self, encrypted_data: str, url_decode: bool = True) -> None:
        """Replace the contents with the pairs sealed in ``encrypted_data``.

        The header checksum covers only salt and ciphertext, so a wrong
        password passes it and usually fails at padding (PaddingOrCipherError).
        When the garbage plaintext happens to end in valid padding, the failure
        surfaces from payload parsing as MalformedPayload instead.
        """
        self._items.clear()
        try:
            raw = from_text(encrypted_data, url_decode=url_decode)
            env = unpack_envelope(raw)
            verify_envelope(env)
            ctx = EncryptionContext.from_salt(self._password, env.salt)
            pairs = loads_pairs(ctx.decrypt(env.ciphertext))
        except DecodeError as exc:
            log.debug("decrypt failed: %s: %s", type(exc).__name__, exc)
            raise
        # All-or-nothing: pairs only land once every stage has succeeded
        self._items.update(pairs)
        log.debug("decrypted %d pair(s) from %d byte token", len(pairs), len(raw))

    def try_decrypt(self, encrypted_data: str, url_decode: bool = True) -> bool:
        try:
            self.decrypt(encrypted_data, url_decode)
        except DecodeError:
            return False
        return True
