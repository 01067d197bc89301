from __future__ import annotations

import hashlib
import unittest

from Cryptodome.Cipher import DES3

from queryargs.constants import BLOCK_SIZE, KDF_ITERATIONS, KEY_SIZE, SALT_SIZE
from queryargs.encryption import EncryptionContext, derive_key
from queryargs.errors import InvalidConfiguration, PaddingOrCipherError


SALT_A = bytes(range(SALT_SIZE))
SALT_B = bytes(range(1, SALT_SIZE + 1))


class KeyDerivationTests(unittest.TestCase):
    def test_matches_pbkdf2_hmac_sha1(self):
        expected = hashlib.pbkdf2_hmac("sha1", "Password123".encode("utf-8"), SALT_A, KDF_ITERATIONS, KEY_SIZE)
        self.assertEqual(derive_key("Password123", SALT_A), expected)

    def test_password_is_utf8(self):
        expected = hashlib.pbkdf2_hmac("sha1", "pässwörd".encode("utf-8"), SALT_A, KDF_ITERATIONS, KEY_SIZE)
        self.assertEqual(derive_key("pässwörd", SALT_A), expected)

    def test_salt_and_password_change_key(self):
        base = derive_key("Password123", SALT_A)
        self.assertEqual(len(base), KEY_SIZE)
        self.assertEqual(base, derive_key("Password123", SALT_A))
        self.assertNotEqual(base, derive_key("Password123", SALT_B))
        self.assertNotEqual(base, derive_key("Password456", SALT_A))

    def test_rejects_blank_password_and_bad_salt(self):
        for pw in ("", "   ", None):
            with self.assertRaises(InvalidConfiguration):
                derive_key(pw, SALT_A)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            derive_key("Password123", b"short")

    def test_rejects_password_with_lone_surrogate(self):
        with self.assertRaises(InvalidConfiguration):
            derive_key("pw\udc80", SALT_A)


class CipherTests(unittest.TestCase):
    def test_create_uses_fresh_salt(self):
        a = EncryptionContext.create("Password123")
        b = EncryptionContext.create("Password123")
        self.assertEqual(len(a.salt), SALT_SIZE)
        self.assertNotEqual(a.salt, b.salt)
        self.assertNotEqual(a.key, b.key)

    def test_roundtrip_and_block_alignment(self):
        ctx = EncryptionContext.create("Password123")
        for size in (0, 1, 7, 8, 9, 100):
            plaintext = bytes(range(size))
            ciphertext = ctx.encrypt(plaintext)
            self.assertEqual(len(ciphertext) % BLOCK_SIZE, 0)
            self.assertGreater(len(ciphertext), len(plaintext))
            self.assertEqual(ctx.decrypt(ciphertext), plaintext)

    def test_from_salt_reproduces_key(self):
        ctx = EncryptionContext.create("Password123")
        ciphertext = ctx.encrypt(b"hello")
        again = EncryptionContext.from_salt("Password123", ctx.salt)
        self.assertEqual(again.key, ctx.key)
        self.assertEqual(again.decrypt(ciphertext), b"hello")

    def test_misaligned_or_empty_ciphertext(self):
        ctx = EncryptionContext.from_salt("Password123", SALT_A)
        with self.assertRaises(PaddingOrCipherError):
            ctx.decrypt(b"")
        with self.assertRaises(PaddingOrCipherError):
            ctx.decrypt(b"\x00" * (BLOCK_SIZE + 3))

    def test_invalid_padding(self):
        ctx = EncryptionContext.from_salt("Password123", SALT_A)
        # A zero final byte is never valid PKCS#7 padding
        raw = DES3.new(ctx.key, DES3.MODE_CBC, iv=SALT_A).encrypt(b"\x00" * BLOCK_SIZE)
        with self.assertRaises(PaddingOrCipherError):
            ctx.decrypt(raw)


if __name__ == "__main__":
    unittest.main()
