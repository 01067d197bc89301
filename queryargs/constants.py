import struct


# Token header: checksum (u16) || salt (8 bytes)
CHECKSUM_SIZE = 2
SALT_SIZE = 8
HEADER_SIZE = CHECKSUM_SIZE + SALT_SIZE

CHECKSUM_STRUCT = struct.Struct("<H")

# Rolling checksum parameters; part of the wire format
CHECKSUM_SEED = 17
CHECKSUM_MULTIPLIER = 31
CHECKSUM_MASK32 = 0xFFFFFFFF
CHECKSUM_MASK16 = 0xFFFF

# Payload: pair count (u32) then length-prefixed key/value pairs
COUNT_STRUCT = struct.Struct("<I")

# Key derivation (PBKDF2-HMAC-SHA1, same defaults as Rfc2898DeriveBytes)
KDF_ITERATIONS = 1000
KEY_SIZE = 16  # two-key Triple-DES

BLOCK_SIZE = 8  # DES block, also the IV length
PADDING_STYLE = "pkcs7"

TEXT_ENCODING = "utf-8"
