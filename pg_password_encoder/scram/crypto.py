# SPDX-License-Identifier: LGPL-3.0-or-later
# SCRAM-SHA-256 cryptographic operations
# Mirrors scram_SaltedPassword(), scram_ClientKey(), scram_ServerKey() and
# scram_H() from the PostgreSQL server (src/common/scram-common.c)

import hmac
import hashlib
import secrets


__all__ = [
    'CryptoDatum',
    'generate_salt',
    'scram_hi',
    'scram_h',
    'scram_hmac_sha256',
    'scram_create_client_key',
    'scram_create_server_key',
    'scram_create_stored_key',
    'scram_constant_time_compare',
    'SCRAM_KEY_LEN',
    'SCRAM_MAX_ITERS',
    'DEFAULT_SCRAM_ITERATIONS',
    'DEFAULT_SCRAM_SALT_SIZE',
]


# SHA-256 digest length, also the length of every derived key
SCRAM_KEY_LEN = 32
# The server parses the iteration count into a signed 32 bit integer
SCRAM_MAX_ITERS = 2 ** 31 - 1
# Defaults of a stock PostgreSQL server (scram_iterations, SCRAM_DEFAULT_SALT_LEN).
# These are advisory; servers may be configured differently.
DEFAULT_SCRAM_ITERATIONS = 4096
DEFAULT_SCRAM_SALT_SIZE = 16


class CryptoDatum(bytes):
    """Bytes that do not print their contents, so key material stays out of
    tracebacks and log lines."""
    def __new__(cls, value):
        return super().__new__(cls, value)

    def __repr__(self):
        return f'CryptoDatum({hex(id(self))})'


def generate_salt(size: int = DEFAULT_SCRAM_SALT_SIZE) -> CryptoDatum:
    """Generate a random salt from the operating system CSPRNG.

    Returns:
        CryptoDatum containing `size` bytes of random data
    """
    return CryptoDatum(secrets.token_bytes(size))


def scram_hi(key: bytes, salt: bytes, iterations: int) -> CryptoDatum:
    """
    Perform PBKDF2-HMAC-SHA256 key derivation as specified in RFC 5802.

    This implements the Hi(str, salt, i) function from RFC 5802 Section 2.2
    and produces the SaltedPassword.

    Args:
        key: Prepared password bytes
        salt: Cryptographic salt for key derivation
        iterations: Number of PBKDF2 iterations

    Returns:
        CryptoDatum containing the derived key (32 bytes)
    """
    derived_key = hashlib.pbkdf2_hmac('sha256', bytes(key), bytes(salt), iterations, dklen=SCRAM_KEY_LEN)
    return CryptoDatum(derived_key)


def scram_h(data: bytes) -> CryptoDatum:
    """
    Perform the SHA-256 hash function H(str) from RFC 5802 Section 2.2.

    Returns:
        CryptoDatum containing the SHA-256 hash (32 bytes)
    """
    return CryptoDatum(hashlib.sha256(bytes(data)).digest())


def scram_hmac_sha256(key: bytes, data: bytes) -> CryptoDatum:
    """
    Perform HMAC-SHA-256 with `key` as the HMAC key and `data` as the message.

    Returns:
        CryptoDatum containing the HMAC-SHA-256 result (32 bytes)
    """
    return CryptoDatum(hmac.digest(bytes(key), bytes(data), hashlib.sha256))


def scram_create_client_key(salted_password: bytes) -> CryptoDatum:
    """ClientKey := HMAC(SaltedPassword, "Client Key")"""
    return scram_hmac_sha256(salted_password, b'Client Key')


def scram_create_server_key(salted_password: bytes) -> CryptoDatum:
    """ServerKey := HMAC(SaltedPassword, "Server Key")"""
    return scram_hmac_sha256(salted_password, b'Server Key')


def scram_create_stored_key(client_key: bytes) -> CryptoDatum:
    """
    Generate the stored key as specified in RFC 5802 Section 3.

    StoredKey := H(ClientKey).
    The stored key is what the server keeps instead of the plaintext
    password for authentication verification.
    """
    return scram_h(client_key)


def scram_constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without leaking timing information."""
    # hmac.compare_digest handles size mismatches gracefully and securely
    return hmac.compare_digest(bytes(a), bytes(b))
