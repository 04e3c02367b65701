# SPDX-License-Identifier: LGPL-3.0-or-later
# Build, parse and check PostgreSQL SCRAM-SHA-256 verifiers

import binascii
import logging
from base64 import b64decode, b64encode
from dataclasses import dataclass
from typing import NamedTuple

from ..exc import (
    EmptyPassword,
    InvalidCredentialType,
    InvalidIterationCount,
    InvalidSaltSize,
    InvalidSaltType,
    InvalidVerifierError,
    UnencodableCredential,
)
from .common import SCRAM_SHA_256, ScramKeys, prepare_password
from .crypto import (
    CryptoDatum,
    DEFAULT_SCRAM_ITERATIONS,
    DEFAULT_SCRAM_SALT_SIZE,
    SCRAM_KEY_LEN,
    SCRAM_MAX_ITERS,
    generate_salt,
    scram_constant_time_compare,
    scram_create_client_key,
    scram_create_server_key,
    scram_create_stored_key,
    scram_hi,
)


__all__ = [
    'ScramOptions',
    'ScramVerifier',
    'encode_scram_sha256',
    'generate_scram_keys',
    'parse_scram_verifier',
    'verify_scram_sha256',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScramOptions:
    """Tunables for SCRAM-SHA-256 verifier generation.

    The defaults match a stock PostgreSQL server but are not part of the
    protocol. A server with a different `scram_iterations` setting will still
    accept verifiers built with these values; pass its value explicitly to
    match it.

    Attributes:
        iterations: PBKDF2 iteration count.
        salt_size: Length in bytes of the random salt generated when `salt` is `None`.
        salt: Fixed salt. Makes the output deterministic. Leave as `None` outside of tests.
        saslprep: Apply SASLprep to the password before key derivation, as the server does.

    """
    iterations: int = DEFAULT_SCRAM_ITERATIONS
    salt_size: int = DEFAULT_SCRAM_SALT_SIZE
    salt: bytes | None = None
    saslprep: bool = True


class ScramVerifier(NamedTuple):
    """A verifier split into its fields."""
    iterations: int
    salt: CryptoDatum
    stored_key: CryptoDatum
    server_key: CryptoDatum

    def __str__(self):
        return (
            f'{SCRAM_SHA_256}${self.iterations}:{b64encode(self.salt).decode()}'
            f'${b64encode(self.stored_key).decode()}:{b64encode(self.server_key).decode()}'
        )


def _check_password(password):
    if not password:
        raise EmptyPassword()

    if isinstance(password, str):
        try:
            password.encode('utf-8')
        except UnicodeEncodeError as e:
            raise UnencodableCredential('password', e.reason)
    elif not isinstance(password, (bytes, bytearray, memoryview)):
        raise InvalidCredentialType('password', password)


def _check_salt_size(salt_size):
    if isinstance(salt_size, bool) or not isinstance(salt_size, int) or salt_size < 1:
        raise InvalidSaltSize(salt_size)


def _check_salt(salt):
    if not isinstance(salt, (bytes, bytearray, memoryview)) or len(salt) == 0:
        raise InvalidSaltType(salt)


def _check_iterations(iterations):
    # bool is an int subclass and floats are rejected even when integral
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidIterationCount(iterations)

    if iterations < 1 or iterations > SCRAM_MAX_ITERS:
        raise InvalidIterationCount(iterations)


def generate_scram_keys(
    password: str | bytes,
    salt: bytes,
    iterations: int,
    *,
    saslprep: bool = True,
) -> ScramKeys:
    """
    Derive SCRAM-SHA-256 key material from a password.

    SaltedPassword := Hi(Normalize(password), salt, i)
    ClientKey      := HMAC(SaltedPassword, "Client Key")
    StoredKey      := H(ClientKey)
    ServerKey      := HMAC(SaltedPassword, "Server Key")

    Args:
        password: Plaintext password. `str` is UTF-8 encoded.
        salt: Salt for PBKDF2.
        iterations: PBKDF2 iteration count.
        saslprep: Normalize the password with SASLprep first.

    Returns:
        ScramKeys with all computed keys

    Raises:
        EmptyPassword: `password` is empty.
        InvalidCredentialType: `password` is neither `str` nor bytes-like.
        InvalidSaltType: `salt` is not a non-empty bytes-like object.
        InvalidIterationCount: `iterations` is not an integer in the range the server accepts.
    """
    _check_password(password)
    _check_salt(salt)
    _check_iterations(iterations)

    salt = CryptoDatum(salt)
    salted_password = scram_hi(prepare_password(password, saslprep), salt, iterations)
    client_key = scram_create_client_key(salted_password)

    return ScramKeys(
        salt=salt,
        iterations=iterations,
        salted_password=salted_password,
        client_key=client_key,
        stored_key=scram_create_stored_key(client_key),
        server_key=scram_create_server_key(salted_password),
    )


def encode_scram_sha256(
    password: str | bytes,
    salt: bytes | None = None,
    iterations: int | None = None,
    *,
    options: ScramOptions | None = None,
) -> str:
    """Encode a password as a SCRAM-SHA-256 verifier.

    `salt` and `iterations` override the values in `options`. When no salt is
    given anywhere a fresh random one of `options.salt_size` bytes is used, so
    two calls for the same password produce different verifiers.

    Returns:
        str: `SCRAM-SHA-256$<iterations>:<salt>$<StoredKey>:<ServerKey>`, safe to
        pass to `ALTER USER ... PASSWORD`.

    Raises:
        EmptyPassword: `password` is empty.
        InvalidCredentialType: `password` is neither `str` nor bytes-like.
        UnencodableCredential: `password` cannot be encoded as UTF-8.
        InvalidSaltType: `salt` is not a non-empty bytes-like object.
        InvalidIterationCount: `iterations` is not a positive integer.
        InvalidSaltSize: no salt was given and `options.salt_size` is not a positive integer.

    """
    options = options or ScramOptions()
    if salt is None:
        salt = options.salt
    if iterations is None:
        iterations = options.iterations

    # Validate everything before consuming entropy
    _check_password(password)
    if salt is not None:
        _check_salt(salt)
    _check_iterations(iterations)

    if salt is None:
        _check_salt_size(options.salt_size)
        salt = generate_salt(options.salt_size)

    keys = generate_scram_keys(password, salt, iterations, saslprep=options.saslprep)
    logger.debug('Encoded SCRAM-SHA-256 verifier with %d iterations and %d byte salt', iterations, len(salt))
    return keys.verifier


def parse_scram_verifier(verifier: str) -> ScramVerifier:
    """Split a stored SCRAM-SHA-256 verifier into its fields.

    Format: SCRAM-SHA-256$<iterations>:<salt>$<StoredKey>:<ServerKey>

    Raises:
        InvalidVerifierError: `verifier` is not a well-formed SCRAM-SHA-256 verifier.
    """
    if not isinstance(verifier, str):
        raise InvalidVerifierError('SCRAM verifier must be a string')

    parts = verifier.split('$')
    if len(parts) != 3:
        raise InvalidVerifierError('Invalid SCRAM verifier format')

    scheme, iter_salt, keys = parts
    if scheme != SCRAM_SHA_256:
        raise InvalidVerifierError(f'Unsupported SCRAM scheme {scheme!r} (expected {SCRAM_SHA_256})')

    iterations_str, sep, salt_b64 = iter_salt.partition(':')
    stored_b64, sep2, server_b64 = keys.partition(':')
    if not sep or not sep2:
        raise InvalidVerifierError('Malformed SCRAM verifier structure')

    if not iterations_str.isascii() or not iterations_str.isdigit():
        raise InvalidVerifierError(f'Invalid iteration count in SCRAM verifier: {iterations_str!r}')

    iterations = int(iterations_str)
    if iterations < 1 or iterations > SCRAM_MAX_ITERS:
        raise InvalidVerifierError(f'Iteration count out of range in SCRAM verifier: {iterations}')

    try:
        salt = b64decode(salt_b64, validate=True)
        stored_key = b64decode(stored_b64, validate=True)
        server_key = b64decode(server_b64, validate=True)
    except binascii.Error as e:
        raise InvalidVerifierError(f'Invalid base64 encoding in SCRAM verifier: {e}')

    if not salt:
        raise InvalidVerifierError('Salt in SCRAM verifier is empty')

    if len(stored_key) != SCRAM_KEY_LEN or len(server_key) != SCRAM_KEY_LEN:
        raise InvalidVerifierError(f'StoredKey and ServerKey in SCRAM verifier must be {SCRAM_KEY_LEN} bytes')

    return ScramVerifier(
        iterations=iterations,
        salt=CryptoDatum(salt),
        stored_key=CryptoDatum(stored_key),
        server_key=CryptoDatum(server_key),
    )


def verify_scram_sha256(password: str | bytes, verifier: str, *, saslprep: bool = True) -> bool:
    """Check a plaintext password against a SCRAM-SHA-256 verifier.

    This is a local check of the stored value. It does not talk to a server.

    Returns:
        True if both StoredKey and ServerKey match, False otherwise.

    Raises:
        InvalidVerifierError: `verifier` is malformed.
        InvalidCredentialType: `password` is neither `str` nor bytes-like.
    """
    parsed = parse_scram_verifier(verifier)
    if not password:
        return False

    keys = generate_scram_keys(password, parsed.salt, parsed.iterations, saslprep=saslprep)
    stored_ok = scram_constant_time_compare(keys.stored_key, parsed.stored_key)
    server_ok = scram_constant_time_compare(keys.server_key, parsed.server_key)
    return stored_ok and server_ok
