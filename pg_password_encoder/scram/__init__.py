# SPDX-License-Identifier: LGPL-3.0-or-later
# PostgreSQL SCRAM-SHA-256 verifier generation

from .crypto import (
    CryptoDatum,
    generate_salt,
    scram_hi,
    scram_h,
    scram_hmac_sha256,
    scram_create_client_key,
    scram_create_server_key,
    scram_create_stored_key,
    scram_constant_time_compare,
    SCRAM_KEY_LEN,
    SCRAM_MAX_ITERS,
    DEFAULT_SCRAM_ITERATIONS,
    DEFAULT_SCRAM_SALT_SIZE,
)

from .common import (
    SCRAM_SHA_256,
    ScramKeys,
    prepare_password,
    saslprep,
)

from .verifier import (
    ScramOptions,
    ScramVerifier,
    encode_scram_sha256,
    generate_scram_keys,
    parse_scram_verifier,
    verify_scram_sha256,
)


__all__ = [
    # Core types
    'CryptoDatum',
    'ScramKeys',
    'ScramOptions',
    'ScramVerifier',

    # Verifiers
    'encode_scram_sha256',
    'generate_scram_keys',
    'parse_scram_verifier',
    'verify_scram_sha256',

    # Password preparation
    'prepare_password',
    'saslprep',

    # Cryptographic functions
    'generate_salt',
    'scram_hi',
    'scram_h',
    'scram_hmac_sha256',
    'scram_create_client_key',
    'scram_create_server_key',
    'scram_create_stored_key',
    'scram_constant_time_compare',

    # Constants
    'SCRAM_SHA_256',
    'SCRAM_KEY_LEN',
    'SCRAM_MAX_ITERS',
    'DEFAULT_SCRAM_ITERATIONS',
    'DEFAULT_SCRAM_SALT_SIZE',
]
