# SPDX-License-Identifier: LGPL-3.0-or-later
# Shared SCRAM-SHA-256 types and password preparation

import stringprep
import unicodedata
from base64 import b64encode
from dataclasses import dataclass

from ..exc import InvalidCredentialType, UnencodableCredential
from .crypto import CryptoDatum


__all__ = ['SCRAM_SHA_256', 'ScramKeys', 'CryptoDatum', 'saslprep', 'prepare_password']


# Mechanism name, also the prefix of every verifier the server stores
SCRAM_SHA_256 = 'SCRAM-SHA-256'


def saslprep(input_str: str) -> str:
    """
    Implements the SASLprep profile of stringprep (RFC 4013).

    This profile is intended to prepare Unicode strings representing simple
    user names and passwords for comparison or use in cryptographic functions
    (e.g., message digests).

    Passwords are stored strings, so unlike a query string unassigned Unicode
    code points are prohibited. This is what the PostgreSQL server and libpq
    do before deriving the SaltedPassword.

    Args:
        input_str: The string to prepare

    Returns:
        The prepared string

    Raises:
        TypeError: If input_str is not a string
        ValueError: If the string contains prohibited characters or violates bidi rules

    References:
        RFC 4013 - SASLprep: Stringprep Profile for User Names and Passwords
        RFC 3454 - Preparation of Internationalized Strings ("stringprep")
    """
    if not isinstance(input_str, str):
        raise TypeError('input_str must be a string')

    if not input_str:
        return input_str

    # RFC 4013, Section 2.1: Mapping
    # Non-ASCII space characters (C.1.2) map to SPACE, B.1 maps to nothing
    mapped = ''.join(
        ' ' if stringprep.in_table_c12(c) else c
        for c in input_str if not stringprep.in_table_b1(c)
    )

    # RFC 4013, Section 2.2: Normalization
    normalized = unicodedata.normalize('NFKC', mapped)

    # RFC 4013, Section 2.3 and 2.5: Prohibited Output and Unassigned Code Points
    for i, c in enumerate(normalized):
        if stringprep.in_table_a1(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, A.1: Unassigned)')

        if stringprep.in_table_c12(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.1.2: Non-ASCII space)')

        if stringprep.in_table_c21_c22(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.2: Control character)')

        if stringprep.in_table_c3(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.3: Private use)')

        if stringprep.in_table_c4(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.4: Non-character)')

        if stringprep.in_table_c5(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.5: Surrogate)')

        if stringprep.in_table_c6(c):
            raise ValueError(
                f'Character at position {i} is prohibited '
                f'(RFC 3454, C.6: Inappropriate for plain text)'
            )

        if stringprep.in_table_c7(c):
            raise ValueError(
                f'Character at position {i} is prohibited '
                f'(RFC 3454, C.7: Inappropriate for canonical representation)'
            )

        if stringprep.in_table_c8(c):
            raise ValueError(
                f'Character at position {i} is prohibited '
                f'(RFC 3454, C.8: Change display properties)'
            )

        if stringprep.in_table_c9(c):
            raise ValueError(f'Character at position {i} is prohibited (RFC 3454, C.9: Tagging character)')

    # RFC 4013, Section 2.4: Bidirectional Characters (RFC 3454, Section 6)
    has_RandALCat = any(stringprep.in_table_d1(c) for c in normalized)
    has_LCat = any(stringprep.in_table_d2(c) for c in normalized)

    if has_RandALCat:
        if has_LCat:
            raise ValueError(
                'String contains both RandALCat and LCat characters (RFC 3454, Section 6)'
            )

        if not stringprep.in_table_d1(normalized[0]) or not stringprep.in_table_d1(normalized[-1]):
            raise ValueError(
                'First and last character must be RandALCat when string contains RandALCat '
                '(RFC 3454, Section 6)'
            )

    return normalized


def prepare_password(password: str | bytes, use_saslprep: bool = True) -> bytes:
    """Turn a password into the bytes fed to PBKDF2.

    Like the server, a password that is not valid UTF-8 or that SASLprep
    rejects is used as-is.

    Raises:
        InvalidCredentialType: `password` is neither `str` nor bytes-like.
        UnencodableCredential: `password` is a `str` that cannot be encoded as UTF-8.
    """
    if isinstance(password, str):
        if use_saslprep:
            try:
                password = saslprep(password)
            except ValueError:
                pass
        try:
            return password.encode('utf-8')
        except UnicodeEncodeError as e:
            raise UnencodableCredential('password', e.reason)

    if not isinstance(password, (bytes, bytearray, memoryview)):
        raise InvalidCredentialType('password', password)

    raw = bytes(password)
    if not use_saslprep:
        return raw

    try:
        return saslprep(raw.decode('utf-8')).encode('utf-8')
    except ValueError:
        # UnicodeDecodeError included
        return raw


@dataclass
class ScramKeys:
    """Key material derived from a password. Everything needed to build a verifier."""
    salt: CryptoDatum
    iterations: int
    salted_password: CryptoDatum
    client_key: CryptoDatum
    stored_key: CryptoDatum
    server_key: CryptoDatum

    @property
    def verifier(self) -> str:
        """The verifier in the format the server keeps in pg_authid.rolpassword:

        SCRAM-SHA-256$<iterations>:<salt>$<StoredKey>:<ServerKey>
        """
        salt_b64 = b64encode(self.salt).decode()
        stored_b64 = b64encode(self.stored_key).decode()
        server_b64 = b64encode(self.server_key).decode()
        return f'{SCRAM_SHA_256}${self.iterations}:{salt_b64}${stored_b64}:{server_b64}'
