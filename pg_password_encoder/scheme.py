from enum import StrEnum

from .exc import UnsupportedSchemeError
from .md5 import encode_md5
from .scram import ScramOptions, encode_scram_sha256

__all__ = ['PasswordEncryption', 'encode_password']


class PasswordEncryption(StrEnum):
    """Values of the server's `password_encryption` setting."""
    MD5 = 'md5'
    SCRAM_SHA_256 = 'scram-sha-256'

    @classmethod
    def from_setting(cls, value: 'str | PasswordEncryption') -> 'PasswordEncryption':
        """Map a `password_encryption` value to a scheme.

        Servers before PostgreSQL 10 report the boolean flags `on` and `off`,
        both of which mean md5.

        Raises:
            UnsupportedSchemeError: `value` names no known scheme.

        """
        if isinstance(value, cls):
            return value

        if not isinstance(value, str):
            raise UnsupportedSchemeError(value)

        match value.strip().lower():
            case 'md5' | 'on' | 'off':
                return cls.MD5
            case 'scram-sha-256':
                return cls.SCRAM_SHA_256
            case _:
                raise UnsupportedSchemeError(value)


def encode_password(
    username: str,
    password: str | bytes,
    password_encryption: str | PasswordEncryption,
    *,
    options: ScramOptions | None = None,
) -> str:
    """Encode `password` with the given scheme.

    `username` is only used by md5 and `options` only by scram-sha-256.

    Returns:
        str: The encoded password as an unescaped string literal.

    Raises:
        UnsupportedSchemeError: `password_encryption` is not a known scheme.

    """
    match PasswordEncryption.from_setting(password_encryption):
        case PasswordEncryption.MD5:
            return encode_md5(username, password)
        case PasswordEncryption.SCRAM_SHA_256:
            return encode_scram_sha256(password, options=options)
