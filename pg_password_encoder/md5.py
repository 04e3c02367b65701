"""Legacy md5 password encoding.

Only use this for servers that still have `password_encryption = md5`.
"""
import hashlib

from .exc import EmptyPassword, EmptyUsername, InvalidCredentialType, UnencodableCredential

__all__ = ['MD5_PREFIX', 'encode_md5']

MD5_PREFIX = 'md5'


def _to_bytes(name: str, value: str | bytes) -> bytes:
    if isinstance(value, str):
        try:
            return value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise UnencodableCredential(name, e.reason)

    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidCredentialType(name, value)

    return bytes(value)


def encode_md5(username: str | bytes, password: str | bytes) -> str:
    """Encode a password for md5 authentication.

    The server salts the hash with the role name, so the verifier is only valid
    for `username`.

    Returns:
        str: `md5` followed by the hex digest of MD5(password + username).

    Raises:
        EmptyUsername: `username` is empty.
        EmptyPassword: `password` is empty.
        InvalidCredentialType: `username` or `password` is neither `str` nor bytes-like.
        UnencodableCredential: `username` or `password` cannot be encoded as UTF-8.

    """
    if not username:
        raise EmptyUsername()
    if not password:
        raise EmptyPassword()

    username = _to_bytes('username', username)
    password = _to_bytes('password', password)

    digest = hashlib.md5(password + username).hexdigest()  # nosec
    return MD5_PREFIX + digest
