"""Blocking helpers that change a role's password on a live server.

Example::

    with connect('postgresql://postgres@localhost/postgres') as conn:
        alter_user_password(conn, 'alice', 'new password')  # uses the server's password_encryption

"""
import logging

import psycopg

from .scheme import PasswordEncryption
from .scram import ScramOptions
from .sql import gen_alter_user_password_sql

__all__ = ['alter_user_password', 'connect', 'get_password_encryption']

logger = logging.getLogger(__name__)


def connect(dsn: str | None = None, **kwargs) -> psycopg.Connection:
    """Open an autocommit connection, so a password change takes effect without an explicit commit."""
    kwargs.setdefault('autocommit', True)
    return psycopg.connect(dsn or '', **kwargs)


def get_password_encryption(conn: psycopg.Connection) -> PasswordEncryption:
    """Read the server's active `password_encryption` setting.

    Raises:
        UnsupportedSchemeError: The server reports a scheme this package cannot encode.

    """
    row = conn.execute('SHOW password_encryption').fetchone()
    logger.debug('Server password_encryption is %r', row[0])
    return PasswordEncryption.from_setting(row[0])


def alter_user_password(
    conn: psycopg.Connection,
    username: str,
    password: str | bytes,
    password_encryption: str | PasswordEncryption | None = None,
    *,
    options: ScramOptions | None = None,
) -> None:
    """Change the password of `username`.

    Only the encoded verifier is sent to the server. Transaction control is
    left to the caller unless the connection is in autocommit mode.

    Args:
        conn: An open connection with privileges to alter `username`.
        username: Role to update.
        password: New plaintext password.
        password_encryption: Scheme to encode with. Queried from the server when not given.
        options: SCRAM-SHA-256 tunables.

    """
    if not password_encryption:
        password_encryption = get_password_encryption(conn)

    stmt = gen_alter_user_password_sql(username, password, password_encryption, options=options)
    conn.execute(stmt)
    logger.info('Changed password of role %r using %s', username, PasswordEncryption.from_setting(password_encryption))
