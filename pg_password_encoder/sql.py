"""SQL statements that set a role's password to an already-encoded verifier.

The statements carry only the verifier, never the plaintext password. Render
them with `as_string(conn)` or pass them straight to `cursor.execute()`.

Example::

    with psycopg.connect(dsn, autocommit=True) as conn:
        conn.execute(gen_alter_user_password_sql('alice', 'pencil', 'scram-sha-256'))

"""
from psycopg import sql

from .scheme import PasswordEncryption, encode_password
from .scram import ScramOptions

__all__ = ['gen_alter_user_password_sql', 'gen_create_user_sql', 'password_statement']


def password_statement(template: str, username: str, encoded_password: str) -> sql.Composed:
    """Fill `template` with `username` as an identifier and `encoded_password` as a literal.

    `template` must contain the `{username}` and `{password}` placeholders.
    """
    return sql.SQL(template).format(
        username=sql.Identifier(username),
        password=sql.Literal(encoded_password),
    )


def gen_alter_user_password_sql(
    username: str,
    password: str | bytes,
    password_encryption: str | PasswordEncryption,
    *,
    options: ScramOptions | None = None,
) -> sql.Composed:
    """Generate SQL changing the password of `username`.

    A specific `password_encryption` must be given, see `db.alter_user_password`
    to use the server's default instead.

    Raises:
        UnsupportedSchemeError: `password_encryption` is not a known scheme.

    """
    encoded = encode_password(username, password, password_encryption, options=options)
    return password_statement('ALTER USER {username} PASSWORD {password}', username, encoded)


def gen_create_user_sql(
    username: str,
    password: str | bytes,
    password_encryption: str | PasswordEncryption,
    *,
    login: bool = True,
    options: ScramOptions | None = None,
) -> sql.Composed:
    """Generate SQL creating role `username` with an encoded password."""
    encoded = encode_password(username, password, password_encryption, options=options)
    template = 'CREATE USER {username} WITH LOGIN PASSWORD {password}' if login else \
        'CREATE USER {username} WITH NOLOGIN PASSWORD {password}'
    return password_statement(template, username, encoded)
