"""Encode PostgreSQL role passwords client side.

Produces the md5 and SCRAM-SHA-256 verifiers that the server stores in
`pg_authid.rolpassword`, so a password can be set or rotated without the
plaintext ever being sent to the server.

Example::

    $ pg-password-encoder scram -P pencil
    SCRAM-SHA-256$4096:...$...:...
    $ pg-password-encoder md5 -U alice -P pencil
    md5ee69efad287c7423caf0b3229d71f567
    $ DATABASE_URL=postgresql://postgres@localhost/postgres pg-password-encoder alter -U alice
    Password:

Example::

    verifier = encode_scram_sha256('pencil')
    with connect(dsn) as conn:
        alter_user_password(conn, 'alice', 'pencil')  # scheme read from the server

"""
import argparse
from base64 import b64decode
import binascii
from getpass import getpass
import logging
import os
import sys

import psycopg

from .db import alter_user_password, connect, get_password_encryption
from .exc import (  # noqa
    PasswordEncoderException, InvalidInputError, EmptyPassword, EmptyUsername, InvalidCredentialType,
    UnencodableCredential, InvalidSaltType, InvalidSaltSize, InvalidIterationCount, InvalidVerifierError,
    UnsupportedSchemeError,
)
from .log_config import setup_logging
from .md5 import encode_md5
from .scheme import PasswordEncryption, encode_password
from .scram import (  # noqa
    DEFAULT_SCRAM_ITERATIONS, ScramOptions, encode_scram_sha256, parse_scram_verifier, verify_scram_sha256,
)
from .sql import gen_alter_user_password_sql, gen_create_user_sql

logger = logging.getLogger(__name__)


def parse_salt(value: str) -> bytes:
    """Decode a base64 salt given on the command line."""
    try:
        salt = b64decode(value, validate=True)
    except binascii.Error:
        raise argparse.ArgumentTypeError('Salt must be base64 encoded')

    if not salt:
        raise argparse.ArgumentTypeError('Salt must not be empty')

    return salt


def get_parser():
    """Construct the argument parser for `pg-password-encoder`."""
    parser = argparse.ArgumentParser(prog='pg-password-encoder')

    # global options
    parser.add_argument('-v', '--verbose', help='Log debug messages to stderr', action='store_true')

    subparsers = parser.add_subparsers(help='sub-command help', dest='name')

    # scram options
    iparser = subparsers.add_parser('scram', help='Print a SCRAM-SHA-256 verifier')
    iparser.add_argument('-P', '--password')
    iparser.add_argument('-i', '--iterations', type=int, default=DEFAULT_SCRAM_ITERATIONS,
                         help=f'PBKDF2 iteration count (default {DEFAULT_SCRAM_ITERATIONS})')
    iparser.add_argument('-s', '--salt', type=parse_salt, help='Base64 salt. Random when omitted')
    iparser.add_argument('--no-saslprep', help='Do not normalize the password with SASLprep',
                         action='store_true')

    # md5 options
    iparser = subparsers.add_parser('md5', help='Print a legacy md5 verifier')
    iparser.add_argument('-U', '--username', required=True)
    iparser.add_argument('-P', '--password')

    # verify options
    iparser = subparsers.add_parser('verify', help='Check a password against a SCRAM-SHA-256 verifier')
    iparser.add_argument('-q', '--quiet', help='Don\'t print the result', action='store_true')
    iparser.add_argument('-P', '--password')
    iparser.add_argument('verifier')

    # sql options
    iparser = subparsers.add_parser('sql', help='Print an ALTER USER statement')
    iparser.add_argument('-U', '--username', required=True)
    iparser.add_argument('-P', '--password')
    iparser.add_argument('-e', '--password-encryption', default=PasswordEncryption.SCRAM_SHA_256)
    iparser.add_argument('-i', '--iterations', type=int, default=DEFAULT_SCRAM_ITERATIONS)

    # alter options
    iparser = subparsers.add_parser('alter', help='Change a role\'s password on a server')
    iparser.add_argument('-d', '--dsn', default=os.environ.get('DATABASE_URL'),
                         help='Connection string, defaults to $DATABASE_URL')
    iparser.add_argument('-U', '--username', required=True)
    iparser.add_argument('-P', '--password')
    iparser.add_argument('-e', '--password-encryption',
                         help='md5 or scram-sha-256, defaults to the server\'s password_encryption')
    iparser.add_argument('-i', '--iterations', type=int, default=DEFAULT_SCRAM_ITERATIONS)

    return parser


def main(argv=None):
    """The entry point for pg-password-encoder. Run `pg-password-encoder -h` to see usage.

    Sub-commands:
        scram, md5, verify, sql, alter

    Exits 1 when the input cannot be encoded, the verifier does not match, or
    the server rejects the change.

    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.name is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)

    if args.password is None:
        args.password = getpass()

    try:
        if args.name == 'scram':
            options = ScramOptions(iterations=args.iterations, salt=args.salt, saslprep=not args.no_saslprep)
            print(encode_scram_sha256(args.password, options=options))
        elif args.name == 'md5':
            print(encode_md5(args.username, args.password))
        elif args.name == 'verify':
            ok = verify_scram_sha256(args.password, args.verifier.strip())
            if not args.quiet:
                print('ok' if ok else 'failed', file=sys.stdout if ok else sys.stderr)
            sys.exit(0 if ok else 1)
        elif args.name == 'sql':
            options = ScramOptions(iterations=args.iterations)
            stmt = gen_alter_user_password_sql(args.username, args.password, args.password_encryption,
                                               options=options)
            print(stmt.as_string())
        elif args.name == 'alter':
            options = ScramOptions(iterations=args.iterations)
            with connect(args.dsn) as conn:
                alter_user_password(conn, args.username, args.password, args.password_encryption,
                                    options=options)
    except PasswordEncoderException as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except psycopg.Error as e:
        logger.debug('Database error', exc_info=True)
        print(f'Failed to change password: {e}', file=sys.stderr)
        sys.exit(1)


__all__ = [
    'EmptyPassword',
    'EmptyUsername',
    'InvalidCredentialType',
    'InvalidInputError',
    'InvalidIterationCount',
    'InvalidSaltSize',
    'InvalidSaltType',
    'InvalidVerifierError',
    'PasswordEncoderException',
    'UnencodableCredential',
    'UnsupportedSchemeError',
    'PasswordEncryption',
    'ScramOptions',
    'alter_user_password',
    'connect',
    'encode_md5',
    'encode_password',
    'encode_scram_sha256',
    'gen_alter_user_password_sql',
    'gen_create_user_sql',
    'get_password_encryption',
    'main',
    'parse_scram_verifier',
    'verify_scram_sha256',
]
