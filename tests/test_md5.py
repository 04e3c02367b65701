# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the legacy md5 encoder."""

import unittest

from pg_password_encoder.exc import EmptyPassword, EmptyUsername, InvalidCredentialType, UnencodableCredential
from pg_password_encoder.md5 import encode_md5


class TestEncodeMd5(unittest.TestCase):
    """Test encode_md5."""

    def test_known_value(self):
        """md5 of the password followed by the username."""
        self.assertEqual(encode_md5('alice', 'pencil'), 'md5ee69efad287c7423caf0b3229d71f567')

    def test_bytes_arguments(self):
        self.assertEqual(encode_md5(b'alice', b'pencil'), encode_md5('alice', 'pencil'))

    def test_salted_by_username(self):
        self.assertNotEqual(encode_md5('alice', 'pencil'), encode_md5('bob', 'pencil'))

    def test_format(self):
        encoded = encode_md5('dummy-user', 'dummy-pass')
        self.assertTrue(encoded.startswith('md5'))
        self.assertEqual(len(encoded), 35)
        int(encoded[3:], 16)

    def test_empty_username(self):
        with self.assertRaises(EmptyUsername) as ctx:
            encode_md5('', 'dummy')

        self.assertIn('A username is required', str(ctx.exception))

    def test_empty_password(self):
        with self.assertRaises(EmptyPassword) as ctx:
            encode_md5('dummy', '')

        self.assertIn('A non-empty password is required', str(ctx.exception))

    def test_username_checked_first(self):
        with self.assertRaises(EmptyUsername):
            encode_md5('', '')

    def test_password_type(self):
        """A password that is not text or bytes never turns into a verifier."""
        for password in (3, 2.5, ['pencil']):
            with self.subTest(password=password):
                with self.assertRaises(InvalidCredentialType) as ctx:
                    encode_md5('alice', password)

                self.assertIsInstance(ctx.exception, TypeError)
                self.assertIn('password must be str or a bytes-like object', str(ctx.exception))

    def test_username_type(self):
        with self.assertRaises(InvalidCredentialType) as ctx:
            encode_md5(42, 'pencil')

        self.assertIn('username must be str', str(ctx.exception))

    def test_bytes_like_arguments(self):
        self.assertEqual(encode_md5(bytearray(b'alice'), memoryview(b'pencil')), encode_md5('alice', 'pencil'))

    def test_lone_surrogate(self):
        with self.assertRaises(UnencodableCredential):
            encode_md5('alice', 'ab\ud800')

        with self.assertRaises(UnencodableCredential):
            encode_md5('al\udcffice', 'pencil')


if __name__ == '__main__':
    unittest.main()
