# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password encryption scheme dispatch."""

import unittest

from pg_password_encoder.exc import EmptyPassword, EmptyUsername, UnsupportedSchemeError
from pg_password_encoder.scheme import PasswordEncryption, encode_password
from pg_password_encoder.scram import ScramOptions, verify_scram_sha256


class TestPasswordEncryptionEnum(unittest.TestCase):
    """Test PasswordEncryption enum."""

    def test_enum_values(self):
        self.assertEqual(PasswordEncryption.MD5, 'md5')
        self.assertEqual(PasswordEncryption.SCRAM_SHA_256, 'scram-sha-256')

    def test_from_setting(self):
        self.assertIs(PasswordEncryption.from_setting('md5'), PasswordEncryption.MD5)
        self.assertIs(PasswordEncryption.from_setting('scram-sha-256'), PasswordEncryption.SCRAM_SHA_256)
        self.assertIs(PasswordEncryption.from_setting(PasswordEncryption.MD5), PasswordEncryption.MD5)

    def test_legacy_flags(self):
        """Pre-10 servers report on/off, both meaning md5."""
        self.assertIs(PasswordEncryption.from_setting('on'), PasswordEncryption.MD5)
        self.assertIs(PasswordEncryption.from_setting('off'), PasswordEncryption.MD5)

    def test_server_output_normalized(self):
        self.assertIs(PasswordEncryption.from_setting(' SCRAM-SHA-256\n'), PasswordEncryption.SCRAM_SHA_256)
        self.assertIs(PasswordEncryption.from_setting('MD5'), PasswordEncryption.MD5)

    def test_unsupported(self):
        for value in ('not-an-acceptable-value', '', 'password', 'scram-sha-1', None, 1):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedSchemeError) as ctx:
                    PasswordEncryption.from_setting(value)

                self.assertEqual(ctx.exception.scheme, value)
                self.assertIn('Unhandled password encryption', str(ctx.exception))


class TestEncodePassword(unittest.TestCase):
    """Test encode_password dispatch."""

    def test_md5(self):
        self.assertEqual(
            encode_password('alice', 'pencil', 'md5'),
            'md5ee69efad287c7423caf0b3229d71f567'
        )

    def test_legacy_flags_use_md5(self):
        for password_encryption in ('on', 'off'):
            with self.subTest(password_encryption=password_encryption):
                encoded = encode_password('dummy-user', 'dummy-pass', password_encryption)
                self.assertTrue(encoded.startswith('md5'), encoded)

    def test_scram(self):
        encoded = encode_password('dummy-user', 'dummy-pass', PasswordEncryption.SCRAM_SHA_256)
        self.assertTrue(encoded.startswith('SCRAM-SHA-256$4096:'), encoded)
        self.assertTrue(verify_scram_sha256('dummy-pass', encoded))

    def test_scram_options(self):
        encoded = encode_password('dummy-user', 'dummy-pass', 'scram-sha-256', options=ScramOptions(iterations=1))
        self.assertTrue(encoded.startswith('SCRAM-SHA-256$1:'), encoded)

    def test_scram_ignores_username(self):
        """Only md5 needs a username."""
        encoded = encode_password('', 'dummy-pass', 'scram-sha-256', options=ScramOptions(iterations=1))
        self.assertTrue(encoded.startswith('SCRAM-SHA-256$'))

    def test_validation_errors_propagate(self):
        with self.assertRaises(EmptyUsername):
            encode_password('', 'dummy-pass', 'md5')

        with self.assertRaises(EmptyPassword):
            encode_password('dummy-user', '', 'scram-sha-256')

    def test_unsupported(self):
        with self.assertRaises(UnsupportedSchemeError):
            encode_password('dummy-user', 'dummy-pass', 'not-an-acceptable-value')


if __name__ == '__main__':
    unittest.main()
