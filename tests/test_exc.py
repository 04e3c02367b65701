# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the exception classes."""

import unittest

from pg_password_encoder import exc


class TestErrorCodes(unittest.TestCase):
    """Each exception carries its own error code."""

    def test_codes(self):
        self.assertEqual(exc.EmptyPassword().code, exc.ENCODER_E_EMPTY_PASSWORD)
        self.assertEqual(exc.EmptyUsername().code, exc.ENCODER_E_EMPTY_USERNAME)
        self.assertEqual(exc.InvalidSaltType('x').code, exc.ENCODER_E_INVALID_SALT)
        self.assertEqual(exc.InvalidIterationCount(0).code, exc.ENCODER_E_INVALID_ITERATIONS)
        self.assertEqual(exc.InvalidVerifierError('bad').code, exc.ENCODER_E_INVALID_VERIFIER)
        self.assertEqual(exc.UnsupportedSchemeError('x').code, exc.ENCODER_E_UNSUPPORTED_SCHEME)
        self.assertEqual(exc.InvalidCredentialType('password', 5).code, exc.ENCODER_E_INVALID_CREDENTIAL)
        self.assertEqual(exc.UnencodableCredential('password', 'surrogates not allowed').code,
                         exc.ENCODER_E_INVALID_CREDENTIAL)
        self.assertEqual(exc.InvalidSaltSize(0).code, exc.ENCODER_E_INVALID_SALT)

    def test_code_override(self):
        self.assertEqual(exc.PasswordEncoderException('boom').code, exc.ENCODER_E_FAULT)
        self.assertEqual(exc.PasswordEncoderException('boom', exc.ENCODER_E_EMPTY_PASSWORD).code,
                         exc.ENCODER_E_EMPTY_PASSWORD)

    def test_repr(self):
        self.assertEqual(
            repr(exc.EmptyPassword()),
            'EmptyPassword(ENCODER_E_EMPTY_PASSWORD: A non-empty password is required)'
        )
        self.assertIn('UNKNOWN_ERROR', repr(exc.PasswordEncoderException('boom', 999)))


class TestHierarchy(unittest.TestCase):
    """Input errors are ValueErrors so callers can catch them generically."""

    def test_input_errors(self):
        for error in (exc.EmptyPassword(), exc.EmptyUsername(), exc.InvalidSaltType('x'),
                      exc.InvalidIterationCount(0), exc.InvalidVerifierError('bad')):
            with self.subTest(error=error):
                self.assertIsInstance(error, exc.InvalidInputError)
                self.assertIsInstance(error, exc.PasswordEncoderException)
                self.assertIsInstance(error, ValueError)

    def test_salt_type_is_type_error(self):
        self.assertIsInstance(exc.InvalidSaltType('x'), TypeError)

    def test_credential_errors(self):
        error = exc.InvalidCredentialType('password', 5)
        self.assertIsInstance(error, exc.InvalidInputError)
        self.assertIsInstance(error, TypeError)
        self.assertEqual(str(error), 'password must be str or a bytes-like object, not int')

        error = exc.UnencodableCredential('username', 'surrogates not allowed')
        self.assertIsInstance(error, exc.InvalidInputError)
        self.assertNotIsInstance(error, TypeError)
        self.assertEqual(str(error), 'username is not valid UTF-8 text: surrogates not allowed')

    def test_salt_size(self):
        error = exc.InvalidSaltSize(-1)
        self.assertIsInstance(error, exc.InvalidInputError)
        self.assertEqual(error.salt_size, -1)
        self.assertEqual(str(error), 'salt_size must be a positive integer: -1')

    def test_salt_messages(self):
        self.assertIn('not str', str(exc.InvalidSaltType('x')))
        self.assertIn('must not be empty', str(exc.InvalidSaltType(b'')))

    def test_unsupported_scheme(self):
        error = exc.UnsupportedSchemeError('password')
        self.assertIsInstance(error, ValueError)
        self.assertNotIsInstance(error, exc.InvalidInputError)
        self.assertEqual(error.scheme, 'password')
        self.assertIn("'password'", str(error))


if __name__ == '__main__':
    unittest.main()
