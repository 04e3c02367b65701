"""Defines the exceptions raised while encoding passwords and changing them on a server."""

# Error codes
ENCODER_E_FAULT = 1
ENCODER_E_EMPTY_PASSWORD = 2
ENCODER_E_EMPTY_USERNAME = 3
ENCODER_E_INVALID_SALT = 4
ENCODER_E_INVALID_ITERATIONS = 5
ENCODER_E_INVALID_VERIFIER = 6
ENCODER_E_UNSUPPORTED_SCHEME = 7
ENCODER_E_INVALID_CREDENTIAL = 8


class PasswordEncoderException(Exception):
    """Represents any exception that might arise from encoding a password."""

    code = ENCODER_E_FAULT

    def __init__(self, error: str, code: int | None = None):
        """Initialize `PasswordEncoderException`.

        Args:
            error: An error message offering a reason for the exception.
            code: An error code to classify the error. Defaults to the class code.

        """
        super().__init__(error)
        self.error = error
        if code is not None:
            self.code = code

    @classmethod
    def _get_errname(cls, code: int) -> str | None:
        """Get the name of an error given its error code.

        Returns:
            str: The name of the associated error.
            None: `code` does not match any known errors.

        """
        for k, v in globals().items():
            if k.startswith('ENCODER_E_') and v == code:
                return k

    def __str__(self):
        return self.error

    def __repr__(self):
        return f'{type(self).__name__}({self._get_errname(self.code) or "UNKNOWN_ERROR"}: {self.error})'


class InvalidInputError(PasswordEncoderException, ValueError):
    """The caller supplied an argument that cannot be encoded. Raised before any hashing happens."""
    pass


class EmptyPassword(InvalidInputError):
    code = ENCODER_E_EMPTY_PASSWORD

    def __init__(self):
        super().__init__('A non-empty password is required')


class EmptyUsername(InvalidInputError):
    """The legacy md5 format salts with the username so one is required."""
    code = ENCODER_E_EMPTY_USERNAME

    def __init__(self):
        super().__init__('A username is required')


class InvalidCredentialType(InvalidInputError, TypeError):
    """A password or username is neither text nor a bytes-like object."""
    code = ENCODER_E_INVALID_CREDENTIAL

    def __init__(self, name, value):
        super().__init__(f'{name} must be str or a bytes-like object, not {type(value).__name__}')


class UnencodableCredential(InvalidInputError):
    """A password or username cannot be encoded as UTF-8, e.g. it contains a lone surrogate."""
    code = ENCODER_E_INVALID_CREDENTIAL

    def __init__(self, name, reason):
        super().__init__(f'{name} is not valid UTF-8 text: {reason}')


class InvalidSaltType(InvalidInputError, TypeError):
    code = ENCODER_E_INVALID_SALT

    def __init__(self, salt):
        if isinstance(salt, (bytes, bytearray, memoryview)):
            msg = 'salt must not be empty'
        else:
            msg = f'salt must be a bytes-like object, not {type(salt).__name__}'
        super().__init__(msg)


class InvalidSaltSize(InvalidInputError):
    code = ENCODER_E_INVALID_SALT

    def __init__(self, salt_size):
        super().__init__(f'salt_size must be a positive integer: {salt_size!r}')
        self.salt_size = salt_size


class InvalidIterationCount(InvalidInputError):
    code = ENCODER_E_INVALID_ITERATIONS

    def __init__(self, iterations):
        super().__init__(f'iterations must be a positive integer: {iterations!r}')
        self.iterations = iterations


class InvalidVerifierError(InvalidInputError):
    """A stored verifier string could not be parsed."""
    code = ENCODER_E_INVALID_VERIFIER


class UnsupportedSchemeError(PasswordEncoderException, ValueError):
    """The password encryption scheme is neither md5 nor scram-sha-256 (nor a legacy on/off flag)."""
    code = ENCODER_E_UNSUPPORTED_SCHEME

    def __init__(self, scheme):
        super().__init__(f'Unhandled password encryption: {scheme!r}')
        self.scheme = scheme
