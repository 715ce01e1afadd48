"""
Exceptions raised while loading keys and signing requests.

Every exception carries a short machine-readable ``error_code`` next to the
human-readable message. Lower-level causes (``OSError``, ``ValueError`` from
the crypto backend) are always chained with ``raise ... from err`` so callers
can inspect ``__cause__``.
"""


class SignatureAuthError(Exception):
    """Base exception for request signing errors."""

    def __init__(self, message: str, error_code: str = "SignatureAuthError"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class KeyReadError(SignatureAuthError):
    """Raised when the private key file cannot be read."""

    def __init__(self, message: str = "An error occurred while reading the key"):
        super().__init__(message, "KeyReadError")


class KeyFormatError(SignatureAuthError):
    """Raised when no PEM block is found in the key source."""

    def __init__(self, message: str = "No PEM block found in key data"):
        super().__init__(message, "KeyFormatError")


class KeyParseError(SignatureAuthError):
    """Raised when the PEM payload is not a valid RSA private key."""

    def __init__(self, message: str = "An error occurred while parsing the key"):
        super().__init__(message, "KeyParseError")


class SigningError(SignatureAuthError):
    """Raised when the RSA signing operation fails."""

    def __init__(self, message: str = "An error occurred while signing"):
        super().__init__(message, "SigningError")


class UnsupportedAlgorithmError(SignatureAuthError):
    """Raised in strict mode when an algorithm identifier is not recognized."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            f"Unsupported signing algorithm: {algorithm}",
            "UnsupportedAlgorithm",
        )


class MissingDateHeaderError(SignatureAuthError):
    """Raised when the request headers carry no Date value to sign."""

    def __init__(self, message: str = "Date header is missing"):
        super().__init__(message, "MissingDateHeader")
