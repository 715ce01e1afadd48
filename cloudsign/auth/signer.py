"""
RSA signing utilities for CloudAPI and Manta HTTP Signature authentication.

Requests are authenticated by signing the value of the Date header (or the
``date: <value>`` line, for Manta) with the account's RSA private key using
PKCS#1 v1.5 padding. The hash function is picked from the configured
algorithm name, and the resulting signature is base64-encoded into the
Authorization header.

See: https://apidocs.joyent.com/cloudapi/#issuing-requests
and https://apidocs.joyent.com/manta/api.html#authentication
"""

import base64
import logging
from typing import Dict, Type, Union

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, utils
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from cloudsign.exceptions import (
    KeyFormatError,
    KeyParseError,
    KeyReadError,
    SigningError,
    UnsupportedAlgorithmError,
)

logger = logging.getLogger(__name__)

# Fallback for identifiers not in HASH_ALGORITHMS
DEFAULT_HASH: Type[hashes.HashAlgorithm] = hashes.SHA256

# rsa-sha224 and rsa-sha384 deliberately map to the wider hash of their pair
HASH_ALGORITHMS: Dict[str, Type[hashes.HashAlgorithm]] = {
    "rsa-sha1": hashes.SHA1,
    "rsa-sha224": hashes.SHA256,
    "rsa-sha256": hashes.SHA256,
    "rsa-sha384": hashes.SHA512,
    "rsa-sha512": hashes.SHA512,
}


class RequestSigner:
    """
    Utility class for signing CloudAPI and Manta requests.

    Provides private key loading, hash selection and RSA signature
    generation. Loaded keys are immutable and may be shared between
    threads; signing keeps no state between calls.
    """

    @staticmethod
    def load_private_key(data: bytes) -> RSAPrivateKey:
        """
        Parse an RSA private key from PEM-encoded bytes.

        The first PEM block found in ``data`` is handed to ``cryptography``
        and must hold an RSA private key (PKCS#1, or an unencrypted PKCS#8
        wrapper around one).

        Args:
            data: Raw bytes containing a PEM block

        Returns:
            Loaded RSA private key object

        Raises:
            KeyFormatError: If no BEGIN/END PEM markers are found
            KeyParseError: If the block is not a valid RSA private key
        """
        # Bytes before the first block (comments, ssh-keygen banners) are skipped
        data = data or b""
        begin = data.find(b"-----BEGIN")
        if begin < 0 or data.find(b"-----END", begin) < 0:
            raise KeyFormatError()

        try:
            key = serialization.load_pem_private_key(data[begin:], password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as err:
            raise KeyParseError(
                f"An error occurred while parsing the key: {err}"
            ) from err

        if not isinstance(key, RSAPrivateKey):
            raise KeyParseError(
                f"An error occurred while parsing the key: "
                f"expected an RSA private key, got {type(key).__name__}"
            )

        logger.debug("Loaded %d-bit RSA private key", key.key_size)
        return key

    @staticmethod
    def load_private_key_file(path: str) -> RSAPrivateKey:
        """
        Load an RSA private key from a PEM file.

        Args:
            path: Path to private key file

        Returns:
            Loaded RSA private key object

        Raises:
            KeyReadError: If the file cannot be read
            KeyFormatError: If the file holds no PEM block
            KeyParseError: If the PEM block is not a valid RSA private key
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as err:
            raise KeyReadError(
                f"An error occurred while reading the key: {err}"
            ) from err

        return RequestSigner.load_private_key(data)

    @staticmethod
    def select_hash(algorithm: str, strict: bool = False) -> hashes.HashAlgorithm:
        """
        Pick the hash function for an algorithm identifier.

        Matching is case-insensitive. Unknown identifiers resolve to SHA-256
        unless ``strict`` is set.

        Args:
            algorithm: Identifier such as "rsa-sha256" or "RSA-SHA1"
            strict: Reject identifiers not in HASH_ALGORITHMS

        Returns:
            Hash algorithm instance

        Raises:
            UnsupportedAlgorithmError: In strict mode, for unknown identifiers
        """
        hash_cls = HASH_ALGORITHMS.get((algorithm or "").lower())
        if hash_cls is None:
            if strict:
                raise UnsupportedAlgorithmError(algorithm)
            hash_cls = DEFAULT_HASH
        return hash_cls()

    @staticmethod
    def sign(
        private_key: RSAPrivateKey,
        algorithm: str,
        signing_string: Union[bytes, str],
    ) -> str:
        """
        Sign a string with RSA PKCS#1 v1.5 and base64-encode the result.

        The signing string is digested with the hash selected by
        ``algorithm`` and the digest is signed as a prehashed value.

        Args:
            private_key: RSA private key for signing
            algorithm: Algorithm identifier (e.g., "rsa-sha256")
            signing_string: Bytes to sign; str is UTF-8 encoded

        Returns:
            Base64-encoded signature string

        Raises:
            SigningError: If the RSA operation fails

        Example:
            >>> key = RequestSigner.load_private_key_file("~/.ssh/id_rsa")
            >>> RequestSigner.sign(key, "rsa-sha256", "Thu, 05 Jan 2023 21:31:40 GMT")
        """
        if isinstance(signing_string, str):
            signing_string = signing_string.encode("utf-8")

        hash_algorithm = RequestSigner.select_hash(algorithm)
        hasher = hashes.Hash(hash_algorithm)
        hasher.update(signing_string)
        digest = hasher.finalize()

        try:
            signature = private_key.sign(
                digest,
                padding.PKCS1v15(),
                utils.Prehashed(hash_algorithm),
            )
        except (ValueError, TypeError, UnsupportedAlgorithm, InternalError) as err:
            raise SigningError(f"An error occurred while signing: {err}") from err

        logger.debug(
            "Signed %d bytes with %s (%s)",
            len(signing_string),
            algorithm,
            hash_algorithm.name,
        )
        return base64.b64encode(signature).decode("ascii")
