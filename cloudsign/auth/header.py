"""
Authorization header construction for CloudAPI and Manta requests.

CloudAPI signs the bare Date header value and puts the signature after the
parameters; Manta signs the ``date: <value>`` line and carries the signature
as a quoted parameter.
"""

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

from cloudsign.auth.signer import RequestSigner
from cloudsign.exceptions import MissingDateHeaderError
from cloudsign.models import Credentials, UserAuth

logger = logging.getLogger(__name__)

# Authorization header templates
SDC_SIGNATURE = 'Signature keyId="/%s/keys/%s",algorithm="%s" %s'
MANTA_SIGNATURE = 'Signature keyId="/%s/keys/%s",algorithm="%s",signature="%s"'

# RFC 7231 IMF-fixdate
HTTP_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"


def http_date(when: Optional[datetime] = None) -> str:
    """
    Format a timestamp for the Date header.

    Args:
        when: Timestamp to format (defaults to now); naive values are taken as UTC

    Returns:
        Date string such as "Thu, 05 Jan 2023 21:31:40 GMT"
    """
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime(HTTP_DATE_FORMAT)


def format_authorization_header(
    signature: str,
    key_id: str,
    user: str,
    algorithm: str,
    is_manta_request: bool,
) -> str:
    """Substitute a signature into the Manta or CloudAPI header template."""
    template = MANTA_SIGNATURE if is_manta_request else SDC_SIGNATURE
    return template % (user, key_id, algorithm, signature)


def get_signature(auth: UserAuth, signing_string: str) -> str:
    """
    Sign a string with the key file and algorithm of an account.

    The key file is read on every call.

    Args:
        auth: Account name, key file path and algorithm
        signing_string: String to sign

    Returns:
        Base64-encoded signature

    Raises:
        KeyReadError, KeyFormatError, KeyParseError: If the key cannot be loaded
        SigningError: If the RSA operation fails
    """
    private_key = RequestSigner.load_private_key_file(auth.key_file)
    return RequestSigner.sign(private_key, auth.algorithm, signing_string)


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def create_authorization_header(
    headers: Mapping[str, str],
    credentials: Credentials,
    is_manta_request: bool,
) -> str:
    """
    Build the Authorization header for a request.

    Args:
        headers: Request headers; must contain Date (any case)
        credentials: Account credentials and key ids
        is_manta_request: True for Manta, False for CloudAPI

    Returns:
        Authorization header value

    Raises:
        MissingDateHeaderError: If headers carry no Date value
        SignatureAuthError: If the key cannot be loaded or signing fails

    Example:
        >>> create_authorization_header({"Date": http_date()}, creds, is_manta_request=True)
        'Signature keyId="/user/keys/my-key",algorithm="rsa-sha256",signature="..."'
    """
    date = _get_header(headers, "Date")
    if not date:
        raise MissingDateHeaderError()

    auth = credentials.user_auth
    signing_string = f"date: {date}" if is_manta_request else date
    signature = get_signature(auth, signing_string)

    key_id = credentials.key_id_for(is_manta_request)
    logger.debug(
        "Built %s authorization header for /%s/keys/%s",
        "Manta" if is_manta_request else "CloudAPI",
        auth.user,
        key_id,
    )
    return format_authorization_header(
        signature, key_id, auth.user, auth.algorithm, is_manta_request
    )
