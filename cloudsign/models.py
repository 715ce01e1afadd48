"""
Credential models for signing CloudAPI and Manta requests.

A single account (user + private key) can hold separate key ids for the
CloudAPI ("SDC") control plane and the Manta object store, so credentials
carry both and the caller picks one per request.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_ALGORITHM = "rsa-sha256"
DEFAULT_SDC_URL = "https://us-east-1.api.joyentcloud.com"
DEFAULT_MANTA_URL = "https://us-east.manta.joyent.com"


@dataclass(frozen=True)
class Endpoint:
    """
    Base URL of an API endpoint.

    Attributes:
        url: Endpoint URL (e.g., https://us-east.manta.joyent.com)
    """
    url: str


@dataclass(frozen=True)
class UserAuth:
    """
    Account name and signing key.

    Attributes:
        user: Account login, used in the keyId path
        key_file: Path to the PEM-encoded RSA private key
        algorithm: Signing algorithm identifier (e.g., rsa-sha256)
    """
    user: str
    key_file: str
    algorithm: str = DEFAULT_ALGORITHM


@dataclass(frozen=True)
class Credentials:
    """
    Everything needed to build an Authorization header for either API.

    Attributes:
        user_auth: Account name, key file and algorithm
        sdc_key_id: Key id registered with CloudAPI
        sdc_endpoint: CloudAPI endpoint
        manta_key_id: Key id registered with Manta
        manta_endpoint: Manta endpoint
    """
    user_auth: UserAuth
    sdc_key_id: str
    sdc_endpoint: Endpoint
    manta_key_id: str
    manta_endpoint: Endpoint

    def key_id_for(self, is_manta_request: bool) -> str:
        """Return the Manta key id for Manta requests, the CloudAPI one otherwise."""
        return self.manta_key_id if is_manta_request else self.sdc_key_id

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """
        Build credentials from environment variables.

        Required: SDC_ACCOUNT, SDC_KEY_FILE, SDC_KEY_ID.
        Optional: SDC_ALGORITHM, SDC_URL, MANTA_KEY_ID (defaults to
        SDC_KEY_ID), MANTA_URL.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Populated credentials

        Raises:
            KeyError: If a required variable is not set
        """
        env = os.environ if environ is None else environ

        sdc_key_id = env["SDC_KEY_ID"]

        return cls(
            user_auth=UserAuth(
                user=env["SDC_ACCOUNT"],
                key_file=os.path.expanduser(env["SDC_KEY_FILE"]),
                algorithm=env.get("SDC_ALGORITHM") or DEFAULT_ALGORITHM,
            ),
            sdc_key_id=sdc_key_id,
            sdc_endpoint=Endpoint(env.get("SDC_URL") or DEFAULT_SDC_URL),
            manta_key_id=env.get("MANTA_KEY_ID") or sdc_key_id,
            manta_endpoint=Endpoint(env.get("MANTA_URL") or DEFAULT_MANTA_URL),
        )
