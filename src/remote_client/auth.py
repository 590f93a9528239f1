"""Authentication module for loading the Google access token.

This module loads the optional Google Drive bearer token from environment
variables using python-dotenv. Unlike a hard credential requirement, a missing
token is normal: documents are then fetched through the public export endpoint.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv


ACCESS_TOKEN_ENV = 'GOOGLE_ACCESS_TOKEN'


class Credentials(NamedTuple):
    """Google API credentials."""
    access_token: Optional[str]

    @property
    def has_token(self) -> bool:
        return bool(self.access_token)


class Authenticator:
    """Loads the Google access token from environment variables.

    The token is loaded from a .env file using python-dotenv and is never
    cached or logged.

    Optional environment variables:
        GOOGLE_ACCESS_TOKEN: OAuth bearer token for the Drive export API

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> if creds.has_token:
        ...     print("Using authenticated export")
    """

    def __init__(self, load_env_file: bool = True):
        """Initialize the authenticator, loading a .env file when present.

        Args:
            load_env_file: Set to False to read only the process environment
        """
        if load_env_file:
            load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Google credentials from environment variables.

        Returns:
            Credentials: A named tuple whose access_token is None when unset
        """
        token = (os.getenv(ACCESS_TOKEN_ENV) or '').strip()
        return Credentials(access_token=token or None)
