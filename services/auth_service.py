"""
Authentication service backed by Supabase.

The dashboard does not implement authentication itself; this wrapper keeps
the provider's client behind sign_in/sign_out/get_current_user and turns
provider failures into AuthError.
"""

import logging
from typing import Any, Optional

# Set up logger
logger = logging.getLogger(__name__)

class AuthError(Exception):
    """Raised when the auth provider rejects or fails a request."""

class AuthService:
    """
    Thin wrapper around a Supabase client's auth API.

    Attributes:
        client: Supabase client (anything exposing an ``auth`` attribute)
    """

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_config(cls, config) -> "AuthService":
        """
        Build the service from the application configuration.

        Args:
            config: ConfigManager instance

        Returns:
            AuthService connected to the configured Supabase project

        Raises:
            AuthError: If the project URL or anon key is missing
        """
        url = config.get_supabase_url()
        key = config.get_supabase_key()
        if not url or not key:
            raise AuthError("Supabase URL and anon key must be configured")

        from supabase import create_client

        logger.info(f"Connecting auth client to {url}")
        return cls(create_client(url, key))

    def sign_in(self, email: str, password: str) -> Any:
        """
        Sign in with email and password.

        Returns:
            The signed-in user object (has an ``email`` attribute)
        """
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.error(f"Sign in failed for {email}: {str(e)}")
            raise AuthError(str(e)) from e

        user = getattr(response, 'user', None)
        if user is None:
            raise AuthError("No user returned by the auth provider")
        return user

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.error(f"Error signing out: {str(e)}")
            raise AuthError(str(e)) from e

    def get_current_user(self) -> Optional[Any]:
        """Return the current user, or None when there is no session."""
        try:
            response = self.client.auth.get_user()
        except Exception as e:
            logger.warning(f"Could not read current user: {str(e)}")
            return None
        return getattr(response, 'user', None) if response else None
