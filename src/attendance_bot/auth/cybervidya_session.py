"""
CyberVidya session management and authentication.

Handles login to the CyberVidya student portal using its JSON API at
/api/auth/login and authenticated requests against the student API.
"""

import logging
from typing import Any, Optional

import requests

from attendance_bot.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CyberVidyaError(Exception):
    """Raised when a CyberVidya API request fails."""
    pass


class CyberVidyaAuthError(CyberVidyaError):
    """Raised when CyberVidya authentication fails."""
    pass


class SessionExpiredError(CyberVidyaAuthError):
    """Raised when the portal rejects the session token (HTTP 401)."""
    pass


class CyberVidyaSession:
    """
    Manages authenticated sessions with the CyberVidya portal.

    Handles:
    - JSON login with username/password
    - Authorization header management (auth_pref + token)
    - Authenticated JSON requests
    """

    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize CyberVidya session.

        Args:
            settings: Optional settings instance, will use default if not provided
        """
        self.settings = settings or get_settings()
        self.base_url = self.settings.cybervidya_base_url

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": self.USER_AGENT,
            "Accept": "application/json, text/plain, */*",
            "Content-Type": "application/json",
        })

        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        """Check if session is authenticated."""
        return self._authenticated

    def _get_url(self, path: str) -> str:
        """Build full URL from path."""
        return f"{self.base_url}{path}"

    def login(self) -> bool:
        """
        Authenticate with CyberVidya using username/password.

        Returns:
            bool: True if login successful

        Raises:
            CyberVidyaAuthError: If the request fails or no token comes back
        """
        logger.info("Attempting login...")

        payload = {
            "userName": self.settings.cybervidya_username,
            "password": self.settings.cybervidya_password,
        }

        try:
            response = self.session.post(self.settings.login_url, json=payload, timeout=30)
            response.raise_for_status()
            data = response.json().get("data") or {}
        except requests.exceptions.RequestException as e:
            logger.error(f"Login failed: {e}")
            if e.response is not None:
                logger.error(f"Server response: {e.response.text}")
            raise CyberVidyaAuthError("Login failed") from e
        except ValueError as e:
            logger.error(f"Login response was not valid JSON: {e}")
            raise CyberVidyaAuthError("Login failed") from e

        auth_pref = data.get("auth_pref")
        token = data.get("token")
        if not token:
            raise CyberVidyaAuthError("Login failed - no session token in response")

        self.session.headers["Authorization"] = f"{auth_pref or ''}{token}"
        self._authenticated = True
        logger.info("Login successful")
        return True

    def get_json(self, path: str, **kwargs) -> Any:
        """
        Make authenticated GET request and return parsed JSON.

        Args:
            path: URL path (e.g., "/api/student/dashboard/registered-courses")
            **kwargs: Additional arguments passed to requests.get

        Returns:
            Parsed JSON response

        Raises:
            CyberVidyaAuthError: If not authenticated
            SessionExpiredError: If the portal answers 401
            CyberVidyaError: On any other request failure
        """
        if not self._authenticated:
            raise CyberVidyaAuthError("Not authenticated. Call login() first.")

        kwargs.setdefault("timeout", 30)

        try:
            response = self.session.get(self._get_url(path), **kwargs)
            if response.status_code == 401:
                raise SessionExpiredError("Session expired or invalid")
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {path} failed: {e}")
            raise CyberVidyaError(f"Failed to fetch {path}") from e
        except ValueError as e:
            raise CyberVidyaError(f"Invalid JSON from {path}") from e

    def logout(self) -> None:
        """Drop the session token."""
        if self._authenticated:
            self._authenticated = False
            self.session.headers.pop("Authorization", None)
            self.session.cookies.clear()
            logger.info("Logged out from CyberVidya")

    def __enter__(self) -> "CyberVidyaSession":
        """Context manager entry - login."""
        self.login()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - logout."""
        self.logout()
