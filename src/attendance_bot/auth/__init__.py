"""Authentication module for the CyberVidya portal."""

from attendance_bot.auth.cybervidya_session import (
    CyberVidyaAuthError,
    CyberVidyaError,
    CyberVidyaSession,
    SessionExpiredError,
)

__all__ = [
    "CyberVidyaSession",
    "CyberVidyaError",
    "CyberVidyaAuthError",
    "SessionExpiredError",
]
