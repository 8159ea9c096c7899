"""
Base scraper class with shared utilities.

Provides common functionality for all CyberVidya scrapers.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from attendance_bot.auth.cybervidya_session import CyberVidyaSession

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Base class for CyberVidya scrapers.

    Provides common utilities for cleaning the loosely typed values the
    portal API returns.
    """

    def __init__(self, session: CyberVidyaSession):
        """
        Initialize scraper with authenticated session.

        Args:
            session: Authenticated CyberVidya session
        """
        self.session = session

    @abstractmethod
    def scrape(self, *args, **kwargs) -> Any:
        """Scrape data - implemented by subclasses."""
        pass

    def clean_text(self, text: Optional[str]) -> str:
        """
        Clean and normalize text content.

        Args:
            text: Text to clean

        Returns:
            str: Cleaned text
        """
        if not text:
            return ""

        # Normalize whitespace
        text = re.sub(r'\s+', ' ', str(text))

        return text.strip()

    def parse_count(self, value: Any) -> Optional[int]:
        """
        Parse a lecture count.

        The API sends numbers, but numeric strings show up too.

        Args:
            value: Raw value from the API

        Returns:
            int or None if the value is not a whole number
        """
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None

        try:
            return int(str(value).strip())
        except ValueError:
            logger.debug(f"Could not parse count '{value}'")
            return None
