"""CyberVidya scrapers module."""

from attendance_bot.scrapers.base import BaseScraper
from attendance_bot.scrapers.courses import CourseScraper

__all__ = [
    "BaseScraper",
    "CourseScraper",
]
