"""
Course attendance scraper for CyberVidya.

Uses the student dashboard API (/api/student/dashboard/registered-courses)
to extract registered courses with their lecture counters.
"""

import logging
from typing import List, Optional

from attendance_bot.auth.cybervidya_session import CyberVidyaSession
from attendance_bot.models import CourseAttendance
from attendance_bot.scrapers.base import BaseScraper

logger = logging.getLogger(__name__)

COURSES_PATH = "/api/student/dashboard/registered-courses"


class CourseScraper(BaseScraper):
    """
    Scrapes registered courses and attendance counters from CyberVidya.

    Course order follows the API response.
    """

    def __init__(self, session: CyberVidyaSession):
        """Initialize course scraper."""
        super().__init__(session)

    def scrape(self) -> List[CourseAttendance]:
        """
        Fetch all registered courses.

        Returns:
            List[CourseAttendance]: Courses in portal order

        Raises:
            CyberVidyaError: If the request fails
        """
        logger.info("Fetching courses...")

        data = self.session.get_json(COURSES_PATH)
        entries = (data or {}).get("data") or []

        courses: List[CourseAttendance] = []
        for entry in entries:
            course = self._parse_course(entry)
            if course:
                courses.append(course)

        logger.info(f"Successfully fetched {len(courses)} courses")
        return courses

    def _parse_course(self, entry: dict) -> Optional[CourseAttendance]:
        """
        Parse a course dict from the API into a CourseAttendance.

        Args:
            entry: Course dict from the registered-courses response

        Returns:
            CourseAttendance or None if the record is unusable
        """
        if not isinstance(entry, dict):
            return None

        code = self.clean_text(entry.get("courseCode"))
        if not code:
            logger.warning(f"Skipping course without code: {entry.get('courseName')}")
            return None

        components = entry.get("studentCourseCompDetails") or []
        if not components or not isinstance(components[0], dict):
            logger.error(f"Skipping {code}: no attendance details")
            return None

        present = self.parse_count(components[0].get("presentLecture"))
        total = self.parse_count(components[0].get("totalLecture"))
        if present is None or total is None:
            logger.error(f"Skipping {code}: unreadable lecture counts")
            return None

        return CourseAttendance(
            code=code,
            name=self.clean_text(entry.get("courseName")),
            present=present,
            total=total,
        )
