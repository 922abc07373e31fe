"""
CourseAdmin - Admin-side course management over a CourseAPI.

Provides:
- Course list refresh, create-or-update save, publish toggle
- Confirmed delete and duplicate
- Learner search and bulk enrollment

API failures never propagate to the caller: they are logged and pushed to
the notification log, and the cached course list is left as it was.
"""

import logging
from typing import Callable, Optional

from coursekit.notifications import NotificationLog
from coursekit.schemas import Course, EnrollmentResult, Learner

from .api import CourseAPI
from .editor import confirmation_message, duplicate_course

logger = logging.getLogger(__name__)


class CourseAdmin:
    """
    Manage courses for the admin dashboard.

    Holds the last known course list so views can render without awaiting
    the backend.
    """

    def __init__(self, api: CourseAPI, notifications: Optional[NotificationLog] = None):
        """
        Initialize admin service.

        Args:
            api: CourseAPI implementation (HTTP client or in-memory double)
            notifications: Optional shared notification log
        """
        self.api = api
        self.notifications = notifications or NotificationLog()
        self.courses: list[Course] = []

    def get_course(self, course_id: str) -> Optional[Course]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    # -------------------------------------------------------------------------
    # Course CRUD
    # -------------------------------------------------------------------------

    async def refresh(self) -> list[Course]:
        """Reload the course list from the API."""
        try:
            self.courses = await self.api.list_courses()
        except Exception as e:
            logger.error(f"Failed to load courses: {e}")
            self.notifications.push("Failed to load courses", "error")
        return self.courses

    async def save_course(self, course: Course) -> Optional[Course]:
        """Create the course if it is new, otherwise update it."""
        exists = self.get_course(course.id) is not None
        try:
            if exists:
                saved = await self.api.update_course(course.id, course)
                self.notifications.push("Course updated successfully!")
            else:
                saved = await self.api.create_course(course)
                self.notifications.push("Course created successfully!")
        except Exception as e:
            logger.error(f"Error saving course {course.id}: {e}")
            self.notifications.push("Error saving course", "error")
            return None
        await self.refresh()
        return saved

    async def toggle_publish(self, course_id: str) -> Optional[Course]:
        course = self.get_course(course_id)
        if course is None:
            return None
        updated = course.model_copy(update={"published": not course.published})
        try:
            saved = await self.api.update_course(course_id, updated)
        except Exception as e:
            logger.error(f"Failed to toggle publish for {course_id}: {e}")
            self.notifications.push("Failed to toggle publish", "error")
            return None
        self.notifications.push("Course published" if saved.published else "Course unpublished")
        await self.refresh()
        return saved

    async def delete_course(self, course_id: str, confirm: Callable[[str], bool]) -> bool:
        """
        Delete a course after the caller confirms.

        Returns:
            True if the course was deleted
        """
        course = self.get_course(course_id)
        if course is None:
            return False
        if not confirm(confirmation_message("course", course.title)):
            return False
        try:
            await self.api.delete_course(course_id)
        except Exception as e:
            logger.error(f"Delete failed for {course_id}: {e}")
            self.notifications.push("Failed to delete course", "error")
            return False
        self.notifications.push("Course deleted")
        await self.refresh()
        return True

    async def duplicate_course(self, course_id: str) -> Optional[Course]:
        course = self.get_course(course_id)
        if course is None:
            return None
        copy = duplicate_course(course)
        try:
            saved = await self.api.create_course(copy)
        except Exception as e:
            logger.error(f"Failed to duplicate {course_id}: {e}")
            self.notifications.push("Failed to duplicate course", "error")
            return None
        self.notifications.push("Course duplicated successfully")
        await self.refresh()
        return saved

    # -------------------------------------------------------------------------
    # Enrollment
    # -------------------------------------------------------------------------

    async def search_learners(self, query: str = "") -> list[Learner]:
        """Case-insensitive search over learner name and email."""
        try:
            users = await self.api.list_users()
        except Exception as e:
            logger.error(f"Failed to load learners: {e}")
            self.notifications.push("Failed to load learners", "error")
            return []
        q = query.strip().lower()
        if not q:
            return users
        return [
            u for u in users
            if q in u.email.lower() or (u.name and q in u.name.lower())
        ]

    async def enroll(
        self,
        course_id: str,
        learners: list[Learner],
        approve: bool = True,
    ) -> Optional[EnrollmentResult]:
        """
        Enroll learners into a course.

        Args:
            course_id: Target course
            learners: Learners to enroll (duplicates by id are collapsed)
            approve: False files an enrollment request awaiting approval
        """
        unique = list({learner.id: learner for learner in learners}.values())
        if not unique:
            self.notifications.push("Select at least one learner", "error")
            return None
        try:
            result = await self.api.enroll_users(course_id, unique, approve=approve)
        except Exception as e:
            logger.error(f"Bulk enroll failed for {course_id}: {e}")
            self.notifications.push("Bulk enroll failed", "error")
            return None
        self.notifications.push(f"Enrolled {result.enrolled} learner(s)")
        return result


def ad_hoc_learner(email: str, name: Optional[str] = None) -> Learner:
    """
    Build a learner from a typed-in email address.

    Raises:
        ValueError: If the address is not plausibly an email
    """
    email = email.strip().lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValueError(f"Not an email address: {email!r}")
    return Learner(id=email, email=email, name=name)
