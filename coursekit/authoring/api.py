"""
Course API port - the backend contract the admin screens talk to.

CourseAPI is an async Protocol so a real HTTP client and a test double are
interchangeable. InMemoryCourseAPI keeps everything in process and answers
immediately.
"""

import logging
from typing import Iterable, Optional, Protocol

from coursekit.errors import CourseNotFoundError
from coursekit.schemas import Course, EnrollmentResult, Learner

logger = logging.getLogger(__name__)


class CourseAPI(Protocol):
    async def list_courses(self) -> list[Course]: ...

    async def create_course(self, course: Course) -> Course: ...

    async def update_course(self, course_id: str, course: Course) -> Course: ...

    async def delete_course(self, course_id: str) -> None: ...

    async def list_users(self) -> list[Learner]: ...

    async def enroll_users(
        self,
        course_id: str,
        learners: list[Learner],
        approve: bool = True,
    ) -> EnrollmentResult: ...


class InMemoryCourseAPI:
    """
    Process-local CourseAPI implementation.

    Courses are stored as validated copies so callers cannot mutate stored
    state through returned objects.
    """

    def __init__(
        self,
        courses: Optional[Iterable[Course]] = None,
        users: Optional[Iterable[Learner]] = None,
    ):
        self._courses: dict[str, Course] = {}
        for course in courses or []:
            self._courses[course.id] = course.model_copy(deep=True)
        self._users: list[Learner] = list(users or [])
        self.enrollments: dict[str, set[str]] = {}

    async def list_courses(self) -> list[Course]:
        return [c.model_copy(deep=True) for c in self._courses.values()]

    async def create_course(self, course: Course) -> Course:
        if course.id in self._courses:
            raise ValueError(f"Course already exists: {course.id}")
        self._courses[course.id] = course.model_copy(deep=True)
        logger.info(f"Created course {course.id} ({course.title})")
        return course.model_copy(deep=True)

    async def update_course(self, course_id: str, course: Course) -> Course:
        if course_id not in self._courses:
            raise CourseNotFoundError(course_id)
        stored = course.model_copy(update={"id": course_id}, deep=True)
        self._courses[course_id] = stored
        return stored.model_copy(deep=True)

    async def delete_course(self, course_id: str) -> None:
        if self._courses.pop(course_id, None) is None:
            raise CourseNotFoundError(course_id)
        self.enrollments.pop(course_id, None)
        logger.info(f"Deleted course {course_id}")

    async def list_users(self) -> list[Learner]:
        return list(self._users)

    async def enroll_users(
        self,
        course_id: str,
        learners: list[Learner],
        approve: bool = True,
    ) -> EnrollmentResult:
        if course_id not in self._courses:
            raise CourseNotFoundError(course_id)
        enrolled = self.enrollments.setdefault(course_id, set())
        new_ids = [learner.id for learner in learners if learner.id not in enrolled]
        if approve:
            enrolled.update(new_ids)
        logger.info(f"Enrolled {len(new_ids)} users to course {course_id} (approved={approve})")
        return EnrollmentResult(
            course_id=course_id,
            enrolled=len(new_ids),
            learner_ids=new_ids,
            approved=approve,
        )
