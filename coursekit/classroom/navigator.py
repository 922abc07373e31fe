"""
Navigator - Lesson sequencing and navigation over a course.

Provides:
- Next/previous lesson navigation in course order
- Lesson availability (optionally sequential: a lesson unlocks once the
  previous one is completed)
- Chapter tree with status indicators and completion counts
- Lesson search
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from coursekit.schemas import Chapter, Course, Lesson, LessonStatus

from .progress import ProgressTracker


class LessonAvailability(str, Enum):
    """Lesson availability status for UI display."""
    LOCKED = "locked"           # Previous lesson not completed (sequential mode)
    AVAILABLE = "available"     # Can start
    IN_PROGRESS = "in_progress" # Started but not completed
    COMPLETED = "completed"     # Finished


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    availability: LessonAvailability
    is_current: bool
    position: int  # 1-based position in the whole course


@dataclass
class NavigationChapter:
    """Chapter with lessons and navigation metadata."""
    chapter: Chapter
    lessons: list[NavigationLesson]
    completed_count: int
    total_count: int


class Navigator:
    """
    Navigate through a course.

    Combines the Course (content) with a ProgressTracker (learner state).
    """

    def __init__(self, course: Course, progress: ProgressTracker, sequential: bool = False):
        """
        Initialize navigator.

        Args:
            course: Course being taken
            progress: ProgressTracker for the learner
            sequential: Lock each lesson until the previous one is completed
        """
        self.course = course
        self.progress = progress
        self.sequential = sequential
        self._lesson_order: list[str] = []
        self._lesson_index: dict[str, int] = {}
        self._lessons: dict[str, Lesson] = {}
        self.refresh()

    def refresh(self, course: Optional[Course] = None):
        """Rebuild the flat lesson order (after the course was edited)."""
        if course is not None:
            self.course = course
        self._lessons = {lesson.id: lesson for _, lesson in self.course.iter_lessons()}
        self._lesson_order = list(self._lessons)
        self._lesson_index = {lid: idx for idx, lid in enumerate(self._lesson_order)}

    @property
    def total_lessons(self) -> int:
        return len(self._lesson_order)

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self._lessons.get(lesson_id)

    # -------------------------------------------------------------------------
    # Availability Checking
    # -------------------------------------------------------------------------

    def get_lesson_availability(self, lesson_id: str) -> LessonAvailability:
        if lesson_id not in self._lesson_index:
            return LessonAvailability.LOCKED

        status = self.progress.get_lesson_progress(lesson_id).status
        if status == LessonStatus.COMPLETED:
            return LessonAvailability.COMPLETED
        if status == LessonStatus.IN_PROGRESS:
            return LessonAvailability.IN_PROGRESS

        if self.sequential:
            previous_id = self.get_previous_lesson_id(lesson_id)
            if previous_id and not self.progress.is_lesson_completed(previous_id):
                return LessonAvailability.LOCKED

        return LessonAvailability.AVAILABLE

    def is_lesson_available(self, lesson_id: str) -> bool:
        return self.get_lesson_availability(lesson_id) != LessonAvailability.LOCKED

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_first_lesson_id(self) -> Optional[str]:
        return self._lesson_order[0] if self._lesson_order else None

    def get_next_lesson_id(self, current_id: str) -> Optional[str]:
        """Get the ID of the next lesson in order."""
        if current_id not in self._lesson_index:
            return None
        current_idx = self._lesson_index[current_id]
        if current_idx + 1 >= len(self._lesson_order):
            return None
        return self._lesson_order[current_idx + 1]

    def get_previous_lesson_id(self, current_id: str) -> Optional[str]:
        """Get the ID of the previous lesson in order."""
        if current_id not in self._lesson_index:
            return None
        current_idx = self._lesson_index[current_id]
        if current_idx <= 0:
            return None
        return self._lesson_order[current_idx - 1]

    def get_recommended_lesson_id(self) -> Optional[str]:
        """
        Get the recommended lesson for the learner.

        Priority:
        1. Current lesson if in progress
        2. First lesson that is not completed and available
        3. First lesson
        """
        current_id = self.progress.get_current_lesson_id()
        if current_id and self.get_lesson_availability(current_id) == LessonAvailability.IN_PROGRESS:
            return current_id

        for lesson_id in self._lesson_order:
            availability = self.get_lesson_availability(lesson_id)
            if availability in (LessonAvailability.AVAILABLE, LessonAvailability.IN_PROGRESS):
                return lesson_id

        return self.get_first_lesson_id()

    def get_lesson_position(self, lesson_id: str) -> tuple[int, int]:
        """
        Get lesson position as (current, total).

        Returns (0, total) if lesson not found.
        """
        if lesson_id not in self._lesson_index:
            return (0, len(self._lesson_order))
        return (self._lesson_index[lesson_id] + 1, len(self._lesson_order))

    def search_lessons(self, query: str) -> list[Lesson]:
        """Case-insensitive title search; an empty query returns every lesson."""
        q = query.strip().lower()
        lessons = [self._lessons[lid] for lid in self._lesson_order]
        if not q:
            return lessons
        return [lesson for lesson in lessons if q in lesson.title.lower()]

    # -------------------------------------------------------------------------
    # Chapter Tree
    # -------------------------------------------------------------------------

    def get_navigation_tree(self) -> list[NavigationChapter]:
        """Get the chapter tree with availability and completion counts."""
        current_lesson_id = self.progress.get_current_lesson_id()

        tree = []
        for chapter in self.course.chapters:
            nav_lessons = []
            completed_count = 0
            for lesson in chapter.lessons:
                availability = self.get_lesson_availability(lesson.id)
                if availability == LessonAvailability.COMPLETED:
                    completed_count += 1
                nav_lessons.append(NavigationLesson(
                    lesson=lesson,
                    availability=availability,
                    is_current=lesson.id == current_lesson_id,
                    position=self._lesson_index[lesson.id] + 1,
                ))
            tree.append(NavigationChapter(
                chapter=chapter,
                lessons=nav_lessons,
                completed_count=completed_count,
                total_count=len(chapter.lessons),
            ))
        return tree

    def get_status_indicator(self, lesson_id: str) -> str:
        """
        Get status indicator for sidebar display.

        Returns:
            ✓ for completed
            → for current
            ○ for available
            ◌ for locked
        """
        current_id = self.progress.get_current_lesson_id()
        availability = self.get_lesson_availability(lesson_id)

        if lesson_id == current_id and availability == LessonAvailability.IN_PROGRESS:
            return "→"
        elif availability == LessonAvailability.COMPLETED:
            return "✓"
        elif availability in (LessonAvailability.AVAILABLE, LessonAvailability.IN_PROGRESS):
            return "○"
        else:
            return "◌"
