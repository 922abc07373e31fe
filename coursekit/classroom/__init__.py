"""
CourseKit Classroom - Learner-side runtime components.

This module provides:
- ProgressTracker: Lesson progress ledger updates
- RewardAccumulator: XP and badges per course
- QuizEvaluator: Quiz grading and results
- Navigator: Lesson sequencing and chapter tree
- LearnerSession: The learner's course session tying these together
- Reports: Course and lesson reports across learners
"""

from .progress import (
    ProgressTracker,
    DEFAULT_WATCH_THRESHOLD,
)

from .rewards import RewardAccumulator

from .quiz import QuizEvaluator

from .navigator import (
    Navigator,
    LessonAvailability,
    NavigationLesson,
    NavigationChapter,
)

from .session import LearnerSession

from .report import (
    course_report,
    lesson_report,
    filter_report,
)

__all__ = [
    # Progress
    "ProgressTracker",
    "DEFAULT_WATCH_THRESHOLD",
    # Rewards
    "RewardAccumulator",
    # Quiz
    "QuizEvaluator",
    # Navigator
    "Navigator",
    "LessonAvailability",
    "NavigationLesson",
    "NavigationChapter",
    # Session
    "LearnerSession",
    # Reports
    "course_report",
    "lesson_report",
    "filter_report",
]
