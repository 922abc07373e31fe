"""
CourseKit Schemas - Pydantic models for the course content and progress model.

This module exports all schema classes for:
- Content: course tree, lessons, quizzes, attachments, learners
- Progress: lesson status, progress ledger, reward state, quiz results, reward policy
"""

# Content schemas
from .content import (
    Attachment,
    Quiz,
    CompletionPolicy,
    Lesson,
    Chapter,
    Course,
    Learner,
    EnrollmentResult,
)

# Progress schemas
from .progress import (
    LessonStatus,
    ProgressEntry,
    ProgressLedger,
    RewardState,
    QuizResult,
    RewardPolicy,
)

__all__ = [
    # Content
    'Attachment',
    'Quiz',
    'CompletionPolicy',
    'Lesson',
    'Chapter',
    'Course',
    'Learner',
    'EnrollmentResult',
    # Progress
    'LessonStatus',
    'ProgressEntry',
    'ProgressLedger',
    'RewardState',
    'QuizResult',
    'RewardPolicy',
]
