"""
Progress tracking schemas for CourseKit.

Defines Pydantic models for learner-side state:
- Lesson status and per-lesson progress entries
- The progress ledger (entries, watch positions, last lesson)
- Per-course reward state (XP and badges)
- Quiz results
- Reward policy (XP amounts and badge names)
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class LessonStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ProgressEntry(BaseModel):
    lesson_id: str
    status: LessonStatus = LessonStatus.NOT_STARTED
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        return self.status == LessonStatus.COMPLETED


class ProgressLedger(BaseModel):
    """Per-learner completion record, keyed by lesson id."""
    entries: dict[str, ProgressEntry] = {}
    watch_seconds: dict[str, int] = {}  # lesson_id -> furthest second watched
    last_lesson_id: Optional[str] = None


class RewardState(BaseModel):
    course_id: str
    xp: int = Field(default=0, ge=0)
    badges: list[str] = []            # set semantics, insertion ordered
    rewarded_lessons: list[str] = []  # lessons that already paid lesson XP


class QuizResult(BaseModel):
    quiz_id: str
    chosen_index: int
    correct: bool
    answered_at: datetime


class RewardPolicy(BaseModel):
    """Point values and badge names used by the reward accumulator."""
    lesson_xp: int = Field(default=15, ge=0)
    quiz_xp: int = Field(default=25, ge=0)
    course_bonus_xp: int = Field(default=100, ge=0)
    course_badge: str = "Course Completed"
    quiz_badge: str = "Quiz Master"
