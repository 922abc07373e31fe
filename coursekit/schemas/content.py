"""
Content tree schemas for CourseKit.

Defines Pydantic models for the authored course structure:
- Course -> Chapter[] -> Lesson[]
- Optional single quiz and attachments per lesson
- Learners and enrollment results for the admin side
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Literal, Optional


# -----------------------------------------------------------------------------
# Lesson parts
# -----------------------------------------------------------------------------


class Attachment(BaseModel):
    id: str
    name: str
    url: str  # data URI or URL, opaque to the core


class Quiz(BaseModel):
    """A single multiple-choice question attached to a lesson."""
    id: str
    question: str
    options: list[str] = Field(..., min_length=2)
    answer_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def answer_in_range(self):
        if self.answer_index >= len(self.options):
            raise ValueError(
                f"answer_index {self.answer_index} out of range for {len(self.options)} options"
            )
        return self

    def is_correct(self, chosen_index: int) -> bool:
        return chosen_index == self.answer_index


CompletionPolicy = Literal["manual", "quiz"]


class Lesson(BaseModel):
    id: str
    title: str
    content: Optional[str] = None    # rich text (HTML)
    video_url: Optional[str] = None  # opaque media reference
    duration: Optional[str] = None   # display only, "mm:ss"
    attachments: list[Attachment] = []
    quiz: Optional[Quiz] = None
    completion_policy: CompletionPolicy = "manual"  # "quiz": correct answer completes

    @property
    def quiz_gated(self) -> bool:
        return self.completion_policy == "quiz" and self.quiz is not None


# -----------------------------------------------------------------------------
# Tree
# -----------------------------------------------------------------------------


class Chapter(BaseModel):
    id: str
    title: str
    lessons: list[Lesson] = []


class Course(BaseModel):
    """
    Root of the content tree.

    Chapter and lesson order is significant: it drives display order and
    the learner's linear lesson sequence.
    """
    id: str
    title: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    published: bool = False
    certificate_available: bool = True
    chapters: list[Chapter] = []

    @model_validator(mode="after")
    def ids_unique(self):
        chapter_ids = [ch.id for ch in self.chapters]
        if len(chapter_ids) != len(set(chapter_ids)):
            raise ValueError(f"Duplicate chapter id in course {self.id}")
        lesson_ids = [lesson.id for ch in self.chapters for lesson in ch.lessons]
        if len(lesson_ids) != len(set(lesson_ids)):
            raise ValueError(f"Duplicate lesson id in course {self.id}")
        quiz_ids = [lesson.quiz.id for _, lesson in self.iter_lessons() if lesson.quiz]
        if len(quiz_ids) != len(set(quiz_ids)):
            raise ValueError(f"Duplicate quiz id in course {self.id}")
        return self

    def iter_lessons(self):
        """Yield (chapter, lesson) pairs in course order."""
        for chapter in self.chapters:
            for lesson in chapter.lessons:
                yield chapter, lesson

    @property
    def total_lessons(self) -> int:
        return sum(len(ch.lessons) for ch in self.chapters)


# -----------------------------------------------------------------------------
# Learners and enrollment
# -----------------------------------------------------------------------------


class Learner(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # the user directory hands out numeric ids
        return str(v)


class EnrollmentResult(BaseModel):
    course_id: str
    enrolled: int
    learner_ids: list[str] = []
    approved: bool = True
