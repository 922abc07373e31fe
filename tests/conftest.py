"""Shared fixtures for CourseKit tests."""

from datetime import datetime, timedelta

import pytest

from coursekit.sample import sample_course
from coursekit.schemas import Chapter, Course, Lesson, Quiz


@pytest.fixture
def course() -> Course:
    """React Fundamentals: ch-1 (l-1 with quiz q-1, l-2), ch-2 (l-3 with quiz q-2)."""
    return sample_course()


@pytest.fixture
def two_lesson_course() -> Course:
    return Course(
        id="c-two",
        title="Two Lessons",
        chapters=[
            Chapter(
                id="ch-a",
                title="Only Chapter",
                lessons=[
                    Lesson(id="a-1", title="First"),
                    Lesson(id="a-2", title="Second"),
                ],
            )
        ],
    )


@pytest.fixture
def quiz_course() -> Course:
    """Two lessons sharing the same style of quiz, the second quiz-gated."""
    return Course(
        id="c-quiz",
        title="Quiz Course",
        chapters=[
            Chapter(
                id="ch-q",
                title="Quizzes",
                lessons=[
                    Lesson(
                        id="q-lesson-1",
                        title="Pick B",
                        quiz=Quiz(id="qz-1", question="Which?", options=["A", "B", "C"], answer_index=1),
                    ),
                    Lesson(
                        id="q-lesson-2",
                        title="Pick B again",
                        quiz=Quiz(id="qz-2", question="Which?", options=["A", "B", "C"], answer_index=1),
                        completion_policy="quiz",
                    ),
                ],
            )
        ],
    )


class FakeClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
