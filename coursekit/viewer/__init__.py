"""
CourseKit Viewer - Rendering components for the learner view.

This module provides:
- Course outline, progress bar and reward summary
- Quiz card display with results
- Completion certificate
"""

from .course import (
    get_course_css,
    render_outline,
    render_outline_chapter,
    render_progress_bar,
    render_reward_summary,
    render_lesson_header,
    STATUS_CLASSES,
)

from .quiz import (
    get_quiz_css,
    render_quiz,
    render_quiz_score,
)

from .certificate import (
    get_certificate_css,
    is_certificate_eligible,
    render_certificate,
)

__all__ = [
    # Course
    "get_course_css",
    "render_outline",
    "render_outline_chapter",
    "render_progress_bar",
    "render_reward_summary",
    "render_lesson_header",
    "STATUS_CLASSES",
    # Quiz
    "get_quiz_css",
    "render_quiz",
    "render_quiz_score",
    # Certificate
    "get_certificate_css",
    "is_certificate_eligible",
    "render_certificate",
]
