"""
CourseKit Authoring - Editor-side operations on the content tree.

This module provides:
- Tree editor: pure CRUD/reorder functions and the CourseDraft session
- CourseAPI: async backend port and an in-memory implementation
- CourseAdmin: course list management, publishing and enrollment
"""

from .editor import (
    CourseDraft,
    new_course,
    update_course,
    duplicate_course,
    add_chapter,
    rename_chapter,
    delete_chapter,
    move_chapter,
    add_lesson,
    update_lesson,
    rename_lesson,
    delete_lesson,
    move_lesson,
    set_video,
    default_quiz,
    attach_quiz,
    detach_quiz,
    update_quiz,
    add_attachment,
    remove_attachment,
    find_chapter,
    find_lesson,
    find_lesson_chapter,
    lesson_ids,
    total_lessons,
    confirmation_message,
)

from .api import CourseAPI, InMemoryCourseAPI

from .admin import CourseAdmin, ad_hoc_learner

__all__ = [
    # Editor
    "CourseDraft",
    "new_course",
    "update_course",
    "duplicate_course",
    "add_chapter",
    "rename_chapter",
    "delete_chapter",
    "move_chapter",
    "add_lesson",
    "update_lesson",
    "rename_lesson",
    "delete_lesson",
    "move_lesson",
    "set_video",
    "default_quiz",
    "attach_quiz",
    "detach_quiz",
    "update_quiz",
    "add_attachment",
    "remove_attachment",
    "find_chapter",
    "find_lesson",
    "find_lesson_chapter",
    "lesson_ids",
    "total_lessons",
    "confirmation_message",
    # API
    "CourseAPI",
    "InMemoryCourseAPI",
    # Admin
    "CourseAdmin",
    "ad_hoc_learner",
]
