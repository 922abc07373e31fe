"""
Tree editor - CRUD and reorder operations over the course content tree.

Every operation takes a Course and returns a new Course; the input is never
mutated and untouched chapters/lessons are shared with the result.

Conventions:
- Unknown chapter/lesson ids and out-of-range positions are no-ops: the
  same course is returned unchanged.
- Validation failures (bad quiz, duplicate ids) raise ValueError before
  anything is committed.
- Deletes are confirmed by the caller; see confirmation_message() and
  CourseDraft.
"""

import logging
from typing import Any, Callable, Optional

from coursekit.schemas import Attachment, Chapter, Course, Lesson, Quiz
from coursekit.utils.ids import new_id
from coursekit.utils.media import format_duration

logger = logging.getLogger(__name__)


DEFAULT_LESSON_CONTENT = "<p>Lesson content goes here...</p>"
DEFAULT_LESSON_DURATION = "10:00"

CONFIRM_MESSAGES = {
    "course": "Are you sure you want to delete {title}? This cannot be undone.",
    "chapter": "Delete chapter {title} and all its lessons?",
    "lesson": "Delete lesson {title}?",
}


# -----------------------------------------------------------------------------
# Lookup helpers
# -----------------------------------------------------------------------------


def find_chapter(course: Course, chapter_id: str) -> Optional[Chapter]:
    for chapter in course.chapters:
        if chapter.id == chapter_id:
            return chapter
    return None


def find_lesson(course: Course, lesson_id: str) -> Optional[Lesson]:
    for _, lesson in course.iter_lessons():
        if lesson.id == lesson_id:
            return lesson
    return None


def find_lesson_chapter(course: Course, lesson_id: str) -> Optional[Chapter]:
    """Get the chapter that owns a lesson."""
    for chapter, lesson in course.iter_lessons():
        if lesson.id == lesson_id:
            return chapter
    return None


def lesson_ids(course: Course) -> list[str]:
    """All lesson ids in course order."""
    return [lesson.id for _, lesson in course.iter_lessons()]


def total_lessons(course: Course) -> int:
    return course.total_lessons


def confirmation_message(kind: str, title: str) -> str:
    """Prompt shown to the user before a delete of `kind` is executed."""
    template = CONFIRM_MESSAGES.get(kind, "Delete {title}?")
    return template.format(title=f'"{title}"')


def _with_chapters(course: Course, chapters: list[Chapter]) -> Course:
    return course.model_copy(update={"chapters": chapters})


def _map_chapter(course: Course, chapter_id: str, fn: Callable[[Chapter], Chapter]) -> Course:
    if find_chapter(course, chapter_id) is None:
        logger.debug(f"Chapter not found, ignoring edit: {chapter_id}")
        return course
    return _with_chapters(
        course,
        [fn(ch) if ch.id == chapter_id else ch for ch in course.chapters],
    )


def _map_lesson(
    course: Course,
    chapter_id: str,
    lesson_id: str,
    fn: Callable[[Lesson], Lesson],
) -> Course:
    chapter = find_chapter(course, chapter_id)
    if chapter is None or all(lesson.id != lesson_id for lesson in chapter.lessons):
        logger.debug(f"Lesson not found, ignoring edit: {chapter_id}/{lesson_id}")
        return course

    def update(ch: Chapter) -> Chapter:
        lessons = [fn(lesson) if lesson.id == lesson_id else lesson for lesson in ch.lessons]
        return ch.model_copy(update={"lessons": lessons})

    return _map_chapter(course, chapter_id, update)


def _require_unused_id(course: Course, new: str) -> None:
    used = {ch.id for ch in course.chapters} | set(lesson_ids(course))
    if new in used:
        raise ValueError(f"Id already used in course {course.id}: {new}")


def _require_unused_quiz_id(course: Course, quiz_id: str, owner_lesson_id: Optional[str] = None) -> None:
    for _, lesson in course.iter_lessons():
        if lesson.quiz is not None and lesson.quiz.id == quiz_id and lesson.id != owner_lesson_id:
            raise ValueError(f"Quiz id already used in course {course.id}: {quiz_id}")


# -----------------------------------------------------------------------------
# Course
# -----------------------------------------------------------------------------


def new_course(title: str = "New Course") -> Course:
    """Create a draft course with one chapter holding one lesson."""
    return Course(
        id=new_id("course"),
        title=title,
        description="Course description",
        thumbnail="",
        certificate_available=True,
        published=False,
        chapters=[
            Chapter(
                id=new_id("ch"),
                title="Chapter 1",
                lessons=[
                    Lesson(
                        id=new_id("l"),
                        title="Lesson 1",
                        content=DEFAULT_LESSON_CONTENT,
                        duration=DEFAULT_LESSON_DURATION,
                        video_url="",
                    )
                ],
            )
        ],
    )


def update_course(course: Course, **fields: Any) -> Course:
    """
    Patch top-level course fields (title, description, thumbnail, flags).

    Raises:
        ValueError: For unknown fields, id/chapters changes, or invalid values
    """
    forbidden = {"id", "chapters"} & fields.keys()
    if forbidden:
        raise ValueError(f"Cannot patch {sorted(forbidden)} through update_course")
    unknown = fields.keys() - Course.model_fields.keys()
    if unknown:
        raise ValueError(f"Unknown course fields: {sorted(unknown)}")
    return Course.model_validate({**course.model_dump(), **fields})


def duplicate_course(course: Course) -> Course:
    """
    Deep-copy a course with fresh ids for it and every descendant.

    The copy is titled "<title> (Copy)" and starts unpublished.
    """
    chapters = []
    for chapter in course.chapters:
        lessons = []
        for lesson in chapter.lessons:
            quiz = None
            if lesson.quiz is not None:
                quiz = lesson.quiz.model_copy(
                    update={"id": new_id("q"), "options": list(lesson.quiz.options)}
                )
            attachments = [
                att.model_copy(update={"id": new_id("att")}) for att in lesson.attachments
            ]
            lessons.append(lesson.model_copy(update={
                "id": new_id("l"),
                "quiz": quiz,
                "attachments": attachments,
            }))
        chapters.append(chapter.model_copy(update={"id": new_id("ch"), "lessons": lessons}))

    return course.model_copy(update={
        "id": new_id("course"),
        "title": f"{course.title} (Copy)",
        "published": False,
        "chapters": chapters,
    })


# -----------------------------------------------------------------------------
# Chapters
# -----------------------------------------------------------------------------


def add_chapter(course: Course, title: Optional[str] = None, chapter_id: Optional[str] = None) -> Course:
    """Append an empty chapter (default title "Chapter N")."""
    chapter_id = chapter_id or new_id("ch")
    _require_unused_id(course, chapter_id)
    chapter = Chapter(id=chapter_id, title=title or f"Chapter {len(course.chapters) + 1}")
    return _with_chapters(course, [*course.chapters, chapter])


def rename_chapter(course: Course, chapter_id: str, title: str) -> Course:
    return _map_chapter(course, chapter_id, lambda ch: ch.model_copy(update={"title": title}))


def delete_chapter(course: Course, chapter_id: str) -> Course:
    """Remove a chapter and, with it, all of its lessons."""
    if find_chapter(course, chapter_id) is None:
        return course
    return _with_chapters(course, [ch for ch in course.chapters if ch.id != chapter_id])


def move_chapter(course: Course, source_index: int, dest_index: int) -> Course:
    """Move the chapter at source_index so it ends up at dest_index."""
    count = len(course.chapters)
    if not (0 <= source_index < count and 0 <= dest_index < count):
        return course
    if source_index == dest_index:
        return course
    chapters = list(course.chapters)
    moved = chapters.pop(source_index)
    chapters.insert(dest_index, moved)
    return _with_chapters(course, chapters)


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------


def add_lesson(
    course: Course,
    chapter_id: str,
    title: str = "New Lesson",
    lesson_id: Optional[str] = None,
    **fields: Any,
) -> Course:
    """
    Append a lesson to a chapter.

    Args:
        course: Course to edit
        chapter_id: Target chapter
        title: Lesson title
        lesson_id: Optional explicit id (generated when omitted)
        **fields: Extra Lesson fields (content, video_url, quiz, ...)

    Raises:
        ValueError: For a used lesson or quiz id, or an id passed in fields
    """
    if "id" in fields:
        raise ValueError("Pass the lesson id as lesson_id")
    if find_chapter(course, chapter_id) is None:
        return course
    lesson_id = lesson_id or new_id("l")
    _require_unused_id(course, lesson_id)
    data = {"content": DEFAULT_LESSON_CONTENT, "duration": DEFAULT_LESSON_DURATION, **fields}
    lesson = Lesson.model_validate({**data, "id": lesson_id, "title": title})
    if lesson.quiz is not None:
        _require_unused_quiz_id(course, lesson.quiz.id)
    return _map_chapter(
        course, chapter_id,
        lambda ch: ch.model_copy(update={"lessons": [*ch.lessons, lesson]}),
    )


def update_lesson(course: Course, chapter_id: str, lesson_id: str, **fields: Any) -> Course:
    """
    Patch lesson fields. The patched lesson is re-validated before commit.

    Raises:
        ValueError: For an id change, unknown fields, or invalid values
    """
    if "id" in fields:
        raise ValueError("Lesson id cannot be changed")
    unknown = fields.keys() - Lesson.model_fields.keys()
    if unknown:
        raise ValueError(f"Unknown lesson fields: {sorted(unknown)}")

    lesson = find_lesson(course, lesson_id)
    if lesson is None:
        return course
    patched = Lesson.model_validate({**lesson.model_dump(), **fields})
    if patched.quiz is not None:
        _require_unused_quiz_id(course, patched.quiz.id, owner_lesson_id=lesson_id)
    return _map_lesson(course, chapter_id, lesson_id, lambda _: patched)


def rename_lesson(course: Course, chapter_id: str, lesson_id: str, title: str) -> Course:
    return update_lesson(course, chapter_id, lesson_id, title=title)


def delete_lesson(course: Course, chapter_id: str, lesson_id: str) -> Course:
    chapter = find_chapter(course, chapter_id)
    if chapter is None or all(lesson.id != lesson_id for lesson in chapter.lessons):
        return course
    return _map_chapter(
        course, chapter_id,
        lambda ch: ch.model_copy(update={"lessons": [x for x in ch.lessons if x.id != lesson_id]}),
    )


def move_lesson(
    course: Course,
    source_chapter_id: str,
    source_index: int,
    dest_chapter_id: str,
    dest_index: int,
) -> Course:
    """
    Move a lesson within a chapter or across chapters.

    dest_index is the position in the destination chapter after the move;
    for a cross-chapter move it may equal the destination's length (append).
    """
    source = find_chapter(course, source_chapter_id)
    dest = find_chapter(course, dest_chapter_id)
    if source is None or dest is None:
        return course
    if not 0 <= source_index < len(source.lessons):
        return course

    if source.id == dest.id:
        if not 0 <= dest_index < len(source.lessons) or dest_index == source_index:
            return course
        lessons = list(source.lessons)
        moved = lessons.pop(source_index)
        lessons.insert(dest_index, moved)
        return _map_chapter(course, source.id, lambda ch: ch.model_copy(update={"lessons": lessons}))

    if not 0 <= dest_index <= len(dest.lessons):
        return course
    source_lessons = list(source.lessons)
    moved = source_lessons.pop(source_index)
    dest_lessons = list(dest.lessons)
    dest_lessons.insert(dest_index, moved)

    chapters = []
    for ch in course.chapters:
        if ch.id == source.id:
            ch = ch.model_copy(update={"lessons": source_lessons})
        elif ch.id == dest.id:
            ch = ch.model_copy(update={"lessons": dest_lessons})
        chapters.append(ch)
    return _with_chapters(course, chapters)


def set_video(
    course: Course,
    chapter_id: str,
    lesson_id: str,
    video_url: str,
    duration_seconds: Optional[float] = None,
) -> Course:
    """Attach a video reference, updating the display duration when known."""
    fields: dict[str, Any] = {"video_url": video_url}
    if duration_seconds is not None:
        fields["duration"] = format_duration(duration_seconds)
    return update_lesson(course, chapter_id, lesson_id, **fields)


# -----------------------------------------------------------------------------
# Quizzes and attachments
# -----------------------------------------------------------------------------


def default_quiz() -> Quiz:
    return Quiz(
        id=new_id("q"),
        question="What is the correct answer?",
        options=["Option 1", "Option 2", "Option 3", "Option 4"],
        answer_index=0,
    )


def attach_quiz(course: Course, chapter_id: str, lesson_id: str, quiz: Optional[Quiz] = None) -> Course:
    """
    Attach (or replace) the lesson's quiz; a template quiz when none given.

    Raises:
        ValueError: If another lesson of the course already holds the quiz id
    """
    quiz = quiz or default_quiz()
    _require_unused_quiz_id(course, quiz.id, owner_lesson_id=lesson_id)
    return _map_lesson(
        course, chapter_id, lesson_id,
        lambda lesson: lesson.model_copy(update={"quiz": quiz}),
    )


def detach_quiz(course: Course, chapter_id: str, lesson_id: str) -> Course:
    return _map_lesson(
        course, chapter_id, lesson_id,
        lambda lesson: lesson.model_copy(update={"quiz": None}),
    )


def update_quiz(course: Course, chapter_id: str, lesson_id: str, **fields: Any) -> Course:
    """
    Edit the lesson's quiz (question, options, answer_index).

    Raises:
        ValueError: If the edited quiz is invalid (e.g. answer out of range)
    """
    lesson = find_lesson(course, lesson_id)
    if lesson is None or lesson.quiz is None:
        return course
    if "id" in fields:
        raise ValueError("Quiz id cannot be changed")
    quiz = Quiz.model_validate({**lesson.quiz.model_dump(), **fields})
    return _map_lesson(
        course, chapter_id, lesson_id,
        lambda current: current.model_copy(update={"quiz": quiz}),
    )


def add_attachment(
    course: Course,
    chapter_id: str,
    lesson_id: str,
    name: str,
    url: str,
    attachment_id: Optional[str] = None,
) -> Course:
    attachment = Attachment(id=attachment_id or new_id("att"), name=name, url=url)
    return _map_lesson(
        course, chapter_id, lesson_id,
        lambda lesson: lesson.model_copy(update={"attachments": [*lesson.attachments, attachment]}),
    )


def remove_attachment(course: Course, chapter_id: str, lesson_id: str, attachment_id: str) -> Course:
    lesson = find_lesson(course, lesson_id)
    if lesson is None or all(att.id != attachment_id for att in lesson.attachments):
        return course
    return _map_lesson(
        course, chapter_id, lesson_id,
        lambda current: current.model_copy(update={
            "attachments": [att for att in current.attachments if att.id != attachment_id]
        }),
    )


# -----------------------------------------------------------------------------
# Editing draft
# -----------------------------------------------------------------------------


ConfirmFn = Callable[[str], bool]


class CourseDraft:
    """
    Mutable editing session around an immutable-by-convention Course value.

    Each edit replaces `course` with the editor's result. Deletes ask the
    caller-supplied `confirm` callable first and do nothing if it declines.

    UIs that cannot block on a prompt stage the delete with request_delete(),
    show `pending_prompt`, and finish with resolve_delete().
    """

    def __init__(self, course: Course):
        self.original = course
        self.course = course
        self.pending_delete: Optional[tuple[str, Optional[str]]] = None  # (chapter_id, lesson_id)
        self.pending_prompt: Optional[str] = None

    @property
    def dirty(self) -> bool:
        return self.course != self.original

    def apply(self, operation: Callable[..., Course], *args: Any, **kwargs: Any) -> Course:
        """Apply an editor operation to the current course."""
        self.course = operation(self.course, *args, **kwargs)
        return self.course

    def discard(self) -> Course:
        self.course = self.original
        self.pending_delete = None
        self.pending_prompt = None
        return self.course

    def mark_saved(self) -> None:
        self.original = self.course

    def delete_chapter(self, chapter_id: str, confirm: ConfirmFn) -> bool:
        chapter = find_chapter(self.course, chapter_id)
        if chapter is None:
            return False
        if not confirm(confirmation_message("chapter", chapter.title)):
            return False
        self.course = delete_chapter(self.course, chapter_id)
        return True

    def delete_lesson(self, chapter_id: str, lesson_id: str, confirm: ConfirmFn) -> bool:
        chapter = find_chapter(self.course, chapter_id)
        lesson = find_lesson(self.course, lesson_id)
        if chapter is None or lesson is None:
            return False
        if not confirm(confirmation_message("lesson", lesson.title)):
            return False
        updated = delete_lesson(self.course, chapter_id, lesson_id)
        changed = updated is not self.course
        self.course = updated
        return changed

    def request_delete(self, chapter_id: str, lesson_id: Optional[str] = None) -> Optional[str]:
        """
        Stage a chapter delete, or a lesson delete when lesson_id is given.

        Returns:
            The confirmation prompt, or None if the target does not exist
        """
        self.pending_delete = None
        self.pending_prompt = None
        chapter = find_chapter(self.course, chapter_id)
        if chapter is None:
            return None
        if lesson_id is None:
            prompt = confirmation_message("chapter", chapter.title)
        else:
            lesson = next((x for x in chapter.lessons if x.id == lesson_id), None)
            if lesson is None:
                return None
            prompt = confirmation_message("lesson", lesson.title)
        self.pending_delete = (chapter_id, lesson_id)
        self.pending_prompt = prompt
        return prompt

    def resolve_delete(self, accepted: bool) -> bool:
        """
        Answer the staged prompt: run the delete if accepted, drop it otherwise.

        Returns:
            True if something was deleted
        """
        if self.pending_delete is None:
            return False
        chapter_id, lesson_id = self.pending_delete
        self.pending_delete = None
        self.pending_prompt = None

        def answer(_prompt: str) -> bool:
            return accepted

        if lesson_id is None:
            return self.delete_chapter(chapter_id, answer)
        return self.delete_lesson(chapter_id, lesson_id, answer)
