"""
Tree editor tests.

Every operation returns a new Course and leaves its input untouched.
"""

import pytest

from coursekit.authoring import (
    CourseDraft,
    add_attachment,
    add_chapter,
    add_lesson,
    attach_quiz,
    confirmation_message,
    default_quiz,
    delete_chapter,
    delete_lesson,
    detach_quiz,
    duplicate_course,
    find_chapter,
    find_lesson,
    find_lesson_chapter,
    lesson_ids,
    move_chapter,
    move_lesson,
    new_course,
    remove_attachment,
    rename_chapter,
    rename_lesson,
    set_video,
    update_course,
    update_lesson,
    update_quiz,
)
from coursekit.schemas import Quiz


class TestCourseOperations:
    """Test course-level operations."""

    def test_new_course_shape(self):
        course = new_course("Python 101")
        assert course.title == "Python 101"
        assert course.id.startswith("course-")
        assert not course.published
        assert len(course.chapters) == 1
        assert course.chapters[0].title == "Chapter 1"
        assert course.total_lessons == 1
        assert course.chapters[0].lessons[0].duration == "10:00"

    def test_update_course_fields(self, course):
        updated = update_course(course, title="React Basics", published=False)
        assert updated.title == "React Basics"
        assert course.title == "React Fundamentals"
        assert updated.chapters == course.chapters

    def test_update_course_rejects_id_and_chapters(self, course):
        with pytest.raises(ValueError):
            update_course(course, id="other")
        with pytest.raises(ValueError):
            update_course(course, chapters=[])

    def test_update_course_rejects_unknown_field(self, course):
        with pytest.raises(ValueError):
            update_course(course, colour="red")

    def test_duplicate_course_fresh_ids(self, course):
        copy = duplicate_course(course)
        assert copy.title == "React Fundamentals (Copy)"
        assert copy.published is False
        assert copy.id != course.id
        assert copy.total_lessons == course.total_lessons

        original_ids = {ch.id for ch in course.chapters} | set(lesson_ids(course))
        copy_ids = {ch.id for ch in copy.chapters} | set(lesson_ids(copy))
        assert original_ids.isdisjoint(copy_ids)

        original_quiz = find_lesson(course, "l-1").quiz
        copied_quiz = copy.chapters[0].lessons[0].quiz
        assert copied_quiz.id != original_quiz.id
        assert copied_quiz.options == original_quiz.options
        assert copied_quiz.options is not original_quiz.options

        copied_att = copy.chapters[0].lessons[1].attachments[0]
        assert copied_att.id != "att-1"
        assert copied_att.name == "setup-guide.pdf"

    def test_confirmation_message(self):
        assert confirmation_message("chapter", "Intro") == 'Delete chapter "Intro" and all its lessons?'
        assert confirmation_message("lesson", "Setup") == 'Delete lesson "Setup"?'


class TestChapterOperations:
    """Test chapter CRUD and reorder."""

    def test_add_chapter_default_title(self, course):
        updated = add_chapter(course)
        assert len(updated.chapters) == 3
        assert updated.chapters[-1].title == "Chapter 3"
        assert updated.chapters[-1].lessons == []
        assert len(course.chapters) == 2

    def test_add_chapter_explicit_id(self, course):
        updated = add_chapter(course, "Hooks", chapter_id="ch-hooks")
        assert find_chapter(updated, "ch-hooks").title == "Hooks"

    def test_add_chapter_duplicate_id(self, course):
        with pytest.raises(ValueError):
            add_chapter(course, "Again", chapter_id="ch-1")

    def test_rename_chapter(self, course):
        updated = rename_chapter(course, "ch-2", "Components & Props")
        assert find_chapter(updated, "ch-2").title == "Components & Props"
        assert find_chapter(course, "ch-2").title == "Components"

    def test_rename_unknown_chapter_is_noop(self, course):
        assert rename_chapter(course, "missing", "x") is course

    def test_delete_chapter_removes_lessons(self, course):
        removed = len(find_chapter(course, "ch-1").lessons)
        updated = delete_chapter(course, "ch-1")
        assert [ch.id for ch in updated.chapters] == ["ch-2"]
        assert updated.total_lessons == course.total_lessons - removed
        assert find_lesson(updated, "l-1") is None

    def test_delete_unknown_chapter_is_noop(self, course):
        assert delete_chapter(course, "missing") is course

    def test_move_chapter_and_back(self, course):
        course = add_chapter(course, "Third", chapter_id="ch-3")
        moved = move_chapter(course, 0, 2)
        assert [ch.id for ch in moved.chapters] == ["ch-2", "ch-3", "ch-1"]
        restored = move_chapter(moved, 2, 0)
        assert [ch.id for ch in restored.chapters] == ["ch-1", "ch-2", "ch-3"]

    def test_move_chapter_out_of_range(self, course):
        assert move_chapter(course, 0, 5) is course
        assert move_chapter(course, -1, 0) is course
        assert move_chapter(course, 1, 1) is course

    def test_untouched_chapters_are_shared(self, course):
        updated = rename_chapter(course, "ch-1", "Start")
        assert updated.chapters[1] is course.chapters[1]


class TestLessonOperations:
    """Test lesson CRUD and reorder."""

    def test_add_lesson(self, course):
        updated = add_lesson(course, "ch-2", "Props", lesson_id="l-4")
        lesson = find_lesson(updated, "l-4")
        assert lesson.title == "Props"
        assert lesson.duration == "10:00"
        assert find_lesson_chapter(updated, "l-4").id == "ch-2"
        assert course.total_lessons == 3
        assert updated.total_lessons == 4

    def test_add_lesson_generated_id(self, course):
        updated = add_lesson(course, "ch-2")
        new = updated.chapters[1].lessons[-1]
        assert new.title == "New Lesson"
        assert new.id.startswith("l-")

    def test_add_lesson_unknown_chapter(self, course):
        assert add_lesson(course, "missing", "x") is course

    def test_add_lesson_duplicate_id(self, course):
        with pytest.raises(ValueError):
            add_lesson(course, "ch-2", "Dup", lesson_id="l-1")

    def test_add_lesson_rejects_id_in_fields(self, course):
        with pytest.raises(ValueError):
            add_lesson(course, "ch-1", "Dup", id="l-1")

    def test_add_lesson_duplicate_quiz_id(self, course):
        quiz = Quiz(id="q-1", question="?", options=["a", "b"], answer_index=0)
        with pytest.raises(ValueError):
            add_lesson(course, "ch-2", "Quiz again", lesson_id="l-4", quiz=quiz)

    def test_update_lesson(self, course):
        updated = update_lesson(course, "ch-1", "l-2", content="<p>Updated</p>", duration="09:00")
        lesson = find_lesson(updated, "l-2")
        assert lesson.content == "<p>Updated</p>"
        assert lesson.duration == "09:00"
        assert lesson.attachments == find_lesson(course, "l-2").attachments

    def test_update_lesson_rejects_id_change(self, course):
        with pytest.raises(ValueError):
            update_lesson(course, "ch-1", "l-2", id="l-9")

    def test_update_lesson_rejects_unknown_field(self, course):
        with pytest.raises(ValueError):
            update_lesson(course, "ch-1", "l-2", colour="red")

    def test_update_lesson_validates(self, course):
        with pytest.raises(ValueError):
            update_lesson(course, "ch-1", "l-2", completion_policy="never")

    def test_update_lesson_wrong_chapter_is_noop(self, course):
        assert update_lesson(course, "ch-2", "l-1", title="x") is course

    def test_rename_lesson(self, course):
        updated = rename_lesson(course, "ch-2", "l-3", "Function Components")
        assert find_lesson(updated, "l-3").title == "Function Components"

    def test_delete_lesson(self, course):
        updated = delete_lesson(course, "ch-1", "l-1")
        assert lesson_ids(updated) == ["l-2", "l-3"]

    def test_delete_lesson_wrong_chapter_is_noop(self, course):
        assert delete_lesson(course, "ch-2", "l-1") is course

    def test_move_lesson_within_chapter(self, course):
        updated = move_lesson(course, "ch-1", 0, "ch-1", 1)
        assert [x.id for x in find_chapter(updated, "ch-1").lessons] == ["l-2", "l-1"]

    def test_move_lesson_within_chapter_out_of_range(self, course):
        assert move_lesson(course, "ch-1", 0, "ch-1", 2) is course
        assert move_lesson(course, "ch-1", 3, "ch-1", 0) is course

    def test_move_lesson_across_chapters(self, course):
        updated = move_lesson(course, "ch-1", 1, "ch-2", 1)
        assert [x.id for x in find_chapter(updated, "ch-1").lessons] == ["l-1"]
        assert [x.id for x in find_chapter(updated, "ch-2").lessons] == ["l-3", "l-2"]
        assert updated.total_lessons == course.total_lessons

    def test_move_lesson_across_chapters_to_front(self, course):
        updated = move_lesson(course, "ch-2", 0, "ch-1", 0)
        assert lesson_ids(updated) == ["l-3", "l-1", "l-2"]

    def test_move_lesson_unknown_chapter(self, course):
        assert move_lesson(course, "ch-1", 0, "missing", 0) is course

    def test_set_video_updates_duration(self, course):
        updated = set_video(course, "ch-1", "l-2", "https://example.com/v.mp4", duration_seconds=125)
        lesson = find_lesson(updated, "l-2")
        assert lesson.video_url == "https://example.com/v.mp4"
        assert lesson.duration == "02:05"

    def test_set_video_keeps_duration(self, course):
        updated = set_video(course, "ch-1", "l-2", "video-ref")
        assert find_lesson(updated, "l-2").duration == "08:30"


class TestQuizAndAttachmentOperations:
    """Test quiz and attachment editing."""

    def test_default_quiz(self):
        quiz = default_quiz()
        assert len(quiz.options) == 4
        assert quiz.answer_index == 0

    def test_attach_quiz_default(self, course):
        updated = attach_quiz(course, "ch-1", "l-2")
        assert find_lesson(updated, "l-2").quiz is not None

    def test_attach_quiz_given(self, course):
        quiz = Quiz(id="q-new", question="?", options=["a", "b"], answer_index=1)
        updated = attach_quiz(course, "ch-1", "l-2", quiz)
        assert find_lesson(updated, "l-2").quiz.id == "q-new"

    def test_attach_quiz_rejects_id_from_other_lesson(self, course):
        quiz = find_lesson(course, "l-1").quiz
        with pytest.raises(ValueError):
            attach_quiz(course, "ch-1", "l-2", quiz)

    def test_attach_quiz_replaces_own_quiz(self, course):
        quiz = Quiz(id="q-1", question="Reworded?", options=["a", "b"], answer_index=1)
        updated = attach_quiz(course, "ch-1", "l-1", quiz)
        assert find_lesson(updated, "l-1").quiz.question == "Reworded?"

    def test_update_lesson_duplicate_quiz_id(self, course):
        with pytest.raises(ValueError):
            update_lesson(course, "ch-1", "l-2", quiz=find_lesson(course, "l-3").quiz)

    def test_detach_quiz(self, course):
        updated = detach_quiz(course, "ch-1", "l-1")
        assert find_lesson(updated, "l-1").quiz is None

    def test_update_quiz(self, course):
        updated = update_quiz(course, "ch-1", "l-1", options=["x", "y", "z"], answer_index=2)
        quiz = find_lesson(updated, "l-1").quiz
        assert quiz.options == ["x", "y", "z"]
        assert quiz.answer_index == 2
        assert quiz.id == "q-1"

    def test_update_quiz_invalid_answer(self, course):
        with pytest.raises(ValueError):
            update_quiz(course, "ch-1", "l-1", answer_index=7)

    def test_update_quiz_without_quiz_is_noop(self, course):
        assert update_quiz(course, "ch-1", "l-2", question="?") is course

    def test_add_and_remove_attachment(self, course):
        updated = add_attachment(course, "ch-1", "l-1", "notes.txt", "data:text/plain;base64,aGk=", attachment_id="att-2")
        assert [a.id for a in find_lesson(updated, "l-1").attachments] == ["att-2"]
        removed = remove_attachment(updated, "ch-1", "l-1", "att-2")
        assert find_lesson(removed, "l-1").attachments == []

    def test_remove_unknown_attachment_is_noop(self, course):
        assert remove_attachment(course, "ch-1", "l-2", "missing") is course


class TestCourseDraft:
    """Test the editing draft wrapper."""

    def test_apply_marks_dirty(self, course):
        draft = CourseDraft(course)
        assert not draft.dirty
        draft.apply(rename_chapter, "ch-1", "Start Here")
        assert draft.dirty
        assert find_chapter(draft.course, "ch-1").title == "Start Here"
        assert draft.original is course

    def test_discard(self, course):
        draft = CourseDraft(course)
        draft.apply(add_chapter)
        assert draft.discard() is course
        assert not draft.dirty

    def test_mark_saved(self, course):
        draft = CourseDraft(course)
        draft.apply(add_chapter)
        draft.mark_saved()
        assert not draft.dirty

    def test_delete_chapter_confirmed(self, course):
        draft = CourseDraft(course)
        prompts = []

        def confirm(message):
            prompts.append(message)
            return True

        assert draft.delete_chapter("ch-1", confirm)
        assert prompts == ['Delete chapter "Getting Started" and all its lessons?']
        assert draft.course.total_lessons == 1

    def test_delete_chapter_declined(self, course):
        draft = CourseDraft(course)
        assert not draft.delete_chapter("ch-1", lambda _: False)
        assert draft.course is course

    def test_delete_lesson(self, course):
        draft = CourseDraft(course)
        assert draft.delete_lesson("ch-1", "l-2", lambda _: True)
        assert lesson_ids(draft.course) == ["l-1", "l-3"]

    def test_delete_lesson_unknown(self, course):
        draft = CourseDraft(course)
        assert not draft.delete_lesson("ch-1", "missing", lambda _: True)

    def test_request_delete_lesson_then_confirm(self, course):
        draft = CourseDraft(course)
        prompt = draft.request_delete("ch-1", "l-2")
        assert prompt == 'Delete lesson "Environment Setup"?'
        assert draft.pending_prompt == prompt
        assert draft.course is course

        assert draft.resolve_delete(True)
        assert lesson_ids(draft.course) == ["l-1", "l-3"]
        assert draft.pending_prompt is None

    def test_request_delete_chapter_then_cancel(self, course):
        draft = CourseDraft(course)
        assert draft.request_delete("ch-2") == 'Delete chapter "Components" and all its lessons?'
        assert not draft.resolve_delete(False)
        assert draft.course is course
        assert draft.pending_delete is None

    def test_request_delete_unknown(self, course):
        draft = CourseDraft(course)
        assert draft.request_delete("ch-1", "l-3") is None
        assert draft.request_delete("missing") is None
        assert not draft.resolve_delete(True)

    def test_discard_drops_pending_delete(self, course):
        draft = CourseDraft(course)
        draft.request_delete("ch-1")
        draft.discard()
        assert not draft.resolve_delete(True)
        assert draft.course is course
