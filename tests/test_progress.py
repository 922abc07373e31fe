"""
Progress tracker tests.
"""

from datetime import datetime

from coursekit.classroom import ProgressTracker
from coursekit.schemas import Course, LessonStatus, ProgressEntry, ProgressLedger


class TestLessonProgress:
    """Test lesson status transitions."""

    def test_unknown_lesson_not_started(self):
        tracker = ProgressTracker()
        entry = tracker.get_lesson_progress("l-1")
        assert entry.status == LessonStatus.NOT_STARTED
        assert "l-1" not in tracker.ledger.entries

    def test_start_lesson(self, clock):
        tracker = ProgressTracker(clock=clock)
        assert tracker.start_lesson("l-1")
        entry = tracker.get_lesson_progress("l-1")
        assert entry.status == LessonStatus.IN_PROGRESS
        assert entry.started_at == datetime(2024, 1, 1, 9, 0)
        assert tracker.get_current_lesson_id() == "l-1"

    def test_start_lesson_twice(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.start_lesson("l-1")
        assert not tracker.start_lesson("l-1")
        assert tracker.get_lesson_progress("l-1").started_at == datetime(2024, 1, 1, 9, 0)

    def test_mark_complete(self, clock):
        tracker = ProgressTracker(clock=clock)
        assert tracker.mark_complete("l-1")
        entry = tracker.get_lesson_progress("l-1")
        assert entry.completed
        assert entry.completed_at is not None
        assert entry.started_at == entry.completed_at

    def test_mark_complete_idempotent(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        first = tracker.get_lesson_progress("l-1").completed_at
        assert not tracker.mark_complete("l-1")
        assert tracker.get_lesson_progress("l-1").completed_at == first

    def test_entries_are_replaced_not_mutated(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.start_lesson("l-1")
        before = tracker.get_lesson_progress("l-1")
        tracker.mark_complete("l-1")
        assert before.status == LessonStatus.IN_PROGRESS

    def test_toggle_complete(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.start_lesson("l-1")
        assert tracker.toggle_complete("l-1") is True
        assert tracker.is_lesson_completed("l-1")
        assert tracker.toggle_complete("l-1") is False
        entry = tracker.get_lesson_progress("l-1")
        assert entry.status == LessonStatus.IN_PROGRESS
        assert entry.completed_at is None

    def test_reset_lesson(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        tracker.record_watch_position("l-1", 30, 100)
        tracker.reset_lesson("l-1")
        assert tracker.get_lesson_progress("l-1").status == LessonStatus.NOT_STARTED
        assert tracker.get_watch_seconds("l-1") == 0

    def test_completed_ids(self, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        tracker.start_lesson("l-2")
        assert tracker.get_completed_lesson_ids() == {"l-1"}


class TestPrune:
    """Test removal of orphaned ledger keys."""

    def test_prune_orphans(self):
        ledger = ProgressLedger(
            entries={
                "l-1": ProgressEntry(lesson_id="l-1", status=LessonStatus.COMPLETED),
                "gone": ProgressEntry(lesson_id="gone", status=LessonStatus.COMPLETED),
            },
            watch_seconds={"gone-too": 40},
            last_lesson_id="gone",
        )
        tracker = ProgressTracker(ledger)
        removed = tracker.prune(["l-1", "l-2"])
        assert sorted(removed) == ["gone", "gone-too"]
        assert list(tracker.ledger.entries) == ["l-1"]
        assert tracker.ledger.watch_seconds == {}
        assert tracker.get_current_lesson_id() is None

    def test_prune_nothing(self):
        tracker = ProgressTracker()
        tracker.mark_complete("l-1")
        assert tracker.prune(["l-1"]) == []


class TestVideoWatching:
    """Test watch position tracking."""

    def test_threshold_reached(self):
        tracker = ProgressTracker()
        assert not tracker.record_watch_position("l-1", 80, 100)
        assert tracker.record_watch_position("l-1", 90, 100)

    def test_unknown_duration(self):
        tracker = ProgressTracker()
        assert not tracker.record_watch_position("l-1", 500, None)
        assert not tracker.record_watch_position("l-1", 500, 0)
        assert tracker.get_watch_seconds("l-1") == 500

    def test_keeps_furthest_position(self):
        tracker = ProgressTracker()
        tracker.record_watch_position("l-1", 120, 600)
        tracker.record_watch_position("l-1", 30, 600)
        assert tracker.get_watch_seconds("l-1") == 120
        assert tracker.get_watched_minutes("l-1") == 2

    def test_custom_threshold(self):
        tracker = ProgressTracker(watch_threshold=0.5)
        assert tracker.record_watch_position("l-1", 50, 100)


class TestStatistics:
    """Test derived counts and percentages."""

    def test_counts_only_course_lessons(self, course, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        tracker.mark_complete("other-course-lesson")
        assert tracker.completed_count(course) == 1
        assert tracker.percent(course) == 33

    def test_empty_course_percent(self):
        tracker = ProgressTracker()
        assert tracker.percent(Course(id="c", title="Empty")) == 0

    def test_completion_stats(self, course, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        tracker.start_lesson("l-2")
        stats = tracker.get_completion_stats(course)
        assert stats == {
            "total_lessons": 3,
            "completed": 1,
            "in_progress": 1,
            "not_started": 1,
            "completion_percent": 33,
        }

    def test_reset_all(self, course, clock):
        tracker = ProgressTracker(clock=clock)
        tracker.mark_complete("l-1")
        tracker.reset_all_progress()
        assert tracker.completed_count(course) == 0
