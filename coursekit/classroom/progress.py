"""
ProgressTracker - Track a learner's lesson progress in a ProgressLedger.

The ledger holds:
- Lesson status and completion timestamps
- Furthest watched video position per lesson
- Current (last opened) lesson

The tracker is storage-agnostic: it only updates the in-memory ledger.
LearnerSession persists the ledger after each change.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from coursekit.schemas import Course, LessonStatus, ProgressEntry, ProgressLedger

logger = logging.getLogger(__name__)


DEFAULT_WATCH_THRESHOLD = 0.9


class ProgressTracker:
    """
    Track learner progress against lesson ids.

    Every update replaces the affected ProgressEntry with a new object, so
    entries handed out earlier never change underneath the caller.
    """

    def __init__(
        self,
        ledger: Optional[ProgressLedger] = None,
        watch_threshold: float = DEFAULT_WATCH_THRESHOLD,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize progress tracker.

        Args:
            ledger: Existing ledger to continue (default: empty)
            watch_threshold: Fraction of a video that counts as watched
            clock: Time source for timestamps (default: datetime.now)
        """
        self.ledger = ledger or ProgressLedger()
        self.watch_threshold = watch_threshold
        self.clock = clock or datetime.now

    # -------------------------------------------------------------------------
    # Lesson Progress
    # -------------------------------------------------------------------------

    def get_lesson_progress(self, lesson_id: str) -> ProgressEntry:
        """Get progress for a specific lesson."""
        entry = self.ledger.entries.get(lesson_id)
        if entry is None:
            return ProgressEntry(lesson_id=lesson_id)
        return entry

    def get_all_lesson_progress(self) -> dict[str, ProgressEntry]:
        return dict(self.ledger.entries)

    def start_lesson(self, lesson_id: str) -> bool:
        """
        Mark a lesson as started and make it the current lesson.

        Returns True if the lesson moved from not started to in progress.
        """
        self.ledger.last_lesson_id = lesson_id
        entry = self.get_lesson_progress(lesson_id)
        if entry.status != LessonStatus.NOT_STARTED:
            return False
        self.ledger.entries[lesson_id] = entry.model_copy(update={
            "status": LessonStatus.IN_PROGRESS,
            "started_at": entry.started_at or self.clock(),
        })
        return True

    def mark_complete(self, lesson_id: str, now: Optional[datetime] = None) -> bool:
        """
        Mark a lesson as completed.

        Idempotent: an already completed lesson keeps its first completed_at.

        Returns:
            True if this call completed the lesson, False if it already was
        """
        entry = self.get_lesson_progress(lesson_id)
        if entry.completed:
            return False
        done_at = now or self.clock()
        self.ledger.entries[lesson_id] = entry.model_copy(update={
            "status": LessonStatus.COMPLETED,
            "started_at": entry.started_at or done_at,
            "completed_at": done_at,
        })
        logger.debug(f"Lesson completed: {lesson_id}")
        return True

    def toggle_complete(self, lesson_id: str, now: Optional[datetime] = None) -> bool:
        """
        Flip a lesson's completed flag.

        Returns:
            The new completed flag
        """
        entry = self.get_lesson_progress(lesson_id)
        if not entry.completed:
            self.mark_complete(lesson_id, now)
            return True
        self.ledger.entries[lesson_id] = entry.model_copy(update={
            "status": LessonStatus.IN_PROGRESS if entry.started_at else LessonStatus.NOT_STARTED,
            "completed_at": None,
        })
        return False

    def reset_lesson(self, lesson_id: str) -> None:
        """Reset a lesson to not started."""
        self.ledger.entries.pop(lesson_id, None)
        self.ledger.watch_seconds.pop(lesson_id, None)

    def is_lesson_completed(self, lesson_id: str) -> bool:
        return self.get_lesson_progress(lesson_id).completed

    def get_completed_lesson_ids(self) -> set[str]:
        """Get set of completed lesson IDs."""
        return {lid for lid, entry in self.ledger.entries.items() if entry.completed}

    def prune(self, valid_lesson_ids: Iterable[str]) -> list[str]:
        """
        Drop ledger keys for lessons that no longer exist.

        Returns:
            Removed lesson ids
        """
        valid = set(valid_lesson_ids)
        orphans = [lid for lid in self.ledger.entries if lid not in valid]
        orphans += [lid for lid in self.ledger.watch_seconds if lid not in valid and lid not in orphans]
        for lid in orphans:
            self.ledger.entries.pop(lid, None)
            self.ledger.watch_seconds.pop(lid, None)
        if self.ledger.last_lesson_id is not None and self.ledger.last_lesson_id not in valid:
            self.ledger.last_lesson_id = None
        if orphans:
            logger.info(f"Pruned {len(orphans)} orphaned progress entries")
        return orphans

    # -------------------------------------------------------------------------
    # Video Watching
    # -------------------------------------------------------------------------

    def record_watch_position(self, lesson_id: str, position: float, duration: Optional[float]) -> bool:
        """
        Record playback position for a lesson video.

        Args:
            lesson_id: Lesson being watched
            position: Current playback position in seconds
            duration: Video length in seconds (None/0 when not yet known)

        Returns:
            True if the position has reached the watch threshold
        """
        current = max(0, int(position))
        previous = self.ledger.watch_seconds.get(lesson_id, 0)
        self.ledger.watch_seconds[lesson_id] = max(previous, current)
        if not duration or duration <= 0:
            return False
        return position / duration >= self.watch_threshold

    def get_watch_seconds(self, lesson_id: str) -> int:
        return self.ledger.watch_seconds.get(lesson_id, 0)

    def get_watched_minutes(self, lesson_id: str) -> int:
        return round(self.get_watch_seconds(lesson_id) / 60)

    # -------------------------------------------------------------------------
    # Current Lesson
    # -------------------------------------------------------------------------

    def get_current_lesson_id(self) -> Optional[str]:
        return self.ledger.last_lesson_id

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def completed_count(self, course: Course) -> int:
        """Completed lessons of this course, derived fresh from the ledger."""
        completed = self.get_completed_lesson_ids()
        return sum(1 for _, lesson in course.iter_lessons() if lesson.id in completed)

    def percent(self, course: Course) -> int:
        """Whole-number completion percentage (0 for an empty course)."""
        return round(self.completed_count(course) / max(1, course.total_lessons) * 100)

    def get_completion_stats(self, course: Course) -> dict:
        """
        Get completion statistics for a course.

        Returns:
            Dictionary with completion stats
        """
        total = course.total_lessons
        completed = self.completed_count(course)
        in_progress = sum(
            1 for _, lesson in course.iter_lessons()
            if self.get_lesson_progress(lesson.id).status == LessonStatus.IN_PROGRESS
        )
        return {
            "total_lessons": total,
            "completed": completed,
            "in_progress": in_progress,
            "not_started": total - completed - in_progress,
            "completion_percent": self.percent(course),
        }

    def reset_all_progress(self) -> None:
        """Reset all progress for this learner."""
        self.ledger = ProgressLedger()
