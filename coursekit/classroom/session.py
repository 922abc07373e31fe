"""
LearnerSession - One learner taking one course.

Joins the course (content), ProgressTracker (ledger), RewardAccumulator
and QuizEvaluator, and persists learner state after every change.

Completion paths:
- explicit "mark complete"
- video watched past the watch threshold
- correct answer on a quiz-gated lesson

All of them go through mark_complete(), which pays lesson XP on a real
transition and then checks course completion against a completed count
derived fresh from the ledger.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from coursekit.notifications import NotificationLog
from coursekit.schemas import Course, Lesson, QuizResult, RewardPolicy
from coursekit.storage import StateStore
from coursekit.utils.config import Settings

from .navigator import Navigator
from .progress import ProgressTracker
from .quiz import QuizEvaluator
from .rewards import RewardAccumulator

logger = logging.getLogger(__name__)


WATCH_SAVE_INTERVAL = 5  # seconds of new playback between ledger writes

PERSIST_FAILED_MESSAGE = "Progress could not be saved. Your changes are kept for this session."


class LearnerSession:
    """Learner-side state machine for a single course."""

    def __init__(
        self,
        course: Course,
        tracker: Optional[ProgressTracker] = None,
        rewards: Optional[RewardAccumulator] = None,
        quizzes: Optional[QuizEvaluator] = None,
        policy: Optional[RewardPolicy] = None,
        state_store: Optional[StateStore] = None,
        notifications: Optional[NotificationLog] = None,
        sequential: bool = False,
    ):
        """
        Initialize a learner session.

        Args:
            course: Course being taken
            tracker: Progress tracker (default: empty ledger)
            rewards: Reward accumulator (default: empty, using `policy`)
            quizzes: Quiz evaluator (default: no answers yet)
            policy: Reward policy when `rewards` is not given
            state_store: Optional persistence; None keeps state in memory only
            notifications: Optional shared notification log
            sequential: Lock lessons until the previous one is completed
        """
        self.course = course
        self.tracker = tracker or ProgressTracker()
        self.rewards = rewards or RewardAccumulator(policy=policy)
        self.quizzes = quizzes or QuizEvaluator()
        self.state_store = state_store
        self.notifications = notifications or NotificationLog()
        self.navigator = Navigator(course, self.tracker, sequential=sequential)
        self._saved_watch: dict[str, int] = {}

    @classmethod
    def open(
        cls,
        course: Course,
        state_store: StateStore,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sequential: bool = False,
    ) -> "LearnerSession":
        """
        Resume a learner's session from storage.

        Missing state starts empty; ledger keys for lessons that no longer
        exist in the course are pruned.
        """
        settings = settings or Settings()
        tracker = ProgressTracker(
            state_store.load_ledger(course.id),
            watch_threshold=settings.watch_threshold,
            clock=clock,
        )
        tracker.prune(lesson.id for _, lesson in course.iter_lessons())

        quiz_ids = {lesson.quiz.id for _, lesson in course.iter_lessons() if lesson.quiz}
        results = [r for r in state_store.load_quiz_results(course.id) if r.quiz_id in quiz_ids]

        session = cls(
            course,
            tracker=tracker,
            rewards=RewardAccumulator([state_store.load_rewards(course.id)], policy=settings.rewards),
            quizzes=QuizEvaluator(results, clock=clock),
            state_store=state_store,
            sequential=sequential,
        )
        session._saved_watch = dict(tracker.ledger.watch_seconds)
        if session._check_course_completion():
            session._persist()
        logger.info(
            f"Opened course {course.id}: {session.completed_count}/{session.total_lessons} lessons complete"
        )
        return session

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def policy(self) -> RewardPolicy:
        return self.rewards.policy

    @property
    def total_lessons(self) -> int:
        return self.course.total_lessons

    @property
    def completed_count(self) -> int:
        return self.tracker.completed_count(self.course)

    @property
    def percent(self) -> int:
        return self.tracker.percent(self.course)

    @property
    def xp(self) -> int:
        return self.rewards.xp(self.course.id)

    @property
    def badges(self) -> list[str]:
        return self.rewards.badges(self.course.id)

    @property
    def is_complete(self) -> bool:
        return self.total_lessons > 0 and self.completed_count == self.total_lessons

    @property
    def certificate_eligible(self) -> bool:
        return self.course.certificate_available and self.is_complete

    def summary(self) -> dict:
        """Progress and reward summary for display."""
        return {
            **self.tracker.get_completion_stats(self.course),
            "xp": self.xp,
            "badges": self.badges,
            "current_lesson_id": self.tracker.get_current_lesson_id(),
            "recommended_lesson_id": self.navigator.get_recommended_lesson_id(),
            "certificate_eligible": self.certificate_eligible,
        }

    # -------------------------------------------------------------------------
    # Lesson actions
    # -------------------------------------------------------------------------

    def open_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Open a lesson (not started -> in progress). None for unknown or locked ids."""
        lesson = self.navigator.get_lesson(lesson_id)
        if lesson is None or not self.navigator.is_lesson_available(lesson_id):
            return None
        self.tracker.start_lesson(lesson_id)
        self._persist()
        return lesson

    def mark_complete(self, lesson_id: str) -> bool:
        """
        Complete a lesson and apply reward side effects.

        Returns:
            True if the lesson transitioned to completed
        """
        if self.navigator.get_lesson(lesson_id) is None:
            return False
        if not self.tracker.mark_complete(lesson_id):
            return False

        self.rewards.grant_lesson_xp(self.course.id, lesson_id)
        self._check_course_completion()
        self._persist()
        return True

    def toggle_complete(self, lesson_id: str) -> bool:
        """
        Flip a lesson between completed and not completed.

        Returns:
            The new completed flag
        """
        if self.navigator.get_lesson(lesson_id) is None:
            return False
        if not self.tracker.is_lesson_completed(lesson_id):
            self.mark_complete(lesson_id)
            return True
        self.tracker.toggle_complete(lesson_id)
        self._persist()
        return False

    def on_video_progress(self, lesson_id: str, position: float, duration: Optional[float]) -> bool:
        """
        Handle a playback position update.

        Returns:
            True if this update completed the lesson
        """
        if self.navigator.get_lesson(lesson_id) is None:
            return False
        reached = self.tracker.record_watch_position(lesson_id, position, duration)
        if reached and self.mark_complete(lesson_id):
            self._saved_watch[lesson_id] = self.tracker.get_watch_seconds(lesson_id)
            return True

        watched = self.tracker.get_watch_seconds(lesson_id)
        if watched - self._saved_watch.get(lesson_id, 0) >= WATCH_SAVE_INTERVAL:
            self._saved_watch[lesson_id] = watched
            self._persist()
        return False

    def next_lesson_id(self, lesson_id: str) -> Optional[str]:
        """Lesson to auto-advance to when `lesson_id` ends."""
        return self.navigator.get_next_lesson_id(lesson_id)

    # -------------------------------------------------------------------------
    # Quizzes
    # -------------------------------------------------------------------------

    def is_quiz_locked(self, quiz_id: str) -> bool:
        return self.quizzes.is_answered(quiz_id)

    def submit_quiz(self, lesson_id: str, chosen_index: int) -> Optional[QuizResult]:
        """
        Submit an answer for the lesson's quiz.

        The first submission is graded and rewarded; later submissions for
        the same quiz return the recorded result unchanged.

        Returns:
            QuizResult, or None if the lesson has no quiz

        Raises:
            ValueError: If chosen_index is not a valid option index
        """
        lesson = self.navigator.get_lesson(lesson_id)
        if lesson is None or lesson.quiz is None:
            return None

        recorded = self.quizzes.result(lesson.quiz.id)
        if recorded is not None:
            return recorded

        result = self.quizzes.submit(lesson.quiz, chosen_index)
        if result.correct:
            self.rewards.grant_quiz_reward(self.course.id)
            if lesson.quiz_gated:
                self.mark_complete(lesson_id)
        self._persist()
        return result

    # -------------------------------------------------------------------------
    # Course edits
    # -------------------------------------------------------------------------

    def apply_course_edit(self, course: Course) -> list[str]:
        """
        Swap in an edited version of the course.

        An edit that leaves every remaining lesson completed finishes the
        course and pays the completion reward (once, as usual).

        Returns:
            Lesson ids whose progress was pruned
        """
        if course.id != self.course.id:
            raise ValueError(f"Cannot swap course {self.course.id} for {course.id}")
        self.course = course
        self.navigator.refresh(course)
        pruned = self.tracker.prune(lesson.id for _, lesson in course.iter_lessons())
        self._check_course_completion()
        self._persist()
        return pruned

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_course_completion(self) -> bool:
        if not self.is_complete:
            return False
        granted = self.rewards.grant_course_completion(self.course.id)
        if granted:
            logger.info(f"Course completed: {self.course.id}")
            self.notifications.push(f"Course completed: {self.course.title}")
        return granted

    def _persist(self) -> bool:
        """Best-effort save of learner state. Never raises."""
        if self.state_store is None:
            return True
        course_id = self.course.id
        results = [
            self.state_store.save_ledger(course_id, self.tracker.ledger),
            self.state_store.save_rewards(self.rewards.state(course_id)),
            self.state_store.save_quiz_results(course_id, self.quizzes.results()),
        ]
        if not all(results):
            self.notifications.push(PERSIST_FAILED_MESSAGE, "error")
            return False
        return True
