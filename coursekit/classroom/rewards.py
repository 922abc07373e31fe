"""
RewardAccumulator - Per-course XP totals and badge sets.

XP only ever grows through this interface and badges have set semantics.
Point values and badge names come from RewardPolicy.
"""

import logging
from typing import Iterable, Optional

from coursekit.schemas import RewardPolicy, RewardState

logger = logging.getLogger(__name__)


class RewardAccumulator:
    """Accumulate experience points and badges per course."""

    def __init__(
        self,
        states: Optional[Iterable[RewardState]] = None,
        policy: Optional[RewardPolicy] = None,
    ):
        self.policy = policy or RewardPolicy()
        self._states: dict[str, RewardState] = {}
        for state in states or []:
            self._states[state.course_id] = state

    def state(self, course_id: str) -> RewardState:
        """Get (creating if needed) the reward state for a course."""
        if course_id not in self._states:
            self._states[course_id] = RewardState(course_id=course_id)
        return self._states[course_id]

    def states(self) -> list[RewardState]:
        return list(self._states.values())

    def xp(self, course_id: str) -> int:
        return self.state(course_id).xp

    def badges(self, course_id: str) -> list[str]:
        return list(self.state(course_id).badges)

    def has_badge(self, course_id: str, name: str) -> bool:
        return name in self.state(course_id).badges

    def grant_xp(self, course_id: str, amount: int) -> int:
        """
        Add XP to a course total.

        Returns:
            The new total

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"XP grants must be non-negative, got {amount}")
        state = self.state(course_id)
        state.xp += amount
        return state.xp

    def award_badge(self, course_id: str, name: str) -> bool:
        """
        Award a badge unless the course already has it.

        Returns:
            True if the badge was newly awarded
        """
        state = self.state(course_id)
        if name in state.badges:
            return False
        state.badges.append(name)
        logger.info(f"Badge awarded for {course_id}: {name}")
        return True

    def grant_lesson_xp(self, course_id: str, lesson_id: str) -> bool:
        """
        Pay lesson-completion XP, at most once per lesson.

        Returns:
            True if XP was granted
        """
        state = self.state(course_id)
        if lesson_id in state.rewarded_lessons:
            return False
        state.rewarded_lessons.append(lesson_id)
        self.grant_xp(course_id, self.policy.lesson_xp)
        return True

    def grant_quiz_reward(self, course_id: str) -> None:
        self.grant_xp(course_id, self.policy.quiz_xp)
        self.award_badge(course_id, self.policy.quiz_badge)

    def grant_course_completion(self, course_id: str) -> bool:
        """
        Award the completion badge and bonus XP, once per course.

        Returns:
            True on the first call for this course, False afterwards
        """
        if not self.award_badge(course_id, self.policy.course_badge):
            return False
        self.grant_xp(course_id, self.policy.course_bonus_xp)
        return True
