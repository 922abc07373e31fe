"""
StateStore - Namespaced load/save of CourseKit state over a KeyValueStore.

Keys look like ``<prefix>::<learner_id>::<kind>::<course_id>`` (courses are
learner independent: ``<prefix>::course::<course_id>``).

Loading is forgiving: an absent key yields the empty default, and a
corrupt or unreadable value yields the default with a warning. Saving is
best-effort: failures are logged and reported as False, never raised.
"""

import logging
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from coursekit.errors import PersistenceError
from coursekit.schemas import Course, ProgressLedger, QuizResult, RewardState

from .store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "lms_local_v2"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StateStore:
    """Serialize CourseKit models into a key-value store."""

    def __init__(self, store: KeyValueStore, prefix: str = DEFAULT_KEY_PREFIX, learner_id: str = "default"):
        """
        Initialize state store.

        Args:
            store: Backing KeyValueStore
            prefix: Key namespace
            learner_id: Learner identifier for multi-user support
        """
        self.store = store
        self.prefix = prefix
        self.learner_id = learner_id

    def key(self, kind: str, course_id: str) -> str:
        if kind == "course":
            return f"{self.prefix}::course::{course_id}"
        return f"{self.prefix}::{self.learner_id}::{kind}::{course_id}"

    # -------------------------------------------------------------------------
    # Raw access
    # -------------------------------------------------------------------------

    def _load_raw(self, key: str) -> Optional[Any]:
        try:
            return self.store.get(key)
        except PersistenceError as e:
            logger.warning(f"Failed to read {key}, using defaults: {e}")
            return None

    def _save_raw(self, key: str, value: Any) -> bool:
        try:
            self.store.set(key, value)
        except PersistenceError as e:
            logger.warning(f"Failed to write {key}: {e}")
            return False
        return True

    def _load_model(self, key: str, model: type[ModelT]) -> Optional[ModelT]:
        raw = self._load_raw(key)
        if raw is None:
            return None
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {model.__name__} at {key}: {e.error_count()} errors")
            return None

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def load_course(self, course_id: str) -> Optional[Course]:
        return self._load_model(self.key("course", course_id), Course)

    def save_course(self, course: Course) -> bool:
        return self._save_raw(self.key("course", course.id), course.model_dump(mode="json"))

    # -------------------------------------------------------------------------
    # Learner state
    # -------------------------------------------------------------------------

    def load_ledger(self, course_id: str) -> ProgressLedger:
        return self._load_model(self.key("progress", course_id), ProgressLedger) or ProgressLedger()

    def save_ledger(self, course_id: str, ledger: ProgressLedger) -> bool:
        return self._save_raw(self.key("progress", course_id), ledger.model_dump(mode="json"))

    def load_rewards(self, course_id: str) -> RewardState:
        state = self._load_model(self.key("rewards", course_id), RewardState)
        if state is None or state.course_id != course_id:
            return RewardState(course_id=course_id)
        return state

    def save_rewards(self, state: RewardState) -> bool:
        return self._save_raw(self.key("rewards", state.course_id), state.model_dump(mode="json"))

    def load_quiz_results(self, course_id: str) -> list[QuizResult]:
        raw = self._load_raw(self.key("quizzes", course_id))
        if not isinstance(raw, list):
            return []
        results = []
        for item in raw:
            try:
                results.append(QuizResult.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid quiz result for {course_id}: {e.error_count()} errors")
        return results

    def save_quiz_results(self, course_id: str, results: list[QuizResult]) -> bool:
        return self._save_raw(
            self.key("quizzes", course_id),
            [r.model_dump(mode="json") for r in results],
        )
