"""
QuizEvaluator - Grade quiz submissions and remember results.

Correctness is `chosen_index == quiz.answer_index`. The evaluator records
the latest result per quiz id; locking a quiz after its first submission
is the job of the learner-facing layer (LearnerSession).
"""

from datetime import datetime
from typing import Callable, Iterable, Optional

from coursekit.schemas import Quiz, QuizResult


class QuizEvaluator:
    """Evaluate quizzes and track results by quiz id."""

    def __init__(
        self,
        results: Optional[Iterable[QuizResult]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.clock = clock or datetime.now
        self._results: dict[str, QuizResult] = {r.quiz_id: r for r in results or []}

    def submit(self, quiz: Quiz, chosen_index: int) -> QuizResult:
        """
        Grade a submission.

        Raises:
            ValueError: If chosen_index is not a valid option index
        """
        if not 0 <= chosen_index < len(quiz.options):
            raise ValueError(
                f"Option {chosen_index} out of range for quiz {quiz.id} ({len(quiz.options)} options)"
            )
        result = QuizResult(
            quiz_id=quiz.id,
            chosen_index=chosen_index,
            correct=quiz.is_correct(chosen_index),
            answered_at=self.clock(),
        )
        self._results[quiz.id] = result
        return result

    def result(self, quiz_id: str) -> Optional[QuizResult]:
        return self._results.get(quiz_id)

    def is_answered(self, quiz_id: str) -> bool:
        return quiz_id in self._results

    def results(self) -> list[QuizResult]:
        return list(self._results.values())

    def reset(self, quiz_id: str) -> None:
        self._results.pop(quiz_id, None)

    def score(self, quizzes: list[Quiz]) -> dict:
        """
        Summarize answered quizzes.

        Args:
            quizzes: Quizzes in scope (e.g. all quizzes of a course)

        Returns:
            Dict with score info
        """
        total = len(quizzes)
        if total == 0:
            return {"score": 1.0, "percent": 100, "correct": 0, "answered": 0, "total": 0}

        answered = [self._results[q.id] for q in quizzes if q.id in self._results]
        correct = sum(1 for r in answered if r.correct)
        score = correct / total
        return {
            "score": round(score, 2),
            "percent": round(score * 100),
            "correct": correct,
            "answered": len(answered),
            "total": total,
        }
