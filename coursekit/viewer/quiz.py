"""
Quiz renderer - Multiple-choice quiz display and results.

Provides:
- Quiz card rendering with numbered options
- Locked/answered state with correct/incorrect marking
- Quiz score summary
"""

import html
from typing import Optional

from coursekit.schemas import Quiz, QuizResult


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.8em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-options {
        list-style: none;
        padding: 0;
        margin: 0;
    }
    .quiz-option {
        background: white;
        border: 1px solid #ddd;
        border-radius: 8px;
        padding: 0.6em 1em;
        margin-bottom: 0.5em;
    }
    .quiz-option-chosen {
        border-color: #1976D2;
        font-weight: 600;
    }
    .quiz-option-correct {
        background: #e8f5e9;
        border-color: #388E3C;
    }
    .quiz-option-wrong {
        background: #ffebee;
        border-color: #C62828;
    }
    .quiz-feedback {
        margin-top: 1em;
        font-weight: 600;
    }
    .quiz-feedback-correct {
        color: #388E3C;
    }
    .quiz-feedback-wrong {
        color: #C62828;
    }
    .quiz-reward-hint {
        margin-top: 0.8em;
        font-size: 0.85em;
        color: #666;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def _option_classes(index: int, quiz: Quiz, result: Optional[QuizResult]) -> str:
    classes = ["quiz-option"]
    if result is None:
        return " ".join(classes)
    if index == result.chosen_index:
        classes.append("quiz-option-chosen")
    if index == quiz.answer_index:
        classes.append("quiz-option-correct")
    elif index == result.chosen_index:
        classes.append("quiz-option-wrong")
    return " ".join(classes)


def render_quiz(quiz: Quiz, result: Optional[QuizResult] = None, quiz_xp: Optional[int] = None) -> str:
    """
    Render a quiz card.

    Args:
        quiz: Quiz to display
        result: Recorded result; when given the quiz renders locked with
            the correct option marked
        quiz_xp: XP offered for a correct answer (shown before answering)

    Returns:
        HTML string for the quiz
    """
    parts = ['<div class="quiz-container">']
    parts.append('<div class="quiz-title">Quiz</div>')
    parts.append(f'<div class="quiz-question">{html.escape(quiz.question)}</div>')

    parts.append('<ol class="quiz-options">')
    for index, option in enumerate(quiz.options):
        parts.append(
            f'<li class="{_option_classes(index, quiz, result)}">{html.escape(option)}</li>'
        )
    parts.append('</ol>')

    if result is not None:
        if result.correct:
            parts.append('<div class="quiz-feedback quiz-feedback-correct">Correct!</div>')
        else:
            answer = html.escape(quiz.options[quiz.answer_index])
            parts.append(
                f'<div class="quiz-feedback quiz-feedback-wrong">Incorrect. The answer is: {answer}</div>'
            )
    elif quiz_xp:
        parts.append(f'<div class="quiz-reward-hint">Correct answer will grant +{quiz_xp} XP</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(score_info: dict) -> str:
    """Render quiz score display (see QuizEvaluator.score)."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct</div>
    </div>
    """
