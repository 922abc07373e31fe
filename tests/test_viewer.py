"""
HTML renderer tests.
"""

from datetime import date, datetime

from coursekit.classroom import LessonAvailability, Navigator, ProgressTracker
from coursekit.schemas import Quiz, QuizResult, RewardState
from coursekit.viewer import (
    STATUS_CLASSES,
    get_certificate_css,
    get_course_css,
    get_quiz_css,
    is_certificate_eligible,
    render_certificate,
    render_lesson_header,
    render_outline,
    render_outline_chapter,
    render_progress_bar,
    render_quiz,
    render_quiz_score,
    render_reward_summary,
)


QUIZ = Quiz(id="q", question="Is <b> bold?", options=["yes", "no & maybe"], answer_index=0)


class TestQuizRenderer:
    """Test quiz card rendering."""

    def test_css(self):
        assert "<style>" in get_quiz_css()

    def test_unanswered(self):
        html = render_quiz(QUIZ, quiz_xp=25)
        assert "Is &lt;b&gt; bold?" in html
        assert "no &amp; maybe" in html
        assert "+25 XP" in html
        assert "quiz-feedback" not in html

    def test_wrong_answer_marks_correct_option(self):
        result = QuizResult(quiz_id="q", chosen_index=1, correct=False, answered_at=datetime(2024, 1, 1))
        html = render_quiz(QUIZ, result)
        assert "quiz-option-wrong" in html
        assert "quiz-option-correct" in html
        assert "The answer is: yes" in html

    def test_correct_answer(self):
        result = QuizResult(quiz_id="q", chosen_index=0, correct=True, answered_at=datetime(2024, 1, 1))
        html = render_quiz(QUIZ, result)
        assert "Correct!" in html
        assert "quiz-option-wrong" not in html

    def test_score(self):
        html = render_quiz_score({"percent": 50, "correct": 1, "total": 2})
        assert "50%" in html
        assert "1 of 2 correct" in html


class TestCourseRenderer:
    """Test outline, progress and reward rendering."""

    def test_outline(self, course):
        tracker = ProgressTracker()
        tracker.mark_complete("l-1")
        tracker.start_lesson("l-2")
        html = render_outline(Navigator(course, tracker))
        assert get_course_css() in html
        assert "Getting Started" in html
        assert "1/2" in html
        assert "✓" in html
        assert "→" in html
        assert "outline-lesson-current" in html

    def test_outline_chapter_status_classes(self, course):
        tracker = ProgressTracker()
        tracker.mark_complete("l-1")
        nav = Navigator(course, tracker, sequential=True)
        first, second = nav.get_navigation_tree()

        html = render_outline_chapter(first, nav)
        assert html.startswith('<div class="outline-chapter">')
        assert STATUS_CLASSES[LessonAvailability.COMPLETED] in html
        assert STATUS_CLASSES[LessonAvailability.AVAILABLE] in html
        assert "outline-lesson-current" not in html
        assert STATUS_CLASSES[LessonAvailability.LOCKED] in render_outline_chapter(second, nav)

    def test_progress_bar(self):
        html = render_progress_bar(1, 2, 50)
        assert "width: 50%" in html
        assert "1/2 lessons (50%)" in html

    def test_reward_summary(self):
        html = render_reward_summary(RewardState(course_id="c", xp=130, badges=["Course Completed"]))
        assert "130 XP" in html
        assert "Course Completed" in html

    def test_reward_summary_no_badges(self):
        assert "No badges yet" in render_reward_summary(RewardState(course_id="c"))

    def test_lesson_header(self, course):
        lesson = course.chapters[0].lessons[1]
        html = render_lesson_header(lesson, 2, 3)
        assert "Lesson 2 of 3" in html
        assert "08:30" in html
        assert 'download="setup-guide.pdf"' in html


class TestCertificate:
    """Test certificate eligibility and rendering."""

    def test_eligibility(self, course):
        assert is_certificate_eligible(course, 100)
        assert not is_certificate_eligible(course, 99)
        no_cert = course.model_copy(update={"certificate_available": False})
        assert not is_certificate_eligible(no_cert, 100)

    def test_render(self, course):
        state = RewardState(course_id=course.id, xp=130, badges=["Course Completed"])
        html = render_certificate(course, "Ada <Lovelace>", state, issued=date(2024, 3, 1))
        assert get_certificate_css()
        assert "Ada &lt;Lovelace&gt;" in html
        assert "React Fundamentals" in html
        assert "130 XP earned" in html
        assert "Issued 2024-03-01" in html

    def test_blank_name(self, course):
        assert "Learner" in render_certificate(course, "   ")
