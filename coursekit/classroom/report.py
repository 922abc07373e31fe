"""
Course and lesson reports across enrolled learners.

Builds pandas DataFrames from courses and the progress ledgers of their
learners, for the admin report screens and CSV export.
"""

from typing import Iterable, Mapping

import pandas as pd

from coursekit.schemas import Course, LessonStatus, ProgressLedger


COURSE_REPORT_COLUMNS = ["id", "name", "enrolled", "completed", "in_progress", "not_started", "status"]
LESSON_REPORT_COLUMNS = ["lesson_id", "chapter", "title", "position", "completed", "learners", "completion_rate"]


def _course_state(course: Course, ledger: ProgressLedger) -> str:
    """Classify one learner's state in a course."""
    ids = [lesson.id for _, lesson in course.iter_lessons()]
    statuses = [
        ledger.entries[lid].status if lid in ledger.entries else LessonStatus.NOT_STARTED
        for lid in ids
    ]
    if ids and all(s == LessonStatus.COMPLETED for s in statuses):
        return "completed"
    if any(s != LessonStatus.NOT_STARTED for s in statuses):
        return "in_progress"
    return "not_started"


def course_report(
    courses: Iterable[Course],
    enrollments: Mapping[str, list[ProgressLedger]],
) -> pd.DataFrame:
    """
    One row per course with learner counts by state.

    Args:
        courses: Courses to report on
        enrollments: course_id -> ledgers of the learners enrolled in it

    Returns:
        DataFrame with COURSE_REPORT_COLUMNS
    """
    rows = []
    for course in courses:
        ledgers = enrollments.get(course.id, [])
        states = [_course_state(course, ledger) for ledger in ledgers]
        rows.append({
            "id": course.id,
            "name": course.title,
            "enrolled": len(ledgers),
            "completed": states.count("completed"),
            "in_progress": states.count("in_progress"),
            "not_started": states.count("not_started"),
            "status": "Active" if course.published else "Inactive",
        })
    return pd.DataFrame(rows, columns=COURSE_REPORT_COLUMNS)


def lesson_report(course: Course, ledgers: list[ProgressLedger]) -> pd.DataFrame:
    """
    One row per lesson with completion counts across learners.

    completion_rate is in [0, 1]; 0.0 when nobody is enrolled.
    """
    learners = len(ledgers)
    rows = []
    for position, (chapter, lesson) in enumerate(course.iter_lessons(), start=1):
        completed = sum(
            1 for ledger in ledgers
            if lesson.id in ledger.entries and ledger.entries[lesson.id].completed
        )
        rows.append({
            "lesson_id": lesson.id,
            "chapter": chapter.title,
            "title": lesson.title,
            "position": position,
            "completed": completed,
            "learners": learners,
            "completion_rate": round(completed / learners, 3) if learners else 0.0,
        })
    return pd.DataFrame(rows, columns=LESSON_REPORT_COLUMNS)


def filter_report(report: pd.DataFrame, query: str) -> pd.DataFrame:
    """Case-insensitive name filter used by the report search box."""
    q = query.strip()
    if not q or report.empty:
        return report
    return report[report["name"].str.contains(q, case=False, regex=False)].reset_index(drop=True)
