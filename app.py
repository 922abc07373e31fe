"""
CourseKit - Course builder and learner preview

Streamlit application for editing a course and taking it as a learner,
with progress, XP, badges, quizzes and a completion certificate.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from coursekit.authoring import (
    CourseDraft,
    add_chapter,
    add_lesson,
    attach_quiz,
    rename_chapter,
    rename_lesson,
    update_course,
)
from coursekit.classroom import LearnerSession, LessonAvailability, lesson_report
from coursekit.sample import sample_course
from coursekit.storage import SqliteStore, StateStore
from coursekit.utils import load_settings, parse_duration, setup_logging
from coursekit.viewer import (
    get_certificate_css,
    get_course_css,
    get_quiz_css,
    render_certificate,
    render_lesson_header,
    render_progress_bar,
    render_quiz,
    render_reward_summary,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = load_settings()
setup_logging(SETTINGS.log_level)

st.set_page_config(
    page_title="CourseKit",
    page_icon="🎓",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "state_store" not in st.session_state:
        SETTINGS.db_path.parent.mkdir(parents=True, exist_ok=True)
        st.session_state.state_store = StateStore(
            SqliteStore(SETTINGS.db_path),
            prefix=SETTINGS.key_prefix,
        )

    if "draft" not in st.session_state:
        store = st.session_state.state_store
        course = sample_course()
        course = store.load_course(course.id) or course
        st.session_state.draft = CourseDraft(course)

    if "session" not in st.session_state:
        st.session_state.session = LearnerSession.open(
            st.session_state.draft.course,
            st.session_state.state_store,
            settings=SETTINGS,
        )

    if "current_lesson_id" not in st.session_state:
        st.session_state.current_lesson_id = st.session_state.session.navigator.get_recommended_lesson_id()

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "learn"  # learn, edit, report


# -----------------------------------------------------------------------------
# Sidebar: Course Outline
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with outline, progress and rewards."""
    session = st.session_state.session
    st.sidebar.title(f"🎓 {session.course.title}")

    st.sidebar.markdown(get_course_css(), unsafe_allow_html=True)
    st.sidebar.markdown(
        render_progress_bar(session.completed_count, session.total_lessons, session.percent),
        unsafe_allow_html=True,
    )
    st.sidebar.markdown(
        render_reward_summary(session.rewards.state(session.course.id)),
        unsafe_allow_html=True,
    )

    st.sidebar.divider()

    st.sidebar.subheader("View Mode")
    view_mode = st.sidebar.radio(
        "Select view",
        ["Learn", "Edit", "Report"],
        index=["learn", "edit", "report"].index(st.session_state.view_mode),
        horizontal=True,
        label_visibility="collapsed",
    )
    st.session_state.view_mode = view_mode.lower()

    if st.session_state.view_mode == "learn":
        render_outline_tree()


def render_outline_tree():
    """Render the chapter tree with lesson navigation."""
    nav = st.session_state.session.navigator

    st.sidebar.divider()
    st.sidebar.subheader("Outline")

    for nav_chapter in nav.get_navigation_tree():
        chapter = nav_chapter.chapter
        chapter_progress = f"({nav_chapter.completed_count}/{nav_chapter.total_count})"
        with st.sidebar.expander(f"**{chapter.title}** {chapter_progress}", expanded=True):
            for nav_lesson in nav_chapter.lessons:
                lesson = nav_lesson.lesson
                indicator = nav.get_status_indicator(lesson.id)
                disabled = nav_lesson.availability == LessonAvailability.LOCKED

                col1, col2 = st.columns([1, 9])
                with col1:
                    st.markdown(indicator)
                with col2:
                    if st.button(
                        lesson.title[:30] + "..." if len(lesson.title) > 30 else lesson.title,
                        key=f"lesson_{lesson.id}",
                        disabled=disabled,
                        use_container_width=True,
                    ):
                        select_lesson(lesson.id)


def select_lesson(lesson_id: str):
    """Select a lesson and update state."""
    st.session_state.current_lesson_id = lesson_id
    st.session_state.session.open_lesson(lesson_id)
    st.rerun()


def render_notifications():
    """Show and clear pending notifications."""
    session = st.session_state.session
    for note in list(session.notifications):
        if note.kind == "error":
            st.error(note.message)
        else:
            st.toast(note.message)
    session.notifications.clear()


# -----------------------------------------------------------------------------
# Main Content: Lesson View
# -----------------------------------------------------------------------------

def render_lesson_view():
    """Render the main lesson content."""
    session = st.session_state.session
    lesson_id = st.session_state.current_lesson_id
    if not lesson_id:
        st.info("This course has no lessons yet.")
        return

    lesson = session.navigator.get_lesson(lesson_id)
    if lesson is None:
        st.error(f"Lesson not found: {lesson_id}")
        return

    render_navigation_bar(lesson_id)

    pos, total = session.navigator.get_lesson_position(lesson_id)
    st.markdown(render_lesson_header(lesson, pos, total), unsafe_allow_html=True)

    if lesson.video_url:
        st.video(lesson.video_url)
        watched = st.slider(
            "Watched (seconds)",
            0,
            max(1, session.tracker.get_watch_seconds(lesson_id) + 60),
            session.tracker.get_watch_seconds(lesson_id),
            key=f"watch_{lesson_id}",
        )
        if st.button("Update watch position", key=f"watch_btn_{lesson_id}"):
            session.on_video_progress(lesson_id, watched, parse_duration(lesson.duration or ""))
            st.rerun()

    if lesson.content:
        st.markdown(lesson.content, unsafe_allow_html=True)

    render_quiz_section(lesson_id)
    render_completion_section(lesson_id)
    render_certificate_section()


def render_navigation_bar(lesson_id: str):
    """Render navigation bar with prev/next buttons."""
    nav = st.session_state.session.navigator
    pos, total = nav.get_lesson_position(lesson_id)

    prev_id = nav.get_previous_lesson_id(lesson_id)
    next_id = nav.get_next_lesson_id(lesson_id)

    col1, col2, col3 = st.columns([1, 2, 1])

    with col1:
        if prev_id and nav.is_lesson_available(prev_id):
            if st.button("← Previous", use_container_width=True):
                select_lesson(prev_id)

    with col2:
        st.markdown(f"<center>Lesson {pos} of {total}</center>", unsafe_allow_html=True)

    with col3:
        if next_id and nav.is_lesson_available(next_id):
            if st.button("Next →", use_container_width=True):
                select_lesson(next_id)

    st.divider()


def render_quiz_section(lesson_id: str):
    """Render the lesson's quiz, locked after the first answer."""
    session = st.session_state.session
    lesson = session.navigator.get_lesson(lesson_id)
    if lesson is None or lesson.quiz is None:
        return

    quiz = lesson.quiz
    st.divider()
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    result = session.quizzes.result(quiz.id)
    if result is not None:
        st.markdown(render_quiz(quiz, result), unsafe_allow_html=True)
        return

    st.markdown(render_quiz(quiz, quiz_xp=session.policy.quiz_xp), unsafe_allow_html=True)
    choice = st.radio(
        "Your answer",
        list(range(len(quiz.options))),
        format_func=lambda i: quiz.options[i],
        key=f"quiz_{quiz.id}",
    )
    if st.button("Submit answer", key=f"submit_{quiz.id}"):
        session.submit_quiz(lesson_id, choice)
        st.rerun()


def render_completion_section(lesson_id: str):
    """Render lesson completion section."""
    session = st.session_state.session

    st.divider()

    if session.tracker.is_lesson_completed(lesson_id):
        st.success("Lesson completed!")
        if st.button("Mark as incomplete"):
            session.toggle_complete(lesson_id)
            st.rerun()
    else:
        if st.button("Mark lesson as complete", type="primary", use_container_width=True):
            session.mark_complete(lesson_id)
            next_id = session.next_lesson_id(lesson_id)
            if next_id:
                st.session_state.current_lesson_id = next_id
            st.rerun()


def render_certificate_section():
    """Offer the certificate once the course is complete."""
    session = st.session_state.session
    if not session.certificate_eligible:
        return

    st.divider()
    st.subheader("Certificate")
    name = st.text_input("Name on certificate", value="Learner")
    st.markdown(get_certificate_css(), unsafe_allow_html=True)
    st.markdown(
        render_certificate(session.course, name, session.rewards.state(session.course.id)),
        unsafe_allow_html=True,
    )


# -----------------------------------------------------------------------------
# Edit View
# -----------------------------------------------------------------------------

def render_delete_prompt():
    """Ask for confirmation of a staged chapter or lesson delete."""
    draft = st.session_state.draft
    if draft.pending_prompt is None:
        return

    st.warning(draft.pending_prompt)
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Confirm delete", type="primary", use_container_width=True):
            draft.resolve_delete(True)
            st.rerun()
    with col2:
        if st.button("Cancel", use_container_width=True):
            draft.resolve_delete(False)
            st.rerun()


def render_edit_view():
    """Render the course tree editor."""
    draft = st.session_state.draft
    course = draft.course

    st.title("Edit Course")
    render_delete_prompt()

    title = st.text_input("Course title", value=course.title)
    description = st.text_area("Description", value=course.description or "")
    if title != course.title or description != (course.description or ""):
        draft.apply(update_course, title=title, description=description)

    for chapter in course.chapters:
        with st.expander(f"**{chapter.title}** ({len(chapter.lessons)} lessons)", expanded=True):
            new_title = st.text_input("Chapter title", value=chapter.title, key=f"ch_title_{chapter.id}")
            if new_title != chapter.title:
                draft.apply(rename_chapter, chapter.id, new_title)

            for lesson in chapter.lessons:
                col1, col2, col3 = st.columns([6, 2, 2])
                with col1:
                    lesson_title = st.text_input("Lesson", value=lesson.title, key=f"l_title_{lesson.id}")
                    if lesson_title != lesson.title:
                        draft.apply(rename_lesson, chapter.id, lesson.id, lesson_title)
                with col2:
                    if lesson.quiz is None and st.button("Add quiz", key=f"quiz_add_{lesson.id}"):
                        draft.apply(attach_quiz, chapter.id, lesson.id)
                        st.rerun()
                with col3:
                    if st.button("Delete", key=f"l_del_{lesson.id}"):
                        draft.request_delete(chapter.id, lesson.id)
                        st.rerun()

            if st.button("Add lesson", key=f"l_add_{chapter.id}"):
                draft.apply(add_lesson, chapter.id)
                st.rerun()
            if st.button("Delete chapter", key=f"ch_del_{chapter.id}"):
                draft.request_delete(chapter.id)
                st.rerun()

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Add chapter", use_container_width=True):
            draft.apply(add_chapter)
            st.rerun()
    with col2:
        if st.button("Save", type="primary", disabled=not draft.dirty, use_container_width=True):
            save_draft()
    with col3:
        if st.button("Discard changes", disabled=not draft.dirty, use_container_width=True):
            draft.discard()
            st.rerun()


def save_draft():
    """Persist the draft and swap it into the learner session."""
    draft = st.session_state.draft
    store = st.session_state.state_store
    if store.save_course(draft.course):
        draft.mark_saved()
        st.success("Course saved")
    else:
        st.error("Error saving course")

    pruned = st.session_state.session.apply_course_edit(draft.course)
    if pruned:
        logger.info(f"Pruned progress for removed lessons: {pruned}")
    if st.session_state.current_lesson_id in pruned:
        st.session_state.current_lesson_id = st.session_state.session.navigator.get_recommended_lesson_id()


# -----------------------------------------------------------------------------
# Report View
# -----------------------------------------------------------------------------

def render_report_view():
    """Render the lesson completion report for this learner."""
    session = st.session_state.session

    st.title("Lesson Report")
    report = lesson_report(session.course, [session.tracker.ledger])
    st.dataframe(report, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        report.to_csv(index=False),
        file_name=f"{session.course.id}-lessons.csv",
        mime="text/csv",
    )


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    render_notifications()

    if st.session_state.view_mode == "learn":
        render_lesson_view()
    elif st.session_state.view_mode == "edit":
        render_edit_view()
    elif st.session_state.view_mode == "report":
        render_report_view()


if __name__ == "__main__":
    main()
