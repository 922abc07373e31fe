"""
Course renderer - Outline, progress and rewards display.

Provides:
- Course outline (chapters and lessons) with status indicators
- Progress bar with completed/total counts
- Reward summary with XP and badges
- Lesson header with duration and attachments
"""

import html

from coursekit.classroom import LessonAvailability, NavigationChapter, Navigator
from coursekit.schemas import Lesson, RewardState


STATUS_CLASSES = {
    LessonAvailability.COMPLETED: "outline-lesson-completed",
    LessonAvailability.IN_PROGRESS: "outline-lesson-in-progress",
    LessonAvailability.AVAILABLE: "outline-lesson-available",
    LessonAvailability.LOCKED: "outline-lesson-locked",
}


def get_course_css() -> str:
    """Get CSS styles for course display."""
    return """
    <style>
    .outline-chapter {
        margin: 1em 0 0.4em 0;
    }
    .outline-chapter-title {
        font-weight: 600;
        color: #333;
        display: flex;
        justify-content: space-between;
    }
    .outline-chapter-count {
        color: #999;
        font-size: 0.85em;
        font-weight: normal;
    }
    .outline-lesson {
        padding: 0.3em 0.6em;
        border-radius: 6px;
        color: #444;
    }
    .outline-lesson-current {
        background: #e3f2fd;
        font-weight: 600;
    }
    .outline-lesson-completed {
        color: #388E3C;
    }
    .outline-lesson-locked {
        color: #bbb;
    }
    .outline-indicator {
        display: inline-block;
        width: 1.4em;
    }
    .progress-wrap {
        margin: 0.8em 0;
    }
    .progress-track {
        background: #eee;
        border-radius: 8px;
        height: 10px;
        overflow: hidden;
    }
    .progress-fill {
        background: #1976D2;
        height: 100%;
    }
    .progress-label {
        color: #666;
        font-size: 0.85em;
        margin-top: 0.3em;
    }
    .reward-summary {
        background: #fff8e1;
        border-radius: 8px;
        padding: 0.8em 1em;
        margin: 0.8em 0;
    }
    .reward-xp {
        font-size: 1.3em;
        font-weight: 700;
        color: #F57F17;
    }
    .reward-badge {
        display: inline-block;
        background: #fff3e0;
        color: #E65100;
        border-radius: 12px;
        padding: 0.2em 0.8em;
        margin: 0.3em 0.3em 0 0;
        font-size: 0.85em;
    }
    .lesson-header-title {
        font-size: 1.5em;
        font-weight: 700;
        color: #333;
    }
    .lesson-header-meta {
        color: #999;
        font-size: 0.85em;
        margin-bottom: 0.8em;
    }
    .lesson-attachments a {
        display: block;
        color: #1565C0;
        margin: 0.2em 0;
    }
    </style>
    """


def render_outline_chapter(chapter: NavigationChapter, navigator: Navigator) -> str:
    """
    Render one chapter of the outline.

    Args:
        chapter: NavigationChapter from Navigator.get_navigation_tree()
        navigator: Navigator used for status indicators

    Returns:
        HTML string for the chapter
    """
    parts = ['<div class="outline-chapter">']
    parts.append('<div class="outline-chapter-title">')
    parts.append(f'<span>{html.escape(chapter.chapter.title)}</span>')
    parts.append(f'<span class="outline-chapter-count">{chapter.completed_count}/{chapter.total_count}</span>')
    parts.append('</div>')

    for nav in chapter.lessons:
        classes = ["outline-lesson", STATUS_CLASSES[nav.availability]]
        if nav.is_current:
            classes.append("outline-lesson-current")
        indicator = navigator.get_status_indicator(nav.lesson.id)
        parts.append(f'<div class="{" ".join(classes)}">')
        parts.append(f'<span class="outline-indicator">{indicator}</span>')
        parts.append(f'{html.escape(nav.lesson.title)}')
        parts.append('</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_outline(navigator: Navigator) -> str:
    """Render the full course outline with status indicators."""
    parts = [get_course_css()]
    for chapter in navigator.get_navigation_tree():
        parts.append(render_outline_chapter(chapter, navigator))
    return ''.join(parts)


def render_progress_bar(completed: int, total: int, percent: int) -> str:
    """Render a progress bar with a 'N/M lessons (P%)' label."""
    width = max(0, min(100, percent))
    return f"""
    <div class="progress-wrap">
        <div class="progress-track"><div class="progress-fill" style="width: {width}%"></div></div>
        <div class="progress-label">{completed}/{total} lessons ({percent}%)</div>
    </div>
    """


def render_reward_summary(reward_state: RewardState) -> str:
    """
    Render XP and badges for a course.

    Args:
        reward_state: RewardState for the course

    Returns:
        HTML string for the summary
    """
    parts = ['<div class="reward-summary">']
    parts.append(f'<div class="reward-xp">{reward_state.xp} XP</div>')
    if reward_state.badges:
        parts.append('<div>')
        for badge in reward_state.badges:
            parts.append(f'<span class="reward-badge">{html.escape(badge)}</span>')
        parts.append('</div>')
    else:
        parts.append('<div class="progress-label">No badges yet</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_lesson_header(lesson: Lesson, position: int, total: int) -> str:
    """Render lesson title, position, duration and attachment links."""
    parts = ['<div class="lesson-header">']
    parts.append(f'<div class="lesson-header-title">{html.escape(lesson.title)}</div>')
    parts.append(
        f'<div class="lesson-header-meta">Lesson {position} of {total} · {html.escape(lesson.duration or "--:--")}</div>'
    )
    if lesson.attachments:
        parts.append('<div class="lesson-attachments">')
        for attachment in lesson.attachments:
            parts.append(
                f'<a href="{html.escape(attachment.url)}" download="{html.escape(attachment.name)}">'
                f'{html.escape(attachment.name)}</a>'
            )
        parts.append('</div>')
    parts.append('</div>')
    return ''.join(parts)
