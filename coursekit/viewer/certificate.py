"""
Certificate renderer - Course completion certificate.

Provides:
- Certificate eligibility check
- Printable certificate card with learner name, course title, XP and badges
"""

import html
from datetime import date
from typing import Optional

from coursekit.schemas import Course, RewardState


def get_certificate_css() -> str:
    """Get CSS styles for certificate display."""
    return """
    <style>
    .certificate {
        background: #fffdf5;
        border: 6px double #C9A227;
        border-radius: 12px;
        padding: 2.5em 2em;
        margin: 1.5em auto;
        max-width: 720px;
        text-align: center;
        font-family: Georgia, 'Times New Roman', serif;
    }
    .certificate-heading {
        font-size: 0.95em;
        letter-spacing: 0.2em;
        text-transform: uppercase;
        color: #8d6e00;
        margin-bottom: 1.2em;
    }
    .certificate-name {
        font-size: 2em;
        font-weight: 700;
        color: #333;
        margin: 0.3em 0;
    }
    .certificate-text {
        color: #666;
        font-size: 1em;
    }
    .certificate-course {
        font-size: 1.4em;
        font-weight: 600;
        color: #1565C0;
        margin: 0.4em 0 1em 0;
    }
    .certificate-rewards {
        color: #444;
        font-size: 0.95em;
        margin-top: 1em;
    }
    .certificate-badge {
        display: inline-block;
        background: #fff3e0;
        color: #E65100;
        border-radius: 12px;
        padding: 0.2em 0.8em;
        margin: 0.2em;
        font-size: 0.85em;
    }
    .certificate-date {
        margin-top: 1.5em;
        color: #999;
        font-size: 0.85em;
    }
    </style>
    """


def is_certificate_eligible(course: Course, percent: int) -> bool:
    """A certificate is offered once every lesson is completed, if the course offers one."""
    return course.certificate_available and course.total_lessons > 0 and percent >= 100


def render_certificate(
    course: Course,
    learner_name: str,
    reward_state: Optional[RewardState] = None,
    issued: Optional[date] = None,
) -> str:
    """
    Render a completion certificate.

    Args:
        course: Completed course
        learner_name: Name printed on the certificate
        reward_state: Optional XP and badges earned in the course
        issued: Issue date (default: today)

    Returns:
        HTML string for the certificate
    """
    issued = issued or date.today()
    name = html.escape(learner_name.strip() or "Learner")

    parts = ['<div class="certificate">']
    parts.append('<div class="certificate-heading">Certificate of Completion</div>')
    parts.append('<div class="certificate-text">This certifies that</div>')
    parts.append(f'<div class="certificate-name">{name}</div>')
    parts.append('<div class="certificate-text">has successfully completed</div>')
    parts.append(f'<div class="certificate-course">{html.escape(course.title)}</div>')

    if reward_state is not None:
        parts.append(f'<div class="certificate-rewards">{reward_state.xp} XP earned</div>')
        if reward_state.badges:
            parts.append('<div>')
            for badge in reward_state.badges:
                parts.append(f'<span class="certificate-badge">{html.escape(badge)}</span>')
            parts.append('</div>')

    parts.append(f'<div class="certificate-date">Issued {issued.isoformat()}</div>')
    parts.append('</div>')
    return ''.join(parts)
