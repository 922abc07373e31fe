"""
Media helpers for lesson videos and attachments.

References to videos, thumbnails and files are opaque strings to the core;
these helpers only format durations and build data URIs for uploads.
"""

import base64
import re
from typing import Optional


_DURATION_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})$")


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as ``mm:ss`` (``h:mm:ss`` past an hour)."""
    total = max(0, int(round(seconds)))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_duration(text: Optional[str]) -> Optional[int]:
    """Parse ``mm:ss`` or ``h:mm:ss`` into seconds. Returns None if unparseable."""
    if not text:
        return None
    match = _DURATION_RE.match(text.strip())
    if not match:
        return None
    hours, minutes, secs = match.groups()
    return int(hours or 0) * 3600 + int(minutes) * 60 + int(secs)


def to_data_uri(data: bytes, mime_type: str = "application/octet-stream") -> str:
    """Encode raw upload bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
