"""
YouTube URL handling.
"""
import re
from typing import Optional

_URL_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)")
_BARE_ID = re.compile(r"^([a-zA-Z0-9_-]{11})$")


def extract_video_id(url: str) -> Optional[str]:
    """
    Video id from a watch/short/embed URL, or an 11-character bare id.

    >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ")
    'dQw4w9WgXcQ'
    """
    url = (url or "").strip()
    for pattern in (_URL_PATTERN, _BARE_ID):
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}?rel=0&modestbranding=1"


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
