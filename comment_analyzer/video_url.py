import re

from comment_analyzer.errors import InvalidUrl
from comment_analyzer.models import VideoReference


VIDEO_URL_PATTERNS = [
    re.compile(r'youtube\.com/watch\?(?:[^#\n]*&)?v=([^&\n?#]+)'),
    re.compile(r'youtu\.be/([^&\n?#]+)'),
    re.compile(r'youtube\.com/embed/([^&\n?#]+)'),
]


def extract_video_id(url: str) -> str:
    """Return the video id captured from a watch, short-link or embed URL.

    The captured token is passed through as-is; an id that merely looks
    plausible is rejected later by the metadata lookup.
    """
    for pattern in VIDEO_URL_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    raise InvalidUrl(f"Invalid YouTube URL: {url!r}")


def parse_video_reference(url: str) -> VideoReference:
    return VideoReference(raw_url=url, video_id=extract_video_id(url))
