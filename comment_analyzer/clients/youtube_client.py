import json
import logging
import os
from typing import Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError
from googleapiclient.errors import HttpError

from comment_analyzer.errors import (
    AnalyzerError,
    CommentsDisabled,
    FetchFailed,
    QuotaExceeded,
    VideoNotFound,
)
from comment_analyzer.models import VideoInfo

logger = logging.getLogger(__name__)

MIN_COMMENT_LENGTH = 10
MAX_COMMENTS = 50

QUOTA_REASONS = {
    "quotaExceeded",
    "dailyLimitExceeded",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "forbidden",
    "keyInvalid",
    "keyExpired",
    "accessNotConfigured",
    "API_KEY_INVALID",
    "RATE_LIMIT_EXCEEDED",
}


def error_reasons(error: HttpError) -> set[str]:
    """Collect the machine-readable reasons from a Google API error body."""
    try:
        payload = json.loads(error.content.decode("utf-8"))
    except (AttributeError, UnicodeDecodeError, ValueError):
        return set()

    body = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(body, dict):
        return set()

    entries = []
    for key in ("errors", "details"):
        if isinstance(body.get(key), list):
            entries.extend(body[key])

    return {
        entry["reason"] for entry in entries
        if isinstance(entry, dict) and entry.get("reason")
    }


def classify_http_error(error: HttpError) -> AnalyzerError:
    status = error.resp.status
    reasons = error_reasons(error)

    if "commentsDisabled" in reasons:
        return CommentsDisabled()
    if status == 404 or "videoNotFound" in reasons:
        return VideoNotFound()
    if status in (401, 403, 429) or reasons & QUOTA_REASONS:
        return QuotaExceeded()
    return FetchFailed(f"YouTube API error {status}: {error.reason}")


def filter_comments(
    texts: list[Optional[str]],
    min_length: int = MIN_COMMENT_LENGTH,
    limit: int = MAX_COMMENTS,
) -> list[str]:
    kept = [text for text in texts if text and len(text) >= min_length]
    return kept[:limit]


class YouTubeClient:
    def __init__(self, api_key: Optional[str] = None, timeout: float = 10.0, service=None):
        self.api_key = api_key or os.getenv('YOUTUBE_API_KEY')
        self.timeout = timeout

        if service is None:
            if not self.api_key:
                raise ValueError("YouTube API key is required")
            service = build('youtube', 'v3', developerKey=self.api_key, cache_discovery=False)
        self.youtube = service

    def _execute(self, request) -> dict:
        # Fresh transport per call: httplib2.Http is not thread-safe and
        # carries the socket timeout for this request.
        try:
            return request.execute(http=httplib2.Http(timeout=self.timeout))
        except HttpError as e:
            raise classify_http_error(e) from e
        except (GoogleApiError, httplib2.HttpLib2Error, OSError) as e:
            raise FetchFailed(f"YouTube request failed: {e}") from e

    def get_video_info(self, video_id: str) -> VideoInfo:
        response = self._execute(self.youtube.videos().list(
            part='snippet',
            id=video_id
        ))

        items = response.get('items') or []
        if not items:
            raise VideoNotFound(f"No video found for id {video_id!r}")

        snippet = items[0].get('snippet', {})
        return VideoInfo(
            title=snippet.get('title', ''),
            channel_title=snippet.get('channelTitle', '')
        )

    def fetch_comments(self, video_id: str, max_results: int = MAX_COMMENTS) -> list[str]:
        response = self._execute(self.youtube.commentThreads().list(
            part='snippet',
            videoId=video_id,
            maxResults=max_results,
            order='relevance',
            textFormat='plainText'
        ))

        texts = []
        for item in response.get('items') or []:
            snippet = item['snippet']['topLevelComment']['snippet']
            texts.append(snippet.get('textDisplay', ''))

        comments = filter_comments(texts, limit=max_results)
        logger.debug(f"Kept {len(comments)} of {len(texts)} comments for {video_id}")
        return comments
