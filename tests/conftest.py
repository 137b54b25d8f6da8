"""
Shared fixtures: a mocked YouTube discovery resource and Gemini client.
"""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError


def make_http_error(status: int, reason: str = None) -> HttpError:
    """Build an HttpError shaped like a YouTube Data API error response"""
    body = {"error": {"code": status, "message": "error", "errors": []}}
    if reason:
        body["error"]["errors"].append({"domain": "youtube", "reason": reason, "message": reason})
    return HttpError(httplib2.Response({"status": status}), json.dumps(body).encode("utf-8"))


def video_response(title="Never Gonna Give You Up", channel="Rick Astley"):
    return {"items": [{"snippet": {"title": title, "channelTitle": channel}}]}


def comments_response(texts):
    return {
        "items": [
            {"snippet": {"topLevelComment": {"snippet": {"textDisplay": text}}}}
            for text in texts
        ]
    }


def chunk(text):
    return SimpleNamespace(text=text)


async def stream_of(*texts):
    for text in texts:
        yield chunk(text)


@pytest.fixture
def youtube_service():
    """Mocked discovery resource; configure execute() per test"""
    service = MagicMock()
    service.videos.return_value.list.return_value.execute.return_value = video_response()
    service.commentThreads.return_value.list.return_value.execute.return_value = comments_response([])
    return service


@pytest.fixture
def genai_client():
    """Mocked google.genai client whose stream yields a complete answer"""
    client = MagicMock()
    client.aio.models.generate_content_stream = AsyncMock(
        side_effect=lambda **kwargs: stream_of('{"sentiment": "Positive", ', '"topics": ["music"]}')
    )
    return client
