"""Error taxonomy surfaced to API clients.

Each kind carries the HTTP status and the machine-readable code it maps to,
so call sites raise a kind and the response layer never has to inspect
messages to decide what went wrong.
"""
from typing import Optional


class AnalyzerError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500
    message = "An unexpected error occurred"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidRequest(AnalyzerError):
    code = "INVALID_REQUEST"
    status_code = 400
    message = "Request body must contain videoUrl field"


class InvalidUrl(AnalyzerError):
    code = "INVALID_URL"
    status_code = 400
    message = "Invalid or unsupported YouTube URL format"


class VideoNotFound(AnalyzerError):
    code = "VIDEO_NOT_FOUND"
    status_code = 404
    message = "Video does not exist or is private"


class CommentsDisabled(AnalyzerError):
    code = "COMMENTS_DISABLED"
    status_code = 400
    message = "Comments are disabled for this video"


class QuotaExceeded(AnalyzerError):
    code = "API_QUOTA_EXCEEDED"
    status_code = 429
    message = "YouTube API quota exceeded. Please try again later."


class FetchFailed(AnalyzerError):
    message = "Failed to fetch data from YouTube"


class AiServiceError(AnalyzerError):
    code = "AI_SERVICE_ERROR"
    status_code = 500
    message = "Error in AI analysis service"


class MethodNotAllowed(AnalyzerError):
    code = "METHOD_NOT_ALLOWED"
    status_code = 405
    message = "Only POST requests are allowed"
