from .youtube_client import YouTubeClient, filter_comments, classify_http_error
from .gemini_stream import GeminiStreamCollector, build_prompt, build_generation_config

__all__ = [
    "YouTubeClient",
    "filter_comments",
    "classify_http_error",
    "GeminiStreamCollector",
    "build_prompt",
    "build_generation_config",
]
