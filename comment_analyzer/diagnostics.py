"""
Check the environment and YouTube API access before deploying.

    python -m comment_analyzer.diagnostics --video dQw4w9WgXcQ
"""
import argparse
import sys

from comment_analyzer.clients import YouTubeClient
from comment_analyzer.config import load_settings
from comment_analyzer.errors import AnalyzerError


def run(video_id: str, client: YouTubeClient = None) -> int:
    settings = load_settings()

    print("Testing environment variables...")
    print("YOUTUBE_API_KEY:", "SET" if settings.youtube_api_key else "NOT SET")
    print("GOOGLE_CLOUD_PROJECT:", settings.google_cloud_project or "NOT SET")
    print("VERTEX_AI_LOCATION:", settings.vertex_ai_location)

    try:
        client = client or YouTubeClient(api_key=settings.youtube_api_key, timeout=settings.youtube_timeout)
        comments = client.fetch_comments(video_id, max_results=5)
    except ValueError as e:
        print("YouTube API test: FAILED")
        print("Error:", e)
        return 1
    except AnalyzerError as e:
        print("YouTube API test: FAILED")
        print("Error:", e.detail)
        print("Error code:", e.code)
        return 1

    print("YouTube API test: SUCCESS")
    print("Comments found:", len(comments))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Verify configuration for the comment analyzer")
    parser.add_argument("--video", default="dQw4w9WgXcQ", help="video id used for the comment probe")
    args = parser.parse_args(argv)
    return run(args.video)


if __name__ == "__main__":
    sys.exit(main())
