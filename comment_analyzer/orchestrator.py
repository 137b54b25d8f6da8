import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from comment_analyzer.clients import GeminiStreamCollector, YouTubeClient
from comment_analyzer.errors import AnalyzerError
from comment_analyzer.extraction import AnalysisExtractor
from comment_analyzer.models import AnalysisData, AnalysisResponse, AnalysisResult
from comment_analyzer.video_url import parse_video_reference

logger = logging.getLogger(__name__)

NO_COMMENTS_ANALYSIS = AnalysisResult(
    sentiment="Mixed",
    topics=["No comments available for analysis"],
)


class CommentAnalyzer:
    """Run one analysis request from video URL to response envelope.

    The YouTube and Gemini handles are created once per process and shared
    read-only between requests.
    """

    def __init__(
        self,
        youtube: YouTubeClient,
        collector: GeminiStreamCollector,
        extractor: Optional[AnalysisExtractor] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.youtube = youtube
        self.collector = collector
        self.extractor = extractor or AnalysisExtractor()
        self.executor = executor or ThreadPoolExecutor(max_workers=3)

    @classmethod
    def from_settings(cls, settings) -> "CommentAnalyzer":
        settings.validate_required()
        youtube = YouTubeClient(api_key=settings.youtube_api_key, timeout=settings.youtube_timeout)
        collector = GeminiStreamCollector.from_settings(settings)
        return cls(youtube, collector)

    async def analyze(self, video_url: str) -> AnalysisData:
        logger.info(f"Processing video URL: {video_url}")
        reference = parse_video_reference(video_url)
        video_id = reference.video_id
        logger.info(f"Extracted video ID: {video_id}")

        loop = asyncio.get_event_loop()
        video_info = await loop.run_in_executor(self.executor, self.youtube.get_video_info, video_id)
        logger.info(f"Video title: {video_info.title}")

        comments = await loop.run_in_executor(self.executor, self.youtube.fetch_comments, video_id)
        logger.info(f"Fetched {len(comments)} comments")

        if not comments:
            return AnalysisData(
                video_id=video_id,
                video_title=video_info.title,
                comments_analyzed=0,
                analysis=NO_COMMENTS_ANALYSIS,
            )

        raw_response = await self.collector.analyze(comments)
        analysis = self.extractor.extract(raw_response)
        logger.info(
            f"Analysis completed: {analysis.sentiment} sentiment, {len(analysis.topics)} topics"
        )

        return AnalysisData(
            video_id=video_id,
            video_title=video_info.title,
            comments_analyzed=len(comments),
            analysis=analysis,
        )

    async def respond(self, video_url: str) -> tuple[int, AnalysisResponse]:
        try:
            data = await self.analyze(video_url)
        except AnalyzerError as e:
            logger.warning(f"Analysis failed with {e.code}: {e.detail}")
            return e.status_code, AnalysisResponse.fail(e.code, e.message)
        except Exception:
            logger.exception("Unexpected error in analyze")
            return 500, AnalysisResponse.fail("INTERNAL_ERROR", "An unexpected error occurred")

        return 200, AnalysisResponse.ok(data)
