import asyncio
import logging

from google import genai
from google.genai import types

from comment_analyzer.errors import AiServiceError

logger = logging.getLogger(__name__)

MAX_PROMPT_CHARS = 8000

PROMPT_TEMPLATE = """Analyze these YouTube comments and return JSON:

Comments: {comments}

Return JSON like this: {{"sentiment": "Positive", "topics": ["music", "nostalgia"]}}"""

SAFETY_CATEGORIES = [
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
]


def build_prompt(comments: list[str], max_chars: int = MAX_PROMPT_CHARS) -> str:
    text = "\n\n".join(comments)
    if len(text) > max_chars:
        text = text[:max_chars] + "..."
    return PROMPT_TEMPLATE.format(comments=text)


def build_generation_config(max_output_tokens: int = 1024) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=0.1,
        top_p=0.8,
        seed=0,
        max_output_tokens=max_output_tokens,
        safety_settings=[
            types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.OFF)
            for category in SAFETY_CATEGORIES
        ],
    )


class GeminiStreamCollector:
    """Stream a Gemini completion into a single string under a time budget."""

    def __init__(self, client, model: str = "gemini-2.5-pro", timeout: float = 30.0):
        """
        Args:
            client: a ``google.genai.Client``; only ``client.aio.models`` is used
            model: model name passed to every call
            timeout: seconds allowed for consuming the stream, counted from
                the first read rather than from the call itself
        """
        self.client = client
        self.model = model
        self.timeout = timeout
        self.config = build_generation_config()

    @classmethod
    def from_settings(cls, settings) -> "GeminiStreamCollector":
        client = genai.Client(
            vertexai=True,
            project=settings.google_cloud_project,
            location=settings.vertex_ai_location,
        )
        return cls(client, model=settings.gemini_model, timeout=settings.ai_stream_timeout)

    async def collect(self, prompt: str) -> str:
        try:
            stream = await self.client.aio.models.generate_content_stream(
                model=self.model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=self.config,
            )
        except Exception as e:
            raise AiServiceError(f"Failed to start AI stream: {e}") from e

        loop = asyncio.get_event_loop()
        iterator = stream.__aiter__()
        chunks = []
        deadline = loop.time() + self.timeout

        try:
            try:
                while True:
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        logger.info("Streaming timeout reached, processing partial response")
                        break
                    try:
                        chunk = await asyncio.wait_for(iterator.__anext__(), timeout=remaining)
                    except StopAsyncIteration:
                        break
                    except asyncio.TimeoutError:
                        logger.info("Streaming timeout reached, processing partial response")
                        break

                    if chunk.text:
                        chunks.append(chunk.text)
            finally:
                aclose = getattr(iterator, "aclose", None)
                if aclose is not None:
                    try:
                        await aclose()
                    except Exception:
                        logger.warning("Failed to close AI stream", exc_info=True)
        except Exception as e:
            raise AiServiceError(f"AI stream failed: {e}") from e

        response = "".join(chunks)
        logger.info(f"Raw AI response length: {len(response)}")
        logger.debug(f"Raw AI response: {response}")
        return response

    async def analyze(self, comments: list[str]) -> str:
        return await self.collect(build_prompt(comments))
