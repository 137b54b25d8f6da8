"""
Recover a ``{sentiment, topics}`` answer from raw model output.

The model is asked for a JSON object but its stream may be wrapped in prose
or a fenced code block, or cut off by the stream time budget. Candidates are
tried in a fixed order and the first one found is parsed; anything that
fails to parse or has the wrong shape falls back to a keyword scan of the
raw text, so ``AnalysisExtractor.extract`` always returns a usable result.

The truncation repair assumes the cut happened inside a string element of
the ``topics`` array, which is where the prompt's shape makes it most likely.
Other truncation points get a best-effort repair that may not parse.
"""
import json
import logging
import re
from typing import Callable, Optional

from comment_analyzer.models import AnalysisResult

logger = logging.getLogger(__name__)

RepairStrategy = Callable[[str], str]

OBJECT_SPAN = re.compile(r'\{[\s\S]*\}')
JSON_FENCE = re.compile(r'```json\s*(\{[\s\S]*?)\s*```')
ANY_FENCE = re.compile(r'```\s*(\{[\s\S]*?)\s*```')
INCOMPLETE_OBJECT = re.compile(r'\{[\s\S]*')
TRAILING_COMMA_BRACKET = re.compile(r',\s*\]')
TRAILING_COMMA_BRACE = re.compile(r',\s*\}')
WORD = re.compile(r'\b\w+\b')

FALLBACK_TOPIC = "Unable to analyze - no structured response from AI"

STOP_WORDS = frozenset([
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might",
    "can", "this", "that", "these", "those", "i", "you", "he", "she", "it",
    "we", "they", "me", "him", "her", "us", "them", "my", "your", "his",
    "its", "our", "their", "mine", "yours", "hers", "ours", "theirs",
])


def repair_truncated_json(fragment: str) -> str:
    """Close a JSON object that was cut off mid-stream.

    ``fragment`` starts at the first ``{`` of the response. Brace, bracket
    and quote counts are taken over the raw text, strings included.
    """
    missing_braces = fragment.count("{") - fragment.count("}")

    lines = fragment.split("\n")
    if lines[-1].count('"') % 2 == 1:
        lines[-1] += '"'
        logger.debug(f"Closed incomplete string: {lines[-1]}")

    for index in range(len(lines) - 1, -1, -1):
        stripped = lines[index].strip()
        if not stripped:
            continue
        if not stripped.endswith(("]", "}", ",")):
            lines[index] += ","
        break

    repaired = "\n".join(lines)

    missing_brackets = repaired.count("[") - repaired.count("]")
    if missing_brackets > 0:
        repaired += "]" * missing_brackets
    if missing_braces > 0:
        repaired += "}" * missing_braces

    repaired = TRAILING_COMMA_BRACKET.sub("]", repaired)
    repaired = TRAILING_COMMA_BRACE.sub("}", repaired)
    logger.debug(f"Completed JSON: {repaired}")
    return repaired


def fallback_analysis(text: str) -> AnalysisResult:
    lowered = text.lower()
    if "positive" in lowered:
        sentiment = "Positive"
    elif "negative" in lowered:
        sentiment = "Negative"
    else:
        sentiment = "Mixed"

    topics = []
    for word in WORD.findall(text):
        if len(word) <= 3 or word.lower() in STOP_WORDS or word in topics:
            continue
        topics.append(word)
        if len(topics) == 5:
            break

    return AnalysisResult(sentiment=sentiment, topics=topics or [FALLBACK_TOPIC])


class AnalysisExtractor:
    def __init__(self, repair: RepairStrategy = repair_truncated_json):
        self.repair = repair

    def find_candidate(self, text: str) -> Optional[str]:
        match = OBJECT_SPAN.search(text)
        if match:
            logger.debug("Using brace-delimited span")
            return match.group(0)

        for pattern in (JSON_FENCE, ANY_FENCE):
            match = pattern.search(text)
            if match:
                logger.debug(f"Using fenced block matched by {pattern.pattern!r}")
                return match.group(1)

        match = INCOMPLETE_OBJECT.search(text)
        if match:
            logger.info("Found incomplete JSON, attempting to complete it")
            return self.repair(match.group(0))

        return None

    def extract(self, text: str) -> AnalysisResult:
        text = text or ""
        candidate = self.find_candidate(text)
        if candidate is None:
            logger.warning("Could not extract JSON from AI response, using text fallback")
            return fallback_analysis(text)

        result = parse_analysis(candidate)
        if result is None:
            logger.warning("AI response did not parse as an analysis object, using text fallback")
            return fallback_analysis(text)
        return result


def parse_analysis(candidate: str) -> Optional[AnalysisResult]:
    try:
        payload = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug(f"JSON parse error: {e}; attempted to parse: {candidate}")
        return None

    if not isinstance(payload, dict):
        return None

    sentiment = payload.get("sentiment")
    topics = payload.get("topics")
    if not isinstance(sentiment, str) or not sentiment.strip():
        return None
    if not isinstance(topics, list) or not topics:
        return None
    if not all(isinstance(topic, str) for topic in topics):
        return None

    return AnalysisResult(sentiment=sentiment, topics=topics)


_default_extractor = AnalysisExtractor()


def extract_analysis(text: str) -> AnalysisResult:
    return _default_extractor.extract(text)
