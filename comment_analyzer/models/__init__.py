from .analysis import (
    VideoReference,
    VideoInfo,
    AnalysisResult,
    AnalysisData,
    ErrorDetail,
    AnalysisRequest,
    AnalysisResponse,
    utc_timestamp,
)

__all__ = [
    "VideoReference",
    "VideoInfo",
    "AnalysisResult",
    "AnalysisData",
    "ErrorDetail",
    "AnalysisRequest",
    "AnalysisResponse",
    "utc_timestamp",
]
