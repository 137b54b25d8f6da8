from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoReference(BaseModel):
    raw_url: str
    video_id: str = Field(min_length=1)


class VideoInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    channel_title: str = ""


class AnalysisResult(BaseModel):
    sentiment: str = Field(min_length=1)
    topics: list[str] = Field(min_length=1)


class AnalysisData(CamelModel):
    video_id: str
    video_title: str
    comments_analyzed: int = 0
    analysis: AnalysisResult


class ErrorDetail(BaseModel):
    code: str
    message: str


class AnalysisRequest(CamelModel):
    video_url: Optional[str] = None


class AnalysisResponse(BaseModel):
    success: bool
    data: Optional[AnalysisData] = None
    error: Optional[ErrorDetail] = None
    timestamp: str = Field(default_factory=utc_timestamp)

    @classmethod
    def ok(cls, data: AnalysisData) -> "AnalysisResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "AnalysisResponse":
        return cls(success=False, error=ErrorDetail(code=code, message=message))

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
