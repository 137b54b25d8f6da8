"""
Environment (.env) loading and shared settings.

YOUTUBE_API_KEY and GOOGLE_CLOUD_PROJECT are required to build the platform
clients; everything else has a default.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

REQUIRED_VARIABLES = ["YOUTUBE_API_KEY", "GOOGLE_CLOUD_PROJECT"]


class Settings(BaseModel):
    youtube_api_key: Optional[str] = None
    google_cloud_project: Optional[str] = None
    vertex_ai_location: str = "global"
    gemini_model: str = "gemini-2.5-pro"
    ai_stream_timeout: float = 30.0
    youtube_timeout: float = 10.0
    log_level: str = "INFO"

    def missing_variables(self) -> list[str]:
        values = {
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "GOOGLE_CLOUD_PROJECT": self.google_cloud_project,
        }
        return [name for name in REQUIRED_VARIABLES if not values[name]]

    def validate_required(self) -> "Settings":
        missing = self.missing_variables()
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        return self


def load_settings() -> Settings:
    return Settings(
        youtube_api_key=os.getenv("YOUTUBE_API_KEY"),
        google_cloud_project=os.getenv("GOOGLE_CLOUD_PROJECT"),
        vertex_ai_location=os.getenv("VERTEX_AI_LOCATION", "global"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-pro"),
        ai_stream_timeout=float(os.getenv("AI_STREAM_TIMEOUT", "30")),
        youtube_timeout=float(os.getenv("YOUTUBE_TIMEOUT", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
