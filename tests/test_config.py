from unittest.mock import MagicMock

import pytest

from comment_analyzer.config import Settings, load_settings
from comment_analyzer.diagnostics import run
from comment_analyzer.errors import QuotaExceeded


class TestSettings:
    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("YOUTUBE_API_KEY", "yt_key")
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
        monkeypatch.setenv("VERTEX_AI_LOCATION", "us-central1")
        monkeypatch.setenv("AI_STREAM_TIMEOUT", "12.5")

        settings = load_settings()

        assert settings.youtube_api_key == "yt_key"
        assert settings.google_cloud_project == "my-project"
        assert settings.vertex_ai_location == "us-central1"
        assert settings.ai_stream_timeout == 12.5
        assert settings.validate_required() is settings

    def test_defaults(self, monkeypatch):
        for name in ["VERTEX_AI_LOCATION", "GEMINI_MODEL", "AI_STREAM_TIMEOUT", "YOUTUBE_TIMEOUT"]:
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.vertex_ai_location == "global"
        assert settings.gemini_model == "gemini-2.5-pro"
        assert settings.ai_stream_timeout == 30.0
        assert settings.youtube_timeout == 10.0

    def test_missing_required(self):
        settings = Settings()
        assert settings.missing_variables() == ["YOUTUBE_API_KEY", "GOOGLE_CLOUD_PROJECT"]
        with pytest.raises(ValueError, match="GOOGLE_CLOUD_PROJECT"):
            settings.validate_required()


class TestDiagnostics:
    def test_success(self, capsys):
        client = MagicMock()
        client.fetch_comments.return_value = ["a long enough comment"] * 5

        assert run("dQw4w9WgXcQ", client=client) == 0

        out = capsys.readouterr().out
        assert "YouTube API test: SUCCESS" in out
        assert "Comments found: 5" in out
        client.fetch_comments.assert_called_once_with("dQw4w9WgXcQ", max_results=5)

    def test_failure(self, capsys):
        client = MagicMock()
        client.fetch_comments.side_effect = QuotaExceeded()

        assert run("dQw4w9WgXcQ", client=client) == 1

        out = capsys.readouterr().out
        assert "YouTube API test: FAILED" in out
        assert "API_QUOTA_EXCEEDED" in out

    def test_missing_key(self, monkeypatch, capsys):
        monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)

        assert run("dQw4w9WgXcQ") == 1
        assert "YouTube API key is required" in capsys.readouterr().out
