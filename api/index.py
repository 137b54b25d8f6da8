# Serverless entry point: platforms that import `app` from api/index.py
# serve the same application as `uvicorn comment_analyzer.main:app`.
from comment_analyzer.main import app

__all__ = ["app"]
