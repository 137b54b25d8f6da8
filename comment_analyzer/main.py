import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from comment_analyzer.config import Settings, load_settings
from comment_analyzer.errors import AnalyzerError, InvalidRequest, MethodNotAllowed
from comment_analyzer.models import AnalysisRequest, AnalysisResponse
from comment_analyzer.orchestrator import CommentAnalyzer

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(error: type[AnalyzerError]) -> JSONResponse:
    envelope = AnalysisResponse.fail(error.code, error.message)
    return JSONResponse(status_code=error.status_code, content=envelope.to_json())


def create_app(
    analyzer: Optional[CommentAnalyzer] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.analyzer is None:
            app.state.analyzer = CommentAnalyzer.from_settings(settings)
            logger.info("YouTube and Gemini clients initialized")
        yield

    app = FastAPI(
        title="YouTube Comment Analyzer",
        description="Sentiment and topic analysis of YouTube comments using Gemini",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.analyzer = analyzer

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_request_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body: {exc.errors()}")
        return error_response(InvalidRequest)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Any method other than POST/OPTIONS on the analysis route lands here.
        if exc.status_code == 405:
            return error_response(MethodNotAllowed)
        return await http_exception_handler(request, exc)

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "service": "YouTube Comment Analyzer"}

    @app.post("/{path:path}")
    async def analyze_comments(body: AnalysisRequest, request: Request):
        if not body.video_url or not body.video_url.strip():
            return error_response(InvalidRequest)

        status_code, envelope = await request.app.state.analyzer.respond(body.video_url)
        return JSONResponse(status_code=status_code, content=envelope.to_json())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
