"""FastAPI server for the interview agent."""

# Load .env FIRST so LANGCHAIN_* variables are visible when @traceable
# decorators are evaluated at import time.
from dotenv import load_dotenv
load_dotenv()

from typing import List, Optional

from fastapi import BackgroundTasks, FastAPI, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from interview_agent.memory import MemoryBackendError, Turn
from interview_agent.utils.logging import get_logger
from interview_agent.workflow.orchestrator import (
    get_short_term_store,
    process_message,
    resolve_session_id,
)

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Session-Id",
}

app = FastAPI(
    title="Interview Agent",
    description=(
        "Voice/text interview agent with short-term (Redis) and "
        "long-term (SQL) conversation memory."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Session-Id"],
)


# ── Error rendering ────────────────────────────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if exc.status_code == 405:
        detail = "Method not allowed"
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


# ── Request / Response models ──────────────────────────────────────────────────

class InterviewRequest(BaseModel):
    userQuestion: Optional[str] = None
    sessionId: Optional[str] = None  # omit to use the default session

    model_config = {
        "json_schema_extra": {
            "example": {"userQuestion": "Tell me about yourself.", "sessionId": "candidate-42"}
        }
    }


class InterviewResponse(BaseModel):
    userQuestion: str
    botAnswer: str
    sessionId: str


class MemoryResponse(BaseModel):
    history: List[Turn]
    sessionId: str


class ClearMemoryResponse(BaseModel):
    success: bool
    message: str


# ── Routes ─────────────────────────────────────────────────────────────────────

@app.get("/health", summary="Health check")
def health_check() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok"}


@app.options("/text-interview", include_in_schema=False)
def text_interview_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(
    "/text-interview",
    response_model=InterviewResponse,
    summary="Ask the interview agent a question",
)
def text_interview(
    request: InterviewRequest,
    background_tasks: BackgroundTasks,
    session_id: Optional[str] = None,
    x_session_id: Optional[str] = Header(default=None),
):
    """
    Answer ``userQuestion`` in persona.

    The short-term transcript is updated after the response is sent; the
    long-term fact store is updated before it.
    """
    question = (request.userQuestion or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="No question provided.")

    try:
        result = process_message(
            question,
            session_id=request.sessionId or session_id or x_session_id,
            defer=background_tasks.add_task,
        )
    except Exception as exc:
        logger.error("text-interview failed: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "details": str(exc)},
            headers=CORS_HEADERS,
        )
    return JSONResponse(content=InterviewResponse(**result).model_dump(), headers=CORS_HEADERS)


@app.get(
    "/get-memory",
    response_model=MemoryResponse,
    summary="Retrieve the short-term transcript for a session",
)
def get_memory(
    session_id: Optional[str] = None,
    x_session_id: Optional[str] = Header(default=None),
):
    """Return the stored transcript, oldest turn first (empty when expired)."""
    sid = resolve_session_id(session_id or x_session_id)
    try:
        history = get_short_term_store().load(sid)
        return MemoryResponse(history=[Turn.model_validate(t) for t in history], sessionId=sid)
    except Exception as exc:
        logger.error("get-memory failed: %s", exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to load memory"})


@app.post(
    "/clear-memory",
    response_model=ClearMemoryResponse,
    summary="Delete the short-term transcript for a session",
)
def clear_memory(
    session_id: Optional[str] = None,
    x_session_id: Optional[str] = Header(default=None),
):
    """Long-term facts are kept."""
    sid = resolve_session_id(session_id or x_session_id)
    try:
        get_short_term_store().clear(sid)
    except MemoryBackendError as exc:
        logger.error("clear-memory failed: %s", exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to clear memory"})
    return ClearMemoryResponse(success=True, message="Memory cleared.")


# ── Entry point (local dev) ────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    from interview_agent.utils.config import get_config

    _server_cfg = get_config()["server"]
    uvicorn.run(
        "interview_agent.web_app.server:app",
        host=_server_cfg.get("host", "0.0.0.0"),
        port=int(_server_cfg.get("port", 8000)),
        reload=True,
    )
