from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from companion.config import Settings, settings as default_settings
from companion.db import Database
from companion.errors import RelayError, UpstreamFailure
from companion.helplines import helplines_for
from companion.relay import ChatRelay
from companion.schemas import (
    ChatRequest,
    DetectEmotionRequest,
    DetectEmotionResponse,
    ErrorResponse,
    HealthResponse,
    HelplinesResponse,
    LogMoodRequest,
    LogMoodResponse,
    MoodEntryItem,
    MoodHistoryResponse,
)
from companion.utils.sentiment import analyze_message


logger = logging.getLogger(__name__)

CHAT_ERROR_RESPONSES = {
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_db(request: Request) -> Database:
    state = request.app.state
    if state.db is None:
        state.db = Database(state.settings.sqlite_path)
        state.owns_db = True
    return state.db


def get_relay(request: Request) -> ChatRelay:
    state = request.app.state
    if state.relay is None:
        # The crisis log opens lazily inside the relay so a bad SQLITE_PATH
        # cannot fail a chat request.
        state.relay = ChatRelay(state.settings, store=state.db, store_path=state.settings.sqlite_path)
        state.owns_relay = True
    return state.relay


def create_app(
    settings: Optional[Settings] = None,
    relay: Optional[ChatRelay] = None,
    db: Optional[Database] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if app.state.owns_relay and app.state.relay is not None:
            await app.state.relay.aclose()
        if app.state.owns_db and app.state.db is not None:
            app.state.db.close()

    app = FastAPI(title="Companion Chat Backend", lifespan=lifespan)
    app.state.settings = settings
    app.state.relay = relay
    app.state.db = db
    app.state.owns_relay = False
    app.state.owns_db = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Detected-Emotion", "X-Crisis-Detected"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        # The chat endpoint only ever answers with the {error} shape.
        if request.url.path == "/chat":
            logger.warning("Rejected malformed chat request: %s", exc.errors())
            return JSONResponse(UpstreamFailure().to_payload(), status_code=500)
        return await request_validation_exception_handler(request, exc)

    @app.post("/chat", responses=CHAT_ERROR_RESPONSES)
    async def chat(payload: ChatRequest, relay: ChatRelay = Depends(get_relay)):
        history = [turn.model_dump() for turn in payload.messages]
        try:
            result = await relay.relay(history, payload.user_message, payload.locale, user_id=payload.user_id)
        except RelayError as exc:
            if exc.status_code >= 500:
                logger.error("Chat relay failed: %s", exc.detail or exc)
            else:
                logger.warning("Chat relay refused (%s): %s", exc.status_code, exc.detail)
            return JSONResponse(exc.to_payload(), status_code=exc.status_code)
        except Exception:
            logger.exception("Unexpected chat error")
            return JSONResponse(
                {"error": "Something went wrong. I'm here for you - please try again."},
                status_code=500,
            )

        headers = dict(result.headers)
        headers["Cache-Control"] = "no-cache"
        return StreamingResponse(result.body, media_type="text/event-stream", headers=headers)

    @app.post("/detect_emotion", response_model=DetectEmotionResponse)
    def detect_emotion(payload: DetectEmotionRequest) -> DetectEmotionResponse:
        if not payload.user_message.strip():
            raise HTTPException(status_code=400, detail="user_message must not be empty")
        result = analyze_message(payload.user_message, payload.locale or settings.default_locale)
        return DetectEmotionResponse(**result)

    @app.post("/mood", response_model=LogMoodResponse)
    def log_mood(payload: LogMoodRequest, db: Database = Depends(get_db)) -> LogMoodResponse:
        timestamp = db.log_mood(
            emoji=payload.emoji,
            emotion=payload.emotion,
            intensity=payload.intensity,
            journal_note=payload.journal_note,
            user_id=payload.user_id,
        )
        return LogMoodResponse(status="logged", timestamp=timestamp)

    @app.get("/mood/history", response_model=MoodHistoryResponse)
    def mood_history(
        user_id: Optional[str] = None,
        last_n: Optional[int] = Query(None, ge=1, le=1000),
        db: Database = Depends(get_db),
    ) -> MoodHistoryResponse:
        items = db.get_mood_history(user_id=user_id, last_n=last_n)
        return MoodHistoryResponse(items=[MoodEntryItem(**it) for it in items])

    @app.get("/helplines", response_model=HelplinesResponse)
    def helplines(country: Optional[str] = None) -> HelplinesResponse:
        return HelplinesResponse(items=helplines_for(country))

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", upstream_configured=settings.upstream_configured)

    return app


app = create_app()

# To run locally: uvicorn companion.main:app --reload
