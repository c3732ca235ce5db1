"""
Transcript Summarizer API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.summarize import router as summarize_router
from api.users import router as users_router
from auth.jwt import TokenService
from auth.routes import router as login_router
from config.settings import Settings, load_settings
from core.summarizer import Summarizer
from database.session import build_engine, build_session_factory, create_tables
from utils.llm_providers import BaseLLMProvider, get_llm_provider

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("httpcore", "httpx", "openai", "anthropic", "aiosqlite"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    llm_provider: Optional[BaseLLMProvider] = None,
) -> FastAPI:
    """
    Build the application. Everything process-wide (settings, token
    service, DB engine, summarizer) is created here once and shared
    through ``app.state``.
    """
    settings = settings or load_settings()
    engine = build_engine(settings.database_url, echo=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Creating database tables…")
        await create_tables(engine)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Transcript Summarizer API",
        version="1.0.0",
        description="User accounts, login, and token-gated text summarization.",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    if llm_provider is None:
        llm_provider = get_llm_provider(
            settings.llm_provider,
            api_key=settings.llm_api_key,
            default_model=settings.summary_model,
        )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        expiry_seconds=settings.jwt_expiry_seconds,
        algorithm=settings.jwt_algorithm,
    )
    app.state.summarizer = Summarizer(
        llm_provider,
        model=settings.summary_model,
        temperature=settings.summary_temperature,
        max_tokens=settings.summary_max_tokens,
    )

    # Routes
    app.include_router(login_router, prefix="/api/v1/login")
    app.include_router(users_router, prefix="/api/v1/user")
    app.include_router(summarize_router, prefix="/api/v1/summarize")

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


settings = load_settings()
configure_logging(settings.debug)
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
