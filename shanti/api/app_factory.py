"""
App Factory
===========
FastAPI 앱 생성 팩토리 (미들웨어, 라우터 등록)
"""

import logging
import os
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shanti.api.dependencies import limiter

logger = logging.getLogger(__name__)


def create_app(
    lifespan: Callable[..., Any] | None = None,
) -> FastAPI:
    """
    FastAPI 앱 생성 및 설정

    Args:
        lifespan: Optional lifespan async context manager for startup/shutdown.

    Returns:
        설정 완료된 FastAPI 인스턴스
    """
    kwargs: dict[str, Any] = {
        "title": "Shanti Guide API",
        "description": "페르소나 가이드 응답 오케스트레이션 (검색 + 생성 + 안전 필터)",
        "version": "1.0.0",
    }
    if lifespan is not None:
        kwargs["lifespan"] = lifespan

    app = FastAPI(**kwargs)

    # Rate Limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    allowed_origins = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:8000,http://127.0.0.1:8000"
    ).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_routers(app)

    return app


def _register_routers(app: FastAPI) -> None:
    """라우터 등록"""
    from shanti.api.routes.community import router as community_router
    from shanti.api.routes.guide import router as guide_router
    from shanti.api.routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(guide_router)
    app.include_router(community_router)
