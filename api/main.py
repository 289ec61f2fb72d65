"""
Event Service API
FastAPI 기반 REST API (Elasticsearch 이벤트 CRUD / 쿼리)
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from contextlib import asynccontextmanager

from elasticsearch.exceptions import ApiError, TransportError
from fastapi import FastAPI

from api.config import APP_NAME, APP_VERSION, ES_INDEX
from api.log_context import configure_logging, stamp_log_context
from api.routers.events import router as events_router
from search.event_service import get_event_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행"""
    configure_logging()
    stamp_log_context()
    logger.info("Event service starting up")

    # 시작 시: 인덱스가 없으면 생성
    service = get_event_service()
    try:
        created = await service.ensure_index()
    except (ApiError, TransportError) as e:
        logger.error(f"Index '{ES_INDEX}' check failed: {e}")
        raise
    if created:
        logger.info(f"Index '{ES_INDEX}' created")

    yield

    # 종료 시
    await service.close()
    logger.info("Event service stopped")


# FastAPI 앱 생성
app = FastAPI(
    title="Event Service API",
    description="Elasticsearch events 인덱스 CRUD 및 고정 쿼리",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


@app.get("/", tags=["Health"])
async def root():
    """API 상태 확인"""
    return {
        "status": "ok",
        "service": APP_NAME,
        "version": APP_VERSION
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """헬스 체크 (Elasticsearch ping 포함)"""
    service = get_event_service()
    es_ok = await service.connection.is_available_async()
    return {
        "status": "healthy" if es_ok else "degraded",
        "elasticsearch": "connected" if es_ok else "disconnected"
    }


# ========================================
# 이벤트 라우터 등록
# ========================================
app.include_router(events_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
