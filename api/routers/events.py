"""
이벤트 CRUD / 쿼리 API 라우터

엔드포인트:
- POST   /bulk-init                    - 샘플 이벤트 5건 시드
- POST   /store                        - 이벤트 저장 (ID 반환)
- GET    /get/{id}                     - 이벤트 조회
- POST   /update/{id}                  - 이벤트 갱신
- DELETE /delete/{id}                  - 이벤트 삭제
- GET    /query/all                    - 전체
- GET    /query/workshops              - WORKSHOP 유형
- GET    /query/title/{title}          - 제목 검색
- GET    /query/after/{date}/{title}   - 제목 검색 + 일시 이후
- POST   /create-index                 - 인덱스 재생성
- GET    /index                        - 인덱스 메타데이터
"""

import json
import logging
from typing import List

from elasticsearch.exceptions import ApiError, TransportError
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from api.config import DEFAULT_LIMIT, MAX_LIMIT
from api.log_context import log_context_dependency
from api.models import ElkEvent, ErrorResponse
from search.event_service import EventService, get_event_service

logger = logging.getLogger(__name__)

BACKEND_ERRORS = (ApiError, TransportError)

# APIRouter 생성 - 모든 요청에 로그 컨텍스트 부여
router = APIRouter(
    tags=["Events"],
    dependencies=[Depends(log_context_dependency)],
    responses={500: {"model": ErrorResponse}},
)


def backend_failure(action: str, error: Exception) -> HTTPException:
    """백엔드 오류를 500 응답으로 변환"""
    logger.error(f"{action} failed: {error}")
    return HTTPException(status_code=500, detail=f"{action} failed: {error}")


# ========================================
# CRUD
# ========================================

@router.post("/bulk-init", summary="샘플 이벤트 일괄 저장")
async def bulk_init(svc: EventService = Depends(get_event_service)):
    """고정 샘플 이벤트 5건을 id "1".."5" 로 저장"""
    try:
        count = await svc.bulk_init()
    except BACKEND_ERRORS as e:
        raise backend_failure("Bulk init", e)

    logger.info(f"Bulk initialised {count} events")
    return None


@router.post("/store", response_class=PlainTextResponse, summary="이벤트 저장")
async def store(event: ElkEvent, svc: EventService = Depends(get_event_service)):
    """
    이벤트 저장

    - **id** 가 없으면 생성
    - 응답 본문은 저장된 문서 ID
    """
    try:
        event_id = await svc.store(event)
    except BACKEND_ERRORS as e:
        raise backend_failure("Store", e)

    logger.info(f"Stored event {event_id}")
    return event_id


@router.get(
    "/get/{event_id}",
    response_model=ElkEvent,
    responses={404: {"model": ErrorResponse}},
    summary="이벤트 조회",
)
async def get_event(event_id: str, svc: EventService = Depends(get_event_service)):
    """이벤트 조회 - 없으면 404"""
    try:
        event = await svc.get(event_id)
    except BACKEND_ERRORS as e:
        raise backend_failure("Get", e)

    logger.info(f"Get event {event_id}")
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event not found: {event_id}")
    return event


@router.post("/update/{event_id}", summary="이벤트 갱신")
async def update_event(
    event_id: str,
    event: ElkEvent,
    svc: EventService = Depends(get_event_service),
):
    try:
        await svc.update(event_id, event)
    except BACKEND_ERRORS as e:
        raise backend_failure("Update", e)

    logger.info(f"Updated event {event_id}")
    return None


@router.delete("/delete/{event_id}", summary="이벤트 삭제")
async def delete_event(event_id: str, svc: EventService = Depends(get_event_service)):
    """이벤트 삭제 - 없는 ID 도 200"""
    try:
        await svc.delete(event_id)
    except BACKEND_ERRORS as e:
        raise backend_failure("Delete", e)

    logger.info(f"Deleted event {event_id}")
    return None


# ========================================
# 쿼리
# ========================================

@router.get("/query/all", response_model=List[ElkEvent], summary="전체 이벤트")
async def query_all(
    size: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    svc: EventService = Depends(get_event_service),
):
    try:
        return await svc.all(size=size)
    except BACKEND_ERRORS as e:
        raise backend_failure("Query all", e)


@router.get("/query/workshops", response_model=List[ElkEvent], summary="워크숍 이벤트")
async def query_workshops(
    size: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    svc: EventService = Depends(get_event_service),
):
    try:
        return await svc.workshops(size=size)
    except BACKEND_ERRORS as e:
        raise backend_failure("Query workshops", e)


@router.get("/query/title/{title}", response_model=List[ElkEvent], summary="제목 검색")
async def query_by_title(
    title: str,
    size: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    svc: EventService = Depends(get_event_service),
):
    try:
        return await svc.by_title(title, size=size)
    except BACKEND_ERRORS as e:
        raise backend_failure("Query by title", e)


@router.get(
    "/query/after/{date}/{title}",
    response_model=List[ElkEvent],
    summary="제목 검색 + 일시 이후",
)
async def query_after(
    date: str,
    title: str,
    size: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    svc: EventService = Depends(get_event_service),
):
    """
    제목이 일치하고 일시가 date 이후인 이벤트

    - **date**: ISO-8601 날짜/일시 (예: 2024-06-01)
    """
    try:
        return await svc.after_date_with_title(date, title, size=size)
    except BACKEND_ERRORS as e:
        raise backend_failure("Query after date", e)


# ========================================
# 인덱스
# ========================================

@router.post("/create-index", summary="인덱스 재생성")
async def create_index(svc: EventService = Depends(get_event_service)):
    """기존 인덱스를 삭제하고 다시 생성 (모든 문서 삭제)"""
    try:
        await svc.create_index(reset=True)
    except BACKEND_ERRORS as e:
        raise backend_failure("Create index", e)

    logger.info(f"Index '{svc.index_name}' created / reset")
    return None


@router.get("/index", response_class=PlainTextResponse, summary="인덱스 메타데이터")
async def index_info(svc: EventService = Depends(get_event_service)):
    logger.info(f"Get index {svc.index_name}")
    try:
        info = await svc.get_index()
    except BACKEND_ERRORS as e:
        raise backend_failure("Get index", e)

    return json.dumps(info, ensure_ascii=False)
