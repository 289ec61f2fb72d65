"""
이벤트 저장/조회 서비스

HTTP 라우터의 각 호출을 Elasticsearch 클라이언트 호출 하나로 변환합니다.
백엔드 I/O 오류는 그대로 호출자에게 전파됩니다.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from elasticsearch import AsyncElasticsearch
from elasticsearch.exceptions import NotFoundError

from api.config import DEFAULT_LIMIT, ES_INDEX, ES_REFRESH
from api.models import ElkEvent, EventType
from search import queries
from search.es_client import ESConnection
from search.es_indices import EventIndexManager
from search.sample_events import seed_events

logger = logging.getLogger(__name__)


class EventService:
    """
    이벤트 문서 CRUD 및 고정 쿼리 4종

    사용 예:
        service = EventService()
        event_id = await service.store(event)
        workshops = await service.workshops()
    """

    def __init__(
        self,
        connection: Optional[ESConnection] = None,
        index_name: str = ES_INDEX,
        refresh: str = ES_REFRESH,
    ):
        """
        서비스 초기화

        Args:
            connection: ES 연결 (기본값: 환경변수 기반 새 연결)
            index_name: 이벤트 인덱스명
            refresh: 쓰기 요청의 refresh 정책
        """
        self.connection = connection or ESConnection()
        self.index_name = index_name
        self.refresh = refresh
        self.indices = EventIndexManager(self.connection, index_name)

    @property
    def client(self) -> AsyncElasticsearch:
        return self.connection.async_client

    # ========================================
    # 인덱스
    # ========================================

    async def ensure_index(self) -> bool:
        return await self.indices.ensure_index()

    async def create_index(self, reset: bool = True) -> bool:
        """인덱스 생성 (reset 이면 삭제 후 재생성)"""
        return await self.indices.create_index(recreate=reset)

    async def get_index(self) -> Dict[str, Any]:
        return await self.indices.get_index_info()

    # ========================================
    # CRUD
    # ========================================

    async def store(self, event: ElkEvent) -> str:
        """
        이벤트 저장

        id 가 없으면 UUID 를 생성합니다. 같은 id 의 기존 문서는 덮어씁니다.

        Returns:
            저장된 문서 ID
        """
        event_id = event.id or str(uuid.uuid4())
        document = event.model_copy(update={"id": event_id}).to_document()

        await self.client.index(
            index=self.index_name,
            id=event_id,
            document=document,
            refresh=self.refresh,
        )
        return event_id

    async def get(self, event_id: str) -> Optional[ElkEvent]:
        """이벤트 조회 (없으면 None)"""
        try:
            response = await self.client.get(index=self.index_name, id=event_id)
        except NotFoundError:
            return None

        if not response["found"]:
            return None
        return ElkEvent.from_hit({"_id": response["_id"], "_source": response["_source"]})

    async def update(self, event_id: str, event: ElkEvent) -> None:
        """주어진 필드로 문서 갱신 (id 필드는 경로의 id 로 고정)"""
        document = event.model_copy(update={"id": event_id}).to_document()
        await self.client.update(
            index=self.index_name,
            id=event_id,
            doc=document,
            refresh=self.refresh,
        )

    async def delete(self, event_id: str) -> bool:
        """이벤트 삭제 (없으면 False)"""
        try:
            await self.client.delete(
                index=self.index_name,
                id=event_id,
                refresh=self.refresh,
            )
        except NotFoundError:
            logger.info(f"Event not found for delete: {event_id}")
            return False
        return True

    # ========================================
    # 고정 쿼리
    # ========================================

    async def all(self, size: int = DEFAULT_LIMIT) -> List[ElkEvent]:
        return await self._search(queries.match_all(), size)

    async def workshops(self, size: int = DEFAULT_LIMIT) -> List[ElkEvent]:
        return await self._search(queries.by_event_type(EventType.WORKSHOP), size)

    async def by_title(self, title: str, size: int = DEFAULT_LIMIT) -> List[ElkEvent]:
        return await self._search(queries.by_title(title), size)

    async def after_date_with_title(
        self,
        date: str,
        title: str,
        size: int = DEFAULT_LIMIT,
    ) -> List[ElkEvent]:
        return await self._search(queries.by_title_after(date, title), size)

    async def _search(self, query: Dict[str, Any], size: int) -> List[ElkEvent]:
        """검색 실행 후 hit 순서대로 이벤트 반환"""
        response = await self.client.search(
            index=self.index_name,
            query=query,
            size=size,
        )
        hits = response["hits"]["hits"]
        logger.debug(f"ES search: query={query}, hits={len(hits)}")
        return [ElkEvent.from_hit(hit) for hit in hits]

    # ========================================
    # 시드
    # ========================================

    async def bulk_init(self) -> int:
        """
        고정 샘플 이벤트 5건을 id "1".."5" 로 일괄 저장

        Returns:
            저장 요청한 문서 수
        """
        operations: List[Dict[str, Any]] = []
        events = seed_events()
        for event in events:
            operations.append({"index": {"_index": self.index_name, "_id": event.id}})
            operations.append(event.to_document())

        response = await self.client.bulk(operations=operations, refresh=self.refresh)
        if response["errors"]:
            logger.warning(f"Bulk init finished with item errors: index={self.index_name}")
        return len(events)

    async def close(self):
        await self.connection.close()


# 싱글톤 인스턴스
_event_service: Optional[EventService] = None


def get_event_service() -> EventService:
    """EventService 싱글톤 반환 (FastAPI 의존성)"""
    global _event_service
    if _event_service is None:
        _event_service = EventService()
    return _event_service
