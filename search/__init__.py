# Event Search Module
"""
Elasticsearch 기반 이벤트 저장/검색 모듈

주요 컴포넌트:
- es_client: Elasticsearch 연결 (Basic 인증, 동기/비동기)
- es_indices: events 인덱스 생성/재생성/조회
- event_service: 이벤트 CRUD 및 고정 쿼리
- queries: 쿼리 본문 빌더
"""

from .es_client import ESConnection
from .es_indices import EventIndexManager
from .event_service import EventService, get_event_service

__all__ = [
    "ESConnection",
    "EventIndexManager",
    "EventService",
    "get_event_service",
]
