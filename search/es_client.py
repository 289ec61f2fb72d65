"""
Elasticsearch 클라이언트

이벤트 서비스용 Elasticsearch 연결(동기/비동기)을 생성하고 관리합니다.
Basic 인증(사용자/비밀번호)으로 접속합니다.
"""

import logging
from typing import List, Optional, Tuple

from elasticsearch import AsyncElasticsearch, Elasticsearch
from elasticsearch.exceptions import ConnectionError

from api.config import ES_PASSWORD, ES_TIMEOUT, ES_USER, es_url

logger = logging.getLogger(__name__)


class ESConnection:
    """
    Elasticsearch 연결 관리자

    동기/비동기 클라이언트를 lazy 하게 생성합니다.
    커넥션 풀은 클라이언트 라이브러리 기본값을 그대로 사용합니다.

    사용 예:
        conn = ESConnection()
        conn.client.info()
        await conn.async_client.info()
    """

    def __init__(
        self,
        hosts: Optional[List[str]] = None,
        user: str = ES_USER,
        password: str = ES_PASSWORD,
        timeout: int = ES_TIMEOUT,
    ):
        """
        연결 초기화

        Args:
            hosts: ES 호스트 목록 (기본값: 환경변수 기반 URL)
            user: Basic 인증 사용자
            password: Basic 인증 비밀번호
            timeout: 요청 타임아웃 (초)
        """
        self.hosts = hosts or [es_url()]
        self.basic_auth: Tuple[str, str] = (user, password)
        self.timeout = timeout
        self._client: Optional[Elasticsearch] = None
        self._async_client: Optional[AsyncElasticsearch] = None

    @property
    def client(self) -> Elasticsearch:
        """동기 클라이언트 (lazy initialization)"""
        if self._client is None:
            self._client = Elasticsearch(
                hosts=self.hosts,
                basic_auth=self.basic_auth,
                request_timeout=self.timeout,
            )
        return self._client

    @property
    def async_client(self) -> AsyncElasticsearch:
        """비동기 클라이언트 (lazy initialization)"""
        if self._async_client is None:
            self._async_client = AsyncElasticsearch(
                hosts=self.hosts,
                basic_auth=self.basic_auth,
                request_timeout=self.timeout,
            )
        return self._async_client

    def is_available(self) -> bool:
        """ES 연결 상태 확인"""
        try:
            return self.client.ping()
        except ConnectionError:
            logger.warning("Elasticsearch connection failed")
            return False

    async def is_available_async(self) -> bool:
        """ES 연결 상태 확인 (비동기)"""
        try:
            return await self.async_client.ping()
        except ConnectionError:
            logger.warning("Elasticsearch connection failed")
            return False

    async def close(self):
        """비동기 클라이언트 연결 종료"""
        if self._async_client:
            await self._async_client.close()
            self._async_client = None

    def close_sync(self):
        """동기 클라이언트 연결 종료"""
        if self._client:
            self._client.close()
            self._client = None
