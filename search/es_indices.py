"""
Elasticsearch 인덱스 관리

이벤트 인덱스 생성, 삭제, 조회, 상태 확인 등을 담당합니다.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from elasticsearch import AsyncElasticsearch, Elasticsearch
from elasticsearch.exceptions import NotFoundError

from api.config import ES_INDEX
from search.es_client import ESConnection

logger = logging.getLogger(__name__)

# 매핑 파일 경로
MAPPINGS_DIR = Path(__file__).parent / "mappings"
EVENTS_MAPPING_PATH = MAPPINGS_DIR / "events.json"


def load_mapping(path: Path = EVENTS_MAPPING_PATH) -> Dict[str, Any]:
    """매핑 파일 로드 ({"mappings": {...}})"""
    if not path.exists():
        raise FileNotFoundError(f"Mapping file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class EventIndexManager:
    """
    이벤트 인덱스 관리자

    고정 스키마(text 5종 + keyword 패싯)로 인덱스를 생성/재생성하고
    메타데이터를 조회합니다. 웹 서비스는 비동기, CLI/데모는 동기 메서드를 씁니다.

    사용 예:
        manager = EventIndexManager()
        await manager.create_index(recreate=True)
        info = await manager.get_index_info()
    """

    def __init__(
        self,
        connection: Optional[ESConnection] = None,
        index_name: str = ES_INDEX,
    ):
        """
        인덱스 관리자 초기화

        Args:
            connection: ES 연결 (기본값: 환경변수 기반 새 연결)
            index_name: 관리 대상 인덱스명
        """
        self.connection = connection or ESConnection()
        self.index_name = index_name
        self._mapping: Optional[Dict[str, Any]] = None

    @property
    def client(self) -> Elasticsearch:
        """동기 클라이언트"""
        return self.connection.client

    @property
    def async_client(self) -> AsyncElasticsearch:
        """비동기 클라이언트"""
        return self.connection.async_client

    @property
    def mappings(self) -> Dict[str, Any]:
        if self._mapping is None:
            self._mapping = load_mapping()
        return self._mapping["mappings"]

    async def create_index(self, recreate: bool = False) -> bool:
        """
        인덱스 생성

        Args:
            recreate: 기존 인덱스 삭제 후 재생성 (모든 문서 삭제)

        Returns:
            새로 생성했으면 True, 이미 있어서 건너뛰었으면 False
        """
        exists = await self.async_client.indices.exists(index=self.index_name)

        if exists:
            if recreate:
                logger.info(f"Deleting existing index: {self.index_name}")
                await self.async_client.indices.delete(index=self.index_name)
            else:
                logger.debug(f"Index already exists: {self.index_name}")
                return False

        await self.async_client.indices.create(
            index=self.index_name,
            mappings=self.mappings,
        )
        logger.info(f"Index created: {self.index_name}")
        return True

    def create_index_sync(self, recreate: bool = False) -> bool:
        """인덱스 생성 (동기)"""
        exists = self.client.indices.exists(index=self.index_name)

        if exists:
            if recreate:
                logger.info(f"Deleting existing index: {self.index_name}")
                self.client.indices.delete(index=self.index_name)
            else:
                logger.debug(f"Index already exists: {self.index_name}")
                return False

        self.client.indices.create(index=self.index_name, mappings=self.mappings)
        logger.info(f"Index created: {self.index_name}")
        return True

    async def ensure_index(self) -> bool:
        """인덱스가 없을 때만 생성"""
        return await self.create_index(recreate=False)

    def ensure_index_sync(self) -> bool:
        """인덱스가 없을 때만 생성 (동기)"""
        return self.create_index_sync(recreate=False)

    async def get_index_info(self) -> Dict[str, Any]:
        """
        인덱스 메타데이터 조회

        Returns:
            aliases / mappings / settings 를 담은 dict
        """
        response = await self.async_client.indices.get(index=self.index_name)
        return response[self.index_name]

    def delete_index_sync(self) -> bool:
        """인덱스 삭제 (없으면 False)"""
        try:
            self.client.indices.delete(index=self.index_name)
        except NotFoundError:
            logger.info(f"Index does not exist: {self.index_name}")
            return False
        logger.info(f"Index deleted: {self.index_name}")
        return True

    def refresh_index_sync(self) -> None:
        """인덱싱된 문서를 검색 가능하게 만듭니다."""
        self.client.indices.refresh(index=self.index_name)
        logger.info(f"Index refreshed: {self.index_name}")

    def get_index_status_sync(self) -> Dict[str, Any]:
        """인덱스 존재 여부 및 문서 수"""
        if not self.client.indices.exists(index=self.index_name):
            return {"index": self.index_name, "exists": False, "docs_count": 0}

        count = self.client.count(index=self.index_name)["count"]
        return {"index": self.index_name, "exists": True, "docs_count": count}


# CLI 인터페이스
def main(argv=None):
    """CLI 진입점"""
    import argparse

    from api.log_context import configure_logging

    parser = argparse.ArgumentParser(description="Event index manager")
    parser.add_argument("action", choices=["create", "delete", "status", "refresh"])
    parser.add_argument("--index", "-i", default=ES_INDEX, help=f"Target index (default: {ES_INDEX})")
    parser.add_argument("--recreate", "-r", action="store_true", help="Recreate existing index")

    args = parser.parse_args(argv)
    configure_logging()

    manager = EventIndexManager(index_name=args.index)

    try:
        if args.action == "create":
            created = manager.create_index_sync(recreate=args.recreate)
            print(f"Create {args.index}: {'CREATED' if created else 'EXISTS'}")

        elif args.action == "delete":
            deleted = manager.delete_index_sync()
            print(f"Delete {args.index}: {'OK' if deleted else 'NOT EXISTS'}")

        elif args.action == "status":
            status = manager.get_index_status_sync()
            if status["exists"]:
                print(f"  {args.index}: {status['docs_count']:,} docs")
            else:
                print(f"  {args.index}: NOT EXISTS")

        elif args.action == "refresh":
            manager.refresh_index_sync()
            print(f"Refresh {args.index}: OK")

    finally:
        manager.connection.close_sync()


if __name__ == "__main__":
    main()
