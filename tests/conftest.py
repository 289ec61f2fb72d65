"""
pytest 공통 fixture 정의
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import copy
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
from elasticsearch.exceptions import NotFoundError

from search.es_client import ESConnection
from search.event_service import EventService, get_event_service


def make_not_found(message: str = "not_found") -> NotFoundError:
    """테스트용 404 예외"""
    return NotFoundError(message, meta=MagicMock(status=404), body={"found": False})


def _parse_instant(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _tokens(text: str):
    return set(str(text).lower().replace(",", " ").split())


def _matches(query: Dict[str, Any], doc: Dict[str, Any]) -> bool:
    """쿼리 DSL 일부(match_all/term/match/match_phrase/range/bool)만 해석"""
    kind, body = next(iter(query.items()))

    if kind == "match_all":
        return True
    if kind == "bool":
        return all(_matches(q, doc) for q in body.get("must", []))

    field, cond = next(iter(body.items()))
    value = doc.get(field)

    if kind == "term":
        expected = cond["value"] if isinstance(cond, dict) else cond
        return value == expected or (isinstance(value, list) and expected in value)
    if kind == "match":
        q = cond["query"] if isinstance(cond, dict) else cond
        return value is not None and bool(_tokens(q) & _tokens(value))
    if kind == "match_phrase":
        q = cond["query"] if isinstance(cond, dict) else cond
        return value is not None and q.lower() in str(value).lower()
    if kind == "range":
        if value is None:
            return False
        stamp = _parse_instant(value)
        if "gt" in cond and not stamp > _parse_instant(cond["gt"]):
            return False
        if "gte" in cond and not stamp >= _parse_instant(cond["gte"]):
            return False
        return True
    raise AssertionError(f"unsupported query: {query}")


class FakeIndices:
    """AsyncElasticsearch.indices 테스트 더블"""

    def __init__(self, es: "FakeAsyncElasticsearch"):
        self.es = es

    async def exists(self, index: str) -> bool:
        return index in self.es.docs

    async def create(self, index: str, mappings: Optional[Dict[str, Any]] = None, **kwargs):
        self.es.docs[index] = {}
        self.es.mappings[index] = mappings or {}
        return {"acknowledged": True, "index": index}

    async def delete(self, index: str, **kwargs):
        if index not in self.es.docs:
            raise make_not_found(f"no such index [{index}]")
        del self.es.docs[index]
        self.es.mappings.pop(index, None)
        return {"acknowledged": True}

    async def get(self, index: str, **kwargs):
        if index not in self.es.docs:
            raise make_not_found(f"no such index [{index}]")
        return {
            index: {
                "aliases": {},
                "mappings": self.es.mappings[index],
                "settings": {"index": {"number_of_shards": "1"}},
            }
        }


class FakeAsyncElasticsearch:
    """인메모리 AsyncElasticsearch 테스트 더블 (이벤트 서비스가 쓰는 API만)"""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.mappings: Dict[str, Dict[str, Any]] = {}
        self.indices = FakeIndices(self)
        self.calls = []

    def _index_docs(self, index: str) -> Dict[str, Dict[str, Any]]:
        if index not in self.docs:
            # ES 기본 동작: 자동 인덱스 생성
            self.docs[index] = {}
            self.mappings[index] = {}
        return self.docs[index]

    async def ping(self) -> bool:
        return True

    async def index(self, index: str, id: str, document: Dict[str, Any], **kwargs):
        self.calls.append(("index", index, id, kwargs))
        docs = self._index_docs(index)
        result = "updated" if id in docs else "created"
        docs[id] = copy.deepcopy(document)
        return {"_index": index, "_id": id, "result": result}

    async def get(self, index: str, id: str, **kwargs):
        docs = self.docs.get(index)
        if docs is None or id not in docs:
            raise make_not_found(f"{index}/{id}")
        return {"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(docs[id])}

    async def update(self, index: str, id: str, doc: Dict[str, Any], **kwargs):
        self.calls.append(("update", index, id, kwargs))
        docs = self.docs.get(index)
        if docs is None or id not in docs:
            raise make_not_found(f"{index}/{id}")
        docs[id].update(copy.deepcopy(doc))
        return {"_index": index, "_id": id, "result": "updated"}

    async def delete(self, index: str, id: str, **kwargs):
        self.calls.append(("delete", index, id, kwargs))
        docs = self.docs.get(index)
        if docs is None or id not in docs:
            raise make_not_found(f"{index}/{id}")
        del docs[id]
        return {"_index": index, "_id": id, "result": "deleted"}

    async def search(self, index: str, query: Dict[str, Any], size: int = 10, **kwargs):
        self.calls.append(("search", index, query, size))
        docs = self.docs.get(index)
        if docs is None:
            raise make_not_found(f"no such index [{index}]")
        hits = [
            {"_index": index, "_id": doc_id, "_score": 1.0, "_source": copy.deepcopy(doc)}
            for doc_id, doc in docs.items()
            if _matches(query, doc)
        ]
        return {"hits": {"total": {"value": len(hits)}, "hits": hits[:size]}}

    async def bulk(self, operations, **kwargs):
        self.calls.append(("bulk", len(operations), kwargs))
        items = []
        for action, source in zip(operations[0::2], operations[1::2]):
            meta = action["index"]
            self._index_docs(meta["_index"])[meta["_id"]] = copy.deepcopy(source)
            items.append({"index": {"_id": meta["_id"], "status": 201}})
        return {"errors": False, "items": items}

    async def close(self):
        pass


@pytest.fixture
def fake_es() -> FakeAsyncElasticsearch:
    return FakeAsyncElasticsearch()


@pytest.fixture
def event_service(fake_es) -> EventService:
    """인메모리 ES 를 쓰는 EventService"""
    connection = ESConnection(hosts=["http://testserver:9200"])
    connection._async_client = fake_es
    return EventService(connection=connection, index_name="events", refresh="wait_for")


@pytest.fixture
def client(event_service):
    """EventService 를 주입한 FastAPI TestClient (lifespan 미실행)"""
    from fastapi.testclient import TestClient
    from api.main import app

    app.dependency_overrides[get_event_service] = lambda: event_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_event_body() -> Dict[str, Any]:
    """테스트용 이벤트 본문"""
    return {
        "title": "Kafka Streams Deep Dive",
        "eventType": "TECH_TALK",
        "datetime": "2024-09-10T16:00:00Z",
        "place": "Room 4, Amsterdam",
        "description": "Stateful stream processing",
        "subTopics": ["Kafka", "State stores"],
    }


@pytest.fixture
def not_found_error() -> NotFoundError:
    return make_not_found()
