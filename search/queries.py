"""
이벤트 검색 쿼리 본문

각 함수는 ES `query` 절에 들어갈 dict 를 반환합니다.
"""

from typing import Any, Dict

from api.models import EventType

Query = Dict[str, Any]


def match_all() -> Query:
    return {"match_all": {}}


def by_event_type(event_type: EventType = EventType.WORKSHOP) -> Query:
    """eventType keyword 정확 일치"""
    return {"term": {"eventType": {"value": EventType(event_type).value}}}


def by_title(title: str) -> Query:
    """title 전문 검색"""
    return {"match": {"title": {"query": title}}}


def by_title_after(date: str, title: str) -> Query:
    """title 전문 검색 AND datetime > date"""
    return {
        "bool": {
            "must": [
                by_title(title),
                {"range": {"datetime": {"gt": date}}},
            ]
        }
    }


def by_exact_title(title: str) -> Query:
    """title 구문 일치 (title 은 keyword 서브필드가 없으므로 match_phrase 사용)"""
    return {"match_phrase": {"title": {"query": title}}}
