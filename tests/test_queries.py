"""
쿼리 본문 빌더 테스트
"""

from api.models import EventType
from search import queries


def test_match_all():
    assert queries.match_all() == {"match_all": {}}


def test_by_event_type_uses_upper_case_keyword():
    assert queries.by_event_type() == {"term": {"eventType": {"value": "WORKSHOP"}}}
    assert queries.by_event_type("TECH_TALK") == {"term": {"eventType": {"value": "TECH_TALK"}}}
    assert queries.by_event_type(EventType.TECH_TALK)["term"]["eventType"]["value"] == "TECH_TALK"


def test_by_title():
    assert queries.by_title("Ansible") == {"match": {"title": {"query": "Ansible"}}}


def test_by_title_after_combines_match_and_range():
    body = queries.by_title_after("2024-06-01", "Bootcamp")
    must = body["bool"]["must"]

    assert {"match": {"title": {"query": "Bootcamp"}}} in must
    assert {"range": {"datetime": {"gt": "2024-06-01"}}} in must
    assert len(must) == 2


def test_by_exact_title_is_phrase():
    assert queries.by_exact_title("Distributed Systems 101") == {
        "match_phrase": {"title": {"query": "Distributed Systems 101"}}
    }
