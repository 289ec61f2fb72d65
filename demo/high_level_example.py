#!/usr/bin/env python3
"""
고수준 클라이언트 예제

일정 간격으로 샘플 이벤트를 일괄 저장하고, 샘플 쿼리를 실행한 뒤
특정 제목의 이벤트를 삭제하는 과정을 반복합니다.
반복마다 로그 컨텍스트(message_id, uuid 등)를 새로 부여합니다.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from elasticsearch import Elasticsearch
from elasticsearch.helpers import bulk

from api.config import DEMO_DELAY_SECONDS, ES_INDEX
from api.log_context import clear_log_context, configure_logging, stamp_log_context
from api.models import ElkEvent, EventType
from search import queries
from search.es_client import ESConnection
from search.es_indices import EventIndexManager
from search.sample_events import demo_events

logger = logging.getLogger(__name__)

DELETE_TITLE = "Ansible Automation Workshop"

# (설명, 쿼리)
SAMPLE_QUERIES = [
    ("All events", queries.match_all()),
    ("Workshops only", queries.by_event_type(EventType.WORKSHOP)),
    ("Specific event: Distributed Systems 101",
     queries.by_exact_title("Distributed Systems 101")),
    ("Data Engineering events after June 2024", {
        "bool": {
            "must": [
                queries.by_exact_title("Data Engineering Bootcamp"),
                {"range": {"datetime": {"gt": "2024-06-01"}}},
            ]
        }
    }),
]


def index_events(es: Elasticsearch, events: List[ElkEvent], index: str = ES_INDEX) -> int:
    """이벤트 일괄 저장 (매 호출마다 새 ID 부여)

    Returns:
        성공한 문서 수
    """
    actions = []
    for event in events:
        doc_id = str(uuid.uuid4())
        actions.append({
            "_index": index,
            "_id": doc_id,
            "_source": event.model_copy(update={"id": doc_id}).to_document(),
        })

    success, _ = bulk(es, actions, refresh="wait_for")
    return success


def run_query(
    es: Elasticsearch,
    description: str,
    query: Dict[str, Any],
    index: str = ES_INDEX,
) -> List[ElkEvent]:
    """쿼리 실행 후 결과 수와 상위 3건을 로그로 남김"""
    response = es.search(index=index, query=query)
    hits = response["hits"]["hits"]
    logger.info(f"Query '{description}' returned {len(hits)} results")

    events = [ElkEvent.from_hit(hit) for hit in hits]
    for event in events[:3]:
        logger.debug(f"  - {event.title} ({event.event_type.value})")
    return events


def run_sample_queries(es: Elasticsearch, index: str = ES_INDEX) -> Dict[str, int]:
    logger.info("Running sample queries")
    return {
        description: len(run_query(es, description, query, index))
        for description, query in SAMPLE_QUERIES
    }


def delete_events_by_title(es: Elasticsearch, title: str, index: str = ES_INDEX) -> int:
    """제목이 일치하는 이벤트를 모두 삭제

    Returns:
        삭제 요청한 문서 수
    """
    logger.info(f"Attempting to delete events with title: {title}")

    response = es.search(index=index, query=queries.by_exact_title(title))
    hits = response["hits"]["hits"]

    if not hits:
        logger.info(f"No events found with title: {title}")
        return 0

    actions = [
        {"_op_type": "delete", "_index": index, "_id": hit["_id"]}
        for hit in hits
    ]
    bulk(es, actions, refresh="wait_for")
    logger.info(f"Deleted {len(hits)} events with title: {title}")
    return len(hits)


def run_iteration(es: Elasticsearch, index: str = ES_INDEX) -> None:
    """한 번의 반복: 저장 → 쿼리 → 삭제"""
    events = demo_events()
    indexed = index_events(es, events, index)
    logger.info(f"Indexed {indexed} events successfully")

    run_sample_queries(es, index)
    delete_events_by_title(es, DELETE_TITLE, index)


def run(
    iterations: Optional[int] = None,
    delay: float = DEMO_DELAY_SECONDS,
    connection: Optional[ESConnection] = None,
    index: str = ES_INDEX,
) -> int:
    """
    데모 루프 실행

    Args:
        iterations: 반복 횟수 (None 이면 무한 반복)
        delay: 반복 간 대기 시간 (초)
        connection: ES 연결
        index: 대상 인덱스

    Returns:
        완료한 반복 횟수
    """
    stamp_log_context()
    logger.info("Event service starting up")

    connection = connection or ESConnection()
    es = connection.client
    logger.info("Connected to Elasticsearch")

    if EventIndexManager(connection, index).ensure_index_sync():
        logger.info(f"Index '{index}' created successfully")

    iteration = 0
    try:
        while iterations is None or iteration < iterations:
            iteration += 1
            stamp_log_context()
            logger.info(f"Starting iteration {iteration}")

            try:
                run_iteration(es, index)
            except Exception as e:
                logger.error(f"Error during iteration {iteration}: {e}", exc_info=True)

            logger.info(f"Iteration {iteration} complete, sleeping for {delay} seconds")
            time.sleep(delay)
            clear_log_context()
    finally:
        connection.close_sync()

    return iteration


def main(argv=None):
    """CLI 진입점"""
    parser = argparse.ArgumentParser(description="Event index demo loop")
    parser.add_argument("--iterations", "-n", type=int, default=None,
                        help="Number of iterations (default: run forever)")
    parser.add_argument("--delay", "-d", type=float, default=DEMO_DELAY_SECONDS,
                        help=f"Seconds between iterations (default: {DEMO_DELAY_SECONDS})")
    parser.add_argument("--index", "-i", default=ES_INDEX, help=f"Target index (default: {ES_INDEX})")
    args = parser.parse_args(argv)

    configure_logging()
    run(iterations=args.iterations, delay=args.delay, index=args.index)


if __name__ == "__main__":
    main()
