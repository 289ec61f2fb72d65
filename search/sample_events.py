"""
데모/초기화용 샘플 이벤트
"""

import uuid
from datetime import datetime
from typing import List

from api.models import ElkEvent, EventType

# (제목, 유형, 일시) - 시드 데이터와 데모 드라이버가 공유
SAMPLE_SCHEDULE = [
    ("Building Scalable Micro-services with Spring Boot", EventType.WORKSHOP, "2024-07-05T13:00:00Z"),
    ("Distributed Systems 101", EventType.TECH_TALK, "2024-06-12T17:30:00Z"),
    ("Ansible Automation Workshop", EventType.WORKSHOP, "2024-05-30T09:00:00Z"),
    ("Observability for Kubernetes", EventType.TECH_TALK, "2024-05-18T15:00:00Z"),
    ("Data Engineering Bootcamp", EventType.WORKSHOP, "2024-08-20T08:30:00Z"),
]

# id 1..5 에 대응하는 장소 / 설명 / 세부 주제
_SEED_DETAILS = [
    ("Tech-Hub – Room A, Berlin", "Hands-on Spring Boot workshop",
     ["DDD", "API Gateway", "Observability", "CI/CD"]),
    ("Auditorium 2, Dublin", "Intro to consistency models, CAP, etc.",
     ["CAP theorem", "Gossip", "Consensus"]),
    ("Lab 1, London", "Hands-on with Ansible playbooks",
     ["YAML", "Idempotence", "Role reuse"]),
    ("Hall C, Paris", "Logging, metrics, traces",
     ["Prometheus", "OpenTelemetry", "Jaeger"]),
    ("Campus West, Zurich", "From raw data to pipelines",
     ["Airflow", "Spark", "DeltaLake"]),
]


def _parse_instant(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def seed_events() -> List[ElkEvent]:
    """bulk-init 용 고정 이벤트 5건 (id "1".."5")"""
    events = []
    for i, ((title, event_type, when), (place, description, topics)) in enumerate(
        zip(SAMPLE_SCHEDULE, _SEED_DETAILS), start=1
    ):
        events.append(ElkEvent(
            id=str(i),
            title=title,
            event_type=event_type,
            datetime=_parse_instant(when),
            place=place,
            description=description,
            sub_topics=topics,
        ))
    return events


def demo_events() -> List[ElkEvent]:
    """데모 드라이버용 이벤트 (매번 새 id)"""
    return [
        ElkEvent(
            id=str(uuid.uuid4()),
            title=title,
            event_type=event_type,
            datetime=_parse_instant(when),
            place="TBA",
            description="Sample event for demo",
            sub_topics=["technology", "learning"],
        )
        for title, event_type, when in SAMPLE_SCHEDULE
    ]
