"""
Event Service API Pydantic 모델
"""

from datetime import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class EventType(str, Enum):
    """이벤트 유형"""
    WORKSHOP = "WORKSHOP"
    TECH_TALK = "TECH_TALK"


class ElkEvent(BaseModel):
    """이벤트 문서

    ES 문서와 HTTP 본문 모두 camelCase 필드명을 사용합니다.
    입력 시에는 snake_case 별칭(event_type, sub_topics)도 허용합니다.
    """
    id: Optional[str] = Field(default=None, description="문서 ID (없으면 저장 시 생성)")
    title: str = Field(..., description="제목")
    event_type: EventType = Field(
        ...,
        alias="eventType",
        validation_alias=AliasChoices("eventType", "event_type"),
        description="이벤트 유형",
    )
    datetime: dt = Field(..., description="일시 (ISO-8601)")
    place: str = Field(default="", description="장소")
    description: str = Field(default="", description="설명")
    sub_topics: List[str] = Field(
        default_factory=list,
        alias="subTopics",
        validation_alias=AliasChoices("subTopics", "sub_topics"),
        description="세부 주제 (정확 일치 필터용)",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "title": "Ansible Automation Workshop",
                "eventType": "WORKSHOP",
                "datetime": "2024-05-30T09:00:00Z",
                "place": "Lab 1, London",
                "description": "Hands-on with Ansible playbooks",
                "subTopics": ["YAML", "Idempotence", "Role reuse"]
            }
        }

    def to_document(self) -> dict:
        """ES 저장용 문서 (camelCase, ISO-8601 일시)"""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_hit(cls, hit: dict) -> "ElkEvent":
        """ES hit/get 응답에서 이벤트 복원 (id 없으면 _id 사용)"""
        source = dict(hit.get("_source") or {})
        if not source.get("id"):
            source["id"] = hit.get("_id")
        return cls.model_validate(source)


class ErrorResponse(BaseModel):
    """오류 응답"""
    error: str = Field(..., description="오류 메시지")
    detail: Optional[str] = Field(default=None, description="상세 정보")
