"""
요청 단위 로그 컨텍스트

요청마다 추적용 메타데이터(message_id, uuid, 서비스명/버전, 호스트명, PID)를
ContextVar에 저장하고, logging.Filter로 모든 로그 레코드에 주입합니다.
비즈니스 로직이나 응답 내용에는 영향을 주지 않습니다.
"""

import contextvars
import logging
import os
import socket
import time
import uuid
from typing import Dict, Optional

from api.config import APP_NAME, APP_VERSION, LOG_LEVEL

CONTEXT_FIELDS = (
    "message_id",
    "uuid",
    "app_name",
    "app_version",
    "hostname",
    "process_id",
)

LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - %(name)s - "
    "[%(message_id)s %(uuid)s %(app_name)s/%(app_version)s "
    "%(hostname)s pid=%(process_id)s] %(message)s"
)

_log_context: contextvars.ContextVar[Dict[str, str]] = contextvars.ContextVar(
    "log_context", default={}
)


def generate_message_id() -> str:
    """타임스탬프 기반 메시지 ID"""
    return f"MSG-{int(time.time() * 1000)}"


def _resolve_hostname() -> str:
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


def build_log_context() -> Dict[str, str]:
    """새 추적 메타데이터 생성"""
    return {
        "message_id": generate_message_id(),
        "uuid": uuid.uuid4().hex,
        "app_name": APP_NAME,
        "app_version": APP_VERSION,
        "hostname": _resolve_hostname(),
        "process_id": str(os.getpid()),
    }


def stamp_log_context() -> Dict[str, str]:
    """현재 컨텍스트를 비우고 새 메타데이터로 교체"""
    ctx = build_log_context()
    _log_context.set(ctx)
    return ctx


def clear_log_context() -> None:
    _log_context.set({})


def get_log_context() -> Dict[str, str]:
    return dict(_log_context.get())


async def log_context_dependency() -> None:
    """FastAPI 라우터 의존성: 요청마다 로그 컨텍스트 갱신

    async 의존성이어야 엔드포인트와 같은 컨텍스트에서 실행됩니다.
    """
    stamp_log_context()


class LogContextFilter(logging.Filter):
    """로그 레코드에 컨텍스트 필드 주입 (없으면 '-')"""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _log_context.get()
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, ctx.get(field, "-"))
        return True


def configure_logging(level: Optional[str] = None) -> None:
    """루트 로거 설정 (포맷 + 컨텍스트 필터)"""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
    context_filter = LogContextFilter()
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, LogContextFilter) for f in handler.filters):
            handler.addFilter(context_filter)
