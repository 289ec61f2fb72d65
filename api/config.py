"""
Event Service API 설정
"""
import os

from dotenv import load_dotenv

# .env 파일 로드 (있을 때만)
load_dotenv()

# Elasticsearch 접속 설정 - 환경변수 우선
ES_HOST = os.getenv("ES_HOST", "localhost")
ES_PORT = int(os.getenv("ES_PORT", "9200"))
ES_SCHEME = os.getenv("ES_SCHEME", "http")
ES_USER = os.getenv("ES_USER", "elastic")
ES_PASSWORD = os.getenv("ES_PASSWORD", "changeme")
ES_TIMEOUT = int(os.getenv("ES_TIMEOUT", "30"))

# 이벤트 인덱스
ES_INDEX = os.getenv("ES_INDEX", "events")

# 쓰기 후 refresh 정책 (true / false / wait_for)
ES_REFRESH = os.getenv("ES_REFRESH", "wait_for")

# 로그 컨텍스트에 실리는 서비스 정보
APP_NAME = os.getenv("APP_NAME", "event-service")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0-SNAPSHOT")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# 데모 드라이버 반복 주기 (초)
DEMO_DELAY_SECONDS = int(os.getenv("DEMO_DELAY_SECONDS", "5"))

# 기본 설정
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def es_url() -> str:
    """ES 접속 URL"""
    return f"{ES_SCHEME}://{ES_HOST}:{ES_PORT}"
