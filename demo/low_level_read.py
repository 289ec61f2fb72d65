"""
저수준 읽기 예제

Elasticsearch 클라이언트 없이 HTTP 요청을 직접 구성해
events 인덱스를 match_all 로 검색하고 응답 JSON 을 그대로 출력합니다.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import base64
from typing import Dict

import requests

from api.config import ES_INDEX, ES_PASSWORD, ES_TIMEOUT, ES_USER, es_url

MATCH_ALL_BODY = '{"query":{"match_all":{}}}'


def basic_auth_header(user: str = ES_USER, password: str = ES_PASSWORD) -> Dict[str, str]:
    """Basic 인증 헤더"""
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def read_all(base_url: str = None, index: str = ES_INDEX) -> str:
    """GET /{index}/_search 실행 후 응답 본문(JSON 문자열) 반환"""
    url = f"{base_url or es_url()}/{index}/_search"
    headers = {"Content-Type": "application/json", **basic_auth_header()}

    resp = requests.get(url, data=MATCH_ALL_BODY, headers=headers, timeout=ES_TIMEOUT)
    resp.raise_for_status()
    return resp.content.decode("utf-8")


def main():
    print(read_all())


if __name__ == "__main__":
    main()
