"""
Elasticsearch 이벤트 인덱스 예제 드라이버

- low_level_read: 직접 구성한 HTTP/JSON 검색 요청
- high_level_example: 클라이언트 API 기반 반복 시드/쿼리 루프
"""
