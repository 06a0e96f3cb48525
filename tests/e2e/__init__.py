"""E2E 테스트 모듈입니다. FastAPI ``TestClient`` 로 HTTP 요청부터 DB 까지 검증합니다."""
