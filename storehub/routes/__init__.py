"""FastAPI 엔드포인트 라우팅 모듈입니다."""
