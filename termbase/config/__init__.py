"""termbase 설정 파일(YAML)과 Pydantic 스키마"""
