"""
Modules package initialization

- extraction: 용어 후보 추출 (형태소 분석, 코퍼스 집계, 점수 계산, 필터링)
"""
