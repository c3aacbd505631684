"""Extraction 패키지: 정규화 + 라벨 패턴 추출"""
