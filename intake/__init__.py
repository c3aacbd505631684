"""
academy-intake

학원 행정 텍스트(퇴원 접수, 상담 안내문)를 구조화된 레코드로 바꾸는
라벨 추출 · 값 정규화 · 사유 분류 파이프라인.
"""

from intake.assembly.assembler import extract_record
from intake.assembly.consultation import extract_consultations
from intake.extraction.normalizer import normalize_qualitative
from intake.notice import render_consultation_notice

__all__ = [
    "extract_consultations",
    "extract_record",
    "normalize_qualitative",
    "render_consultation_notice",
]
