"""
추출 파이프라인 데이터 스키마

이 스키마는 추출 파이프라인의 입출력 계약(contract)이다.
폼 상태(외부)는 PartialRecord만 받는다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union


# 필드명 → 값. 키가 없으면 "결정되지 않음" (None placeholder 금지)
FieldValue = Union[str, bool]
PartialRecord = dict[str, FieldValue]


@dataclass(frozen=True)
class NormalizedValue:
    """정규화 결과"""
    numeric: float     # 수치 의미가 없으면 0
    display: str       # 사람이 읽을 문자열 (기본: 원문 trim 또는 "-")


class CaptureShape(Enum):
    """라벨 뒤 값의 캡처 형태"""
    SINGLE_LINE = "single-line"                  # 줄 끝까지
    MULTI_LINE = "multi-line-until-marker"       # 섹션 마커/다음 라벨/끝까지
    COMPOUND = "compound"                        # 값 하나가 여러 하위 필드로 분해


@dataclass(frozen=True)
class ExtractionRule:
    """
    출력 레코드의 필드 하나를 채우는 규칙

    같은 field_name을 가진 규칙이 여러 개면 테이블 순서대로 시도하고,
    먼저 채운 규칙이 이긴다 (뒤 규칙은 fallback).
    """
    field_name: str
    label_patterns: tuple[str, ...]
    capture_shape: CaptureShape = CaptureShape.SINGLE_LINE

    # 캡처 원문 → 저장값. None이면 이 매칭은 필드를 채우지 않음
    normalizer: Optional[Callable[[str], Optional[FieldValue]]] = None

    # COMPOUND 전용: 캡처 원문 → {하위 필드: 값}. None이면 복합 매칭 실패
    decompose: Optional[Callable[[str], Optional[dict[str, FieldValue]]]] = None

    # 캡처 원문에서 파생 필드 생성 (이미 채워진 필드는 덮어쓰지 않음)
    post_extract: Optional[Callable[[str], dict[str, FieldValue]]] = None

    # 이 중 하나라도 채워져 있으면 규칙을 건너뜀
    unless: tuple[str, ...] = ()

    def output_fields(self) -> tuple[str, ...]:
        """이 규칙이 채울 수 있는 필드명 (COMPOUND는 field_name이 그룹명)"""
        return tuple(self.field_name.split("/"))


@dataclass
class ExtractResult:
    """개별 필드 추출 결과"""
    field_name: str
    value: Any                     # 저장값 (COMPOUND는 dict)
    evidence: str                  # 캡처된 원문
    extractor: str = ""            # 매칭된 라벨
    rule: Optional[ExtractionRule] = None


@dataclass
class ExtractionTrace:
    """한 번의 추출 실행 결과 (디버깅/추적용)"""
    record: PartialRecord = field(default_factory=dict)
    results: list[ExtractResult] = field(default_factory=list)
