"""
Value Normalizer 모듈

원문 스칼라 하나를 정규화된 값으로 변환하는 순수 함수 모음.
- 날짜: 구분자(. /)를 - 로 통일 (달력 검증은 하지 않음)
- 전화번호: 숫자만 남기고 3-4-4 / 3-3-4 로 재그룹
- 정성 평가: 숫자 → 내장 숫자 → 한글 표현 테이블 → 0 순으로 수치화

모든 normalizer는 예외를 던지지 않는다.
해석 불가 입력은 {numeric: 0, display: 원문 trim 또는 "-"} 로 내려간다.
"""

import math
import re
from typing import Any, Optional

from intake.extraction.schema import NormalizedValue


DASH = "-"

# === 정성 평가 표현 테이블 ===
# 포함(substring) 매칭을 테이블 순서대로 검사한다.
# "매우 낮음"이 "낮음"보다 먼저 와야 한다 (순서가 곧 정확성).

QUALITATIVE_LEVELS: tuple[tuple[str, int], ...] = (
    # 매우 높음 (5)
    ("매우 높음", 5), ("매우높음", 5), ("매우 높은", 5),
    ("매우 좋음", 5), ("매우좋음", 5),
    # 매우 낮음 (1)
    ("매우 낮음", 1), ("매우낮음", 1), ("매우 낮은", 1),
    ("매우 나쁨", 1), ("매우나쁨", 1), ("부족", 1),
    # 높음 (5 / 4)
    ("우수", 5),
    ("높음", 4), ("높은", 4), ("강함", 4), ("많음", 4), ("적극적", 4), ("좋음", 4),
    # 보통 (3)
    ("보통", 3), ("중간", 3), ("평균", 3),
    # 낮음 (2)
    ("낮음", 2), ("낮은", 2), ("약함", 2), ("적음", 2), ("소극적", 2), ("나쁨", 2),
)

# 1~5 수준 → 학습 상태 5단계 라벨
RATING_LABELS: dict[int, str] = {
    5: "상",
    4: "중상",
    3: "중",
    2: "중하",
    1: "하",
}

_DATE_SEPARATOR = re.compile(r"\s*[./]\s*")
_DIRECT_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_EMBEDDED_NUMBER = re.compile(r"\d+\.?\d*")


def _as_text(raw: Any) -> str:
    """None/비문자열 입력을 trim된 문자열로 변환"""
    if raw is None:
        return ""
    return str(raw).strip()


def _phrase_level(text: str, levels: tuple[tuple[str, int], ...]) -> Optional[int]:
    """표현 테이블에서 처음 포함되는 표현의 수준 (없으면 None)"""
    for phrase, level in levels:
        if phrase in text:
            return level
    return None


def normalize_date(raw: Optional[str]) -> NormalizedValue:
    """
    날짜 구분자를 하이픈으로 통일한다.

    "2024.03.01" → "2024-03-01", "2024/3/1" → "2024-3-1"
    끝에 붙은 구분자("2024.03.01.")는 제거한다.
    """
    text = _as_text(raw).rstrip("./").strip()
    if not text:
        return NormalizedValue(numeric=0, display=DASH)
    return NormalizedValue(numeric=0, display=_DATE_SEPARATOR.sub("-", text))


def normalize_phone(raw: Optional[str]) -> NormalizedValue:
    """
    전화번호를 숫자만 남겨 재그룹한다.

    - 11자리: 3-4-4 (010-1234-5678)
    - 10자리: 3-3-4 (011-123-4567)
    - 그 외: 숫자만 그룹 없이 반환 (숫자가 없으면 원문)
    """
    text = _as_text(raw)
    if not text:
        return NormalizedValue(numeric=0, display=DASH)

    digits = re.sub(r"\D", "", text)
    if len(digits) == 11:
        return NormalizedValue(numeric=0, display=f"{digits[:3]}-{digits[3:7]}-{digits[7:]}")
    if len(digits) == 10:
        return NormalizedValue(numeric=0, display=f"{digits[:3]}-{digits[3:6]}-{digits[6:]}")
    return NormalizedValue(numeric=0, display=digits or text)


def normalize_qualitative(
    raw: Any,
    levels: tuple[tuple[str, int], ...] = QUALITATIVE_LEVELS,
) -> NormalizedValue:
    """
    임의의 값을 1~5 수준의 정성 평가로 수치화한다.

    순서:
    1. 문자열 전체가 숫자면 그 값 ("4.5", "1e3")
    2. 내장된 첫 숫자 ("4.2점" → 4.2)
    3. 한글 표현 테이블 포함 매칭 ("매우 낮음" → 1)
    4. 기본값 {0, 원문}

    display는 항상 원문(trim)이며, 비어 있으면 "-".
    """
    text = _as_text(raw)
    if not text:
        return NormalizedValue(numeric=0, display=DASH)

    # 1. 직접 숫자
    if _DIRECT_NUMBER.match(text):
        number = float(text)
        if math.isfinite(number):
            return NormalizedValue(numeric=number, display=text)

    # 2. 내장 숫자
    match = _EMBEDDED_NUMBER.search(text)
    if match:
        return NormalizedValue(numeric=float(match.group()), display=text)

    # 3. 표현 테이블
    level = _phrase_level(text, levels)
    if level is not None:
        return NormalizedValue(numeric=float(level), display=text)

    # 4. 기본값
    return NormalizedValue(numeric=0, display=text)


def rating_label(raw: Any) -> Optional[str]:
    """
    학습 상태 평가(수업 태도/숙제/출결)를 5단계 라벨로 변환한다.

    값 전체가 숫자이거나 표현 테이블에 걸린 경우에만 수준을 쓴다.
    서술 속 숫자("지각 2회")는 수준이 아니므로 원문을 그대로 둔다.
    정수 수준 1~5만 라벨로 바꾼다 ("보통" → "중", "3.5" → "3.5").
    """
    text = _as_text(raw)
    if not text:
        return None

    level: Optional[float] = None
    if _DIRECT_NUMBER.match(text):
        number = float(text)
        if math.isfinite(number):
            level = number
    else:
        phrase_level = _phrase_level(text, QUALITATIVE_LEVELS)
        if phrase_level is not None:
            level = float(phrase_level)

    if level is not None and level.is_integer() and int(level) in RATING_LABELS:
        return RATING_LABELS[int(level)]
    return text


def bar_width(value: NormalizedValue, scale: float = 5.0) -> float:
    """막대 그래프 폭(%) = numeric / scale * 100, 0~100으로 제한"""
    if scale <= 0:
        return 0.0
    return max(0.0, min(value.numeric / scale * 100, 100.0))


def bar_label(value: NormalizedValue) -> str:
    """막대 라벨: 수치가 있으면 소수 1자리, 없으면 display"""
    if value.numeric > 0:
        return f"{value.numeric:.1f}"
    return value.display
