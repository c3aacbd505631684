"""
Extractor 공통 유틸리티

라벨 정규식 생성, 이름 접미사 정리, 키워드 포함 검사 등
추출기/분류기 공통 기능
"""

import re
from functools import lru_cache
from typing import Iterable, Optional


# 줄 앞 불릿/번호: "- ", "▫ ", "■", "1.", "2)" 등
BULLET = r"(?:[-*•·▫■□▪◦●○※>]+|\d{1,2}[.)])?"

# 콜론: ASCII / 전각
COLON = r"[:：]"

# 여러 줄 캡처를 끊는 섹션 마커
SECTION_MARKERS: tuple[str, ...] = ("▫", "■", "□", "──")

# 이름 뒤 호칭/역할 접미사 ("박선생님T" → "박선생", "김T" → "김")
_ROLE_SUFFIX = re.compile(r"\s*(?:님\s*)?T?\s*$")


def label_regex(label: str) -> str:
    """
    라벨 문자열을 정규식 조각으로 변환한다.

    라벨 안의 공백은 "공백 없음 또는 임의 공백"과 매칭된다.
    "담당 강사" → 담당[ \\t]*강사
    """
    parts = [re.escape(p) for p in label.split()]
    return r"[ \t]*".join(parts)


@lru_cache(maxsize=512)
def labeled_line_pattern(label: str) -> re.Pattern:
    """
    `<불릿?><라벨><콜론><값>` 형태의 줄 정규식 (MULTILINE)

    group("value")는 같은 줄의 콜론 뒤 나머지.
    """
    return re.compile(
        rf"^[ \t]*{BULLET}[ \t]*{label_regex(label)}[ \t]*{COLON}[ \t]*(?P<value>[^\n]*)$",
        re.MULTILINE,
    )


def labels_line_pattern(labels: Iterable[str]) -> Optional[re.Pattern]:
    """여러 라벨 중 하나로 시작하는 라벨 줄 판별용 정규식"""
    ordered = sorted(set(labels), key=len, reverse=True)
    if not ordered:
        return None
    alternation = "|".join(label_regex(label) for label in ordered)
    return re.compile(rf"^[ \t]*{BULLET}[ \t]*(?:{alternation})[ \t]*{COLON}")


def cut_at_marker(line: str, markers: tuple[str, ...] = SECTION_MARKERS) -> tuple[str, bool]:
    """
    섹션 마커 위치에서 줄을 자른다.

    Returns:
        (마커 앞부분, 마커 발견 여부)
    """
    positions = [line.find(m) for m in markers if m in line]
    if not positions:
        return line, False
    return line[:min(positions)], True


def strip_role_suffix(name: str) -> str:
    """이름 끝의 호칭/역할 접미사(님, T)를 제거한다."""
    if not name:
        return name
    return _ROLE_SUFFIX.sub("", name.strip())


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(label_regex(keyword.lower()))


def contains_keyword(text: str, keyword: str) -> bool:
    """
    키워드 포함 검사 (소문자화)

    키워드 안의 공백만 생략 가능하다: "타학원으로 옮겨요"는 "타 학원"과 매칭되지만
    원문의 공백은 그대로 두므로 "선생님이 사소한"은 "이사"와 매칭되지 않는다.
    """
    if not text or not keyword or not keyword.strip():
        return False
    return _keyword_pattern(keyword).search(text.lower()) is not None


def find_labeled_value(text: str, labels: Iterable[str]) -> Optional[tuple[str, str]]:
    """
    라벨 목록 순서대로 한 줄 값을 찾는다.

    Returns:
        (매칭된 라벨, 값) 또는 None
    """
    if not text:
        return None
    for label in labels:
        for match in labeled_line_pattern(label).finditer(text):
            value = match.group("value").strip()
            if value:
                return label, value
    return None
