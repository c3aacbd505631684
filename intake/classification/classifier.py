"""
Categorical Inference Cascade

부분 레코드와 원문에서 닫힌 카테고리 하나를 결정한다.

3단계 (앞 단계가 결과를 못 내면 다음 단계):
1. 명시 필드: 원문에 "퇴원 사유:" 같은 라벨이 있으면 그 값에 키워드 테이블 적용
2. 근거 집계: 여러 자유서술 필드(학생/학부모/담당 의견)를 합쳐 같은 테이블 적용
3. 기본값: 테이블의 기본 카테고리

항상 카테고리 집합의 원소를 반환하며 예외를 던지지 않는다.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from intake.classification.table import ClassificationTable
from intake.extraction.extractors.utils import contains_keyword, find_labeled_value


TIER_EXPLICIT = "explicit"
TIER_EVIDENCE = "evidence"
TIER_DEFAULT = "default"


@dataclass(frozen=True)
class Classification:
    """분류 결과와 근거"""
    category: str
    tier: str                  # explicit / evidence / default
    keyword: str = ""          # 매칭된 키워드 (default면 빈 문자열)
    evidence: str = ""         # 키워드를 찾은 텍스트


def match_category(text: Any, table: ClassificationTable) -> Optional[tuple[str, str]]:
    """
    테이블 순서대로 키워드 포함 여부를 검사한다.

    Returns:
        (카테고리, 키워드) 또는 None
    """
    if not isinstance(text, str) or not text.strip():
        return None
    for rule in table.rules:
        for keyword in rule.keywords:
            if contains_keyword(text, keyword):
                return rule.category, keyword
    return None


class ReasonClassifier:
    """
    퇴원 사유 분류기

    테이블/라벨/근거 필드를 주입받아 테스트에서 작은 규칙 집합으로 바꿀 수 있다.
    """

    def __init__(
        self,
        table: ClassificationTable,
        explicit_labels: Iterable[str] = (),
        evidence_fields: Iterable[str] = (),
    ) -> None:
        self._table = table
        self._explicit_labels = tuple(explicit_labels)
        self._evidence_fields = tuple(evidence_fields)

    @property
    def categories(self) -> tuple[str, ...]:
        return self._table.categories

    def classify(self, partial: Optional[Mapping[str, Any]], raw_text: Optional[str]) -> str:
        """카테고리만 반환한다."""
        return self.explain(partial, raw_text).category

    def explain(self, partial: Optional[Mapping[str, Any]], raw_text: Optional[str]) -> Classification:
        """카테고리와 결정 단계/근거를 함께 반환한다."""
        # 1. 명시 필드
        explicit = self._explicit_value(raw_text)
        if explicit:
            hit = match_category(explicit, self._table)
            if hit:
                return Classification(hit[0], TIER_EXPLICIT, hit[1], explicit)

        # 2. 근거 집계
        evidence = self._aggregate_evidence(partial)
        if evidence:
            hit = match_category(evidence, self._table)
            if hit:
                return Classification(hit[0], TIER_EVIDENCE, hit[1], evidence)

        # 3. 기본값
        return Classification(self._table.default, TIER_DEFAULT)

    def _explicit_value(self, raw_text: Optional[str]) -> str:
        if not self._explicit_labels or not isinstance(raw_text, str):
            return ""
        found = find_labeled_value(raw_text, self._explicit_labels)
        return found[1] if found else ""

    def _aggregate_evidence(self, partial: Optional[Mapping[str, Any]]) -> str:
        """근거 필드들을 공백으로 이어 붙여 소문자화"""
        if not isinstance(partial, Mapping) or not partial:
            return ""
        parts = [
            str(partial[name]) for name in self._evidence_fields
            if isinstance(partial.get(name), str) and partial[name].strip()
        ]
        return " ".join(parts).lower()
