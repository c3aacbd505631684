"""
Record Assembler (퇴원 접수 파이프라인 오케스트레이터)

붙여넣은 원문을 폼 상태에 넘길 PartialRecord로 변환한다:
1. Extract   : 라벨 패턴 추출 (정규화 포함)
2. Classify  : 퇴원 사유 카테고리 결정 (명시 → 근거 집계 → 기본값)
3. Derive    : post_extract 파생 필드 (반 이름 → 학년)
4. Clean     : 빈 값 제거

네트워크/저장소 없음, 예외 없음. "추출 실패"는 필드 부재로만 표현된다.
"""

from datetime import date
from typing import Any, Optional

from intake.assembly.rules import PostExtractRule, ReasonCategoryRule, RuleContext, RuleEngine
from intake.classification.classifier import ReasonClassifier
from intake.classification.table import REASON_TABLE
from intake.extraction.extractors.base import BaseExtractor
from intake.extraction.extractors.label_extractor import LabelPatternExtractor
from intake.extraction.schema import ExtractionTrace, PartialRecord
from intake.extraction.tables import OPINION_FIELDS, REASON_LABELS, WITHDRAWAL_RULES
from intake.lib.logger import get_logger

logger = get_logger("assembler")


def clean_record(record: dict[str, Any]) -> PartialRecord:
    """None/빈 문자열 값을 제거한다. (bool False는 결정된 값이므로 유지)"""
    cleaned: PartialRecord = {}
    for key, value in record.items():
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        cleaned[key] = value
    return cleaned


class RecordAssembler:
    """추출기 + 보강 규칙 엔진 조립"""

    def __init__(self, extractor: BaseExtractor, engine: RuleEngine) -> None:
        self._extractor = extractor
        self._engine = engine

    def parse(self, raw_text: Optional[str], reference_date: Optional[date] = None) -> RuleContext:
        """파이프라인을 실행하고 컨텍스트(추적 정보 포함)를 반환한다."""
        text = raw_text if isinstance(raw_text, str) else ""

        trace = self._extractor.trace(text) if text.strip() else ExtractionTrace()
        ctx = RuleContext(raw_text=text, trace=trace, reference_date=reference_date)
        self._engine.run(ctx)

        tier = ctx.classification.tier if ctx.classification else "-"
        logger.debug(
            "assembled: fields=%s; rules=%s; category_tier=%s",
            ",".join(sorted(ctx.record)),
            ",".join(ctx.applied),
            tier,
        )
        return ctx

    def assemble(self, raw_text: Optional[str], reference_date: Optional[date] = None) -> PartialRecord:
        """최종 PartialRecord (빈 값 제거)"""
        return clean_record(self.parse(raw_text, reference_date).record)


def build_withdrawal_assembler() -> RecordAssembler:
    """퇴원 접수용 기본 조립 (테이블은 모듈 로드 시 1회 생성된 것을 공유)"""
    extractor = LabelPatternExtractor(WITHDRAWAL_RULES, boundary_labels=REASON_LABELS)
    classifier = ReasonClassifier(
        REASON_TABLE,
        explicit_labels=REASON_LABELS,
        evidence_fields=OPINION_FIELDS,
    )
    engine = (
        RuleEngine()
        .register(ReasonCategoryRule(classifier))
        .register(PostExtractRule())
    )
    return RecordAssembler(extractor, engine)


WITHDRAWAL_ASSEMBLER: RecordAssembler = build_withdrawal_assembler()


def extract_record(raw_text: Optional[str]) -> PartialRecord:
    """
    퇴원 접수 원문 → PartialRecord

    폼 상태(외부)가 사용자 검토 전에 미리 채울 값을 반환한다.
    """
    return WITHDRAWAL_ASSEMBLER.assemble(raw_text)
