"""
Reason Category Rule (퇴원 사유 분류 규칙)

사유 카테고리가 아직 없으면 분류기로 결정해 레코드에 넣는다.
"""

from intake.assembly.rules.base import RuleContext
from intake.classification.classifier import ReasonClassifier


class ReasonCategoryRule:
    """분류 결과를 field_name에 병합"""

    def __init__(self, classifier: ReasonClassifier, field_name: str = "reason_category") -> None:
        self._classifier = classifier
        self._field_name = field_name

    @property
    def name(self) -> str:
        return "reason_category"

    def applies(self, ctx: RuleContext) -> bool:
        return self._field_name not in ctx.record

    def apply(self, ctx: RuleContext) -> None:
        result = self._classifier.explain(ctx.record, ctx.raw_text)
        ctx.classification = result
        ctx.fill(self._field_name, result.category)
