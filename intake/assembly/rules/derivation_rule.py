"""
Post-Extract Derivation Rule (파생 필드 규칙)

post_extract가 있는 추출 규칙의 캡처 원문에서 보조 필드를 만든다.
예: 반 이름 "중2A" → grade "중2" (학년 라벨로 직접 채워졌으면 건드리지 않음)
"""

from intake.assembly.rules.base import RuleContext


class PostExtractRule:
    """추출 결과마다 post_extract를 실행하고 빈 필드만 채운다."""

    @property
    def name(self) -> str:
        return "post_extract"

    def applies(self, ctx: RuleContext) -> bool:
        return any(
            result.rule is not None and result.rule.post_extract is not None
            for result in ctx.trace.results
        )

    def apply(self, ctx: RuleContext) -> None:
        for result in ctx.trace.results:
            if result.rule is None or result.rule.post_extract is None:
                continue
            for name, value in result.rule.post_extract(result.evidence).items():
                ctx.fill(name, value)
