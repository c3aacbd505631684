"""
Rule Engine

보강 규칙을 등록 순서대로 적용한다.
"""

from typing import Iterable

from intake.assembly.rules.base import Rule, RuleContext


class RuleEngine:
    """
    규칙 엔진

    각 규칙은 applies()가 True일 때만 apply()된다.
    엔진 자체는 상태를 갖지 않으므로 여러 파싱에서 공유해도 된다.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: list[Rule] = list(rules)

    def register(self, rule: Rule) -> "RuleEngine":
        """규칙 등록 (체이닝 가능)"""
        self._rules.append(rule)
        return self

    def run(self, ctx: RuleContext) -> RuleContext:
        for rule in self._rules:
            if rule.applies(ctx):
                rule.apply(ctx)
                ctx.applied.append(rule.name)
        return ctx

    @property
    def rules(self) -> list[Rule]:
        """등록된 규칙 목록 (읽기 전용)"""
        return list(self._rules)
