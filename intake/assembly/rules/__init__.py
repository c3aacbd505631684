"""
Assembly Rules 패키지

추출 결과를 보강하는 규칙 (분류, 파생 필드, 일시 분해)
"""

from intake.assembly.rules.base import Rule, RuleContext
from intake.assembly.rules.consultation_rules import BarePhoneRule, ScheduleRule
from intake.assembly.rules.derivation_rule import PostExtractRule
from intake.assembly.rules.engine import RuleEngine
from intake.assembly.rules.reason_rule import ReasonCategoryRule

__all__ = [
    "BarePhoneRule",
    "PostExtractRule",
    "ReasonCategoryRule",
    "Rule",
    "RuleContext",
    "RuleEngine",
    "ScheduleRule",
]
