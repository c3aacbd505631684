"""
상담 안내문 보강 규칙

- BarePhoneRule: 라벨 없는 전화번호 fallback
- ScheduleRule : "일시" 원문 → consult_date / consult_time
"""

import re
from datetime import date
from typing import Callable, Optional

from intake.assembly.rules.base import RuleContext
from intake.extraction.normalizer import normalize_phone


_BARE_PHONE = re.compile(r"(?<!\d)(\d{3}[-\s]?\d{4}[-\s]?\d{4})(?!\d)")


class BarePhoneRule:
    """연락처 라벨이 없으면 블록 안 첫 휴대폰 번호(3-4-4)를 쓴다."""

    def __init__(self, field_name: str = "parent_phone") -> None:
        self._field_name = field_name

    @property
    def name(self) -> str:
        return "bare_phone"

    def applies(self, ctx: RuleContext) -> bool:
        return self._field_name not in ctx.record and _BARE_PHONE.search(ctx.raw_text) is not None

    def apply(self, ctx: RuleContext) -> None:
        match = _BARE_PHONE.search(ctx.raw_text)
        if match:
            ctx.fill(self._field_name, normalize_phone(match.group(1)).display)


class ScheduleRule:
    """일시 원문을 날짜/시간으로 분해하고 원문 필드는 제거한다."""

    def __init__(
        self,
        parse_date: Callable[[str, date], Optional[str]],
        parse_time: Callable[[str], Optional[str]],
        source_field: str = "schedule",
    ) -> None:
        self._parse_date = parse_date
        self._parse_time = parse_time
        self._source_field = source_field

    @property
    def name(self) -> str:
        return "schedule"

    def applies(self, ctx: RuleContext) -> bool:
        return isinstance(ctx.record.get(self._source_field), str)

    def apply(self, ctx: RuleContext) -> None:
        raw = ctx.record.pop(self._source_field)
        today = ctx.reference_date or date.today()
        ctx.fill("consult_date", self._parse_date(raw, today))
        ctx.fill("consult_time", self._parse_time(raw))
