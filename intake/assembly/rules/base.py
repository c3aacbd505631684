"""
Assembly Rule 인터페이스 정의

추출 직후 레코드를 보강하는 규칙(분류, 파생 필드)은 이 Protocol을 따른다.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Protocol

from intake.classification.classifier import Classification
from intake.extraction.schema import ExtractionTrace, FieldValue, PartialRecord


@dataclass
class RuleContext:
    """
    규칙 실행 컨텍스트

    규칙이 읽고 쓰는 한 번의 파싱 상태. 파싱마다 새로 만들고 공유하지 않는다.
    """
    raw_text: str
    trace: ExtractionTrace
    classification: Optional[Classification] = None
    reference_date: Optional[date] = None               # 연도 없는 날짜 해석 기준일
    applied: list[str] = field(default_factory=list)   # 적용된 규칙 이름

    @property
    def record(self) -> PartialRecord:
        return self.trace.record

    def fill(self, name: str, value: Optional[FieldValue]) -> bool:
        """비어 있는 필드만 채운다. 채웠으면 True"""
        if name in self.record or value is None or value == "":
            return False
        self.record[name] = value
        return True


class Rule(Protocol):
    """
    규칙 인터페이스 (Protocol)

    - name: 규칙 이름 (로깅용)
    - applies(): 이 규칙이 적용되는지 판단
    - apply(): 컨텍스트의 레코드를 보강
    """

    @property
    def name(self) -> str:
        ...

    def applies(self, ctx: RuleContext) -> bool:
        ...

    def apply(self, ctx: RuleContext) -> None:
        ...
