"""
Base Extractor 인터페이스

모든 Extractor는 이 인터페이스를 따른다.
"""

from abc import ABC, abstractmethod

from intake.extraction.schema import ExtractionTrace, PartialRecord


class BaseExtractor(ABC):
    """
    추출기 기본 클래스

    모든 추출기는 이 클래스를 상속받아 trace 메서드를 구현한다.
    """

    name: str = "base"

    @abstractmethod
    def trace(self, raw_text: str) -> ExtractionTrace:
        """
        텍스트에서 필드를 추출하고 추적 정보와 함께 반환한다.

        Args:
            raw_text: 붙여넣은 원문 전체

        Returns:
            ExtractionTrace (채우지 못한 필드는 record에 없음)
        """
        pass

    def extract(self, raw_text: str) -> PartialRecord:
        """텍스트에서 PartialRecord만 추출한다."""
        return self.trace(raw_text).record
