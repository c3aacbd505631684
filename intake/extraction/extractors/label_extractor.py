"""
Label-Pattern Field Extractor

규칙 테이블(필드명 → 라벨 동의어 목록)을 원문에 대조해 PartialRecord를 채운다.

매칭 규칙:
- `<불릿?><라벨><: 또는 ：><값>` 형태의 줄만 인정
- 규칙 안에서는 라벨 목록 순서대로, 먼저 매칭된 라벨이 이김
- 한 번 채운 필드는 뒤 규칙이 덮어쓰지 않음 (뒤 규칙 = fallback)
- 원문 안의 라벨 순서는 테이블 순서와 무관 (전체 텍스트 대상 검색)

캡처 형태:
- single-line: 줄 끝까지
- multi-line-until-marker: 섹션 마커 / 다음 라벨 줄 / 텍스트 끝까지
- compound: 값 하나를 여러 하위 필드로 분해 (실패 시 fallback 규칙에 양보)
"""

from typing import Iterable, Optional

from intake.extraction.extractors.base import BaseExtractor
from intake.extraction.extractors.utils import (
    cut_at_marker,
    labeled_line_pattern,
    labels_line_pattern,
)
from intake.extraction.schema import (
    CaptureShape,
    ExtractionRule,
    ExtractionTrace,
    ExtractResult,
    FieldValue,
)


class LabelPatternExtractor(BaseExtractor):
    """라벨 패턴 기반 필드 추출기"""

    name = "label_pattern"

    def __init__(
        self,
        rules: Iterable[ExtractionRule],
        boundary_labels: Iterable[str] = (),
    ) -> None:
        self._rules: tuple[ExtractionRule, ...] = tuple(rules)

        # 여러 줄 캡처를 끊는 "다음 라벨" 목록 = 모든 규칙 라벨 + 추가 경계 라벨
        known_labels = [label for rule in self._rules for label in rule.label_patterns]
        known_labels.extend(boundary_labels)
        self._boundary = labels_line_pattern(known_labels)

    @property
    def rules(self) -> tuple[ExtractionRule, ...]:
        """등록된 규칙 목록 (읽기 전용)"""
        return self._rules

    def trace(self, raw_text: str) -> ExtractionTrace:
        """
        모든 규칙을 테이블 순서대로 실행한다.

        Returns:
            ExtractionTrace (record: 채운 필드, results: 규칙별 매칭 근거)
        """
        trace = ExtractionTrace()
        if not isinstance(raw_text, str) or not raw_text.strip():
            return trace

        text = raw_text.replace("\r\n", "\n").replace("\r", "\n")

        for rule in self._rules:
            if self._should_skip(rule, trace):
                continue

            result = self._apply_rule(rule, text, trace)
            if result is None:
                continue

            trace.results.append(result)
            if isinstance(result.value, dict):
                for key, value in result.value.items():
                    if key not in trace.record:
                        trace.record[key] = value
            else:
                trace.record[rule.field_name] = result.value

        return trace

    def _should_skip(self, rule: ExtractionRule, trace: ExtractionTrace) -> bool:
        """이미 채워졌거나 unless 조건에 걸린 규칙은 건너뛴다."""
        if any(name in trace.record for name in rule.unless):
            return True
        return all(name in trace.record for name in rule.output_fields())

    def _apply_rule(
        self,
        rule: ExtractionRule,
        text: str,
        trace: ExtractionTrace,
    ) -> Optional[ExtractResult]:
        """규칙의 라벨 목록을 순서대로 시도해 첫 유효 매칭을 반환한다."""
        for label in rule.label_patterns:
            for match in labeled_line_pattern(label).finditer(text):
                if rule.capture_shape is CaptureShape.MULTI_LINE:
                    captured = self._capture_block(text, match.start("value"))
                else:
                    captured, _ = cut_at_marker(match.group("value"))
                    captured = captured.strip()

                if not captured:
                    continue

                value = self._convert(rule, captured, trace)
                if value is None:
                    continue

                return ExtractResult(
                    field_name=rule.field_name,
                    value=value,
                    evidence=captured,
                    extractor=label,
                    rule=rule,
                )
        return None

    def _convert(
        self,
        rule: ExtractionRule,
        captured: str,
        trace: ExtractionTrace,
    ) -> Optional[object]:
        """캡처 원문을 저장값으로 변환 (None이면 이 매칭은 무효)"""
        if rule.capture_shape is CaptureShape.COMPOUND:
            if rule.decompose is None:
                return None
            parts = rule.decompose(captured)
            if not parts:
                return None
            # 이미 채워진 하위 필드는 제외
            fresh = {
                key: value for key, value in parts.items()
                if key not in trace.record and value not in (None, "")
            }
            return fresh or None

        value: Optional[FieldValue] = captured
        if rule.normalizer is not None:
            value = rule.normalizer(captured)
        if value is None or value == "":
            return None
        return value

    def _capture_block(self, text: str, start: int) -> str:
        """
        start 위치부터 여러 줄 값을 캡처한다.

        종료 조건 (먼저 오는 것):
        1. 섹션 마커 (마커 앞까지만 포함)
        2. 인식된 라벨로 시작하는 줄
        3. 텍스트 끝
        """
        lines = text[start:].split("\n")
        collected: list[str] = []

        for index, line in enumerate(lines):
            if index > 0 and self._boundary is not None and self._boundary.match(line):
                break
            head, has_marker = cut_at_marker(line)
            collected.append(head)
            if has_marker:
                break

        return "\n".join(part.strip() for part in collected).strip()
