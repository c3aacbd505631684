"""
퇴원 접수 파이프라인 테스트 (extract_record / RecordAssembler)
"""

import pytest

from intake import extract_record
from intake.assembly.assembler import WITHDRAWAL_ASSEMBLER, RecordAssembler, clean_record
from intake.assembly.rules import PostExtractRule, ReasonCategoryRule, RuleContext, RuleEngine
from intake.classification import REASON_TABLE, ClassificationRule, ClassificationTable, ReasonClassifier
from intake.extraction.extractors import LabelPatternExtractor
from intake.extraction.schema import ExtractionRule, ExtractionTrace
from intake.extraction.tables import grade_from_class_name


SAMPLE = """학생명: 김민수
과목: 수학
담당 강사: 박선생님T
재원 기간: 2024.03.01 ~ 2025.01.15 (10개월)
학생 의견: 이사를 가게 되어서 그만두게 됐어요"""


class TestExampleScenario:
    """대표 입력 예시"""

    def test_full_record(self) -> None:
        assert extract_record(SAMPLE) == {
            "name": "김민수",
            "subject": "수학",
            "teacher": "박선생",
            "enrollment_start": "2024-03-01",
            "enrollment_end": "2025-01-15",
            "duration_months": "10",
            "student_opinion": "이사를 가게 되어서 그만두게 됐어요",
            "reason_category": "개인 사유",
        }

    def test_category_from_evidence_tier(self) -> None:
        ctx = WITHDRAWAL_ASSEMBLER.parse(SAMPLE)
        assert ctx.classification is not None
        assert ctx.classification.tier == "evidence"
        assert ctx.applied == ["reason_category"]


class TestDerivedFields:
    """반 이름 → 학년 파생"""

    def test_grade_from_class_name(self) -> None:
        record = extract_record("반: 중2A반")
        assert record["class_name"] == "중2A반"
        assert record["grade"] == "중2"

    def test_direct_grade_wins(self) -> None:
        """학년 라벨로 직접 채워진 값은 파생값이 덮어쓰지 않습니다."""
        record = extract_record("반: 중2A반\n학년: 중3")
        assert record["grade"] == "중3"

    def test_unknown_class_name(self) -> None:
        assert "grade" not in extract_record("반명: 심화반")


class TestRecordValues:
    """값 보존 / 빈 값 제거"""

    def test_false_flag_is_kept(self) -> None:
        assert extract_record("감사 인사: X")["parent_thanks"] is False

    def test_explicit_reason_label(self) -> None:
        record = extract_record("이름: 홍길동\n퇴원 사유: 친구와 다툼")
        assert record["reason_category"] == "친구 문제"

    def test_reason_label_not_in_record(self) -> None:
        """퇴원 사유 원문은 필드로 저장하지 않고 카테고리만 남깁니다."""
        record = extract_record("퇴원 사유: 과외 시작")
        assert record == {"reason_category": "타 학원/과외로 이동"}

    def test_clean_record(self) -> None:
        assert clean_record({"a": "", "b": None, "c": "  ", "d": False, "e": "x"}) == {
            "d": False,
            "e": "x",
        }


class TestTotality:
    """어떤 입력에도 예외 없이 동작"""

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\n", "::::", "이름:", 123])
    def test_degenerate_input(self, raw) -> None:
        record = extract_record(raw)
        assert record == {"reason_category": "개인 사유"}


class TestCustomAssembler:
    """작은 규칙 집합으로 조립"""

    def test_injected_tables(self) -> None:
        rules = (ExtractionRule("class_name", ("반",), post_extract=grade_from_class_name),
                 ExtractionRule("memo", ("메모",)))
        table = ClassificationTable(
            rules=(ClassificationRule("바쁨", ("학원 일정",)), ClassificationRule("기타", ())),
            default="기타",
        )
        engine = (
            RuleEngine()
            .register(ReasonCategoryRule(ReasonClassifier(table, evidence_fields=("memo",))))
            .register(PostExtractRule())
        )
        assembler = RecordAssembler(LabelPatternExtractor(rules), engine)

        assert assembler.assemble("반: 고1\n메모: 학원 일정이 많음") == {
            "class_name": "고1",
            "memo": "학원 일정이 많음",
            "grade": "고1",
            "reason_category": "바쁨",
        }

    def test_existing_category_is_kept(self) -> None:
        """레코드에 이미 카테고리가 있으면 분류 규칙은 적용되지 않습니다."""
        rule = ReasonCategoryRule(ReasonClassifier(REASON_TABLE))
        ctx = RuleContext(raw_text="", trace=ExtractionTrace(record={"reason_category": "성적 부진"}))
        RuleEngine([rule]).run(ctx)
        assert ctx.record["reason_category"] == "성적 부진"
        assert ctx.applied == []
