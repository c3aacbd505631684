"""
학원 접수 텍스트 추출 CLI

사용법:
    python -m intake.main                       # 퇴원 접수 텍스트
    python -m intake.main --kind consultation   # 상담 안내문 (여러 건)
    python -m intake.main --json                # JSON 출력

표준 입력에서 여러 줄의 텍스트를 EOF(Ctrl+D)까지 읽고,
추출 → 분류 → 정리 결과를 출력합니다.
"""

import argparse
import json
import sys
from typing import Optional

from intake.assembly.assembler import WITHDRAWAL_ASSEMBLER, clean_record
from intake.assembly.consultation import extract_consultations
from intake.assembly.rules import RuleContext
from intake.config import get_settings
from intake.extraction.normalizer import bar_label, bar_width, normalize_qualitative
from intake.extraction.schema import PartialRecord


# 출력용 필드 라벨 (폼 화면 라벨과 동일)
FIELD_LABELS: dict[str, str] = {
    "name": "이름",
    "school": "학교",
    "grade": "학년",
    "subject": "과목",
    "class_name": "반",
    "teacher": "담당 강사",
    "enrollment_start": "재원 시작일",
    "enrollment_end": "재원 종료일",
    "duration_months": "재원 기간(개월)",
    "withdrawal_date": "퇴원일",
    "class_attitude": "수업 태도",
    "homework_submission": "숙제 제출",
    "attendance": "출결 상태",
    "grade_change": "성적 변화",
    "recent_grade": "최근 성적",
    "reason_category": "퇴원 사유",
    "student_opinion": "학생 의견",
    "parent_opinion": "학부모 의견",
    "teacher_opinion": "담당 선생님 의견",
    "final_consult_date": "최종 상담일",
    "final_counselor": "상담자",
    "final_consult_summary": "상담 요약",
    "parent_thanks": "감사 인사",
    "comeback_possibility": "복귀 가능성",
    "expected_comeback_date": "예상 복귀 시기",
    "special_notes": "특이사항",
    "parent_phone": "학부모 연락처",
    "consult_date": "상담일",
    "consult_time": "상담 시간",
    "location": "위치",
    "consult_type": "상담 방식",
}

RATING_FIELDS: tuple[str, ...] = ("class_attitude", "homework_submission", "attendance")

TIER_DESCRIPTIONS: dict[str, str] = {
    "explicit": "퇴원 사유 라벨",
    "evidence": "의견 내용 추론",
    "default": "기본값",
}


def format_value(value: object) -> str:
    """bool은 O/X, 여러 줄 값은 들여쓰기"""
    if isinstance(value, bool):
        return "O" if value else "X"
    return str(value).replace("\n", "\n      ")


def format_record(record: PartialRecord) -> list[str]:
    """레코드를 FIELD_LABELS 순서로 나열 (모르는 키는 뒤에)"""
    lines: list[str] = []
    ordered = [key for key in FIELD_LABELS if key in record]
    ordered += [key for key in record if key not in FIELD_LABELS]
    for key in ordered:
        lines.append(f"  - {FIELD_LABELS.get(key, key)}: {format_value(record[key])}")
    return lines


def format_rating_bars(ctx: RuleContext, scale: Optional[float] = None) -> list[str]:
    """
    학습 상태 평가를 10칸 막대로 표시

    막대는 저장된 라벨이 아니라 캡처 원문을 다시 수치화해서 그린다.
    """
    if scale is None:
        scale = get_settings().rating_scale
    lines: list[str] = []
    for result in ctx.trace.results:
        if result.field_name not in RATING_FIELDS:
            continue
        value = normalize_qualitative(result.evidence)
        filled = round(bar_width(value, scale) / 10)
        bar = "#" * filled + "." * (10 - filled)
        lines.append(f"  {FIELD_LABELS[result.field_name]}: [{bar}] {bar_label(value)}")
    return lines


def format_withdrawal_output(ctx: RuleContext) -> str:
    """퇴원 접수 결과를 사람이 읽기 쉬운 형식으로 포맷합니다."""
    separator = "=" * 60
    record = clean_record(ctx.record)
    lines: list[str] = [separator, "퇴원 접수 추출 결과", separator, ""]

    if record:
        lines.extend(format_record(record))
    else:
        lines.append("  (추출된 항목 없음)")
    lines.append("")

    bars = format_rating_bars(ctx)
    if bars:
        lines.append("## 학습 상태")
        lines.extend(bars)
        lines.append("")

    if ctx.classification is not None:
        tier = TIER_DESCRIPTIONS.get(ctx.classification.tier, ctx.classification.tier)
        basis = f" / 키워드: {ctx.classification.keyword}" if ctx.classification.keyword else ""
        lines.append(f"## 사유 분류: {ctx.classification.category} ({tier}{basis})")
        lines.append("")

    lines.append(separator)
    lines.append(">> 추출값은 초안입니다. 저장 전에 폼에서 확인/수정하세요.")
    lines.append(separator)
    return "\n".join(lines)


def format_consultation_output(records: list[PartialRecord]) -> str:
    """상담 안내문 결과를 건별로 포맷합니다."""
    separator = "=" * 60
    lines: list[str] = [separator, f"상담 안내문 추출 결과 ({len(records)}건)", separator]
    for index, record in enumerate(records, 1):
        lines.append("")
        lines.append(f"## {index}. {record.get('name', '-')}")
        lines.extend(format_record(record))
    if not records:
        lines.append("")
        lines.append("  (이름이 있는 안내문을 찾지 못했습니다)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="학원 접수 텍스트를 구조화된 레코드로 추출합니다.")
    parser.add_argument(
        "--kind",
        choices=["withdrawal", "consultation"],
        default="withdrawal",
        help="입력 텍스트 종류 (기본: withdrawal)",
    )
    parser.add_argument("--json", action="store_true", help="JSON으로 출력")
    return parser


def run(text: str, kind: str = "withdrawal", as_json: bool = False) -> str:
    """입력 텍스트 하나를 처리해 출력 문자열을 만든다."""
    if kind == "consultation":
        records = extract_consultations(text)
        if as_json:
            return json.dumps(records, ensure_ascii=False, indent=2)
        return format_consultation_output(records)

    ctx = WITHDRAWAL_ASSEMBLER.parse(text)
    if as_json:
        return json.dumps(clean_record(ctx.record), ensure_ascii=False, indent=2)
    return format_withdrawal_output(ctx)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI 진입점"""
    args = build_parser().parse_args(argv)

    if not args.json:
        print("학원 접수 텍스트 추출기")
        print("텍스트를 붙여넣으세요. (입력 완료: Ctrl+D)")
        print("-" * 40)

    # 표준 입력에서 EOF까지 읽기
    user_input = sys.stdin.read()

    if not user_input.strip():
        print("입력이 없습니다. 추출할 텍스트를 입력해 주세요.")
        return

    if not args.json:
        print()
    print(run(user_input, kind=args.kind, as_json=args.json))


if __name__ == "__main__":
    main()
