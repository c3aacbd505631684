"""
퇴원 접수 추출 규칙 테이블

테이블은 불변 데이터(튜플)로 프로세스 시작 시 한 번 만들고 공유한다.
규칙 순서가 곧 우선순위다:
- 같은 필드의 뒤 규칙은 fallback (앞 규칙이 채우면 실행 안 됨)
- 복합(compound) 재원 기간이 먼저, 분해된 시작일/기간 라벨이 나중
"""

import re
from typing import Optional

from intake.extraction.extractors.utils import strip_role_suffix
from intake.extraction.normalizer import (
    DASH,
    normalize_date,
    normalize_phone,
    rating_label,
)
from intake.extraction.schema import CaptureShape, ExtractionRule, FieldValue


# === 필드 변환기 (캡처 원문 → 저장값, None이면 미채움) ===

def as_date(raw: str) -> Optional[str]:
    """날짜 필드: 구분자 통일"""
    value = normalize_date(raw)
    return None if value.display == DASH else value.display


def as_phone(raw: str) -> Optional[str]:
    """전화번호 필드: 3-4-4 / 3-3-4 그룹"""
    value = normalize_phone(raw)
    return None if value.display == DASH else value.display


def as_person(raw: str) -> Optional[str]:
    """강사/상담자 이름: 호칭 접미사 제거"""
    return strip_role_suffix(raw) or None


def as_flag(raw: str) -> bool:
    """O/X 표시 → bool"""
    return raw.strip() in ("O", "o", "○")


# 앞자리 개월 수만 인정 ("10개월", "10"). 날짜("2024.03.01 ~")는 거부
_MONTHS = re.compile(r"^(\d{1,3})\s*(?:개월|달)?(?![\d./\-])")


def as_months(raw: str) -> Optional[str]:
    """기간 필드: 개월 수 문자열"""
    match = _MONTHS.match(raw.strip())
    return match.group(1) if match else None


# "2024.03.01 ~ 2025.01.15 (10개월)" (개월 수는 생략 가능)
_ENROLLMENT_RANGE = re.compile(
    r"^(?P<start>[^\s~]+)\s*~\s*(?P<end>[^\s~(]+)"
    r"(?:\s*\(\s*(?P<months>\d+)\s*개월\s*\))?"
)


def decompose_enrollment(raw: str) -> Optional[dict[str, FieldValue]]:
    """재원 기간 복합값을 시작일/종료일/개월 수로 분해한다."""
    match = _ENROLLMENT_RANGE.match(raw.strip())
    if not match:
        return None

    parts: dict[str, FieldValue] = {}
    start = as_date(match.group("start"))
    end = as_date(match.group("end"))
    if start:
        parts["enrollment_start"] = start
    if end:
        parts["enrollment_end"] = end
    if match.group("months"):
        parts["duration_months"] = match.group("months")
    return parts or None


# 반 이름 앞의 학년 토큰: "중2A반" → "중2"
_CLASS_GRADE = re.compile(r"^(초[3-6]|중[1-3]|고[1-3])")


def grade_from_class_name(raw: str) -> dict[str, FieldValue]:
    match = _CLASS_GRADE.match(raw.strip())
    return {"grade": match.group(1)} if match else {}


# === 퇴원 사유 명시 라벨 (분류기가 원문에서 직접 읽음) ===

REASON_LABELS: tuple[str, ...] = ("퇴원 사유", "퇴원사유")

# 학생/학부모/담당 의견 = 사유 추론의 근거 필드
OPINION_FIELDS: tuple[str, ...] = ("student_opinion", "parent_opinion", "teacher_opinion")


def build_withdrawal_rules() -> tuple[ExtractionRule, ...]:
    """퇴원 접수 텍스트 추출 규칙 (순서 유지)"""
    single = CaptureShape.SINGLE_LINE
    multi = CaptureShape.MULTI_LINE

    return (
        # --- 기본 정보 ---
        ExtractionRule("name", ("학생명", "이름", "성명")),
        ExtractionRule("subject", ("과목",)),
        ExtractionRule("class_name", ("반명", "반"), post_extract=grade_from_class_name),
        ExtractionRule("school", ("학교",)),
        ExtractionRule(
            "teacher",
            ("담당 강사", "담당 선생님", "담당 선생", "담임 선생님", "담임", "담당"),
            normalizer=as_person,
        ),
        ExtractionRule("grade", ("학년",)),

        # --- 재원 기간: 복합 우선, 분해 라벨은 fallback ---
        ExtractionRule(
            "enrollment_start/enrollment_end/duration_months",
            ("재원 기간",),
            capture_shape=CaptureShape.COMPOUND,
            decompose=decompose_enrollment,
        ),
        ExtractionRule("enrollment_start", ("수업 시작일", "등록일"), normalizer=as_date),
        ExtractionRule("enrollment_end", ("수업 종료일",), normalizer=as_date),
        ExtractionRule("duration_months", ("수업 기간", "재원 기간"), normalizer=as_months),
        ExtractionRule("withdrawal_date", ("퇴원일",), normalizer=as_date),

        # --- 학습 상태 ---
        ExtractionRule("class_attitude", ("수업 태도",), normalizer=rating_label),
        ExtractionRule("homework_submission", ("숙제 제출",), normalizer=rating_label),
        ExtractionRule("attendance", ("출결 상태", "출결"), normalizer=rating_label),
        ExtractionRule("grade_change", ("성적 변화",)),
        ExtractionRule("recent_grade", ("최근 성적",)),

        # --- 의견 (여러 줄) ---
        ExtractionRule("student_opinion", ("학생 의견",), capture_shape=multi),
        ExtractionRule("parent_opinion", ("학부모 의견", "학부모님 의견"), capture_shape=multi),
        ExtractionRule(
            "student_opinion",
            ("학생/학부모 의견",),
            capture_shape=single,
            unless=("student_opinion", "parent_opinion"),
        ),
        ExtractionRule(
            "teacher_opinion",
            ("담당선생님 추측", "담당 선생님 추측", "학원 소견"),
            capture_shape=multi,
        ),

        # --- 최종 상담 ---
        ExtractionRule(
            "final_consult_date",
            ("최종 상담일", "최종 상담 일시", "상담일", "상담 일시"),
        ),
        ExtractionRule("final_counselor", ("상담자",), normalizer=as_person),
        ExtractionRule("final_consult_summary", ("요약",)),

        # --- 후속 관리 ---
        ExtractionRule("parent_thanks", ("감사 인사",), normalizer=as_flag),
        ExtractionRule("comeback_possibility", ("복귀 가능성", "복원 가능성")),
        ExtractionRule("expected_comeback_date", ("예상 복귀 시기",)),
        ExtractionRule("special_notes", ("특이사항", "비고")),
    )


WITHDRAWAL_RULES: tuple[ExtractionRule, ...] = build_withdrawal_rules()
