"""
상담 안내문 추출기

메신저로 보낸 레벨 테스트 안내문(여러 건을 한 번에 붙여넣기)을
상담 레코드 목록으로 변환한다.

지원 형식:
    [NK test 안내]
    이름 : 홍길동
    학교 : OO중(중1)
    연락처 : 010-1234-5678
    일시 : 2월 10일 오후 5시
    테스트 과목 : 수학
    위치 : NK학원(폴리타운 B동 4층)
    학부모님 상담 : 유선 상담

일시의 연도는 기준일(today)의 연도를 쓴다. 해석할 수 없는 필드는 비워 둔다.
"""

import re
from datetime import date
from typing import Optional

from intake.assembly.assembler import RecordAssembler
from intake.assembly.rules import BarePhoneRule, PostExtractRule, RuleEngine, ScheduleRule
from intake.classification.classifier import match_category
from intake.classification.table import LOCATION_TABLE
from intake.config import get_settings
from intake.extraction.extractors.label_extractor import LabelPatternExtractor
from intake.extraction.normalizer import normalize_phone
from intake.extraction.schema import ExtractionRule, FieldValue, PartialRecord
from intake.lib.logger import get_logger

logger = get_logger("consultation")


CONSULT_PHONE = "유선 상담"
CONSULT_IN_PERSON = "대면 상담"

_PHONE = re.compile(r"(?<!\d)(\d{3}[-\s]?\d{3,4}[-\s]?\d{4})(?!\d)")
_GRADE_TOKEN = re.compile(r"(초|중|고)\s*([1-6])")
_PAREN = re.compile(r"\([^)]*\)")
_FULL_DATE = re.compile(r"(\d{4})\s*[./\-]\s*(\d{1,2})\s*[./\-]\s*(\d{1,2})")
_MONTH_DAY = re.compile(r"(\d{1,2})\s*월\s*(\d{1,2})\s*일")
_TIME = re.compile(r"(오전|오후)?\s*(\d{1,2})\s*(?:시|:)\s*(\d{0,2})")


# === 필드 변환기 ===

def as_labeled_phone(raw: str) -> Optional[str]:
    """라벨 값 안의 전화번호 모양만 인정 (계좌번호 등 오매칭 방지)"""
    match = _PHONE.search(raw)
    return normalize_phone(match.group(1)).display if match else None


def as_school(raw: str) -> Optional[str]:
    """학교명: 괄호 부분과 뒤의 학년 숫자 제거 ("대치중2" → "대치중")"""
    school = _PAREN.sub("", raw)
    school = re.sub(r"\s*\d\s*학년\s*$", "", school)
    school = re.sub(r"([초중고])\s*\d\s*$", r"\1", school)
    return school.strip() or None


def grade_from_school(raw: str) -> dict[str, FieldValue]:
    """학교 값에서 학년 토큰 ("OO중(중1)" → "중1")"""
    match = _GRADE_TOKEN.search(raw)
    return {"grade": match.group(1) + match.group(2)} if match else {}


def as_location(raw: str) -> str:
    """위치 표기 → 정식 장소명 (모르는 표기는 본관)"""
    hit = match_category(raw, LOCATION_TABLE)
    return hit[0] if hit else LOCATION_TABLE.default


def parse_time(raw: str) -> Optional[str]:
    """
    "오후 5시", "5시 30분", "17:30" → "HH:MM"

    오전/오후 표기가 없는 1~8시는 오후로 본다 (학원 상담 시간대).
    """
    match = _TIME.search(raw or "")
    if not match:
        return None
    meridiem, hour, minute = match.group(1), int(match.group(2)), match.group(3)
    minute_value = int(minute) if minute else 0

    if meridiem == "오후" and hour < 12:
        hour += 12
    elif not meridiem and 1 <= hour <= 8:
        hour += 12

    if hour > 23 or minute_value > 59:
        return None
    return f"{hour:02d}:{minute_value:02d}"


def parse_date(raw: str, today: date) -> Optional[str]:
    """
    "2025.02.10" 또는 "2월 10일" → "YYYY-MM-DD"

    월/일만 있으면 기준일의 연도를 쓴다. 달력에 없는 날짜는 None.
    """
    if not raw:
        return None
    full = _FULL_DATE.search(raw)
    if full:
        year, month, day = (int(part) for part in full.groups())
    else:
        month_day = _MONTH_DAY.search(raw)
        if not month_day:
            return None
        year = today.year
        month, day = int(month_day.group(1)), int(month_day.group(2))

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def as_consult_type(raw: str) -> str:
    """
    학부모 상담 방식 판별

    - 유선/전화 → 유선 상담
    - 대면 또는 시간 표기 → "대면 (HH:MM)" / 대면 상담
    - 그 외 → 유선 상담
    """
    lowered = raw.lower()
    if "유선" in lowered or "전화" in lowered:
        return CONSULT_PHONE

    at = parse_time(raw)
    if at:
        return f"대면 ({at})"
    if "대면" in lowered:
        return CONSULT_IN_PERSON
    return CONSULT_PHONE


def build_consultation_rules() -> tuple[ExtractionRule, ...]:
    """상담 안내문 추출 규칙 (순서 유지)"""
    return (
        ExtractionRule("name", ("이름", "학생명")),
        ExtractionRule(
            "parent_phone",
            ("학부모 연락처", "학부모", "연락처", "전화번호", "전화", "핸드폰", "휴대폰"),
            normalizer=as_labeled_phone,
        ),
        ExtractionRule("school", ("학교",), normalizer=as_school, post_extract=grade_from_school),
        ExtractionRule("schedule", ("일시", "테스트 일시", "날짜")),
        ExtractionRule("subject", ("테스트 과목", "과목")),
        ExtractionRule("location", ("위치", "장소"), normalizer=as_location),
        ExtractionRule("consult_type", ("학부모님 상담", "학부모 상담"), normalizer=as_consult_type),
    )


CONSULTATION_RULES: tuple[ExtractionRule, ...] = build_consultation_rules()


def build_consultation_assembler() -> RecordAssembler:
    """상담 안내문용 조립: 라벨 추출 → 전화번호 fallback → 학년 파생 → 일시 분해"""
    engine = (
        RuleEngine()
        .register(BarePhoneRule())
        .register(PostExtractRule())
        .register(ScheduleRule(parse_date, parse_time))
    )
    return RecordAssembler(LabelPatternExtractor(CONSULTATION_RULES), engine)


CONSULTATION_ASSEMBLER: RecordAssembler = build_consultation_assembler()


def split_blocks(raw_text: str, header: str) -> list[str]:
    """안내문 헤더 기준으로 블록 분리 (헤더가 없으면 전체가 한 블록)"""
    if not header or header not in raw_text:
        return [raw_text]
    return [block for block in raw_text.split(header) if block.strip()]


def extract_consultation(
    block: Optional[str],
    today: Optional[date] = None,
    assembler: RecordAssembler = CONSULTATION_ASSEMBLER,
) -> PartialRecord:
    """안내문 한 건 → 상담 PartialRecord (이름이 없으면 빈 dict)"""
    record = assembler.assemble(block, reference_date=today)
    return record if "name" in record else {}


def extract_consultations(
    raw_text: Optional[str],
    today: Optional[date] = None,
) -> list[PartialRecord]:
    """
    여러 건의 안내문 → 상담 레코드 목록

    이름을 찾지 못한 블록은 건너뛴다.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        return []

    header = get_settings().notice_header
    blocks = split_blocks(raw_text, header)
    records = []
    for block in blocks:
        record = extract_consultation(block, today=today)
        if record:
            records.append(record)

    logger.debug("consultations: blocks=%d; records=%d", len(blocks), len(records))
    return records
