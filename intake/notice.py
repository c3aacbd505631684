"""
상담 안내문 렌더러 (빠른 복사용 텍스트)

상담 레코드를 메신저 안내문 형식으로 되돌린다.
렌더링한 텍스트를 다시 extract_consultations에 넣으면
이름/연락처/과목/일시가 그대로 복원된다.
"""

import re
from typing import Any, Mapping, Optional

from intake.config import get_settings


_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$")


def format_korean_date(value: Any) -> Optional[str]:
    """"2025-02-10" → "2월 10일" """
    match = _ISO_DATE.match(str(value or "").strip())
    if not match:
        return None
    return f"{int(match.group(2))}월 {int(match.group(3))}일"


def format_korean_time(value: Any) -> Optional[str]:
    """"17:30" → "오후 5시 30분", "09:00" → "오전 9시" """
    match = _CLOCK.match(str(value or "").strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    meridiem = "오후" if hour >= 12 else "오전"
    display_hour = hour - 12 if hour > 12 else hour
    text = f"{meridiem} {display_hour}시"
    if minute:
        text += f" {minute}분"
    return text


def _school_line(record: Mapping[str, Any]) -> Optional[str]:
    school = str(record.get("school") or "").strip()
    grade = str(record.get("grade") or "").strip()
    if school and grade:
        return f"{school}({grade})"
    return school or grade or None


def _schedule_line(record: Mapping[str, Any]) -> Optional[str]:
    parts = [
        part for part in (
            format_korean_date(record.get("consult_date")),
            format_korean_time(record.get("consult_time")),
        )
        if part
    ]
    return " ".join(parts) or None


def render_consultation_notice(record: Optional[Mapping[str, Any]], header: Optional[str] = None) -> str:
    """
    상담 레코드 → 안내문 텍스트

    값이 없는 줄은 생략한다. 레코드가 비어 있으면 헤더만 반환한다.
    """
    record = record or {}
    lines = [header or get_settings().notice_header]

    fields = (
        ("이름", record.get("name")),
        ("학교", _school_line(record)),
        ("연락처", record.get("parent_phone")),
        ("일시", _schedule_line(record)),
        ("테스트 과목", record.get("subject")),
        ("위치", record.get("location")),
        ("학부모님 상담", record.get("consult_type")),
    )
    for label, value in fields:
        if value is None or str(value).strip() == "":
            continue
        lines.append(f"{label} : {str(value).strip()}")

    return "\n".join(lines)
