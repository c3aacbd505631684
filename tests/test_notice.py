"""
상담 안내문 렌더링 테스트
"""

from datetime import date

from intake import extract_consultations, render_consultation_notice
from intake.notice import format_korean_date, format_korean_time


RECORD = {
    "name": "홍길동",
    "school": "대치중",
    "grade": "중1",
    "parent_phone": "010-1234-5678",
    "consult_date": "2025-02-10",
    "consult_time": "17:30",
    "subject": "수학",
    "location": "NK학원(폴리타운 B동 4층)",
    "consult_type": "유선 상담",
}


class TestFormatters:
    """날짜/시간 한글 표기"""

    def test_korean_date(self) -> None:
        assert format_korean_date("2025-02-10") == "2월 10일"
        assert format_korean_date("2월 10일") is None
        assert format_korean_date(None) is None

    def test_korean_time(self) -> None:
        assert format_korean_time("17:30") == "오후 5시 30분"
        assert format_korean_time("09:00") == "오전 9시"
        assert format_korean_time("12:00") == "오후 12시"
        assert format_korean_time("오후") is None


class TestRenderNotice:
    """빠른 복사용 안내문"""

    def test_full_record(self) -> None:
        assert render_consultation_notice(RECORD) == "\n".join([
            "[NK test 안내]",
            "이름 : 홍길동",
            "학교 : 대치중(중1)",
            "연락처 : 010-1234-5678",
            "일시 : 2월 10일 오후 5시 30분",
            "테스트 과목 : 수학",
            "위치 : NK학원(폴리타운 B동 4층)",
            "학부모님 상담 : 유선 상담",
        ])

    def test_missing_lines_are_skipped(self) -> None:
        text = render_consultation_notice({"name": "가", "subject": ""})
        assert text == "[NK test 안내]\n이름 : 가"

    def test_empty_record(self) -> None:
        assert render_consultation_notice(None) == "[NK test 안내]"
        assert render_consultation_notice({}, header="<<안내>>") == "<<안내>>"

    def test_rendered_notice_parses_back(self) -> None:
        """렌더링한 안내문을 다시 추출하면 같은 레코드가 나와야 합니다."""
        text = render_consultation_notice(RECORD)
        records = extract_consultations(text, today=date(2025, 1, 1))
        assert records == [RECORD]
