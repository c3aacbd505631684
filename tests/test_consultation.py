"""
상담 안내문 추출 테스트
"""

from datetime import date

import pytest

from intake import extract_consultations
from intake.assembly.consultation import (
    CONSULT_IN_PERSON,
    CONSULT_PHONE,
    as_consult_type,
    as_location,
    as_school,
    extract_consultation,
    grade_from_school,
    parse_date,
    parse_time,
    split_blocks,
)
from intake.classification.table import LOCATION_ANNEX, LOCATION_MAIN, LOCATION_XI


TODAY = date(2025, 2, 1)

TWO_NOTICES = """[NK test 안내]
이름 : 홍길동
학교 : 대치중(중1)
연락처 : 01012345678
일시 : 2월 10일 오후 5시
테스트 과목 : 수학
위치 : 폴리타운 4층
학부모님 상담 : 유선 상담

[NK test 안내]
이름 : 김영희
학교 : 도곡초6
010-9876-5432
일시 : 2월 11일 4시 30분
테스트 과목 : 영어
위치 : 자이 801호
학부모님 상담 : 대면"""


class TestExtractConsultations:
    """여러 건 안내문"""

    def test_two_blocks(self) -> None:
        records = extract_consultations(TWO_NOTICES, today=TODAY)
        assert records == [
            {
                "name": "홍길동",
                "parent_phone": "010-1234-5678",
                "school": "대치중",
                "grade": "중1",
                "consult_date": "2025-02-10",
                "consult_time": "17:00",
                "subject": "수학",
                "location": LOCATION_MAIN,
                "consult_type": CONSULT_PHONE,
            },
            {
                "name": "김영희",
                "parent_phone": "010-9876-5432",
                "school": "도곡초",
                "grade": "초6",
                "consult_date": "2025-02-11",
                "consult_time": "16:30",
                "subject": "영어",
                "location": LOCATION_XI,
                "consult_type": CONSULT_IN_PERSON,
            },
        ]

    def test_without_header_is_one_block(self) -> None:
        records = extract_consultations("이름: 박지민\n과목: 국어", today=TODAY)
        assert records == [{"name": "박지민", "subject": "국어"}]

    def test_block_without_name_is_skipped(self) -> None:
        text = "[NK test 안내]\n학교 : 대치중\n[NK test 안내]\n이름 : 이준호"
        assert extract_consultations(text, today=TODAY) == [{"name": "이준호"}]

    @pytest.mark.parametrize("raw", [None, "", "   ", "[NK test 안내]", 42])
    def test_empty_input(self, raw) -> None:
        assert extract_consultations(raw) == []

    def test_custom_header(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """헤더는 환경 변수로 바꿀 수 있습니다."""
        from intake.config import get_settings

        monkeypatch.setenv("ACADEMY_INTAKE_NOTICE_HEADER", "<<안내>>")
        get_settings.cache_clear()
        try:
            records = extract_consultations("<<안내>>\n이름: 가\n<<안내>>\n이름: 나", today=TODAY)
        finally:
            get_settings.cache_clear()
        assert [r["name"] for r in records] == ["가", "나"]


class TestSingleNotice:
    """안내문 한 건"""

    def test_labeled_phone_wins_over_bare(self) -> None:
        block = "이름: 가\n연락처: 010-1111-2222\n메모: 010-3333-4444"
        assert extract_consultation(block, today=TODAY)["parent_phone"] == "010-1111-2222"

    def test_labeled_value_without_phone(self) -> None:
        """연락처 라벨 값에 번호가 없으면 블록의 다른 번호를 씁니다."""
        block = "이름: 가\n연락처: 추후 안내\n01055556666"
        assert extract_consultation(block, today=TODAY)["parent_phone"] == "010-5555-6666"

    def test_missing_fields_stay_absent(self) -> None:
        """일시/학년/위치를 모르면 기본값을 넣지 않습니다."""
        record = extract_consultation("이름: 가", today=TODAY)
        assert record == {"name": "가"}

    def test_unparseable_schedule(self) -> None:
        record = extract_consultation("이름: 가\n일시: 추후 협의", today=TODAY)
        assert "consult_date" not in record
        assert "consult_time" not in record
        assert "schedule" not in record

    def test_full_date_in_schedule(self) -> None:
        record = extract_consultation("이름: 가\n날짜: 2024.12.30 17:30", today=TODAY)
        assert record["consult_date"] == "2024-12-30"
        assert record["consult_time"] == "17:30"


class TestConverters:
    """필드 변환기"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("오후 5시", "17:00"),
            ("오전 11시", "11:00"),
            ("5시 30분", "17:30"),
            ("17:30", "17:30"),
            ("10시", "10:00"),
            ("오후 12시", "12:00"),
            ("25시", None),
            ("미정", None),
        ],
    )
    def test_parse_time(self, raw: str, expected) -> None:
        assert parse_time(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2월 10일", "2025-02-10"),
            ("3 월 5 일 (수)", "2025-03-05"),
            ("2024.12.30", "2024-12-30"),
            ("2월 30일", None),
            ("다음 주", None),
            ("", None),
        ],
    )
    def test_parse_date(self, raw: str, expected) -> None:
        assert parse_date(raw, TODAY) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("대치중(중1)", "대치중"),
            ("도곡초6", "도곡초"),
            ("휘문고 2학년", "휘문고"),
            ("숙명여중", "숙명여중"),
        ],
    )
    def test_as_school(self, raw: str, expected: str) -> None:
        assert as_school(raw) == expected

    def test_grade_from_school(self) -> None:
        assert grade_from_school("대치중(중1)") == {"grade": "중1"}
        assert grade_from_school("휘문고 2학년") == {"grade": "고2"}
        assert grade_from_school("숙명여중") == {}

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("자이센터프라자", LOCATION_XI),
            ("A동 7층", LOCATION_ANNEX),
            ("본관", LOCATION_MAIN),
        ],
    )
    def test_as_location(self, raw: str, expected: str) -> None:
        assert as_location(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("유선 상담", CONSULT_PHONE),
            ("전화로 부탁드려요", CONSULT_PHONE),
            ("대면 오후 6시", "대면 (18:00)"),
            ("대면", CONSULT_IN_PERSON),
            ("괜찮습니다", CONSULT_PHONE),
        ],
    )
    def test_as_consult_type(self, raw: str, expected: str) -> None:
        assert as_consult_type(raw) == expected

    def test_split_blocks(self) -> None:
        assert split_blocks("A[H]B[H]", "[H]") == ["A", "B"]
        assert split_blocks("본문", "[H]") == ["본문"]
