"""
분류 규칙 테이블

(카테고리, 키워드 목록)을 우선순위 순서로 나열한 불변 테이블.
첫 매칭 카테고리가 이긴다. 순서는 알파벳이 아니라 분류 체계(taxonomy)다:
구체적/결정적 키워드(이사, 전학)를 넓은 키워드(시간, 스케줄)보다 먼저 검사한다.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationRule:
    """카테고리 하나와 그 근거 키워드"""
    category: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class ClassificationTable:
    """우선순위 순서의 규칙 + 기본 카테고리"""
    rules: tuple[ClassificationRule, ...]
    default: str

    def __post_init__(self) -> None:
        if self.default not in self.categories:
            raise ValueError(f"default category {self.default!r} is not in the table")

    @property
    def categories(self) -> tuple[str, ...]:
        """닫힌 카테고리 집합 (테이블 순서, 중복 제거)"""
        seen: list[str] = []
        for rule in self.rules:
            if rule.category not in seen:
                seen.append(rule.category)
        return tuple(seen)


# === 퇴원 사유 카테고리 ===

PERSONAL = "개인 사유"
POOR_GRADES = "성적 부진"
MOTIVATION = "학습 의지 및 태도"
WORKLOAD = "학습량 부담"
MANAGEMENT = "학습 관리 및 시스템"
CLASS_CONTENT = "수업 내용 및 방식"
INSTRUCTOR = "강사 역량 및 소통"
MOVED_ELSEWHERE = "타 학원/과외로 이동"
FRIENDS = "친구 문제"
SCHEDULE = "스케줄 변동"


def build_reason_table() -> ClassificationTable:
    """퇴원 사유 분류 테이블 (순서 변경 금지: 분류 결과가 바뀜)"""
    return ClassificationTable(
        rules=(
            ClassificationRule(PERSONAL, ("이사", "전학")),
            ClassificationRule(POOR_GRADES, ("성적", "점수")),
            ClassificationRule(MOTIVATION, ("태도", "의지", "숙제")),
            ClassificationRule(WORKLOAD, ("학습량", "부담", "힘들")),
            ClassificationRule(MANAGEMENT, ("시스템", "관리")),
            ClassificationRule(CLASS_CONTENT, ("수업", "방식")),
            ClassificationRule(INSTRUCTOR, ("강사", "소통", "선생님")),
            ClassificationRule(MOVED_ELSEWHERE, ("타 학원", "과외", "이동")),
            ClassificationRule(FRIENDS, ("친구",)),
            ClassificationRule(SCHEDULE, ("스케줄", "시간")),
        ),
        default=PERSONAL,
    )


# === 상담 장소 ===

LOCATION_MAIN = "NK학원(폴리타운 B동 4층)"
LOCATION_ANNEX = "NK학원(폴리타운 A동 7층)"
LOCATION_XI = "자이센터프라자 801호"


def build_location_table() -> ClassificationTable:
    """상담 안내문 위치 표기 → 정식 장소명"""
    return ClassificationTable(
        rules=(
            ClassificationRule(LOCATION_XI, ("자이", "801")),
            ClassificationRule(LOCATION_ANNEX, ("7층",)),
            ClassificationRule(LOCATION_MAIN, ("폴리타운", "4층")),
        ),
        default=LOCATION_MAIN,
    )


REASON_TABLE: ClassificationTable = build_reason_table()
LOCATION_TABLE: ClassificationTable = build_location_table()
