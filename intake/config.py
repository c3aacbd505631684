"""
설정 모듈

환경 변수(ACADEMY_INTAKE_*)에서 런타임 설정을 읽는다.
추출/분류 규칙 테이블은 설정이 아니라 코드 상수로 관리한다.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """런타임 설정"""

    # 로깅
    log_level: str = "INFO"

    # 리포트 막대 그래프 만점 기준 (numeric / rating_scale * 100)
    rating_scale: float = 5.0

    # 상담 안내문 블록 구분 헤더
    notice_header: str = "[NK test 안내]"

    model_config = SettingsConfigDict(
        env_prefix="ACADEMY_INTAKE_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
