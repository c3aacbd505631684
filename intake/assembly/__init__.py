"""Assembly 패키지: 추출 → 분류 → 파생 → 정리"""
