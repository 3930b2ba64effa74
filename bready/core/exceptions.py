"""
커스텀 예외 클래스 정의

모든 레이어에서 사용하는 표준화된 예외 처리
채점 엔진은 예외를 발생시키지 않으며, 아래 예외는 설정/DB/평가 워크플로우 전용
"""
from typing import Any


class BaseError(Exception):
    """모든 커스텀 예외의 기본 클래스"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ============================================
# Configuration Errors
# ============================================
class ConfigError(BaseError):
    """설정 관련 오류"""
    pass


class ConfigNotFoundError(ConfigError):
    """설정 파일을 찾을 수 없음"""
    pass


class ConfigValidationError(ConfigError):
    """설정 값 유효성 검증 실패"""
    pass


# ============================================
# Database Errors
# ============================================
class DatabaseError(BaseError):
    """데이터베이스 관련 오류"""
    pass


# ============================================
# Assessment Workflow Errors
# ============================================
class AssessmentError(BaseError):
    """평가 워크플로우 관련 오류"""
    pass


class AssessmentNotFoundError(AssessmentError):
    """평가를 찾을 수 없음"""

    def __init__(self, assessment_id: int):
        super().__init__("Assessment not found", {"assessment_id": assessment_id})
        self.assessment_id = assessment_id


class AssessmentAccessError(AssessmentError):
    """다른 사용자의 평가에 접근"""

    def __init__(self, assessment_id: int, user_id: int):
        super().__init__(
            "You do not own this assessment",
            {"assessment_id": assessment_id, "user_id": user_id},
        )
        self.assessment_id = assessment_id
        self.user_id = user_id


class AnswerValidationError(AssessmentError):
    """답변 페이로드 유효성 검증 실패"""
    pass
