"""
Assessment 워크플로우

문항 계층 조회, 평가 시작, 답변 저장, 채점 엔진 호출 및 최종 점수 저장
"""
from bready.assessment.questions import QuestionRepository, QuestionService, build_hierarchy
from bready.assessment.repository import AssessmentRepository
from bready.assessment.service import AssessmentService

__all__ = [
    "QuestionRepository",
    "QuestionService",
    "build_hierarchy",
    "AssessmentRepository",
    "AssessmentService",
]
