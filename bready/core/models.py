"""
데이터베이스 모델 정의

SQLAlchemy ORM 모델 (기존 B-Ready 테이블 매핑)
pillar -> category -> subcategory -> question 계층
"""
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime,
    Text, ForeignKey, Index
)

from bready.core.database import Base
from bready.core.interfaces import AssessmentStatus


# ============================================
# 문항 계층 모델
# ============================================
class PillarModel(Base):
    """Pillar 테이블 (최상위)"""
    __tablename__ = "pillars"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    pillar_id = Column(Integer, nullable=True)  # 원본 문서상의 pillar 번호

    def __repr__(self):
        return f"<Pillar {self.id}: {self.name}>"


class CategoryModel(Base):
    """Category 테이블"""
    __tablename__ = "categories"

    id = Column(String(50), primary_key=True)  # 예: "1.1"
    name = Column(String(200), nullable=False)
    pillar_id = Column(Integer, ForeignKey("pillars.id"), nullable=True)

    def __repr__(self):
        return f"<Category {self.id}: {self.name}>"


class SubcategoryModel(Base):
    """Subcategory 테이블"""
    __tablename__ = "subcategories"

    id = Column(String(50), primary_key=True)  # 예: "1.1.1"
    name = Column(String(200), nullable=False)
    category_id = Column(String(50), ForeignKey("categories.id"), nullable=True)

    def __repr__(self):
        return f"<Subcategory {self.id}: {self.name}>"


# ============================================
# 문항 모델
# ============================================
class QuestionModel(Base):
    """B-Ready 문항 테이블 (채점 메타데이터 포함)"""
    __tablename__ = "b_ready_questions"

    question_id = Column(Integer, primary_key=True)
    question_text = Column(Text, default="")
    subcategory_id = Column(String(50), ForeignKey("subcategories.id"), nullable=True)

    # 채점 메타데이터
    indicator_name = Column(String(200), nullable=False)
    is_scored = Column(Boolean, default=True)
    good_practice_answer = Column(String(50), nullable=True)
    ffp_value = Column(Float, default=0.0)
    sbp_value = Column(Float, default=0.0)
    group_logic = Column(String(20), nullable=True)  # AND/OR/PARTIAL/CDF_INPUT/NULL

    def __repr__(self):
        return f"<Question {self.question_id}: {self.indicator_name}>"


# ============================================
# 평가 모델
# ============================================
class AssessmentModel(Base):
    """사용자별 평가 테이블"""
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    status = Column(String(20), default=AssessmentStatus.IN_PROGRESS.value)

    # 최종 점수 (확정 시 기록)
    final_ffp_score = Column(Float, nullable=True)
    final_sbp_score = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.now)

    __table_args__ = (
        Index("idx_assessment_user", "user_id"),
    )

    def __repr__(self):
        return f"<Assessment {self.id}: user={self.user_id} {self.status}>"


# ============================================
# 답변 모델
# ============================================
class UserAnswerModel(Base):
    """평가별 사용자 답변 테이블"""
    __tablename__ = "user_answers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False)
    question_id = Column(Integer, ForeignKey("b_ready_questions.question_id"), nullable=False)
    user_answer = Column(String(200), nullable=True)

    __table_args__ = (
        Index("idx_answer_assessment_question", "assessment_id", "question_id"),
    )

    def __repr__(self):
        return f"<UserAnswer {self.assessment_id}/{self.question_id}: {self.user_answer}>"
