"""
핵심 인터페이스 정의

채점 엔진과 평가 워크플로우가 공유하는 데이터 계약
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


# ============================================
# Enums
# ============================================
class GroupLogic(Enum):
    """지표 그룹 채점 규칙"""
    SIMPLE = "SIMPLE"          # 문항별 개별 채점 (기본값)
    AND = "AND"                # 그룹 전체 정답일 때만 배점
    OR = "OR"                  # 정답 문항 배점 합산
    PARTIAL = "PARTIAL"        # 정답 문항 배점 합산
    CDF_INPUT = "CDF_INPUT"    # Y/N -> 정규 CDF 가중치
    UNKNOWN = "UNKNOWN"        # 인식 불가 태그 (SIMPLE과 동일하게 채점)

    @classmethod
    def parse(cls, raw: str | None) -> "GroupLogic":
        """
        원본 group_logic 문자열을 규칙으로 변환

        None/빈 문자열은 SIMPLE, 대소문자 무시, 모르는 값은 UNKNOWN
        """
        if not raw:
            return cls.SIMPLE
        try:
            return cls(normalize_group_logic(raw))
        except ValueError:
            return cls.UNKNOWN


def normalize_group_logic(raw: str | None) -> str:
    """그룹 키에 쓰이는 group_logic 태그 (None/빈 문자열 -> SIMPLE, 대문자화)"""
    if not raw:
        return GroupLogic.SIMPLE.value
    return str(raw).upper()


class AssessmentStatus(Enum):
    """평가 진행 상태 (DB에 저장되는 문자열)"""
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


# ============================================
# Data Classes
# ============================================
@dataclass
class AnsweredQuestion:
    """답변된 문항 + 채점 메타데이터"""
    question_id: int
    indicator_name: str
    group_logic: str | None = None
    good_practice_answer: str | None = None
    ffp_value: Any = 0
    sbp_value: Any = 0
    user_answer: str | None = None

    @property
    def group_key(self) -> tuple[str, str]:
        """(정규화된 group_logic, indicator_name)"""
        return normalize_group_logic(self.group_logic), self.indicator_name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnsweredQuestion":
        """DB 조회 행(dict)에서 생성"""
        return cls(
            question_id=data.get("question_id"),
            indicator_name=data.get("indicator_name"),
            group_logic=data.get("group_logic"),
            good_practice_answer=data.get("good_practice_answer"),
            ffp_value=data.get("ffp_value"),
            sbp_value=data.get("sbp_value"),
            user_answer=data.get("user_answer"),
        )


@dataclass
class ScoreResult:
    """FFP / SBP 합계"""
    ffp: float = 0.0
    sbp: float = 0.0

    def add(self, ffp: float, sbp: float) -> None:
        self.ffp += ffp
        self.sbp += sbp

    def to_dict(self) -> dict[str, float]:
        return {"ffp": self.ffp, "sbp": self.sbp}


# ============================================
# Abstract Interfaces
# ============================================
class Scorer(ABC):
    """평가 채점기 인터페이스"""

    @abstractmethod
    def score(self, questions: list[AnsweredQuestion]) -> ScoreResult:
        """답변 목록을 FFP/SBP 합계로 집계"""
        pass
