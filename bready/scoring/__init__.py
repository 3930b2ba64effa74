"""
Scoring

indicator 그룹 규칙 기반 FFP/SBP 점수 집계
- SIMPLE / AND / OR / PARTIAL / CDF_INPUT
"""
from bready.scoring.engine import (
    ScoringEngine,
    GroupScore,
    calculate_scores,
    compare_answers,
    group_questions,
    to_number,
)
from bready.scoring.normal import normal_cdf

__all__ = [
    "ScoringEngine",
    "GroupScore",
    "calculate_scores",
    "compare_answers",
    "group_questions",
    "to_number",
    "normal_cdf",
]
