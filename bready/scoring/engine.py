"""
B-Ready 채점 엔진

답변된 문항 목록을 FFP(기업 관점) / SBP(사회적 편익 관점) 합계로 집계

채점 규칙 (indicator_name + group_logic 단위 그룹):
- SIMPLE (None): 정답 문항마다 배점
- AND: 그룹 전체가 정답일 때만 그룹 전체 배점, 하나라도 오답이면 0
- OR / PARTIAL: 정답 문항 배점 합산
- CDF_INPUT: Y=1, 그 외=0 을 정규 CDF에 통과시킨 값을 배점에 곱함
- 인식 불가 태그: SIMPLE과 동일

순수 함수. I/O, 상태 없음, 예외 없음.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

from bready.core.interfaces import (
    AnsweredQuestion,
    GroupLogic,
    Scorer,
    ScoreResult,
)
from bready.core.logger import get_logger
from bready.scoring.normal import normal_cdf

# (ffp, sbp) 가산분
Award = tuple[float, float]


def to_number(value: Any) -> float:
    """
    배점 값 안전 변환

    None, 비숫자, 밑줄 포함 문자열("1_0"), NaN, ±inf -> 0
    """
    if value is None:
        return 0.0
    if isinstance(value, str) and "_" in value:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def compare_answers(user: str | None, good: str | None) -> bool:
    """
    사용자 답변과 모범 답변 비교

    양쪽 공백 제거 후 대소문자 무시 비교. 어느 한쪽이라도 None이면 오답.
    """
    if good is None or user is None:
        return False
    return str(user).strip().upper() == str(good).strip().upper()


def is_correct(question: AnsweredQuestion) -> bool:
    return compare_answers(question.user_answer, question.good_practice_answer)


def binary_indicator(answer: str | None) -> int:
    """
    CDF_INPUT 입력값 (Y -> 1, 그 외 -> 0)

    None 답변은 0으로 처리 ("Y가 아님"과 동일)
    """
    if answer is None:
        return 0
    return 1 if str(answer).strip().upper() == "Y" else 0


def _full_award(question: AnsweredQuestion) -> Award:
    return to_number(question.ffp_value), to_number(question.sbp_value)


# ============================================
# 규칙별 평가 함수 (문항 순서대로 가산분 생성)
# ============================================
def evaluate_and(questions: list[AnsweredQuestion]) -> Iterator[Award]:
    """그룹 전체 정답일 때만 모든 문항 배점"""
    if all(is_correct(q) for q in questions):
        for q in questions:
            yield _full_award(q)


def evaluate_correct_members(questions: list[AnsweredQuestion]) -> Iterator[Award]:
    """정답 문항 배점 합산 (OR / PARTIAL / SIMPLE)"""
    for q in questions:
        if is_correct(q):
            yield _full_award(q)


def evaluate_cdf_input(questions: list[AnsweredQuestion]) -> Iterator[Award]:
    """Y/N 입력을 정규 CDF 가중치로 변환해 배점에 곱함"""
    for q in questions:
        factor = normal_cdf(binary_indicator(q.user_answer))
        yield factor * to_number(q.ffp_value), factor * to_number(q.sbp_value)


RULES: dict[GroupLogic, Callable[[list[AnsweredQuestion]], Iterator[Award]]] = {
    GroupLogic.SIMPLE: evaluate_correct_members,
    GroupLogic.AND: evaluate_and,
    # TODO: OR은 "하나라도 정답이면 그룹 배점 1회" 의도일 가능성 있음 (제품 측 확인 후 분리)
    GroupLogic.OR: evaluate_correct_members,
    GroupLogic.PARTIAL: evaluate_correct_members,
    GroupLogic.CDF_INPUT: evaluate_cdf_input,
    GroupLogic.UNKNOWN: evaluate_correct_members,
}


@dataclass
class GroupScore:
    """그룹 단위 채점 내역"""
    tag: str                       # 정규화된 group_logic 문자열
    indicator_name: str
    logic: GroupLogic
    question_ids: list[int] = field(default_factory=list)
    ffp: float = 0.0
    sbp: float = 0.0
    awarded: int = 0               # 배점이 발생한 문항 수


def group_questions(
    questions: Iterable[AnsweredQuestion],
) -> dict[tuple[str, str], list[AnsweredQuestion]]:
    """
    (정규화된 group_logic, indicator_name) 기준 그룹핑

    그룹은 최초 등장 순서, 그룹 내 문항은 입력 순서를 유지
    """
    groups: dict[tuple[str, str], list[AnsweredQuestion]] = {}
    for q in questions:
        groups.setdefault(q.group_key, []).append(q)
    return groups


class ScoringEngine(Scorer):
    """
    규칙 기반 채점 엔진

    사용법:
        engine = ScoringEngine()
        result = engine.score(questions)
        print(result.ffp, result.sbp)

        # 그룹별 내역
        for group in engine.evaluate_groups(questions):
            print(group.indicator_name, group.ffp)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def score(self, questions: list[AnsweredQuestion]) -> ScoreResult:
        """
        FFP/SBP 합계 산출

        Args:
            questions: 답변된 문항 목록 (빈 목록이면 0/0)

        Returns:
            ScoreResult
        """
        result = ScoreResult()
        groups = self._evaluate(questions, result)

        self.logger.debug(
            f"채점 완료: 문항 {len(questions)}개, 그룹 {len(groups)}개 "
            f"-> FFP={result.ffp:.4f}, SBP={result.sbp:.4f}"
        )
        return result

    def evaluate_groups(self, questions: list[AnsweredQuestion]) -> list[GroupScore]:
        """그룹별 채점 내역 (합계는 score()와 동일)"""
        return self._evaluate(questions, ScoreResult())

    def _evaluate(
        self, questions: list[AnsweredQuestion], result: ScoreResult
    ) -> list[GroupScore]:
        # 합계는 문항 단위로 누적 (입력 순서 기반 고정 합산 순서)
        group_scores = []

        for (tag, indicator_name), members in group_questions(questions).items():
            logic = GroupLogic.parse(tag)
            group = GroupScore(
                tag=tag,
                indicator_name=indicator_name,
                logic=logic,
                question_ids=[q.question_id for q in members],
            )

            for ffp, sbp in RULES[logic](members):
                result.add(ffp, sbp)
                group.ffp += ffp
                group.sbp += sbp
                group.awarded += 1

            if logic is GroupLogic.UNKNOWN:
                self.logger.warning(
                    f"알 수 없는 group_logic '{tag}' (지표: {indicator_name}) -> SIMPLE 규칙 적용"
                )

            group_scores.append(group)

        return group_scores


def calculate_scores(questions: list[AnsweredQuestion]) -> ScoreResult:
    """
    답변 목록 채점 (편의 함수)

    dict 행도 허용 (DB 조회 결과를 그대로 전달하는 경우)
    """
    items = [
        q if isinstance(q, AnsweredQuestion) else AnsweredQuestion.from_dict(q)
        for q in questions
    ]
    return ScoringEngine().score(items)
