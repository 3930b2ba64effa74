"""
평가 워크플로우 서비스

평가 시작 -> 답변 저장 -> 점수 확정(채점 엔진 1회 호출 후 저장)
"""
from typing import Any

from bready.core.database import DatabaseManager
from bready.core.exceptions import (
    AnswerValidationError,
    AssessmentAccessError,
    AssessmentNotFoundError,
)
from bready.core.interfaces import AssessmentStatus, Scorer, ScoreResult
from bready.core.logger import get_logger
from bready.core.models import AssessmentModel
from bready.assessment.repository import AssessmentRepository
from bready.scoring.engine import ScoringEngine


class AssessmentService:
    """
    평가 워크플로우 서비스

    DatabaseManager는 프로세스 시작 시 생성해 주입한다.

    사용법:
        db = init_database_from_config()
        service = AssessmentService(db)

        assessment_id = service.start_assessment(user_id=1)
        service.save_answers(assessment_id, 1, [
            {"question_id": 101, "user_answer": "Y"},
        ])
        scores = service.calculate(assessment_id, 1)
    """

    def __init__(self, db: DatabaseManager, scorer: Scorer | None = None):
        self.db = db
        self.scorer = scorer or ScoringEngine()
        self.logger = get_logger(self.__class__.__name__)

    def start_assessment(self, user_id: int) -> int:
        """새 평가 생성 (In Progress)"""
        with self.db.session() as session:
            assessment = AssessmentRepository(session).create_assessment(user_id)
            self.logger.info(f"평가 시작: id={assessment.id}, user={user_id}")
            return assessment.id

    def list_assessments(self, user_id: int) -> list[dict[str, Any]]:
        """사용자 평가 목록 (최신순)"""
        with self.db.session() as session:
            assessments = AssessmentRepository(session).list_for_user(user_id)
            return [
                {
                    "id": a.id,
                    "status": a.status,
                    "final_ffp_score": a.final_ffp_score,
                    "final_sbp_score": a.final_sbp_score,
                    "created_at": a.created_at,
                }
                for a in assessments
            ]

    def get_answers(self, assessment_id: int, user_id: int) -> list[dict[str, Any]]:
        """저장된 답변 조회 (소유자만)"""
        with self.db.session() as session:
            repo = AssessmentRepository(session)
            self._get_owned(repo, assessment_id, user_id)
            return [
                {"question_id": a.question_id, "user_answer": a.user_answer}
                for a in repo.get_answers(assessment_id)
            ]

    def save_answers(
        self, assessment_id: int, user_id: int, answers: list[dict[str, Any]]
    ) -> int:
        """
        답변 저장/갱신

        Args:
            assessment_id: 평가 ID
            user_id: 요청 사용자 ID
            answers: [{"question_id": int, "user_answer": str}, ...]

        Returns:
            저장된 답변 수

        Raises:
            AnswerValidationError: 페이로드가 답변 목록이 아닌 경우
            AssessmentNotFoundError / AssessmentAccessError
        """
        parsed = self._validate_answers(answers)

        with self.db.session() as session:
            repo = AssessmentRepository(session)
            self._get_owned(repo, assessment_id, user_id)

            for question_id, user_answer in parsed:
                repo.replace_answer(assessment_id, question_id, user_answer)

        self.logger.info(f"답변 저장: assessment={assessment_id}, {len(parsed)}건")
        return len(parsed)

    def calculate(self, assessment_id: int, user_id: int) -> ScoreResult:
        """
        평가 확정

        답변+문항 메타데이터 조회 -> 채점 -> 최종 점수/Completed 저장을
        하나의 세션(트랜잭션)에서 수행
        """
        with self.db.session() as session:
            repo = AssessmentRepository(session)
            assessment = self._get_owned(repo, assessment_id, user_id)

            if assessment.status == AssessmentStatus.COMPLETED.value:
                self.logger.info(f"완료된 평가 재채점: id={assessment_id}")

            questions = repo.fetch_answered_questions(assessment_id)
            scores = self.scorer.score(questions)
            repo.complete(assessment, scores)

        self.logger.info(
            f"평가 확정: id={assessment_id}, 문항 {len(questions)}개, "
            f"FFP={scores.ffp:.4f}, SBP={scores.sbp:.4f}"
        )
        return scores

    def _get_owned(
        self, repo: AssessmentRepository, assessment_id: int, user_id: int
    ) -> AssessmentModel:
        """평가 조회 + 소유권 확인"""
        assessment = repo.get_assessment(assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError(assessment_id)
        if assessment.user_id != user_id:
            self.logger.warning(
                f"평가 접근 거부: id={assessment_id}, owner={assessment.user_id}, user={user_id}"
            )
            raise AssessmentAccessError(assessment_id, user_id)
        return assessment

    @staticmethod
    def _validate_answers(answers: Any) -> list[tuple[int, str | None]]:
        """답변 페이로드 검증 -> (question_id, user_answer) 목록"""
        if not isinstance(answers, list):
            raise AnswerValidationError("Request body must be an array of answers")

        parsed = []
        for index, item in enumerate(answers):
            if not isinstance(item, dict) or "question_id" not in item:
                raise AnswerValidationError(
                    "Each answer must have a question_id", {"index": index}
                )
            raw_id = item["question_id"]
            question_id = _parse_question_id(raw_id)
            if question_id is None:
                raise AnswerValidationError(
                    "question_id must be an integer",
                    {"index": index, "question_id": raw_id},
                )
            user_answer = item.get("user_answer")
            parsed.append((question_id, None if user_answer is None else str(user_answer)))

        return parsed


def _parse_question_id(raw: Any) -> int | None:
    """정수 question_id 변환 (bool, 소수부 있는 float, 비숫자 -> None)"""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
