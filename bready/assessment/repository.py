"""
평가 데이터 저장소

세션 단위 CRUD. 트랜잭션 경계는 호출자(AssessmentService)가 관리
"""
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bready.core.interfaces import AnsweredQuestion, AssessmentStatus, ScoreResult
from bready.core.models import AssessmentModel, QuestionModel, UserAnswerModel


class AssessmentRepository:
    """
    평가/답변 저장소

    사용법:
        with db.session() as session:
            repo = AssessmentRepository(session)
            assessment = repo.create_assessment(user_id=1)
            repo.replace_answer(assessment.id, question_id=101, user_answer="Y")
    """

    def __init__(self, session: Session):
        self.session = session

    def create_assessment(self, user_id: int) -> AssessmentModel:
        assessment = AssessmentModel(
            user_id=user_id,
            status=AssessmentStatus.IN_PROGRESS.value,
        )
        self.session.add(assessment)
        self.session.flush()
        return assessment

    def get_assessment(self, assessment_id: int) -> AssessmentModel | None:
        return self.session.get(AssessmentModel, assessment_id)

    def list_for_user(self, user_id: int) -> list[AssessmentModel]:
        """사용자 평가 목록 (최신순)"""
        result = self.session.execute(
            select(AssessmentModel)
            .where(AssessmentModel.user_id == user_id)
            .order_by(AssessmentModel.created_at.desc(), AssessmentModel.id.desc())
        )
        return list(result.scalars().all())

    def get_answers(self, assessment_id: int) -> list[UserAnswerModel]:
        result = self.session.execute(
            select(UserAnswerModel)
            .where(UserAnswerModel.assessment_id == assessment_id)
            .order_by(UserAnswerModel.id)
        )
        return list(result.scalars().all())

    def replace_answer(
        self, assessment_id: int, question_id: int, user_answer: str | None
    ) -> UserAnswerModel:
        """
        답변 저장 (기존 답변 삭제 후 삽입)

        user_answers 테이블에 (assessment_id, question_id) 유니크 제약이 없으므로
        중복 행까지 모두 삭제
        """
        self.session.execute(
            delete(UserAnswerModel).where(
                UserAnswerModel.assessment_id == assessment_id,
                UserAnswerModel.question_id == question_id,
            )
        )
        answer = UserAnswerModel(
            assessment_id=assessment_id,
            question_id=question_id,
            user_answer=user_answer,
        )
        self.session.add(answer)
        self.session.flush()
        return answer

    def fetch_answered_questions(self, assessment_id: int) -> list[AnsweredQuestion]:
        """
        답변 + 문항 메타데이터 조인

        Returns:
            채점 엔진 입력 (답변 저장 순서)
        """
        result = self.session.execute(
            select(
                UserAnswerModel.question_id,
                QuestionModel.indicator_name,
                QuestionModel.group_logic,
                QuestionModel.good_practice_answer,
                QuestionModel.ffp_value,
                QuestionModel.sbp_value,
                UserAnswerModel.user_answer,
            )
            .join(QuestionModel, UserAnswerModel.question_id == QuestionModel.question_id)
            .where(UserAnswerModel.assessment_id == assessment_id)
            .order_by(UserAnswerModel.id)
        )
        return [AnsweredQuestion.from_dict(dict(row._mapping)) for row in result]

    def complete(self, assessment: AssessmentModel, scores: ScoreResult) -> None:
        """최종 점수 기록 + 완료 처리"""
        assessment.final_ffp_score = scores.ffp
        assessment.final_sbp_score = scores.sbp
        assessment.status = AssessmentStatus.COMPLETED.value
        self.session.flush()
