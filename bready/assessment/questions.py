"""
문항 계층 조회

pillar -> category -> subcategory -> question 트리 구성
"""
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from bready.core.database import DatabaseManager
from bready.core.logger import get_logger
from bready.core.models import (
    CategoryModel,
    PillarModel,
    QuestionModel,
    SubcategoryModel,
)

QUESTION_FIELDS = (
    "question_id",
    "question_text",
    "indicator_name",
    "is_scored",
    "good_practice_answer",
    "ffp_value",
    "sbp_value",
    "group_logic",
    "subcategory_id",
)


class QuestionRepository:
    """문항 계층 테이블 조회 (모두 id 순)"""

    def __init__(self, session: Session):
        self.session = session

    def list_pillars(self) -> list[PillarModel]:
        return list(self.session.execute(
            select(PillarModel).order_by(PillarModel.id)
        ).scalars().all())

    def list_categories(self) -> list[CategoryModel]:
        return list(self.session.execute(
            select(CategoryModel).order_by(CategoryModel.id)
        ).scalars().all())

    def list_subcategories(self) -> list[SubcategoryModel]:
        return list(self.session.execute(
            select(SubcategoryModel).order_by(SubcategoryModel.id)
        ).scalars().all())

    def list_questions(self) -> list[QuestionModel]:
        return list(self.session.execute(
            select(QuestionModel).order_by(QuestionModel.question_id)
        ).scalars().all())


def build_hierarchy(
    pillars: list[PillarModel],
    categories: list[CategoryModel],
    subcategories: list[SubcategoryModel],
    questions: list[QuestionModel],
) -> dict[str, Any]:
    """
    계층 트리 구성

    상위 항목이 없는 하위 항목(고아)은 트리에 포함하지 않는다.
    - subcategory를 찾을 수 없는 문항
    - category를 찾을 수 없는 subcategory
    - pillar를 찾을 수 없는 category

    Returns:
        {"pillars": [{"id", "name", "categories": [{"id", "name",
            "subcategories": [{"id", "name", "questions": [...]}]}]}]}
    """
    subcategory_nodes: dict[str, dict[str, Any]] = {}
    subcategories_by_category: dict[str, list[dict[str, Any]]] = {}
    for sub in subcategories:
        node = {"id": sub.id, "name": sub.name, "questions": []}
        subcategory_nodes[sub.id] = node
        subcategories_by_category.setdefault(sub.category_id, []).append(node)

    for q in questions:
        node = subcategory_nodes.get(q.subcategory_id)
        if node is not None:
            node["questions"].append({name: getattr(q, name) for name in QUESTION_FIELDS})

    categories_by_pillar: dict[int, list[dict[str, Any]]] = {}
    for cat in categories:
        categories_by_pillar.setdefault(cat.pillar_id, []).append({
            "id": cat.id,
            "name": cat.name,
            "subcategories": subcategories_by_category.get(cat.id, []),
        })

    return {
        "pillars": [
            {
                "id": p.id,
                "name": p.name,
                "categories": categories_by_pillar.get(p.id, []),
            }
            for p in pillars
        ]
    }


class QuestionService:
    """
    문항 계층 서비스

    사용법:
        service = QuestionService(db)
        tree = service.get_hierarchy()
        for pillar in tree["pillars"]:
            print(pillar["name"], len(pillar["categories"]))
    """

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.logger = get_logger(self.__class__.__name__)

    def get_hierarchy(self) -> dict[str, Any]:
        """전체 문항 계층 조회"""
        with self.db.session() as session:
            repo = QuestionRepository(session)
            pillars = repo.list_pillars()
            categories = repo.list_categories()
            subcategories = repo.list_subcategories()
            questions = repo.list_questions()

        tree = build_hierarchy(pillars, categories, subcategories, questions)
        self.logger.debug(
            f"문항 계층 조회: pillar {len(pillars)}개, category {len(categories)}개, "
            f"subcategory {len(subcategories)}개, 문항 {len(questions)}개"
        )
        return tree
