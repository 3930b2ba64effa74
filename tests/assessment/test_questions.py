"""
QuestionService 문항 계층 테스트 (SQLite 임시 DB)
"""
import pytest

from bready.assessment import QuestionService
from bready.core.database import DatabaseManager
from bready.core.models import (
    CategoryModel,
    PillarModel,
    QuestionModel,
    SubcategoryModel,
)


def _question(question_id, subcategory_id, indicator="X1"):
    return QuestionModel(
        question_id=question_id,
        question_text=f"Question {question_id}",
        indicator_name=indicator,
        good_practice_answer="Y",
        ffp_value=1,
        sbp_value=2,
        subcategory_id=subcategory_id,
    )


@pytest.fixture
def db(tmp_path):
    """계층 데이터가 적재된 임시 DB (삽입 순서는 id 순서와 다르게)"""
    manager = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'bready.db'}")
    manager.create_all_tables()

    with manager.session() as session:
        session.add_all([
            PillarModel(id=2, name="Dispute Resolution", pillar_id=2),
            PillarModel(id=1, name="Regulatory Framework", pillar_id=1),
            CategoryModel(id="1.2", name="Permits", pillar_id=1),
            CategoryModel(id="1.1", name="Entry", pillar_id=1),
            CategoryModel(id="9.1", name="Orphan category", pillar_id=9),
            SubcategoryModel(id="1.1.2", name="Registration", category_id="1.1"),
            SubcategoryModel(id="1.1.1", name="Incorporation", category_id="1.1"),
            SubcategoryModel(id="9.1.1", name="Under orphan category", category_id="9.1"),
            SubcategoryModel(id="8.8.8", name="Orphan subcategory", category_id="8.8"),
            _question(12, "1.1.1"),
            _question(11, "1.1.1", indicator="X2"),
            _question(13, "1.1.2"),
            _question(14, "7.7.7"),
            _question(15, "9.1.1"),
        ])

    yield manager
    manager.close()


class TestQuestionHierarchy:
    """문항 계층 조회 테스트"""

    def test_nesting_and_ordering(self, db):
        tree = QuestionService(db).get_hierarchy()

        pillars = tree["pillars"]
        assert [p["id"] for p in pillars] == [1, 2]
        assert pillars[0]["name"] == "Regulatory Framework"

        categories = pillars[0]["categories"]
        assert [c["id"] for c in categories] == ["1.1", "1.2"]
        assert categories[1]["subcategories"] == []
        assert pillars[1]["categories"] == []

        subcategories = categories[0]["subcategories"]
        assert [s["id"] for s in subcategories] == ["1.1.1", "1.1.2"]
        assert [q["question_id"] for q in subcategories[0]["questions"]] == [11, 12]
        assert [q["question_id"] for q in subcategories[1]["questions"]] == [13]

    def test_question_fields(self, db):
        tree = QuestionService(db).get_hierarchy()
        question = tree["pillars"][0]["categories"][0]["subcategories"][0]["questions"][0]

        assert question == {
            "question_id": 11,
            "question_text": "Question 11",
            "indicator_name": "X2",
            "is_scored": True,
            "good_practice_answer": "Y",
            "ffp_value": 1.0,
            "sbp_value": 2.0,
            "group_logic": None,
            "subcategory_id": "1.1.1",
        }

    def test_orphans_skipped(self, db):
        """상위 항목이 없는 category/subcategory/문항은 트리에서 제외"""
        tree = QuestionService(db).get_hierarchy()

        category_ids = [c["id"] for p in tree["pillars"] for c in p["categories"]]
        subcategory_ids = [
            s["id"] for p in tree["pillars"] for c in p["categories"] for s in c["subcategories"]
        ]
        question_ids = [
            q["question_id"]
            for p in tree["pillars"]
            for c in p["categories"]
            for s in c["subcategories"]
            for q in s["questions"]
        ]

        assert "9.1" not in category_ids
        assert "9.1.1" not in subcategory_ids
        assert "8.8.8" not in subcategory_ids
        assert question_ids == [11, 12, 13]

    def test_empty_tables(self, tmp_path):
        manager = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'empty.db'}")
        manager.create_all_tables()

        assert QuestionService(manager).get_hierarchy() == {"pillars": []}
        manager.close()
