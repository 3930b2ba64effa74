"""
Core 모듈 단위 테스트
"""
import pytest


class TestConfig:
    """Config 모듈 테스트"""

    def setup_method(self):
        """각 테스트 전 Config 리셋"""
        from bready.core.config import Config
        Config.reset()

    def teardown_method(self):
        """각 테스트 후 Config 리셋"""
        from bready.core.config import Config
        Config.reset()

    def test_config_load_success(self):
        """설정 파일 로드 성공"""
        from bready.core.config import Config

        config = Config()
        assert config.get("app.name") == "bready"

    def test_config_singleton(self):
        """싱글톤 패턴 확인"""
        from bready.core.config import Config

        assert Config() is Config()

    def test_config_get_default(self):
        """존재하지 않는 키 기본값 반환"""
        from bready.core.config import Config

        config = Config()
        assert config.get("non.existent.key", default="default_value") == "default_value"

    def test_config_get_section(self):
        """섹션 전체 조회"""
        from bready.core.config import Config

        db_section = Config().get_section("database")
        assert isinstance(db_section, dict)
        assert "connection_string" in db_section

    def test_get_required_missing(self):
        """필수 값 누락 시 예외"""
        from bready.core.config import Config
        from bready.core.exceptions import ConfigValidationError

        with pytest.raises(ConfigValidationError):
            Config().get_required("missing.key")

    def test_env_overlay(self, tmp_path):
        """환경별 설정 파일 병합"""
        from bready.core.config import Config

        (tmp_path / "settings.yaml").write_text(
            "logging:\n  level: INFO\n  log_dir: ./logs\n", encoding="utf-8"
        )
        (tmp_path / "settings.production.yaml").write_text(
            "logging:\n  level: WARNING\n", encoding="utf-8"
        )

        config = Config(env="production", config_dir=tmp_path)
        assert config.is_production
        assert config.get("logging.level") == "WARNING"
        assert config.get("logging.log_dir") == "./logs"

    def test_env_variable_override(self, tmp_path, monkeypatch):
        """BREADY_ / DATABASE_URL 환경 변수 오버라이드"""
        from bready.core.config import Config

        (tmp_path / "settings.yaml").write_text(
            "database:\n  connection_string: sqlite:///a.db\n", encoding="utf-8"
        )
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/bready")
        monkeypatch.setenv("BREADY_LOGGING__LEVEL", "DEBUG")

        config = Config(config_dir=tmp_path)
        assert config.get("database.connection_string") == "postgresql://localhost/bready"
        assert config.get("logging.level") == "DEBUG"

    def test_missing_base_file(self, tmp_path):
        from bready.core.config import Config
        from bready.core.exceptions import ConfigNotFoundError

        with pytest.raises(ConfigNotFoundError):
            Config(config_dir=tmp_path)

    def test_invalid_yaml(self, tmp_path):
        from bready.core.config import Config
        from bready.core.exceptions import ConfigError

        (tmp_path / "settings.yaml").write_text("database: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            Config(config_dir=tmp_path)


class TestLogger:
    """Logger 모듈 테스트"""

    def setup_method(self):
        from bready.core.logger import LoggerService
        LoggerService.reset()

    def teardown_method(self):
        from bready.core.logger import LoggerService
        LoggerService.reset()

    def test_logger_configure(self):
        """로거 설정 성공"""
        from bready.core.logger import LoggerService

        LoggerService.configure(level="DEBUG", file_enabled=False)
        assert LoggerService._configured is True

    def test_get_logger(self):
        """모듈별 로거 획득 후 메시지 출력"""
        from bready.core.logger import get_logger, LoggerService

        LoggerService.configure(level="DEBUG", file_enabled=False)
        logger = get_logger(__name__)
        assert logger is not None
        logger.info("테스트 메시지")

    def test_file_handler(self, tmp_path):
        """파일 로깅"""
        from bready.core.logger import get_logger, LoggerService

        LoggerService.configure(level="INFO", log_dir=str(tmp_path), file_enabled=True)
        get_logger("test").error("파일 기록")

        assert (tmp_path / "app.log").exists()
        assert (tmp_path / "error.log").exists()


class TestDatabase:
    """Database 모듈 테스트"""

    def test_database_connection(self, tmp_path):
        """데이터베이스 연결 테스트"""
        from bready.core.database import DatabaseManager

        db = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'test.db'}")
        assert db.health_check() is True
        db.close()

    def test_missing_connection_string(self):
        from bready.core.database import DatabaseManager
        from bready.core.exceptions import DatabaseError

        with pytest.raises(DatabaseError):
            DatabaseManager().get_session()

    def test_sqlalchemy_error_wrapped(self, tmp_path):
        """SQL 오류는 DatabaseError로 변환"""
        from sqlalchemy import text
        from bready.core.database import DatabaseManager
        from bready.core.exceptions import DatabaseError

        db = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'test.db'}")
        with pytest.raises(DatabaseError):
            with db.session() as session:
                session.execute(text("SELECT * FROM missing_table"))
        db.close()

    def test_domain_error_propagates(self, tmp_path):
        """도메인 예외는 그대로 전파"""
        from bready.core.database import DatabaseManager
        from bready.core.exceptions import AssessmentNotFoundError

        db = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'test.db'}")
        with pytest.raises(AssessmentNotFoundError):
            with db.session():
                raise AssessmentNotFoundError(1)
        db.close()

    def test_domain_error_rolls_back(self, tmp_path):
        """도메인 예외 발생 시 세션 변경분 롤백"""
        from sqlalchemy import func, select
        from bready.core.database import DatabaseManager
        from bready.core.exceptions import AnswerValidationError
        from bready.core.models import AssessmentModel

        db = DatabaseManager(connection_string=f"sqlite:///{tmp_path / 'test.db'}")
        db.create_all_tables()

        with pytest.raises(AnswerValidationError):
            with db.session() as session:
                session.add(AssessmentModel(user_id=1))
                session.flush()
                raise AnswerValidationError("invalid")

        with db.session() as session:
            count = session.execute(select(func.count()).select_from(AssessmentModel)).scalar_one()
        assert count == 0
        db.close()

    def test_init_from_config(self, tmp_path):
        from bready.core.config import Config
        from bready.core.database import init_database_from_config

        (tmp_path / "settings.yaml").write_text(
            f"database:\n  connection_string: sqlite:///{tmp_path / 'cfg.db'}\n  echo: false\n",
            encoding="utf-8",
        )
        Config.reset()
        try:
            db = init_database_from_config(Config(config_dir=tmp_path))
            assert db.health_check() is True
            db.close()
        finally:
            Config.reset()


class TestExceptions:
    """Exception 모듈 테스트"""

    def test_base_error(self):
        from bready.core.exceptions import BaseError

        error = BaseError("테스트 오류", {"key": "value"})
        assert error.message == "테스트 오류"
        assert error.details == {"key": "value"}
        assert "Details:" in str(error)

    def test_assessment_errors(self):
        from bready.core.exceptions import (
            AssessmentAccessError,
            AssessmentError,
            AssessmentNotFoundError,
        )

        not_found = AssessmentNotFoundError(7)
        assert isinstance(not_found, AssessmentError)
        assert not_found.details == {"assessment_id": 7}

        denied = AssessmentAccessError(7, 2)
        assert denied.user_id == 2
        assert str(denied).startswith("You do not own this assessment")


class TestInterfaces:
    """Interfaces 모듈 테스트"""

    @pytest.mark.parametrize("raw,expected", [
        (None, "SIMPLE"),
        ("", "SIMPLE"),
        ("and", "AND"),
        ("Or", "OR"),
        ("PARTIAL", "PARTIAL"),
        ("cdf_input", "CDF_INPUT"),
        ("weird", "UNKNOWN"),
    ])
    def test_group_logic_parse(self, raw, expected):
        from bready.core.interfaces import GroupLogic

        assert GroupLogic.parse(raw).value == expected

    def test_group_key(self):
        from bready.core.interfaces import AnsweredQuestion

        question = AnsweredQuestion(question_id=1, indicator_name="X1", group_logic="and")
        assert question.group_key == ("AND", "X1")

    def test_assessment_status_values(self):
        from bready.core.interfaces import AssessmentStatus

        assert AssessmentStatus.IN_PROGRESS.value == "In Progress"
        assert AssessmentStatus.COMPLETED.value == "Completed"
