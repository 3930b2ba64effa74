"""
데이터베이스 관리 모듈

SQLAlchemy 기반 커넥션 풀 및 세션 관리

프로세스 전역 싱글톤을 두지 않는다. 프로세스 시작 시 생성해서
워크플로우에 주입하고, 종료 시 close()로 정리한다.
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from bready.core.exceptions import DatabaseError
from bready.core.logger import get_logger

# ORM Base 클래스
Base = declarative_base()


class DatabaseManager:
    """
    데이터베이스 연결 관리자

    사용법:
        db = DatabaseManager("sqlite:///data/bready.db")

        with db.session() as session:
            result = session.execute(text("SELECT 1"))

        db.close()
    """

    def __init__(
        self,
        connection_string: str | None = None,
        pool_size: int = 5,
        pool_timeout: int = 30,
        echo: bool = False,
    ):
        self._connection_string = connection_string
        self._pool_size = pool_size
        self._pool_timeout = pool_timeout
        self._echo = echo

        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None
        self.logger = get_logger(self.__class__.__name__)

    def _ensure_engine(self) -> Engine:
        """엔진 생성 (Lazy initialization)"""
        if self._engine is None:
            if self._connection_string is None:
                raise DatabaseError("데이터베이스 연결 문자열이 설정되지 않았습니다")

            # SQLite 파일 DB인 경우 디렉토리 생성
            if self._connection_string.startswith("sqlite:///"):
                db_file = self._connection_string.replace("sqlite:///", "")
                if db_file and db_file != ":memory:":
                    Path(db_file).parent.mkdir(parents=True, exist_ok=True)

            if self._connection_string.startswith("sqlite"):
                # SQLite는 pool_size 지원 안함
                self._engine = create_engine(
                    self._connection_string,
                    echo=self._echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(
                    self._connection_string,
                    pool_size=self._pool_size,
                    pool_timeout=self._pool_timeout,
                    echo=self._echo,
                )

            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            self.logger.debug(f"DB 엔진 생성: {self._engine.url.get_backend_name()}")

        return self._engine

    @property
    def engine(self) -> Engine:
        """SQLAlchemy 엔진 반환"""
        return self._ensure_engine()

    def get_session(self) -> Session:
        """새 세션 반환 (수동 관리)"""
        self._ensure_engine()
        if self._session_factory is None:
            raise DatabaseError("세션 팩토리가 초기화되지 않았습니다")
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        세션 컨텍스트 매니저

        자동 커밋/롤백 처리. SQLAlchemy 오류는 DatabaseError로 감싸고,
        그 외 예외(도메인 예외 포함)는 롤백 후 그대로 전파한다.

        사용법:
            with db.session() as session:
                session.add(model)
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise DatabaseError(f"데이터베이스 작업 실패: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all_tables(self) -> None:
        """모든 테이블 생성 (ORM 모델 기반)"""
        # 모델 등록
        import bready.core.models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def health_check(self) -> bool:
        """연결 상태 확인"""
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            self.logger.warning(f"DB 헬스체크 실패: {e}")
            return False

    def close(self) -> None:
        """연결 종료"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


def init_database_from_config(config=None) -> DatabaseManager:
    """설정 파일 기반 데이터베이스 초기화"""
    if config is None:
        from bready.core.config import get_config
        config = get_config()

    db_config = config.get_section("database")

    return DatabaseManager(
        connection_string=db_config.get("connection_string"),
        pool_size=int(db_config.get("pool_size", 5)),
        pool_timeout=int(db_config.get("pool_timeout", 30)),
        # 환경 변수 오버라이드는 문자열로 들어옴
        echo=str(db_config.get("echo", False)).lower() in ("1", "true", "yes"),
    )
