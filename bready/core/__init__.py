"""
Core 모듈 - 공통 인프라

- config: 설정 관리
- logger: 로깅 서비스
- database: DB 관리
- exceptions: 커스텀 예외
- interfaces: 데이터 계약 / 인터페이스
- models: ORM 모델
"""
from bready.core.config import Config, get_config
from bready.core.logger import get_logger, LoggerService, setup_logger_from_config
from bready.core.database import DatabaseManager, init_database_from_config, Base
from bready.core.exceptions import (
    BaseError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    DatabaseError,
    AssessmentError,
    AssessmentNotFoundError,
    AssessmentAccessError,
    AnswerValidationError,
)
from bready.core.interfaces import (
    GroupLogic,
    AssessmentStatus,
    AnsweredQuestion,
    ScoreResult,
    Scorer,
    normalize_group_logic,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    # Logger
    "get_logger",
    "LoggerService",
    "setup_logger_from_config",
    # Database
    "DatabaseManager",
    "init_database_from_config",
    "Base",
    # Exceptions
    "BaseError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "DatabaseError",
    "AssessmentError",
    "AssessmentNotFoundError",
    "AssessmentAccessError",
    "AnswerValidationError",
    # Interfaces
    "GroupLogic",
    "AssessmentStatus",
    "AnsweredQuestion",
    "ScoreResult",
    "Scorer",
    "normalize_group_logic",
]
