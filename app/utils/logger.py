"""애플리케이션 로깅 설정 모듈.

Application logging setup module.
Configures the root logger once from ``settings.LOG_LEVEL``; modules log
through ``logging.getLogger(__name__)``. Request/response logging is done
separately by the Axiom middleware.
"""

import logging
import sys

from app.config import settings

DEFAULT_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(level_name: str | None = None) -> logging.Logger:
    """루트 로거를 설정합니다. 여러 번 호출해도 핸들러가 중복되지 않습니다.

    Configure the root logger with a stdout handler. Calling it again
    replaces the previous handlers instead of stacking them.

    Args:
        level_name: 로그 레벨 이름, None이면 설정값 사용
                    (Log level name; defaults to settings.LOG_LEVEL)

    Returns:
        logging.Logger: 설정된 루트 로거 (Configured root logger)
    """
    level: int = getattr(logging, (level_name or settings.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 재호출 시 중복 핸들러 제거 — Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    root_logger.addHandler(handler)

    return root_logger
