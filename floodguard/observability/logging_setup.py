"""
Logging configuration for FloodGuard.

All output goes through loguru. Standard-library loggers (uvicorn,
aiosqlite, aiohttp) are routed into it. Each module binds its own
component name; the check-in flow adds the user id for the duration
of the request.
"""

from __future__ import annotations
import logging
import sys
from typing import Any, Dict
from loguru import logger

# loguru로 흡수할 라이브러리 로거
ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "aiosqlite", "aiohttp.client")

DEFAULT_COMPONENT = "floodguard"


class InterceptHandler(logging.Handler):
    """stdlib logging 레코드를 loguru로 넘깁니다."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # logging 모듈 내부 프레임을 건너뛰어 실제 호출 위치를 표시
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _console_format(record: Dict[str, Any]) -> str:
    """컴포넌트 이름과, 있으면 user_id를 붙인 콘솔 포맷"""
    suffix = " <magenta>user:{extra[user_id]}</magenta>" if "user_id" in record["extra"] else ""
    return (
        "<green>{time:HH:mm:ss.SSS}</green> "
        "<level>{level:<7}</level> "
        "<cyan>{extra[name]:<22}</cyan>"
        + suffix +
        " - <level>{message}</level>\n{exception}"
    )


def configure_logging(log_level: str = "INFO", *, json_output: bool = False) -> None:
    """
    loguru sink를 설정하고 stdlib 로거를 연결합니다.

    Args:
        log_level: 최소 로그 레벨
        json_output: True이면 한 줄 JSON (컨테이너 로그 수집용)
    """
    logger.remove()
    logger.configure(extra={"name": DEFAULT_COMPONENT})

    if json_output:
        logger.add(sys.stdout, level=log_level.upper(), serialize=True, backtrace=False)
    else:
        logger.add(sys.stdout, level=log_level.upper(), format=_console_format,
                   colorize=True, backtrace=True, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers = [InterceptHandler()]
        routed.propagate = False


def get_logger(name: str = DEFAULT_COMPONENT, **ctx):
    """컴포넌트 이름(및 추가 컨텍스트)을 바인딩한 logger"""
    return logger.bind(name=name, **ctx)


def with_context(**ctx):
    """블록 안의 모든 로그에 컨텍스트를 붙입니다 (예: user_id)."""
    return logger.contextualize(**ctx)
