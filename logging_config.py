# logging_config.py
import sys
from loguru import logger

import config


def setup_logging(level: str = None):
    """
    loguru 기본 핸들러를 지우고 콘솔(stdout) 핸들러 하나만 등록
    (앱 lifespan 시작 시 한 번 호출)
    """
    logger.remove()
    logger.add(
        sys.stdout,
        level=level or config.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        colorize=True,
    )
    return logger
