import sys
from loguru import logger
import logging

from app.core.config import settings

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# uvicorn access lines and the HTTP stack under the supabase client are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "hpack")

class InterceptHandler(logging.Handler):
    """Forwards stdlib logging records to loguru, keeping the original call site."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # skip logging's own frames
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def setup_logging():
    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL, format=CONSOLE_FORMAT)
    logger.add(
        settings.ERROR_LOG_FILE,
        level="ERROR",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=FILE_FORMAT
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

__all__ = ["logger", "setup_logging"]
