import logging

from llm_connector_lib.base.constants_base import LOG_LEVEL


def prepare_logger(logger_name: str, level: str = LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
