import logging
import sys

from app.components.logger.logger_interface import LoggerInterface

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger(LoggerInterface):
    def __init__(self, log_format: str | None = None, log_level: str | None = None):
        self.log_format: str = log_format or DEFAULT_LOG_FORMAT
        self.log_level: int = self.__parse_level(log_level)

        self.handler = logging.StreamHandler(sys.stdout)
        self.handler.setFormatter(logging.Formatter(self.log_format))

    @staticmethod
    def __parse_level(log_level: str | None) -> int:
        if not log_level:
            return logging.INFO

        level = logging.getLevelName(log_level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {log_level}")
        return level

    def get_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.log_level)

        if self.handler not in logger.handlers:
            logger.addHandler(self.handler)
        logger.propagate = False

        return logger
