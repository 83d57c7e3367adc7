"""
Logger centralizzato per Fridge Access Event Server

- server.log: eventi, input rifiutati, errori (INFO e superiori)
- diagnostics.log: solo record DEBUG (massimi per etichetta, decisioni
  di occupazione), non fanno parte del risultato dell'evento
- console: tutto
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from config import Config


class DiagnosticsFilter(logging.Filter):
    """Lascia passare solo i record DEBUG"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == logging.DEBUG


class ServerLogger:
    """Logger centralizzato con rotazione file e canale diagnostico separato"""

    _loggers = {}

    FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'
    DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

    @classmethod
    def _rotating_handler(cls, path: str, level: int) -> RotatingFileHandler:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=Config.LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=Config.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        handler.setLevel(level)
        return handler

    @classmethod
    def get_logger(cls, module_name: str) -> logging.Logger:
        """
        Ottiene o crea logger per modulo

        Args:
            module_name: Nome modulo (es. "pipeline", "events_api")

        Returns:
            logging.Logger configurato
        """
        if module_name in cls._loggers:
            return cls._loggers[module_name]

        logger = logging.getLogger(f"SmartFridge.{module_name}")
        logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

        if logger.handlers:
            cls._loggers[module_name] = logger
            return logger

        formatter = logging.Formatter(cls.FORMAT, datefmt=cls.DATE_FORMAT)

        file_handler = cls._rotating_handler(Config.LOG_FILE, logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if Config.LOG_DIAGNOSTICS_FILE:
            diagnostics_handler = cls._rotating_handler(Config.LOG_DIAGNOSTICS_FILE, logging.DEBUG)
            diagnostics_handler.addFilter(DiagnosticsFilter())
            diagnostics_handler.setFormatter(formatter)
            logger.addHandler(diagnostics_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        cls._loggers[module_name] = logger
        return logger


def get_logger(module_name: str) -> logging.Logger:
    """
    Shortcut per ottenere logger

    Usage:
        from utils.logger import get_logger
        logger = get_logger('decision')
        logger.debug("IIH Max Predictions ...")   # -> diagnostics.log
        logger.info("milk placed in ...")         # -> server.log
    """
    return ServerLogger.get_logger(module_name)
