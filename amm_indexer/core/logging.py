# amm_indexer/core/logging.py
"""
Centralized logging system for the AMM indexer.

Provides:
- IndexerLogger: Global logging configuration
- LoggingMixin: Consistent logging behavior for classes
- Utility functions: Context logging helpers
"""

import json
import logging
import sys
from datetime import datetime
from logging import DEBUG, INFO, WARNING, ERROR, CRITICAL
from pathlib import Path
from typing import Optional, Dict, Any


ROOT_LOGGER_NAME = 'amm_indexer'

CONTEXT_ATTRS = (
    'tx_hash', 'log_index', 'block_number', 'event_type', 'pool_id',
    'pool_address', 'token', 'pricing_asset', 'error', 'exception_type',
)


class IndexerFormatter(logging.Formatter):
    def __init__(self, include_context: bool = True, structured: bool = False):
        self.include_context = include_context
        self.structured = structured
        super().__init__()

    def _collect_context(self, record: logging.LogRecord) -> Dict[str, Any]:
        context = {}
        for attr in CONTEXT_ATTRS:
            if hasattr(record, attr):
                context[attr] = getattr(record, attr)
        for key, value in getattr(record, 'extra_context', {}).items():
            context.setdefault(key, value)
        return context

    def format(self, record: logging.LogRecord) -> str:
        context = self._collect_context(record) if self.include_context else {}

        if self.structured:
            log_entry = {
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            }
            if context:
                log_entry['context'] = context
            if record.exc_info:
                log_entry['exception'] = self.formatException(record.exc_info)
            return json.dumps(log_entry, separators=(',', ':'), default=str)

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        base_msg = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if context:
            context_parts = ' '.join(f"{key}={value}" for key, value in context.items())
            base_msg = f"{base_msg} | {context_parts}"

        if record.exc_info:
            base_msg = f"{base_msg}\n{self.formatException(record.exc_info)}"

        return base_msg


class IndexerLogger:
    """Global logging configuration and management"""

    _configured = False
    _log_dir: Optional[Path] = None
    _log_level = logging.INFO

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = False,
                  structured_format: bool = False) -> None:

        if cls._configured:
            return

        cls._log_dir = log_dir
        cls._log_level = getattr(logging, log_level.upper())

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(cls._log_level)
        root_logger.handlers.clear()

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(cls._log_level)
            console_handler.setFormatter(IndexerFormatter(structured=structured_format))
            root_logger.addHandler(console_handler)

        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = IndexerFormatter(structured=True)

            file_handler = logging.FileHandler(log_dir / 'amm_indexer.log')
            file_handler.setLevel(cls._log_level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / 'amm_indexer_errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'
        return logging.getLogger(name)


# === Utility Functions ===

def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__

    if module.startswith(f'{ROOT_LOGGER_NAME}.'):
        module = module[len(ROOT_LOGGER_NAME) + 1:]

    return IndexerLogger.get_logger(f"{module}.{class_name}")


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        extra_context = {}
        for key, value in context.items():
            if key in CONTEXT_ATTRS:
                setattr(record, key, value)
            else:
                extra_context[key] = value
        record.extra_context = extra_context
        logger.handle(record)


# === LoggingMixin for Classes ===

class LoggingMixin:
    """
    Mixin to add consistent logging behavior to any class.

    Provides convenient logging methods that automatically:
    - Create class-specific loggers
    - Support structured context logging
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)

    def log_event_context(self, event, **additional_context) -> Dict[str, Any]:
        context = {
            'tx_hash': event.tx_hash,
            'log_index': event.log_index,
            'block_number': event.block_number,
        }
        context.update(additional_context)
        return context


__all__ = [
    'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL',
    'IndexerFormatter', 'IndexerLogger', 'LoggingMixin',
    'get_class_logger', 'log_with_context',
]
