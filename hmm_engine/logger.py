"""
Logging setup for hmm-engine.

Everything the package logs goes through the ``hmm_engine`` logger, which is
configured once from the ``logging`` config section. Model, decoder and
scorer log under ``hmm_engine.hmm``; re-estimation and initialization log
under ``hmm_engine.train``.
"""

import logging
import sys
import warnings
from pathlib import Path
from typing import Optional, Union

from .config import get_config

PACKAGE_LOGGER = 'hmm_engine'
HMM_COMPONENT = 'hmm'
TRAINING_COMPONENT = 'train'


def resolve_level(level: Union[str, int]) -> int:
    """
    Numeric logging level for a level name ('debug', 'INFO', ...) or number.

    Raises:
        ValueError: If the name is not a registered logging level
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


class EngineLogging:
    """
    Owns the handlers attached to the package logger.

    Only handlers created here are ever replaced or removed, so handlers that
    an application or test runner attaches to ``hmm_engine`` are left alone.
    """

    def __init__(self):
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self.configure()

    def configure(self):
        """(Re)build the console and file handlers from config."""
        configured = get_config('logging', 'level') or 'INFO'
        try:
            level = resolve_level(configured)
        except ValueError:
            warnings.warn(f"Unknown logging level {configured!r}, using INFO")
            level = logging.INFO

        self._detach(self._console_handler)
        self.disable_file_logging()

        self.logger.setLevel(level)
        self.logger.propagate = False

        self._console_handler = logging.StreamHandler(sys.stdout)
        self._console_handler.setLevel(level)
        self._console_handler.setFormatter(self._formatter())
        self.logger.addHandler(self._console_handler)

        if get_config('logging', 'file_logging'):
            self.enable_file_logging()

    def _formatter(self) -> logging.Formatter:
        return logging.Formatter(get_config('logging', 'format'))

    def _detach(self, handler: Optional[logging.Handler]):
        if handler is not None:
            self.logger.removeHandler(handler)
            handler.close()

    def component(self, name: str) -> logging.Logger:
        """Logger for ``name`` below the package logger."""
        if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
            return logging.getLogger(name)
        return logging.getLogger(f'{PACKAGE_LOGGER}.{name}')

    def set_level(self, level: Union[str, int]):
        numeric = resolve_level(level)
        self.logger.setLevel(numeric)
        for handler in (self._console_handler, self._file_handler):
            if handler is not None:
                handler.setLevel(numeric)

    def enable_file_logging(self, log_file: Optional[str] = None) -> logging.FileHandler:
        """
        Start copying package log records to ``log_file``.

        A second call while file logging is on keeps the existing handler.

        Returns:
            The file handler owned by this manager
        """
        if self._file_handler is not None:
            return self._file_handler

        log_path = Path(log_file or get_config('logging', 'log_file') or 'hmm_engine.log')
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(log_path)
        handler.setLevel(self.logger.level)
        handler.setFormatter(self._formatter())
        self.logger.addHandler(handler)
        self._file_handler = handler
        return handler

    def disable_file_logging(self):
        self._detach(self._file_handler)
        self._file_handler = None

    @property
    def file_handler(self) -> Optional[logging.FileHandler]:
        return self._file_handler


_engine_logging = EngineLogging()


def get_logger(name: str = 'main') -> logging.Logger:
    """Get a logger below ``hmm_engine`` for the given name."""
    return _engine_logging.component(name)


def get_hmm_logger() -> logging.Logger:
    """Logger shared by the model, decoder, scorer and report code."""
    return _engine_logging.component(HMM_COMPONENT)


def get_training_logger() -> logging.Logger:
    """Logger shared by re-estimation and initialization."""
    return _engine_logging.component(TRAINING_COMPONENT)


def configure_logging():
    """Re-apply the ``logging`` config section, e.g. after ``update_config``."""
    _engine_logging.configure()


def set_log_level(level: Union[str, int]):
    """Set the level of the package logger and its own handlers."""
    _engine_logging.set_level(level)


def enable_file_logging(log_file: Optional[str] = None) -> logging.FileHandler:
    """Enable file logging (default path: ``logging.log_file`` from config)."""
    return _engine_logging.enable_file_logging(log_file)


def disable_file_logging():
    """Remove the file handler added by :func:`enable_file_logging`."""
    _engine_logging.disable_file_logging()
