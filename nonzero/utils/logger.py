"""
Structured logging - everything goes to a log file, nothing to the console.
"""

import logging
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

ROOT_LOGGER_NAME = 'nonzero'

# Recent records shared by every StructuredLogger
_recent_logs: List[Dict] = []
MAX_RECENT_LOGS = 100


def setup_logging(log_level: str = 'INFO', log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to write to. Without one, records are only
            kept in the in-memory buffer.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root.addHandler(file_handler)
    else:
        root.addHandler(logging.NullHandler())

    # No console handler
    root.propagate = False
    return root


class StructuredLogger:
    """Logger that takes keyword fields and renders them as JSON."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    def log_action(self, level: str, message: str, **kwargs):
        """Log a message with structured data."""
        if not self.logger.isEnabledFor(getattr(logging, level.upper(), logging.DEBUG)):
            return

        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'logger': self.name,
            'level': level,
            'message': message,
            **kwargs
        }

        _recent_logs.append(log_entry)
        if len(_recent_logs) > MAX_RECENT_LOGS:
            _recent_logs.pop(0)

        text = f"{message} | {json.dumps(kwargs, default=str)}" if kwargs else message
        if level == 'error':
            self.logger.error(text)
        elif level == 'warning':
            self.logger.warning(text)
        elif level == 'info':
            self.logger.info(text)
        else:
            self.logger.debug(text)

    def debug(self, message: str, **kwargs):
        self.log_action('debug', message, **kwargs)

    def info(self, message: str, **kwargs):
        self.log_action('info', message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.log_action('warning', message, **kwargs)

    def error(self, message: str, **kwargs):
        self.log_action('error', message, **kwargs)


def get_recent_logs(level: Optional[str] = None, limit: int = 50) -> List[Dict]:
    """Get recent logs, optionally filtered by level."""
    logs = _recent_logs
    if level:
        logs = [log for log in logs if log['level'] == level]
    return logs[-limit:]


def clear_recent_logs() -> None:
    _recent_logs.clear()


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str = 'app') -> StructuredLogger:
    """Get (or create) the structured logger for ``name``."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]
