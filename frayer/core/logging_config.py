"""
Logging configuration: console handler, text or JSON lines, per-module levels.
"""
import json
import logging
import sys
from typing import Dict, Optional

from frayer.core import config


class JsonFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class LoggingConfig:
    """Centralized logging configuration"""

    _configured = False
    _module_levels: Dict[str, str] = {}

    @classmethod
    def configure(cls, module_levels: Optional[Dict[str, str]] = None, force: bool = False):
        """Configure logging for the application"""
        if cls._configured and not force:
            return

        default_levels = {
            "uvicorn.access": "WARNING",
            "frayer": config.LOG_LEVEL,
            "root": config.LOG_LEVEL,
        }
        if module_levels:
            default_levels.update(module_levels)
        cls._module_levels = default_levels

        if config.LOG_FORMAT.lower() == "json":
            formatter = JsonFormatter(datefmt='%Y-%m-%d %H:%M:%S')
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)

        root_level = default_levels.get("root", "INFO")
        logging.basicConfig(
            level=getattr(logging, root_level.upper()),
            handlers=[console_handler],
            force=True
        )

        for module, level in default_levels.items():
            if module != "root":
                logging.getLogger(module).setLevel(getattr(logging, level.upper()))

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for a module"""
        if not cls._configured:
            cls.configure()
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    return LoggingConfig.get_logger(name)
