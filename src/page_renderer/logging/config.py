import os
import logging
import logging.handlers
from typing import List
from pathlib import Path
import json
from datetime import datetime, timezone

# Extra record attributes the renderer attaches to its log calls
RECORD_FIELDS = ("cache_key", "template")

class LogConfig:
    """Root logger setup driven by a RendererConfiguration."""

    def __init__(self, config):
        """
        Args:
            config: RendererConfiguration holding the log_* settings
        """
        self.log_level = getattr(logging, config.log_level)
        self.log_file = config.log_file
        self.log_format = config.log_format
        self.max_bytes = config.log_max_bytes
        self.backup_count = config.log_backup_count
        self.json_logging = config.json_logging

    def build_handlers(self) -> List[logging.Handler]:
        """Console handler, plus a rotating file handler when log_file is set."""
        if self.json_logging:
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(self.log_format)

        handlers = [logging.StreamHandler()]
        if self.log_file:
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                Path(log_dir).mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            ))

        for handler in handlers:
            handler.setFormatter(formatter)
            handler.setLevel(self.log_level)
        return handlers

    def configure(self) -> None:
        """Replace the root logger's handlers."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        for handler in self.build_handlers():
            root_logger.addHandler(handler)

class JsonFormatter(logging.Formatter):
    """One JSON object per record, including renderer cache keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno
        }

        for field in RECORD_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)
