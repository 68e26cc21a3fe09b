from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..settings import LOG_FILE_NAME, LogSettings, get_log_settings

# Runtime guard so root handlers are attached once per process. (NOT A CONSTANT)
_LOGGING_CONFIGURED = False


def build_handlers(
    log_settings: LogSettings,
    base_dir: Optional[Union[str, Path]] = None,
) -> List[logging.Handler]:
    """Console handler, plus an appending file handler when a logs dir is set."""
    formatter = logging.Formatter(fmt=log_settings.fmt, datefmt=log_settings.datefmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers: List[logging.Handler] = [console_handler]

    if log_settings.logs_dir:
        logs_path = Path(base_dir or Path.cwd()) / log_settings.logs_dir
        logs_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_path / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def setup_logger(
    name: Optional[str] = None,
    *,
    base_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    global _LOGGING_CONFIGURED

    if not _LOGGING_CONFIGURED:
        log_settings = get_log_settings()
        root_logger = logging.getLogger()
        root_logger.setLevel(log_settings.level)
        for handler in build_handlers(log_settings, base_dir):
            root_logger.addHandler(handler)
        _LOGGING_CONFIGURED = True

    return logging.getLogger(name or "identity_hash")
