from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
import os

from dotenv import load_dotenv

ENV_DEFAULT_ENCODING = "IDENTITY_HASH_ENCODING"
ENV_MIN_ITERATIONS = "IDENTITY_HASH_MIN_ITERATIONS"
ENV_WORKERS = "IDENTITY_HASH_WORKERS"
ENV_TIMEOUT_SECONDS = "IDENTITY_HASH_TIMEOUT_SECONDS"

DEFAULT_ENCODING = "base64"
DEFAULT_MIN_ITERATIONS = 10_000
DEFAULT_WORKERS = 4
DEFAULT_TIMEOUT_SECONDS = 10.0

DEFAULT_LOGS_DIR = ""
LOG_FILE_NAME = "identity_hash.log"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOGS_DIR = "LOGS_DIR"
ENV_LOG_FORMAT = "LOG_FORMAT"
ENV_LOG_DATE_FORMAT = "LOG_DATE_FORMAT"

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid integer for env var {name}: {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"Env var {name} must be positive, got {parsed}")
    return parsed


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid number for env var {name}: {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"Env var {name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class LogSettings:
    logs_dir: str
    level: int
    fmt: str
    datefmt: str


@dataclass(frozen=True)
class Settings:
    default_encoding: str
    min_iterations: int
    workers: int
    timeout_seconds: float


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()

    return Settings(
        default_encoding=os.getenv(ENV_DEFAULT_ENCODING, DEFAULT_ENCODING).strip().lower()
        or DEFAULT_ENCODING,
        min_iterations=_int_env(ENV_MIN_ITERATIONS, DEFAULT_MIN_ITERATIONS),
        workers=_int_env(ENV_WORKERS, DEFAULT_WORKERS),
        timeout_seconds=_float_env(ENV_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS),
    )


@lru_cache(maxsize=1)
def get_log_settings() -> LogSettings:
    load_dotenv()

    raw_level = os.getenv(ENV_LOG_LEVEL, "").strip().upper()
    if raw_level.isdigit():
        level = int(raw_level)
    else:
        level = _LOG_LEVELS.get(raw_level, DEFAULT_LOG_LEVEL)

    return LogSettings(
        logs_dir=os.getenv(ENV_LOGS_DIR, DEFAULT_LOGS_DIR).strip(),
        level=level,
        fmt=os.getenv(ENV_LOG_FORMAT) or DEFAULT_LOG_FORMAT,
        datefmt=os.getenv(ENV_LOG_DATE_FORMAT) or DEFAULT_LOG_DATE_FORMAT,
    )
