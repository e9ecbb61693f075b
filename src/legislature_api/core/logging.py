"""Loguru logging configuration.

Every record carries a ``job`` tag: ``api`` for the web service, or the
ingestion job name while a job runs (see ``logged_job``). Human-readable
lines go to stderr. Records bound with ``json_output=True`` (the job
summaries cron wrappers scrape) are additionally written to stderr as one
flat JSON object per line. An optional rotating log file mirrors the
human-readable lines.
"""

import functools
import json
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[job]:<11} | {name}:{function}:{line} | {message}"
_DEFAULT_JOB = "api"


def _is_summary(record: Any) -> bool:
    return bool(record["extra"].get("json_output", False))


def _write_summary(message: Any) -> None:
    """Write a job summary as one flat JSON line."""
    record = message.record
    payload = {
        "time": record["time"].isoformat(),
        "level": record["level"].name,
        "event": record["message"],
        **{k: v for k, v in record["extra"].items() if k != "json_output"},
    }
    sys.stderr.write(json.dumps(payload, default=str) + "\n")


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"job": _DEFAULT_JOB})
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)
    logger.add(_write_summary, level=level, filter=_is_summary)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "legislature-api.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )


def logged_job(name: str) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Tag every record emitted while the decorated coroutine runs with ``job=name``."""

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with logger.contextualize(job=name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
