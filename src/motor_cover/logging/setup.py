"""Logging configuration using loguru — colored console or structured JSON."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from omegaconf import DictConfig


# ---------------------------------------------------------------------------
# Intercept stdlib logging → loguru
# ---------------------------------------------------------------------------

class _InterceptHandler(logging.Handler):
    """Route standard-library log records (uvicorn, pandas, …) through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno  # type: ignore[assignment]

        # Walk past logging's own frames so loguru reports the real caller.
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


_PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
    "{extra}"
)

_NOISY_LOGGERS = ("uvicorn.access", "watchdog", "urllib3", "httpx", "httpcore")


def setup_logging(cfg: DictConfig) -> None:
    """Configure loguru from the ``logging`` config section.

    Parameters
    ----------
    cfg:
        Keys ``level``, ``colored``, ``format`` and optionally ``file``.
        ``format`` is ``"pretty"`` (colored console) or ``"structured"``
        (JSON lines).  When ``file`` is set, a rotating JSON file sink is
        added alongside the console sink.
    """
    logger.remove()

    level: str = str(getattr(cfg, "level", "INFO")).upper()
    use_json: bool = getattr(cfg, "format", "pretty") == "structured"
    colorize: bool = getattr(cfg, "colored", True)
    log_file = getattr(cfg, "file", None)

    if use_json:
        logger.add(sys.stderr, level=level, serialize=True, colorize=False)
    else:
        logger.add(sys.stderr, level=level, format=_PRETTY_FORMAT, colorize=colorize)

    if log_file:
        logger.add(
            str(log_file),
            level=level,
            serialize=True,
            rotation="10 MB",
            retention=5,
            enqueue=True,
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=level, json_mode=use_json, file=log_file)
