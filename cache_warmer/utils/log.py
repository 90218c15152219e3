"""
Logging configuration for the cache warmer.

Console output highlights ``[CATEGORY]`` tags (through ``colorlog`` when it
is installed) and turns warnings and errors into ``::warning::`` /
``::error::`` annotations when running inside GitHub Actions.

Every crawl event is emitted as a single record, so handlers write each
event as one line even when many crawl threads log at once.
"""

import logging
import os
from pathlib import Path

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("cache-warmer")

_CONSOLE_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_CI: bool = os.environ.get("GITHUB_ACTIONS") == "true"

_ANSI_RESET = "\033[0m"
_CATEGORY_STYLES: dict[str, str] = {
    "[SITE]":  "\033[1;34m",
    "[VISIT]": "\033[32m",
    "[LINKS]": "\033[37m",
    "[SKIP]":  "\033[90m",
    "[PARSE]": "\033[33m",
    "[FAIL]":  "\033[1;33m",
    "[ERR]":   "\033[1;31m",
}

_CI_COMMANDS: dict[int, str] = {
    logging.WARNING:  "::warning::",
    logging.ERROR:    "::error::",
    logging.CRITICAL: "::error::",
}


def describe_exception(exc: BaseException) -> str:
    """Render *exc* and every exception it was raised from, one per line.

    Nested causes are prefixed with one dash per level::

        outer failure
        ->connection refused
        -->[Errno 111] Connection refused

    An implicit context hidden with ``raise ... from None`` is not shown.
    """
    lines: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    level = 0
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current) or type(current).__name__
        prefix = "-" * level + ">" if level else ""
        lines.append(f"{prefix}{message}")
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
        level += 1
    return "\n".join(lines)


class _TagHighlighter:
    """Formatter mixin: colours ``[CATEGORY]`` tags and, in CI, prefixes
    the workflow command for the record's level."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)  # type: ignore[misc]
        for tag, style in _CATEGORY_STYLES.items():
            if tag in msg:
                msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
        if _CI:
            msg = _CI_COMMANDS.get(record.levelno, "") + msg
        return msg


class _PlainFormatter(_TagHighlighter, logging.Formatter):
    pass


def _console_handler() -> logging.Handler:
    if _COLORLOG_AVAILABLE and not _CI:
        class _ColorFormatter(_TagHighlighter, colorlog.ColoredFormatter):
            pass

        handler = colorlog.StreamHandler()
        handler.setFormatter(_ColorFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt=_CONSOLE_DATEFMT,
        ))
        return handler

    handler = logging.StreamHandler()
    handler.setFormatter(_PlainFormatter(_CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT))
    return handler


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure the module-level logger.

    Parameters
    ----------
    debug : bool
        Enable DEBUG-level console output (default is INFO).  Rejected
        links are only reported at DEBUG level.
    log_file : str | None
        If given, also write every record, DEBUG included, to this file.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    log.handlers.clear()
    log.propagate = False

    handler = _console_handler()
    handler.setLevel(level)
    log.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())
