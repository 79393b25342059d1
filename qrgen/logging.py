"""qrgen structured logging: console/JSON formatters, audit events and call tracing."""

import functools
import json
import logging
import os
import sys
import time
import traceback
from datetime import datetime, timezone

ROOT_LOGGER = "qrgen"

# Between WARNING (30) and ERROR (40)
AUDIT = 35
logging.addLevelName(AUDIT, "AUDIT")


def _truncate(value: object, max_len: int = 80) -> str:
    s = str(value)
    if len(s) > max_len:
        return s[:max_len] + "..."
    return s


def _timestamp(record: logging.LogRecord, fmt: str) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(fmt)[:-3]


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        entry = {
            "ts": _timestamp(record, "%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "src": record.name,
        }
        event = getattr(record, "event", None)
        if event:
            entry["event"] = event
        else:
            entry["msg"] = record.getMessage()
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = round(record.duration_ms, 2)
        if getattr(record, "ctx", None):
            entry["ctx"] = record.ctx
        if record.exc_info and record.exc_info[1]:
            entry["traceback"] = traceback.format_exception(*record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "AUDIT": "\033[35m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        level = f"{record.levelname:5s}"
        if self.use_color and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        parts = [_timestamp(record, "%H:%M:%S.%f"), level, f"[{record.name}]"]

        event = getattr(record, "event", None)
        if event:
            parts.append(event)
        if hasattr(record, "duration_ms"):
            parts.append(f"({record.duration_ms:.1f}ms)")

        ctx = getattr(record, "ctx", None)
        if ctx:
            parts.append(" ".join(f"{k}={_truncate(v)}" for k, v in ctx.items()))
        elif not event:
            parts.append(record.getMessage())

        if record.exc_info and record.exc_info[1]:
            parts.append("\n" + "".join(traceback.format_exception(*record.exc_info)).rstrip())

        return " ".join(parts)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``qrgen`` logger tree.

    Args:
        level: DEBUG, INFO, WARNING, AUDIT or ERROR. Falls back to the
            ``QRGEN_LOG_LEVEL`` environment variable, then INFO.
        log_file: If set, additionally write JSON lines to this path.
        json_format: Use JSON on the console too.
    """
    level = (level or os.environ.get("QRGEN_LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger(ROOT_LOGGER)
    numeric = logging.getLevelName(level)
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JsonFormatter() if json_format else ConsoleFormatter(use_color=sys.stderr.isatty()))
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(JsonFormatter())
        root.addHandler(fh)
    return root


def get_logger(module_name: str) -> logging.Logger:
    """Return a logger scoped under the qrgen namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{module_name}")


def _emit(log: logging.Logger, level: int, event: str, ctx: dict,
          duration_ms: float | None = None, exc_info=None):
    if not log.isEnabledFor(level):
        return
    record = log.makeRecord(log.name, level, fn="", lno=0, msg="", args=(), exc_info=exc_info)
    record.event = event
    record.ctx = ctx
    if duration_ms is not None:
        record.duration_ms = duration_ms
    log.handle(record)


def audit(event: str, logger: logging.Logger | None = None, **context):
    """Emit an AUDIT-level structured entry.

    Args:
        event: Machine-readable tag, e.g. ``"render.written"``.
        logger: Logger to use; defaults to the qrgen root.
        **context: Key/value pairs attached to the event.
    """
    _emit(logger or logging.getLogger(ROOT_LOGGER), AUDIT, event, context)


def _summarize(value) -> str:
    if isinstance(value, (str, int, float, bool)):
        return _truncate(repr(value), 80)
    if isinstance(value, (list, tuple, dict)):
        return f"{type(value).__name__}[{len(value)}]"
    return type(value).__name__


def trace(func=None, *, logger_name: str | None = None):
    """Decorator that logs entry (DEBUG), exit with timing (INFO) and errors (ERROR)."""

    def decorator(fn):
        log = get_logger(logger_name or fn.__module__.replace(f"{ROOT_LOGGER}.", ""))

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            name = fn.__name__
            if log.isEnabledFor(logging.DEBUG):
                _emit(log, logging.DEBUG, f"{name}.enter", {
                    "args": [_truncate(repr(a), 80) for a in args],
                    "kwargs": {k: _truncate(repr(v), 80) for k, v in kwargs.items()},
                })

            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception:
                _emit(log, logging.ERROR, f"{name}.error", {"function": name},
                      duration_ms=(time.perf_counter() - start) * 1000,
                      exc_info=sys.exc_info() if log.isEnabledFor(logging.DEBUG) else None)
                raise
            _emit(log, logging.INFO, f"{name}.done", {"result": _summarize(result)},
                  duration_ms=(time.perf_counter() - start) * 1000)
            return result

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
