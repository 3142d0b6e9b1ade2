"""Structured logging: console plus a JSON-lines search event log."""

import contextvars
import json
import logging
import os
import sys
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from intranet_search.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return f"{seconds * 1000:.0f}ms"
    return "0s"


def _short(text: str | None, max_len: int = 60) -> str:
    """One-line preview for console output."""
    if not text or not text.strip():
        return ""
    s = text.strip().replace("\n", " ")
    return s[:max_len] + "..." if len(s) > max_len else s


_request_ctx: contextvars.ContextVar[tuple[int, float] | None] = contextvars.ContextVar(
    "search_request", default=None
)


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "dim": "\033[38;5;239m",
        "query": "\033[38;5;81m",
        "ok": "\033[38;5;78m",
        "fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)


class PortalLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "search.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("intranet_search")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.WARNING)
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        logging.getLogger("httpx").setLevel(logging.WARNING)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def search_request(self, seq: int, query: str, search_type: str, page: int, limit: int):
        _request_ctx.set((seq, time.monotonic()))
        event = LogEvent(
            event_type="SEARCH_REQUEST",
            timestamp=self._timestamp(),
            data={
                "seq": seq,
                "query": query[:200],
                "type": search_type,
                "page": page,
                "limit": limit,
            },
        )
        self.log_event(event)
        self.console.debug(
            f"{_c('query')}search #{seq}{_reset()}  {_short(query)!r}  type={search_type} page={page}"
        )

    def _elapsed(self, seq: int) -> float:
        pair = _request_ctx.get()
        if pair is None or pair[0] != seq:
            return 0.0
        _request_ctx.set(None)
        return time.monotonic() - pair[1]

    def search_response(self, seq: int, total: int, total_pages: int):
        elapsed = self._elapsed(seq)
        event = LogEvent(
            event_type="SEARCH_RESPONSE",
            timestamp=self._timestamp(),
            data={
                "seq": seq,
                "total": total,
                "total_pages": total_pages,
                "duration_seconds": round(elapsed, 3),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        self.console.debug(
            f"{_c('ok')}search #{seq} [ok]{_reset()}  {total} results, {total_pages} pages  {dur}"
        )

    def search_discarded(self, seq: int, current_seq: int):
        self._elapsed(seq)
        event = LogEvent(
            event_type="SEARCH_DISCARDED",
            timestamp=self._timestamp(),
            data={"seq": seq, "current_seq": current_seq},
        )
        self.log_event(event)
        self.console.debug(f"{_c('dim')}search #{seq} superseded by #{current_seq}{_reset()}")

    def search_failed(self, seq: int, reason: str, status_code: int | None = None):
        elapsed = self._elapsed(seq)
        data: dict[str, Any] = {
            "seq": seq,
            "reason": reason[:500],
            "duration_seconds": round(elapsed, 3),
        }
        if status_code is not None:
            data["status_code"] = status_code
        event = LogEvent(event_type="SEARCH_FAILED", timestamp=self._timestamp(), data=data)
        self.log_event(event)
        self.console.warning(
            f"{_c('fail')}search #{seq} [failed]{_reset()}  {_short(reason, 80)}"
        )

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"Error: {message}", *args, **log_kwargs)

    def info(self, message: str, *args, **kwargs):
        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.info(message, *args, **log_kwargs)

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.warning(message, *args, **log_kwargs)

    def exception(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)
        self.console.exception(message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="DEBUG", timestamp=self._timestamp(), data={"message": message}
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.debug(message, *args, **log_kwargs)


logger = PortalLogger()
