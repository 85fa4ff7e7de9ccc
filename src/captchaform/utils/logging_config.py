import logging
import json
from typing import Optional, Mapping, Dict, Any

_LOGGING_CONFIGURED = False
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


_DEFAULT_RECORD_KEYS = set(logging.makeLogRecord({}).__dict__.keys())


class ContextFormatter(logging.Formatter):
    """Formatter that appends any custom LogRecord attributes as JSON context.

    Fields passed via ``extra={...}`` (``outcome``, ``score``, ``error_codes``)
    show up in the output without being part of the format string.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context: Dict[str, Any] = {}
        for k, v in record.__dict__.items():
            if k in _DEFAULT_RECORD_KEYS:
                continue
            if k.startswith("_"):
                continue
            if k in {"exc_text", "stack_info", "message", "asctime"}:
                continue
            context[k] = v
        if context:
            try:
                ctx = json.dumps(context, ensure_ascii=False, default=str)
                return f"{base} | {ctx}"
            except (TypeError, ValueError):
                return f"{base} | context={context}"
        return base


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that ignores writes after the stream is closed.

    During test teardown the standard streams may be closed before atexit
    handlers run; records emitted then are dropped instead of raising
    ``ValueError: I/O operation on closed file``.
    """

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - tiny wrapper
        stream = getattr(self, "stream", None)
        if not stream or getattr(stream, "closed", False):
            return
        super().emit(record)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logger with a standard format once."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    handler = SafeStreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    _LOGGING_CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger with the project's configuration."""
    if not _LOGGING_CONFIGURED:
        setup_logging()
    return logging.getLogger(name)


SENSITIVE_FIELDS = {"secret", "secret_key", "password", "csrf_token"}


def redact_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of a form payload with sensitive values redacted.

    CAPTCHA tokens are shortened to their last 6 characters so that a log line
    can still be correlated with a client report.
    """
    out: Dict[str, Any] = {}
    for k, v in payload.items():
        lk = k.lower()
        if lk in SENSITIVE_FIELDS:
            out[k] = "<redacted>" if v else "<empty>"
        elif lk in {"response", "g-recaptcha-response", "verification_token"} and v:
            out[k] = f"****{str(v)[-6:]}"
        else:
            out[k] = v
    return out


def resolve_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as ``"info"`` or ``"DEBUG"`` to its numeric value."""
    level = getattr(logging, str(name or "").upper(), None)
    return level if isinstance(level, int) else default
