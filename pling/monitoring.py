"""Structured event logging with secret redaction.

Usage: from pling.monitoring import log_event, sanitize

Gateways log request/response details here when `debug` is on, so anything
that looks like a credential (Passwd, Authorization, auth tokens) is masked
before it reaches a handler.
"""
from typing import Dict, Any, Union
import logging
import re

_SECRET_KEY_RE = re.compile(r"(?i)(^|[_.-])(api[_-]?key|secret|token|authorization|password|passwd|bearer)([_.-]|$)")
_SECRET_VAL_RE = re.compile(r"(?i)^(?:googlelogin auth=|bearer )")
_AUTH_LINE_RE = re.compile(r"(?im)^(Auth|SID|LSID)=.+$")

logger = logging.getLogger("pling.monitoring")


def _mask_value(v: Any) -> Any:
    if isinstance(v, str):
        if _SECRET_VAL_RE.search(v.strip()):
            return "***REDACTED***"
        # ClientLogin responses carry tokens as Key=value lines
        return _AUTH_LINE_RE.sub(lambda m: f"{m.group(1)}=***REDACTED***", v)
    return v


def sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if _SECRET_KEY_RE.search(str(k)):
                out[k] = "***REDACTED***"
            else:
                out[k] = sanitize(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [sanitize(x) for x in obj]
    return _mask_value(obj)


def log_event(event: Union[str, Dict[str, Any]], payload: Dict[str, Any] | None = None, log: logging.Logger | None = None):
    """Log a pipeline event.

    Flexible signature supports:
      - log_event({'event': 'name', ...})
      - log_event('name', {...}) (preferred)
    """
    if isinstance(event, str):
        record = {'event': event, **(payload or {})}
    else:
        record = event
    (log or logger).info('PLING_EVENT %s', sanitize(record))


__all__ = ["log_event", "sanitize"]
