from __future__ import annotations

import json
import sys
import time
from typing import Any, TextIO


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + f".{int((time.time() % 1) * 1000):03d}Z"


def log_event(event: str, correlation_id: str | None = None, stream: TextIO | None = None, **fields: Any) -> None:
    payload: dict[str, Any] = {
        "ts": _now_iso(),
        "event": event,
    }
    if correlation_id:
        payload["correlation_id"] = correlation_id
    payload.update(fields)
    print(json.dumps(payload, default=str), file=stream or sys.stderr, flush=True)
