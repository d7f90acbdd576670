import json
import logging
import sys
from datetime import datetime, timezone


_SECRET_FIELDS = {"password", "credit_card", "payment_token", "token", "accessToken"}

_logger = logging.getLogger("tshirtshop.events")


def log_event(level: str, event: str, **fields) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "level": level.lower(),
        "event": event,
    }
    payload.update({k: v for k, v in (fields or {}).items() if k not in _SECRET_FIELDS})
    try:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
    except (OSError, ValueError) as exc:
        # stdout closed or unserialisable field: fall back to the std logger
        _logger.warning("event %s not written: %s", event, exc)
