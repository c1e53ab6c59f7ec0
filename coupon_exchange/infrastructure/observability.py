"""Structured Logging - one-line JSON records for the coupon exchange.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Coupon/store/deal ids and regeneration counts are copied from `extra`
      when present; UUIDs and datetimes become strings, counts stay numbers
    - "text" format is for local runs only

Design Decisions:
    - Configured once per process: FastAPI lifespan or the
      regenerate_affiliations entry point
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "store_id", "coupon_id", "deal_id", "error_code", "path",
    "store_count", "candidate_pairs", "inserted",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _json_value(val):
    if isinstance(val, (bool, int, float)):
        return val
    return str(val)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, _json_value(record.__dict__[key]))
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays off unless explicitly raised
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
