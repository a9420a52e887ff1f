"""Activity log: one structured line for every domain event the shop raises.

The handler subscribes to every stream, so events of any aggregate land here
without being listed.
"""

import structlog
from protean import handle

from animalshop.domain import shop

logger = structlog.get_logger(__name__)

# Kept out of log files
REDACTED_FIELDS = frozenset({"email"})


def activity_entry(event) -> dict:
    fields = {
        key: value
        for key, value in event.payload.items()
        if key not in REDACTED_FIELDS and not key.startswith("_")
    }
    return {"event_type": event.__class__.__name__, **fields}


@shop.event_handler(stream_category="$all")
class ActivityLog:
    @handle("$any")
    def record(self, event) -> None:
        logger.info("domain_event", **activity_entry(event))
