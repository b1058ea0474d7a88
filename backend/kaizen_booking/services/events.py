"""
backend/kaizen_booking/services/events.py

Event emitter: pushes events to a Redis queue for downstream consumers
(booking wizard caches, notification workers).

Queue:
- events:p2p: instant delivery
"""

import json
import time
import logging

from redis.exceptions import RedisError

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

P2P_QUEUE = "events:p2p"


def emit_event(event_type: str, payload: dict) -> bool:
    """
    Emit a p2p event.

    Pushed to Redis list `events:p2p`. Returns False when Redis is not
    configured or the push failed; the caller's operation is unaffected.
    """
    if redis_client is None:
        logger.debug(f"Redis not configured, event dropped: {event_type}")
        return False

    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(P2P_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} -> {P2P_QUEUE}")
        return True
    except RedisError as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False
