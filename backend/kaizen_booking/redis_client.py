from redis import Redis

from .config import settings

# None when REDIS_URL is not set: events are dropped, nothing else needs Redis
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, socket_timeout=2.0, decode_responses=True)
    if settings.redis_url
    else None
)
