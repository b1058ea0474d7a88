import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from .config import settings
from .redis_client import redis_client
from .routers import availability, calendar

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Kaizen Booking API")

app.include_router(availability.router)
app.include_router(calendar.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a client error: 400, not FastAPI's default 422."""
    logger.info(f"Rejected request {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.get("/health")
def health():
    redis_ok = None
    if redis_client is not None:
        try:
            redis_ok = redis_client.ping()
        except RedisError:
            logger.exception("Redis health check failed")
            redis_ok = False
    return {"status": "ok", "redis": redis_ok}
