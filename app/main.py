from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.deps import get_ticket_service
from app.api.v1 import presence as presence_router
from app.api.v1 import tickets as tickets_router
from app.config.db import check_db_connection
from app.config.redis import check_redis_connection
from app.utils.logging_config import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.
    """
    check_db_connection()
    get_ticket_service().store.initialize()

    try:
        check_redis_connection()
    except Exception as e:
        logger.warning(f"Redis unavailable, notices will not be delivered: {e}")

    yield


app = FastAPI(
    lifespan=lifespan,
    title="Ticket Desk",
    description="Support ticket lifecycle API",
)

app.include_router(tickets_router.router, prefix="/api/v1/tickets", tags=["Tickets"])
app.include_router(presence_router.router, prefix="/api/v1/presence", tags=["Presence"])


@app.get("/")
def read_root() -> dict[str, str]:
    return {"message": "Hello from Ticket Desk API!"}
