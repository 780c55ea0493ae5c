# File: src/api/routers/utility_routes.py

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from pymongo.errors import PyMongoError

from common.exceptions.base_exception import ServiceUnavailableException
from common.logging.logger import log_warning
from common.utils.date_utils import utc_now
from infrastructure.database.mongodb.connection import MongoDBConnection

router = APIRouter()


@router.get("/", response_class=RedirectResponse, include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")


@router.get("/favicon.ico", response_class=PlainTextResponse, include_in_schema=False)
async def favicon():
    return ""


@router.get("/health", tags=["Utility"])
async def health_check():
    """Report liveness and whether MongoDB answers a ping."""
    database = "connected"
    try:
        db = await MongoDBConnection.connect()
        await db.command("ping")
    except ServiceUnavailableException:
        database = "unavailable"
    except PyMongoError as e:
        log_warning("Health check ping failed", extra={"error": str(e)})
        database = "unavailable"

    healthy = database == "connected"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "database": database,
            "state": MongoDBConnection.state().value,
            "timestamp": utc_now().isoformat()
        }
    )
