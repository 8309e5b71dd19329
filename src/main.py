import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from src.api import api_router
from src.config import settings
from src.database.mongo.core import close_mongo, init_mongo, is_connected
from src.models import utcnow
from src.utils.exceptions import add_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup operations
    os.makedirs(settings.upload_dir, exist_ok=True)
    init_mongo(app)
    yield
    # on-shutdown operations
    close_mongo(app)

if settings.app_env == "production":
    # In production: disable Swagger UI and /docs endpoints
    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
else:
    # In development: keep docs enabled
    app = FastAPI(lifespan=lifespan)

add_exception_handlers(app)

if settings.app_env != "production":
    @app.get("/", tags=["Health"])
    def read_root():
        return {"message": f"attendance-api v{settings.app_version}"}

@app.get("/api/health", tags=["Health"])
def health(request: Request):
    return {
        "success": True,
        "message": "API is running",
        "timestamp": utcnow().isoformat(),
        "mongodb": "connected" if is_connected(request.app) else "disconnected",
    }

app.include_router(api_router, prefix="/api")

# permission letters, referenced by attachmentPath
app.mount(settings.uploads_url_prefix, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
