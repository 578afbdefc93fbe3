import json
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from party_planner.core.config import get_settings
from party_planner.core.errors import NotFoundError
from party_planner.api.routes import router
from party_planner.core.database import engine
from party_planner.models.models import Base

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Party Planner API",
    description="Chat-driven bachelor and bachelorette party planning",
    version="1.0.0"
)

# CORS
cors_origins = settings.CORS_ORIGINS
if "," in cors_origins:
    cors_origins = [origin.strip().strip('"').strip("'") for origin in cors_origins.split(",")]
elif cors_origins.startswith("["):
    cors_origins = json.loads(cors_origins)
else:
    cors_origins = [cors_origins]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)

app.include_router(router, prefix="/api", tags=["party"])


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {
        "message": "Party Planner API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
