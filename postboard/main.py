import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postboard.config import settings
from postboard.database import engine
from postboard.exceptions import ServiceError
from postboard.logging_config import configure_logging
from postboard.middleware import RequestTimingMiddleware
from postboard.routers import posts, users
from postboard.schemas import HealthResponse

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    logger.info("Starting Postboard API (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Postboard API",
    description="User and post management REST API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error handling
@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

# Routers
app.include_router(users.router)
app.include_router(posts.router)

@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": settings.APP_VERSION}
