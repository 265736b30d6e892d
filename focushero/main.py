import logging

from focushero.config import CORS_ORIGINS, LOG_LEVEL

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from focushero.api.base import api_router  # noqa: E402

logger = logging.getLogger(__name__)

app = FastAPI(
    title="FocusHero API",
    description="Backend API for FocusHero - focus timer sessions, settings and motivation",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Generic 400 messages for payloads that fail schema validation
VALIDATION_MESSAGES = {
    "/api/session": "Invalid session data",
    "/api/session/date-range": "Invalid date range",
    "/api/session/stats": "Invalid stats query",
    "/api/session/history": "Invalid history query",
    "/api/session/export": "Invalid history query",
    "/api/settings": "Invalid settings data",
}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    path = request.url.path.rstrip("/") or "/"
    message = VALIDATION_MESSAGES.get(path, "Invalid request data")
    logger.warning(f"Validation failed for {request.method} {path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": message})


# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "FocusHero API",
        "docs": "/docs",
        "version": "1.0.0"
    }
