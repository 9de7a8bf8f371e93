import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.rate_limiter import auth_rate_limiter
from app.database import init_db, engine
from app.logging_config import setup_logging
from app.routers import auth, jobs

setup_logging()
logger = logging.getLogger(__name__)

RATE_LIMITED_PATHS = {"/api/v1/auth/login", "/api/v1/auth/register"}
PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"

app = FastAPI(
    title="Job Tracker API",
    description="Track job applications: filtered listing, CRUD and application stats.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(jobs.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    limit = settings.rate_limit_auth_per_min
    if request.method == "POST" and request.url.path in RATE_LIMITED_PATHS and limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = auth_rate_limiter.allow(f"{client_ip}:{request.url.path}", limit=limit)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests from this IP, please try again later"},
                headers={"Retry-After": str(retry_after)},
            )
    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Tracker API")
    env = (settings.app_env or "development").lower()
    if settings.secret_key == PLACEHOLDER_SECRET:
        if env in {"production", "prod"}:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
    init_db()
