import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .ai_client import AIClient
from .api.routes import admin, auth, challenges, coding, recommendations, skills
from .config import settings
from .database import SessionLocal, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_ON_STARTUP:
        from .seed import seed_catalog

        db = SessionLocal()
        try:
            seed_catalog(db)
        finally:
            db.close()

    app.state.ai_client = AIClient.from_settings()
    logger.info("AI client ready (model=%s)", app.state.ai_client.model)
    try:
        yield
    finally:
        app.state.ai_client.close()


app = FastAPI(
    title="SkillTrack API",
    description="Student skill tracking, badges, leaderboards, recommendations & AI coding feedback",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    https_only=settings.APP_ENV == "production",
    same_site="lax",
)

app.include_router(auth.router,            prefix="/api",                 tags=["Auth"])
app.include_router(skills.router,          prefix="/api",                 tags=["Skills"])
app.include_router(recommendations.router, prefix="/api/recommendations", tags=["Recommendations"])
app.include_router(challenges.router,      prefix="/api",                 tags=["Challenges"])
app.include_router(coding.router,          prefix="/api",                 tags=["Coding"])
app.include_router(admin.router,           prefix="/api/admin",           tags=["Admin"])


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    return {
        "name": "SkillTrack API",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "auth":            "/api/auth/user",
            "skills":          "/api/skills",
            "recommendations": "/api/recommendations",
            "leaderboard":     "/api/leaderboard",
            "coding":          "/api/coding-challenges",
            "admin":           "/api/admin",
        },
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
