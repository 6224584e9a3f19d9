from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import reports as reports_router
from app.routers import schedule as schedule_router
from app.routers import streaks as streaks_router
from app.core.errors import (
    HabitEngineException,
    engine_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(
    title="Habit Engine API",
    description=(
        "**Habit scheduling and analytics engine**\n\n"
        "Stateless endpoints: send the habits and logs you hold, get back "
        "schedules, streaks, progress and reports. Dates are ISO `YYYY-MM-DD`.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(HabitEngineException, engine_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(schedule_router.router)
app.include_router(streaks_router.router)
app.include_router(reports_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """
    Returns `{"status": "ok"}` when the API is up. The engine has no
    database, so there is nothing else to probe.
    """
    return {"status": "ok", "env": settings.APP_ENV}
