import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rrsched import config
from rrsched.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    RevisionConflictError,
    RosterError,
    SchedulerError,
    ScheduleValidationError,
)
from rrsched.routes import projections, roster, runtime, schedule, tournaments

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title=config.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])
app.include_router(roster.router, prefix="/api", tags=["roster"])
app.include_router(schedule.router, prefix="/api", tags=["schedule"])

# Runtime (match / round status + results; no schedule regeneration)
app.include_router(runtime.router, prefix="/api", tags=["runtime"])

# Read-only projections
app.include_router(projections.router, prefix="/api", tags=["projections"])


# Service errors -> HTTP status (same {"detail": ...} body as HTTPException)
_ERROR_STATUS = {
    NotFoundError: 404,
    RevisionConflictError: 409,
    ScheduleValidationError: 422,
    RosterError: 422,
    InvalidTransitionError: 422,
}


@app.exception_handler(SchedulerError)
async def scheduler_error_handler(request: Request, exc: SchedulerError):
    status_code = next((code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)), 400)
    if status_code >= 409:
        logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/api/health")
def health_check():
    """Diagnostic endpoint"""
    return {"app_name": config.APP_NAME, "status": "healthy"}
