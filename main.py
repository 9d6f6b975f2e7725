import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tracker.config.settings import settings
from tracker.database import SessionLocal, init_db
from tracker.exceptions import TrackerError
from tracker.routers import auth, tasks, incentives, reports, admin, admin_tasks
from tracker.services.user_manager import ensure_default_admin

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("tracker")

app = FastAPI(title="Task & Incentive Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _server_error(exc: Exception) -> JSONResponse:
    content = {"detail": "server error"}
    if settings.is_development:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _server_error(exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append("%s: %s" % (field, error.get("msg")) if field else error.get("msg"))
    return JSONResponse(status_code=400, content={"detail": ", ".join(messages) or "invalid request"})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return _server_error(exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _server_error(exc)


# Route registration
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(incentives.router, prefix="/api/incentives", tags=["Incentives"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(admin_tasks.router, prefix="/api/admin/tasks", tags=["Admin Tasks"])


@app.on_event("startup")
def startup_event():
    """Create missing tables and the default admin account"""
    logger.info("Starting Task & Incentive Tracker API (%s backend)", settings.backend)
    init_db()
    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()


@app.get("/")
def read_root():
    return {"message": "Task & Incentive Tracker API"}


@app.get("/health")
def health():
    return {"status": "ok"}
