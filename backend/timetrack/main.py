from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from timetrack.api.routes import health
from timetrack.core.config import settings
from timetrack.core.errors import register_exception_handlers
from timetrack.core.logging import bind_request_context, configure_logging, get_logger
from timetrack.core.monitoring import configure_error_monitoring
from timetrack.core.observability import configure_observability
from timetrack.db.session import create_tables, session_scope
from timetrack.domains.auth.router import router as auth_router
from timetrack.domains.employees.router import router as employee_router
from timetrack.domains.leave.router import router as leave_router
from timetrack.domains.projects.router import router as project_router
from timetrack.domains.reporting.router import router as reporting_router
from timetrack.domains.time_entries.router import router as time_router
from timetrack.seed.seed_data import seed

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth_router)
app.include_router(employee_router)
app.include_router(project_router)
app.include_router(time_router)
app.include_router(leave_router)
app.include_router(reporting_router)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid4().hex
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.on_event("startup")
def startup_event() -> None:
    if settings.auto_create_tables:
        create_tables()
    if settings.seed_demo_data:
        with session_scope() as session:
            seed(session)
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Timetrack API running", "environment": settings.env}
