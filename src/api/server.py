"""FastAPI server exposing the FoundryAI core over REST."""

from __future__ import annotations

import os

from foundry_ai.logging import configure_logging, get_logger
from foundry_ai.settings import settings

# Configure logging early so all modules get proper handlers
configure_logging(settings.log_level)

import logfire  # noqa: E402
import uvicorn  # noqa: E402
from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from api.routes import health, projects, tasks  # noqa: E402
from foundry_ai.exceptions import (  # noqa: E402
    AlreadyExistsError,
    BackendError,
    BackendPaymentRequiredError,
    BackendRateLimitedError,
    BlockedError,
    FoundryError,
    NotFoundError,
)

logfire.configure(
    send_to_logfire="if-token-present",
    service_name="foundry-ai",
    token=os.environ.get("LOGFIRE_TOKEN"),
    environment=os.environ.get("ENVIRONMENT", "development"),
)
logfire.instrument_openai()

logger = get_logger(__name__)

# First match wins, so subclasses come before their bases
ERROR_STATUS: dict[type[FoundryError], int] = {
    NotFoundError: 404,
    AlreadyExistsError: 409,
    BlockedError: 409,
    BackendRateLimitedError: 429,
    BackendPaymentRequiredError: 402,
    BackendError: 502,
}

app = FastAPI(
    title="FoundryAI API",
    description="""
# FoundryAI API

Turn a startup idea into departments and tasks, track dependencies between
tasks, and let an AI assistant manage the project.

## Features

- **Plan generation**: departments, tasks and dependencies from a free-text idea
- **Dependency-aware boards**: tasks in dependency order with blocked flags
- **Status guard**: tasks cannot start or finish while a dependency is incomplete
- **Project assistant**: chat that can create, rename, delete and re-status tasks
- **Task assistant**: focused help for one unblocked task

## Environment Setup

- `SUPABASE_URL`, `SUPABASE_SERVICE_ROLE_KEY` (or `SUPABASE_ANON_KEY`)
- `OPENROUTER_API_KEY` and optionally `AI_GATEWAY_BASE_URL`
- or `OPENAI_API_KEY` alone to call OpenAI directly (`OPENAI_ASSISTANT_MODEL`, `OPENAI_PLAN_MODEL`)
    """,
    version="0.1.0",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Projects", "description": "Plan generation and the project assistant"},
        {"name": "Tasks", "description": "Boards, status changes and the task assistant"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(projects.router)
app.include_router(tasks.router)

logfire.instrument_fastapi(app)


# Exception handlers
@app.exception_handler(FoundryError)
async def foundry_exception_handler(request: Request, exc: FoundryError):
    status_code = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 400)
    content: dict = {"detail": str(exc)}
    if isinstance(exc, BlockedError):
        content["blockers"] = exc.blockers
    log = logger.error if status_code >= 500 else logger.warning
    log(f"[{type(exc).__name__}] {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"[VALIDATION ERROR] {request.method} {request.url.path}")
    for error in exc.errors():
        logger.error(f"  {error['loc']}: {error['msg']} (type={error['type']})")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[UNHANDLED ERROR] {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]


def run_dev() -> None:
    """Entry point for local development with hot reload."""
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"Starting dev server on http://0.0.0.0:{port} (reload enabled)")
    uvicorn.run("api.server:app", host="0.0.0.0", port=port, reload=True, log_level="info")


def run_http() -> None:
    """Entry point for the HTTP server command."""
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"Starting API server on http://0.0.0.0:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run_http()
