"""
FastAPI application for the Task Tracker.

This is the main entry point that:
- Wires a TaskStore into a TaskService
- Maps HTTP verbs and paths onto service operations
- Renders service errors as JSON responses
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .errors import NotFound, ValidationError
from .logging_setup import setup_logging
from .models import TaskInput
from .service import TaskService
from .store import TaskStore

logger = logging.getLogger(__name__)


def create_app(
    service: TaskService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        service: Service to expose. Defaults to one over a fresh empty store.
        settings: App settings. Defaults to the environment.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or load_settings()
    service = service or TaskService(TaskStore())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - report store size on startup."""
        logger.info("%s ready, tasks=%d", settings.title, len(service.store))
        yield

    app = FastAPI(
        title=settings.title,
        description="Create, update, complete and delete tasks",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "ValidationError", "errors": exc.errors},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "ValidationError", "errors": errors},
        )

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(
            status_code=404,
            content={"error": "NotFound", "message": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "InternalError"})

    # API Endpoints
    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "tasks": len(service.store)}

    @app.post("/tasks", status_code=201)
    async def create_task(payload: TaskInput):
        return service.create(payload).to_dict()

    @app.get("/tasks")
    async def list_tasks(status: str | None = None, priority: str | None = None):
        """List all tasks, optionally filtered by status or priority."""
        return [task.to_dict() for task in service.list(status=status, priority=priority)]

    @app.get("/tasks/{task_id}")
    async def get_task(task_id: str):
        return service.get(task_id).to_dict()

    @app.put("/tasks/{task_id}")
    async def update_task(task_id: str, payload: TaskInput):
        return service.update(task_id, payload).to_dict()

    @app.put("/tasks/{task_id}/complete")
    async def complete_task(task_id: str):
        """Mark a task as completed."""
        return service.complete(task_id).to_dict()

    @app.delete("/tasks/{task_id}")
    async def delete_task(task_id: str):
        return service.delete(task_id).to_dict()

    return app


app = create_app()


def main() -> None:
    """Run the app with uvicorn using environment settings."""
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
