import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import APP_TITLE, CORS_ORIGINS, LOG_LEVEL
from .errors import TaskNotFoundError
from .logging_config import setup_logging
from .routers import tasks
from .store import TaskStore

logger = logging.getLogger(__name__)


async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
    logger.info("Task not found id=%s path=%s", exc.task_id, request.url.path)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app(store: Optional[TaskStore] = None) -> FastAPI:
    """Build the API around ``store`` (a fresh in-memory store by default)."""
    app = FastAPI(
        title=APP_TITLE,
        description="Task tracking API with filtering, lifecycle shortcuts and statistics",
        version="1.0.0",
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.task_store = store if store is not None else TaskStore()
    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)

    # Include routers
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/")
    def read_root():
        return {"message": APP_TITLE}

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "tasks": len(app.state.task_store)}

    return app


setup_logging(LOG_LEVEL)
app = create_app()
