"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from slack_linker.config import get_settings
from slack_linker.logging_config import configure_logging
from slack_linker.repository import InMemoryConnectionRepository
from slack_linker.slack.router import router as slack_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, load config and install the repository.

    An in-memory repository is installed unless the host already set
    ``app.state.repository`` to its own store.
    """
    configure_logging()
    app.state.settings = get_settings()
    if getattr(app.state, "repository", None) is None:
        app.state.repository = InMemoryConnectionRepository()
    yield


app = FastAPI(
    title="Slack Linker",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "slack-linker",
        "version": "0.1.0",
    }
