"""FastAPI entrypoint exposing the movie agent."""

from __future__ import annotations

import logging
import platform
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import BaseModel, Field

from movie_tracker.core.config import get_settings
from movie_tracker.core.langchain_config import configure_langchain_env
from movie_tracker.services.agent import MovieAgent
from movie_tracker.services.errors import AgentError, ConfigurationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration and build the agent once before serving."""

    settings = get_settings()
    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
    configure_langchain_env(settings)
    app.state.agent = MovieAgent.from_settings(settings)
    logger.info("Movie agent ready with %s tools", len(app.state.agent.registry))
    yield


app = FastAPI(title="Movie Tracker", lifespan=lifespan)


class AskRequest(BaseModel):
    question: str = Field(..., description="Free-text question about movies or dates")


class AskResponse(BaseModel):
    answer: str


class VersionResponse(BaseModel):
    version: str
    environment: str
    machine_name: str


def get_agent(request: Request) -> MovieAgent:
    return request.app.state.agent


@app.post("/ask", response_model=AskResponse)
def ask(payload: AskRequest, agent: MovieAgent = Depends(get_agent)) -> AskResponse:
    question = payload.question.strip()
    if not question:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Question is required.",
        )
    try:
        answer = agent.ask(question)
    except AgentError as exc:
        logger.error("Agent failed to answer: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The language model is unavailable, please try again later.",
        ) from exc
    return AskResponse(answer=answer)


@app.get("/health")
def health() -> str:
    return "healthy"


@app.get("/health/ready")
def ready() -> str:
    return "ready"


@app.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    try:
        package_version = version("movie-tracker-agent")
    except PackageNotFoundError:
        package_version = "0.0.0"
    return VersionResponse(
        version=package_version,
        environment=get_settings().environment,
        machine_name=platform.node(),
    )
