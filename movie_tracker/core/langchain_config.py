"""Utilities to configure LangChain/LangSmith from environment settings."""

from __future__ import annotations

import os

from movie_tracker.core.config import Settings


def configure_langchain_env(settings: Settings) -> None:
    """Export optional LangSmith tracing variables without overriding existing ones."""

    if settings.langchain_tracing_v2:
        os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
    if settings.langchain_api_key:
        os.environ.setdefault("LANGCHAIN_API_KEY", settings.langchain_api_key)
    if settings.langchain_project:
        os.environ.setdefault("LANGCHAIN_PROJECT", settings.langchain_project)
