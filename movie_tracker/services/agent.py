"""Run the tool-calling loop that answers /ask questions."""

from __future__ import annotations

import logging
from typing import Any

import pydantic
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from movie_tracker.core.config import Settings
from movie_tracker.services.errors import AgentError, MovieToolError
from movie_tracker.services.movie_tools import MovieTools
from movie_tracker.services.tmdb import TMDbClient
from movie_tracker.services.tool_registry import ToolSpec, build_tool_registry

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are {name}, a helpful assistant in movie tracking that answers using live TMDb data. "
    "Use the date tools to turn relative periods such as 'last 3 years' into ISO dates before "
    "calling discover_movies. Resolve people, genres and keywords to their ids with the search "
    "tools first. If the user asks for a trailer without naming a movie, call "
    "handle_generic_trailer_request."
)
_FALLBACK_ANSWER = "I couldn't work out an answer to that question. Could you rephrase it?"


def build_chat_model(settings: Settings) -> BaseChatModel:
    if settings.azure_openai_endpoint:
        return AzureChatOpenAI(
            temperature=0.0,
            azure_endpoint=settings.azure_openai_endpoint,
            azure_deployment=settings.openai_model,
            api_version=settings.azure_openai_api_version,
            api_key=settings.openai_api_key,
        )
    return ChatOpenAI(
        temperature=0.0,
        model=settings.openai_model,
        api_key=settings.openai_api_key,
    )


class MovieAgent:
    """Binds the registered tools to a chat model and drives it to a final answer."""

    def __init__(
        self,
        llm: BaseChatModel,
        registry: dict[str, ToolSpec],
        *,
        name: str = "Movie Assistant",
        max_steps: int = 8,
    ) -> None:
        self.registry = registry
        self.name = name
        self.max_steps = max_steps
        self._llm = llm.bind_tools([spec.tool for spec in registry.values()])

    @classmethod
    def from_settings(cls, settings: Settings) -> "MovieAgent":
        tools = MovieTools(TMDbClient.from_settings(settings))
        return cls(
            build_chat_model(settings),
            build_tool_registry(tools),
            name=settings.agent_name,
            max_steps=settings.agent_max_steps,
        )

    def ask(self, question: str) -> str:
        messages: list[BaseMessage] = [
            SystemMessage(content=_SYSTEM_PROMPT.format(name=self.name)),
            HumanMessage(content=question),
        ]
        for _ in range(self.max_steps):
            try:
                ai_message = self._llm.invoke(messages)
            except Exception as exc:
                raise AgentError(f"chat model call failed: {exc}") from exc
            messages.append(ai_message)
            tool_calls = getattr(ai_message, "tool_calls", None) or []
            if not tool_calls:
                return _extract_text(ai_message) or _FALLBACK_ANSWER
            for call in tool_calls:
                messages.append(self._run_tool(call))
        logger.warning("Agent stopped after %s steps without a final answer", self.max_steps)
        return _FALLBACK_ANSWER

    def _run_tool(self, call: dict[str, Any]) -> ToolMessage:
        name = call.get("name")
        args = call.get("args") or {}
        call_id = call.get("id") or ""
        spec = self.registry.get(name)
        if spec is None:
            return ToolMessage(content=f"Error: unknown tool '{name}'", tool_call_id=call_id)
        logger.info("Agent calling tool %s", name)
        logger.debug("Tool %s args: %s", name, args)
        try:
            result = spec.tool.invoke(args)
        except (MovieToolError, pydantic.ValidationError) as exc:
            # Reported back so the model can correct its arguments or explain the failure.
            logger.info("Tool %s failed: %s", name, exc)
            result = f"Error: {exc}"
        return ToolMessage(content=str(result), tool_call_id=call_id)


def _extract_text(message: Any) -> str:
    content = getattr(message, "content", "")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                parts.append(str(chunk.get("text", "")))
            elif isinstance(chunk, str):
                parts.append(chunk)
        return "".join(parts)
    return str(content)
