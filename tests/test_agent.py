import json

import pytest
from langchain_core.messages import AIMessage, ToolMessage

from movie_tracker.services.agent import MovieAgent
from movie_tracker.services.errors import AgentError
from movie_tracker.services.tool_registry import build_tool_registry


class FakeLLM:
    def __init__(self, responses):
        self.responses = list(responses)
        self.seen = []
        self.tools = None

    def bind_tools(self, tools):
        self.tools = tools
        return self

    def invoke(self, messages):
        self.seen.append(list(messages))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def tool_call(name, args, call_id="call_1"):
    return AIMessage(content="", tool_calls=[{"name": name, "args": args, "id": call_id}])


@pytest.fixture
def registry(movie_tools):
    return build_tool_registry(movie_tools)


def test_registry_exposes_every_tool(registry):
    assert set(registry) == {
        "list_genres",
        "search_people",
        "search_movies",
        "get_movie_trailers",
        "get_movie_with_trailer",
        "handle_generic_trailer_request",
        "get_movie_details",
        "search_keywords",
        "describe_movie",
        "discover_movies",
        "today",
        "this_month",
        "this_year",
        "past_years_range",
        "past_months_range",
        "past_days_range",
        "offset_date",
    }
    assert all(spec.tool.name == name for name, spec in registry.items())


def test_registered_tools_accept_agent_style_arguments(registry, fake_client):
    results = json.loads(registry["search_movies"].tool.invoke({"title": "Fight Club", "year": 1999}))
    assert results[0]["MovieId"] == "550"
    assert fake_client.calls[0] == ("search_movie", "Fight Club", 1999)

    details = json.loads(registry["get_movie_details"].tool.invoke({"movie_id": 550}))
    assert details["MovieId"] == "550"

    assert registry["offset_date"].tool.invoke({"iso_date": "2022-05-20", "amount": 10, "unit": "d"}) == "2022-05-30"
    assert json.loads(registry["list_genres"].tool.invoke({}))[0]["GenreId"] == "28"


def test_agent_runs_tools_until_final_answer(registry):
    llm = FakeLLM(
        [
            tool_call("offset_date", {"iso_date": "2022-05-20", "amount": 10, "unit": "d"}),
            AIMessage(content="Ten days later is 2022-05-30."),
        ]
    )
    agent = MovieAgent(llm, registry)

    assert agent.ask("What is ten days after 2022-05-20?") == "Ten days later is 2022-05-30."
    assert len(llm.tools) == len(registry)
    tool_message = llm.seen[1][-1]
    assert isinstance(tool_message, ToolMessage)
    assert tool_message.content == "2022-05-30"
    assert tool_message.tool_call_id == "call_1"


def test_agent_reports_tool_errors_back_to_model(registry):
    llm = FakeLLM(
        [
            tool_call("get_movie_trailers", {"movie_id": "fight-club"}),
            tool_call("no_such_tool", {}, call_id="call_2"),
            AIMessage(content="Which movie did you mean?"),
        ]
    )
    agent = MovieAgent(llm, registry)

    assert agent.ask("show me the trailer") == "Which movie did you mean?"
    assert llm.seen[1][-1].content.startswith("Error: movie id must be numeric")
    assert llm.seen[2][-1].content == "Error: unknown tool 'no_such_tool'"


def test_agent_wraps_model_failures(registry):
    agent = MovieAgent(FakeLLM([RuntimeError("rate limited")]), registry)
    with pytest.raises(AgentError):
        agent.ask("anything")


def test_agent_gives_up_after_max_steps(registry):
    llm = FakeLLM([tool_call("today", {}, call_id=f"call_{i}") for i in range(2)])
    agent = MovieAgent(llm, registry, max_steps=2)
    assert "rephrase" in agent.ask("loop forever")


def test_agent_reports_out_of_range_dates_back_to_model(registry):
    llm = FakeLLM(
        [
            tool_call("past_years_range", {"years": 5000}),
            AIMessage(content="That range is too far back."),
        ]
    )
    agent = MovieAgent(llm, registry)

    assert agent.ask("movies from the last 5000 years") == "That range is too far back."
    assert llm.seen[1][-1].content.startswith("Error: cannot look back 5000 years")
