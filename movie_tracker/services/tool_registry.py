"""Tool registry for the movie agent.

The registry is built once at startup from a ``MovieTools`` instance and maps
each stable tool name to its LangChain ``StructuredTool``. Parameter
descriptions live on the pydantic argument schemas below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from movie_tracker.services import datetime_tools
from movie_tracker.services.movie_tools import MovieTools


class NoArgs(BaseModel):
    pass


class PersonNameArgs(BaseModel):
    name: str = Field(..., description="The name of the person or cast member")


class SearchMoviesArgs(BaseModel):
    title: str = Field(..., description="The title of the movie, or part of the title")
    year: str | int | None = Field(default=None, description="Optional: The year the movie was released")


class MovieIdArgs(BaseModel):
    movie_id: str | int = Field(..., description="The TMDb movie ID")


class TrailerQueryArgs(BaseModel):
    query: str = Field(..., description="The user's generic trailer request")


class KeywordArgs(BaseModel):
    term: str = Field(..., description="The name or partial name of the keyword")


class DiscoverMoviesArgs(BaseModel):
    release_date_from: str | None = Field(default=None, description="Optional: Start release date (YYYY-MM-DD)")
    release_date_to: str | None = Field(default=None, description="Optional: End release date (YYYY-MM-DD)")
    cast_ids: str | None = Field(
        default=None, description="Optional: Include movies with all of these cast IDs (comma-separated)"
    )
    genre_ids: str | None = Field(
        default=None, description="Optional: Include movies with all of these genre IDs (comma-separated)"
    )
    keyword_ids: str | None = Field(
        default=None, description="Optional: Include movies with all of these keyword IDs (comma-separated)"
    )
    min_vote_average: float | None = Field(default=None, description="Optional: Minimum vote average (1-10)")
    max_vote_average: float | None = Field(default=None, description="Optional: Maximum vote average (1-10)")
    min_vote_count: int | None = Field(default=None, description="Optional: Minimum vote count")
    max_vote_count: int | None = Field(default=None, description="Optional: Maximum vote count")


class YearsArgs(BaseModel):
    years: int = Field(..., description="Number of years to look back (e.g. 3 = last three years)")


class MonthsArgs(BaseModel):
    months: int = Field(..., description="Number of months to look back")


class DaysArgs(BaseModel):
    days: int = Field(..., description="Number of days to look back")


class OffsetDateArgs(BaseModel):
    iso_date: str = Field(..., description="Date to shift (YYYY-MM-DD)")
    amount: int = Field(..., description="Number of units to shift by, may be negative")
    unit: str = Field(..., description="Unit (d=days, m=months, y=years)")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    tool: StructuredTool


def _spec(
    name: str,
    func: Callable[..., str],
    description: str,
    args_schema: type[BaseModel] = NoArgs,
) -> ToolSpec:
    return ToolSpec(
        name=name,
        description=description,
        tool=StructuredTool.from_function(
            func=func,
            name=name,
            description=description,
            args_schema=args_schema,
        ),
    )


def _date_tool_specs() -> list[ToolSpec]:
    return [
        _spec("today", lambda: datetime_tools.today(), "Today in ISO format (YYYY-MM-DD)."),
        _spec("this_month", lambda: datetime_tools.this_month(), "This month in ISO format (YYYY-MM)."),
        _spec("this_year", lambda: datetime_tools.this_year(), "This year in ISO format (YYYY)."),
        _spec(
            "past_years_range",
            lambda years: datetime_tools.past_years_range(years),
            "ISO-8601 interval for the past <years> years up to today. "
            "Example: past_years_range(3) -> 2022-06-13/2025-06-13",
            YearsArgs,
        ),
        _spec(
            "past_months_range",
            lambda months: datetime_tools.past_months_range(months),
            "ISO-8601 interval for the past <months> months up to today. "
            "Example: past_months_range(6) -> 2024-12-13/2025-06-13",
            MonthsArgs,
        ),
        _spec(
            "past_days_range",
            lambda days: datetime_tools.past_days_range(days),
            "ISO-8601 interval for the past <days> days up to today.",
            DaysArgs,
        ),
        _spec(
            "offset_date",
            datetime_tools.offset_date,
            "Offset any ISO date (YYYY-MM-DD) by N units. Units = d, m, y. "
            'Example: offset_date("2022-05-20", 10, "d")',
            OffsetDateArgs,
        ),
    ]


def _movie_tool_specs(tools: MovieTools) -> list[ToolSpec]:
    return [
        _spec(
            "list_genres",
            tools.list_genres,
            "Get the list of official genres for movies. Returns a JSON list with GenreId and GenreName.",
        ),
        _spec(
            "search_people",
            tools.search_people,
            "Search for people / cast by their name and also known as names. "
            "Returns a JSON list with PersonId and PersonName.",
            PersonNameArgs,
        ),
        _spec(
            "search_movies",
            tools.search_movies,
            "Search for movies by their title and release year. You can search by movie name or part of "
            "a movie name. Returns a JSON list with MovieId, MovieName, ReleaseDate and ImdbId.",
            SearchMoviesArgs,
        ),
        _spec(
            "get_movie_trailers",
            tools.get_movie_trailers,
            "Get movie trailers, teasers, video clips, behind-the-scenes content and featurettes for a "
            "specific movie. Use this when users ask to 'show trailer', 'play trailer', 'watch video', "
            "'preview movie', 'see teaser' or any other video-related request for a movie.",
            MovieIdArgs,
        ),
        _spec(
            "get_movie_with_trailer",
            tools.get_movie_with_trailer,
            "Get movie information with a trailer included for inline chat display. Use when users ask "
            "to 'show movie', 'tell me about movie', or want general movie info with a trailer preview.",
            MovieIdArgs,
        ),
        _spec(
            "handle_generic_trailer_request",
            tools.handle_generic_trailer_request,
            "Handle generic video/trailer requests when context is unclear, e.g. 'trailer please' or "
            "'play trailer' when no specific movie is mentioned. Asks which movie the user means.",
            TrailerQueryArgs,
        ),
        _spec(
            "get_movie_details",
            tools.get_movie_details,
            "Get detailed information about a specific movie by its ID: title, overview, release date, "
            "genres, runtime, votes and ImdbId.",
            MovieIdArgs,
        ),
        _spec(
            "search_keywords",
            tools.search_keywords,
            "Search for keywords related to movies. Returns a JSON list with KeywordId and Name.",
            KeywordArgs,
        ),
        _spec(
            "describe_movie",
            tools.describe_movie,
            "Returns a readable description of a specific movie including tagline, language, "
            "top cast and ImdbId.",
            MovieIdArgs,
        ),
        _spec(
            "discover_movies",
            tools.discover_movies,
            "Discover movies by release date range, cast, genres, keywords and vote filters. All "
            "filters are optional and combined with AND. Returns a JSON list with MovieId, MovieName, "
            "ReleaseDate and ImdbId.",
            DiscoverMoviesArgs,
        ),
    ]


def build_tool_registry(movie_tools: MovieTools) -> dict[str, ToolSpec]:
    """Return every tool the agent may call, keyed by its stable name."""

    specs = _movie_tool_specs(movie_tools) + _date_tool_specs()
    return {spec.name: spec for spec in specs}
