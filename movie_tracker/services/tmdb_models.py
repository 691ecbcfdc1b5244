"""Pydantic models for the TMDb response shapes the tool layer reads.

Only the fields we normalize are declared; everything else TMDb sends is
ignored. Apart from ids, every field may be missing or null.
"""

from __future__ import annotations

from datetime import date
from typing import Generic, TypeVar

from pydantic import BaseModel, field_validator

T = TypeVar("T")


def _empty_if_null(value):
    # TMDb occasionally sends an explicit null where a list is expected.
    return [] if value is None else value


class TMDbGenre(BaseModel):
    id: int
    name: str | None = None


class TMDbGenreList(BaseModel):
    genres: list[TMDbGenre] = []

    @field_validator("genres", mode="before")
    @classmethod
    def _null_genres_is_empty(cls, value):
        return _empty_if_null(value)


class TMDbPerson(BaseModel):
    id: int
    name: str | None = None


class TMDbKeyword(BaseModel):
    id: int
    name: str | None = None


class TMDbMovieSummary(BaseModel):
    """Movie entry as returned by search and discover listings."""

    id: int
    title: str | None = None
    release_date: date | None = None

    @field_validator("release_date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        # TMDb sends "" for unknown release dates.
        if value in ("", None):
            return None
        return value


class TMDbMovie(TMDbMovieSummary):
    """Full movie record from /movie/{id}."""

    overview: str | None = None
    genres: list[TMDbGenre] = []
    runtime: int | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    imdb_id: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    tagline: str | None = None
    original_language: str | None = None

    @field_validator("genres", mode="before")
    @classmethod
    def _null_genres_is_empty(cls, value):
        return _empty_if_null(value)


class TMDbPage(BaseModel, Generic[T]):
    page: int = 1
    results: list[T] = []
    total_pages: int = 0
    total_results: int = 0

    @field_validator("results", mode="before")
    @classmethod
    def _null_results_is_empty(cls, value):
        return _empty_if_null(value)


class TMDbVideo(BaseModel):
    name: str | None = None
    key: str | None = None
    site: str | None = None
    type: str | None = None
    official: bool | None = False


class TMDbVideoList(BaseModel):
    results: list[TMDbVideo] = []

    @field_validator("results", mode="before")
    @classmethod
    def _null_results_is_empty(cls, value):
        return _empty_if_null(value)


class TMDbCastMember(BaseModel):
    name: str | None = None
    order: int | None = None


class TMDbCredits(BaseModel):
    cast: list[TMDbCastMember] = []

    @field_validator("cast", mode="before")
    @classmethod
    def _null_cast_is_empty(cls, value):
        return _empty_if_null(value)


class TMDbExternalIds(BaseModel):
    imdb_id: str | None = None
