"""Thin wrapper around the TMDb API used by the movie tools."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
import pydantic

from movie_tracker.core.config import Settings
from movie_tracker.services.errors import NotFoundError, ServiceError
from movie_tracker.services.tmdb_models import (
    TMDbCredits,
    TMDbExternalIds,
    TMDbGenre,
    TMDbGenreList,
    TMDbKeyword,
    TMDbMovie,
    TMDbMovieSummary,
    TMDbPage,
    TMDbPerson,
    TMDbVideo,
    TMDbVideoList,
)


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


class TMDbClient:
    """Simple TMDb HTTP client using API key auth.

    Every public method performs a single GET and returns parsed pydantic
    models. Failures surface as ``ServiceError`` (``NotFoundError`` for 404s);
    nothing is retried or cached.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-US",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "TMDbClient":
        return cls(
            api_key=settings.tmdb_api_key,
            base_url=settings.tmdb_base_url,
            language=settings.tmdb_language,
            timeout=settings.tmdb_timeout,
            **kwargs,
        )

    def _request(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise ServiceError("TMDB_API_KEY is not configured")
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, params=query)
        except httpx.RequestError as exc:
            raise ServiceError(f"TMDb request to {path} failed: {exc}") from exc
        if response.status_code == 404:
            raise NotFoundError(f"TMDb has no resource at {path}")
        if response.status_code == 401:
            raise ServiceError("TMDb rejected the API key")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ServiceError(str(exc)) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(f"TMDb returned a non-JSON body for {path}") from exc

    def _get(self, model: type[ModelT], path: str, *, params: dict[str, Any] | None = None) -> ModelT:
        payload = self._request(path, params=params)
        logger.debug("TMDb %s payload: %s", path, payload)
        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise ServiceError(f"Unexpected TMDb response shape for {path}") from exc

    def get_movie_genres(self) -> list[TMDbGenre]:
        return self._get(
            TMDbGenreList, "/genre/movie/list", params={"language": self.language}
        ).genres

    def search_person(self, name: str, *, include_adult: bool = False) -> list[TMDbPerson]:
        page = self._get(
            TMDbPage[TMDbPerson],
            "/search/person",
            params={
                "query": name,
                "include_adult": str(include_adult).lower(),
                "language": self.language,
            },
        )
        return page.results

    def search_movie(self, title: str, *, year: int | None = None) -> list[TMDbMovieSummary]:
        page = self._get(
            TMDbPage[TMDbMovieSummary],
            "/search/movie",
            params={"query": title, "year": year, "language": self.language},
        )
        return page.results

    def get_movie(self, movie_id: int) -> TMDbMovie:
        return self._get(TMDbMovie, f"/movie/{movie_id}", params={"language": self.language})

    def get_movie_external_ids(self, movie_id: int) -> TMDbExternalIds:
        return self._get(TMDbExternalIds, f"/movie/{movie_id}/external_ids")

    def get_movie_videos(self, movie_id: int) -> list[TMDbVideo]:
        return self._get(
            TMDbVideoList, f"/movie/{movie_id}/videos", params={"language": self.language}
        ).results

    def get_movie_credits(self, movie_id: int) -> TMDbCredits:
        return self._get(TMDbCredits, f"/movie/{movie_id}/credits", params={"language": self.language})

    def search_keyword(self, term: str) -> list[TMDbKeyword]:
        return self._get(TMDbPage[TMDbKeyword], "/search/keyword", params={"query": term}).results

    def discover_movies(self, params: dict[str, Any]) -> list[TMDbMovieSummary]:
        """Run a discover query built by ``DiscoverQuery.params()``."""

        query = {"language": self.language}
        query.update(params)
        return self._get(TMDbPage[TMDbMovieSummary], "/discover/movie", params=query).results
