"""Movie tools called by the agent, one method per user intent.

Each method validates its arguments, calls TMDb (sometimes once per search
hit), normalizes the responses and returns a single JSON string. Client
errors propagate untouched; the only tolerated failure is a missing credits
list in ``describe_movie``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from movie_tracker.services.discover import DiscoverQuery, DiscoveryFilter
from movie_tracker.services.errors import ServiceError, ValidationError
from movie_tracker.services.models import MovieSearchResult
from movie_tracker.services.normalizers import (
    description_from_tmdb,
    detail_from_tmdb,
    format_date,
    genre_from_tmdb,
    keyword_from_tmdb,
    person_from_tmdb,
    search_result_from_tmdb,
    select_inline_trailer,
    supported_videos,
    video_bundle_from_tmdb,
)
from movie_tracker.services.tmdb import TMDbClient
from movie_tracker.services.tmdb_models import TMDbCredits, TMDbMovieSummary

logger = logging.getLogger(__name__)

# "0" is what the agent sends when it has no year in mind; treat it as unset,
# never as year zero.
YEAR_UNSET_SENTINEL = "0"

INLINE_TRAILER_DISPLAY_TYPE = "movie-with-inline-trailer"

_CLARIFICATION = {
    "Type": "clarification-needed",
    "Message": "I'd be happy to show you a trailer! Which movie are you interested in?",
    "Suggestions": [
        "Try: 'Show me the Inception trailer'",
        "Or: 'Play the Batman trailer'",
        "Or: 'Trailer for Top Gun Maverick'",
    ],
    "FollowUp": "Just tell me the movie name and I'll find the trailer for you!",
}


def to_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def to_indented_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def parse_movie_id(raw: str) -> int:
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"movie id must be numeric, got '{raw}'") from exc


def parse_year(raw: str | int | None) -> int | None:
    """Year filter policy: unset, blank, the "0" sentinel and garbage all mean no filter."""

    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text == YEAR_UNSET_SENTINEL:
        return None
    try:
        return int(text) or None
    except ValueError:
        logger.debug("Ignoring unparsable release year %r", raw)
        return None


class MovieTools:
    """Tool implementations bound to one TMDb client."""

    def __init__(self, client: TMDbClient) -> None:
        self.client = client

    def list_genres(self) -> str:
        genres = [genre_from_tmdb(genre) for genre in self.client.get_movie_genres()]
        return to_json([genre.to_payload() for genre in genres])

    def search_people(self, name: str) -> str:
        if not name or not name.strip():
            raise ValidationError("person name must not be empty")
        people = [person_from_tmdb(p) for p in self.client.search_person(name.strip(), include_adult=False)]
        return to_json([person.to_payload() for person in people])

    def search_movies(self, title: str, year: str | None = None) -> str:
        results = self.client.search_movie(title, year=parse_year(year))
        return to_json([hit.to_payload() for hit in self._with_external_ids(results)])

    def get_movie_trailers(self, movie_id: str) -> str:
        tmdb_id = parse_movie_id(movie_id)
        videos = self.client.get_movie_videos(tmdb_id)
        movie = self.client.get_movie(tmdb_id)
        bundle = video_bundle_from_tmdb(movie, videos)
        return to_json(bundle.to_payload())

    def get_movie_with_trailer(self, movie_id: str) -> str:
        tmdb_id = parse_movie_id(movie_id)
        movie = self.client.get_movie(tmdb_id)
        trailer = select_inline_trailer(supported_videos(self.client.get_movie_videos(tmdb_id)))
        if trailer is not None:
            trailer_payload = {
                "HasTrailer": True,
                "Name": trailer.name,
                "YouTubeUrl": trailer.youtube_url,
                "EmbedUrl": trailer.embed_url,
                "ThumbnailUrl": trailer.thumbnail_url,
                "DisplayInline": True,
                "AllowFullScreen": True,
            }
            message = "Here's the movie info with trailer - tap to watch full screen!"
        else:
            trailer_payload = {
                "HasTrailer": False,
                "Name": "No trailer available",
                "YouTubeUrl": "",
                "EmbedUrl": "",
                "ThumbnailUrl": "",
                "DisplayInline": False,
                "AllowFullScreen": False,
            }
            message = "Here's the movie info (no trailer available)"
        return to_json(
            {
                "MovieId": str(movie_id),
                "Title": movie.title or "",
                "Overview": movie.overview,
                "ReleaseDate": format_date(movie.release_date),
                "ImdbId": movie.imdb_id or "",
                "DisplayType": INLINE_TRAILER_DISPLAY_TYPE,
                "Trailer": trailer_payload,
                "ChatMessage": message,
            }
        )

    def handle_generic_trailer_request(self, query: str) -> str:
        logger.debug("Generic trailer request without a movie: %r", query)
        return to_json(_CLARIFICATION)

    def get_movie_details(self, movie_id: str) -> str:
        movie = self.client.get_movie(parse_movie_id(movie_id))
        return to_json(detail_from_tmdb(str(movie_id), movie).to_payload())

    def search_keywords(self, term: str) -> str:
        keywords = [keyword_from_tmdb(keyword) for keyword in self.client.search_keyword(term)]
        return to_json([keyword.to_payload() for keyword in keywords])

    def describe_movie(self, movie_id: str) -> str:
        tmdb_id = parse_movie_id(movie_id)
        movie = self.client.get_movie(tmdb_id)
        credits: TMDbCredits | None
        try:
            credits = self.client.get_movie_credits(movie.id)
        except ServiceError as exc:
            logger.warning("Credits lookup failed for movie %s, describing without cast: %s", movie.id, exc)
            credits = None
        description = description_from_tmdb(str(movie_id), movie, credits)
        return to_indented_json(description.to_payload())

    def discover_movies(
        self,
        release_date_from: str | None = None,
        release_date_to: str | None = None,
        cast_ids: str | None = None,
        genre_ids: str | None = None,
        keyword_ids: str | None = None,
        min_vote_average: float | None = None,
        max_vote_average: float | None = None,
        min_vote_count: int | None = None,
        max_vote_count: int | None = None,
    ) -> str:
        filters = DiscoveryFilter.from_arguments(
            release_date_from=release_date_from,
            release_date_to=release_date_to,
            cast_ids=cast_ids,
            genre_ids=genre_ids,
            keyword_ids=keyword_ids,
            min_vote_average=min_vote_average,
            max_vote_average=max_vote_average,
            min_vote_count=min_vote_count,
            max_vote_count=max_vote_count,
        )
        params = filters.apply(DiscoverQuery()).params()
        logger.debug("Discover query params: %s", params)
        results = self.client.discover_movies(params)
        return to_json([hit.to_payload() for hit in self._with_external_ids(results)])

    def _with_external_ids(self, movies: list[TMDbMovieSummary]) -> list[MovieSearchResult]:
        # One external-id lookup per hit, sequential and in listing order.
        return [
            search_result_from_tmdb(movie, self.client.get_movie_external_ids(movie.id))
            for movie in movies
        ]
