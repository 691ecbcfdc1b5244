import datetime as dt

import pytest

from movie_tracker.core.config import get_settings
from movie_tracker.services.movie_tools import MovieTools
from movie_tracker.services.tmdb_models import (
    TMDbCastMember,
    TMDbCredits,
    TMDbExternalIds,
    TMDbGenre,
    TMDbKeyword,
    TMDbMovie,
    TMDbMovieSummary,
    TMDbPerson,
    TMDbVideo,
)


class FakeTMDbClient:
    """In-memory stand-in for TMDbClient that records every call."""

    def __init__(self):
        self.calls = []
        self.movie = TMDbMovie(
            id=550,
            title="Fight Club",
            release_date=dt.date(1999, 10, 15),
            overview="An insomniac office worker...",
            genres=[TMDbGenre(id=18, name="Drama"), TMDbGenre(id=53, name="Thriller")],
            runtime=139,
            vote_average=8.4,
            vote_count=30000,
            imdb_id="tt0137523",
            poster_path="/poster.jpg",
            backdrop_path="/backdrop.jpg",
            tagline="Mischief. Mayhem. Soap.",
            original_language="en",
        )
        self.videos = []
        self.search_results = [
            TMDbMovieSummary(id=550, title="Fight Club", release_date=dt.date(1999, 10, 15)),
            TMDbMovieSummary(id=1, title="Fight Club: Members Only", release_date=None),
        ]
        self.external_ids = {550: TMDbExternalIds(imdb_id="tt0137523"), 1: TMDbExternalIds(imdb_id=None)}
        cast_names = ["Edward Norton", "Brad Pitt", "Helena Bonham Carter", "Meat Loaf", "Jared Leto", "Zach Grenier"]
        self.credits = TMDbCredits(
            cast=[TMDbCastMember(name=name, order=order) for order, name in enumerate(cast_names)]
        )
        self.credits_error = None

    def get_movie_genres(self):
        self.calls.append(("get_movie_genres",))
        return [TMDbGenre(id=28, name="Action"), TMDbGenre(id=12, name="Adventure")]

    def search_person(self, name, *, include_adult=False):
        self.calls.append(("search_person", name, include_adult))
        return [TMDbPerson(id=819, name="Edward Norton")]

    def search_movie(self, title, *, year=None):
        self.calls.append(("search_movie", title, year))
        return list(self.search_results)

    def get_movie(self, movie_id):
        self.calls.append(("get_movie", movie_id))
        return self.movie

    def get_movie_external_ids(self, movie_id):
        self.calls.append(("get_movie_external_ids", movie_id))
        return self.external_ids.get(movie_id, TMDbExternalIds())

    def get_movie_videos(self, movie_id):
        self.calls.append(("get_movie_videos", movie_id))
        return list(self.videos)

    def get_movie_credits(self, movie_id):
        self.calls.append(("get_movie_credits", movie_id))
        if self.credits_error is not None:
            raise self.credits_error
        return self.credits

    def search_keyword(self, term):
        self.calls.append(("search_keyword", term))
        return [TMDbKeyword(id=825, name="support group")]

    def discover_movies(self, params):
        self.calls.append(("discover_movies", params))
        return list(self.search_results)


def make_video(type_, *, official=False, site="YouTube", key=None, name=None):
    return TMDbVideo(
        name=name or f"{type_} video",
        key=key or f"key-{type_.lower().replace(' ', '-')}-{int(official)}",
        site=site,
        type=type_,
        official=official,
    )


@pytest.fixture
def fake_client():
    return FakeTMDbClient()


@pytest.fixture
def movie_tools(fake_client):
    return MovieTools(fake_client)


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep tracing flags and cached settings from leaking between tests
    monkeypatch.setenv("LANGCHAIN_TRACING_V2", "false")
    monkeypatch.delenv("LANGCHAIN_API_KEY", raising=False)
    monkeypatch.delenv("LANGCHAIN_PROJECT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
