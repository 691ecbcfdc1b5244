"""Value objects returned by the movie tools, plus their wire payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class VideoType(str, Enum):
    TRAILER = "Trailer"
    TEASER = "Teaser"
    CLIP = "Clip"
    BEHIND_THE_SCENES = "Behind the Scenes"
    FEATURETTE = "Featurette"
    OTHER = "Other"

    @classmethod
    def classify(cls, raw: str | None) -> "VideoType":
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


# Bucket names in the video bundle, in output order.
VIDEO_BUCKETS: dict[VideoType, str] = {
    VideoType.TRAILER: "Trailers",
    VideoType.TEASER: "Teasers",
    VideoType.CLIP: "Clips",
    VideoType.BEHIND_THE_SCENES: "BehindTheScenes",
    VideoType.FEATURETTE: "Featurettes",
    VideoType.OTHER: "Others",
}


@dataclass(frozen=True, slots=True)
class Genre:
    id: str
    name: str

    def to_payload(self) -> dict[str, Any]:
        return {"GenreId": self.id, "GenreName": self.name}


@dataclass(frozen=True, slots=True)
class Person:
    id: str
    name: str

    def to_payload(self) -> dict[str, Any]:
        return {"PersonId": self.id, "PersonName": self.name}


@dataclass(frozen=True, slots=True)
class Keyword:
    id: str
    name: str

    def to_payload(self) -> dict[str, Any]:
        return {"KeywordId": self.id, "Name": self.name}


@dataclass(frozen=True, slots=True)
class MovieSearchResult:
    """One search/discover hit. Unknown date and IMDb id are empty strings."""

    id: str
    title: str
    release_date: str = ""
    imdb_id: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {
            "MovieId": self.id,
            "MovieName": self.title,
            "ReleaseDate": self.release_date,
            "ImdbId": self.imdb_id,
        }


@dataclass(frozen=True, slots=True)
class MovieDetail:
    """Full movie record. Values TMDb leaves out stay ``None``."""

    id: str
    title: str
    overview: str | None = None
    release_date: str | None = None
    genres: tuple[Genre, ...] = ()
    runtime: int | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    imdb_id: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "MovieId": self.id,
            "Title": self.title,
            "Overview": self.overview,
            "ReleaseDate": self.release_date,
            "Genres": [{"Id": genre.id, "Name": genre.name} for genre in self.genres],
            "Runtime": self.runtime,
            "VoteAverage": self.vote_average,
            "VoteCount": self.vote_count,
            "ImdbId": self.imdb_id,
            "PosterPath": self.poster_path,
            "BackdropPath": self.backdrop_path,
        }


@dataclass(frozen=True, slots=True)
class MovieDescription:
    detail: MovieDetail
    tagline: str | None = None
    language: str | None = None
    cast: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        detail = self.detail
        return {
            "MovieId": detail.id,
            "Title": detail.title,
            "Overview": detail.overview,
            "ReleaseDate": detail.release_date,
            "Genres": [genre.name for genre in detail.genres],
            "Runtime": detail.runtime,
            "Tagline": self.tagline,
            "Rating": detail.vote_average,
            "Language": self.language,
            "ImdbId": detail.imdb_id,
            "Cast": list(self.cast),
        }


@dataclass(frozen=True, slots=True)
class Video:
    name: str
    type: str
    key: str
    youtube_url: str
    embed_url: str
    thumbnail_url: str
    official: bool = False

    @property
    def video_type(self) -> VideoType:
        return VideoType.classify(self.type)

    def to_payload(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Type": self.type,
            "Key": self.key,
            "YouTubeUrl": self.youtube_url,
            "EmbedUrl": self.embed_url,
            "ThumbnailUrl": self.thumbnail_url,
            "Official": self.official,
        }


@dataclass(frozen=True, slots=True)
class VideoBundle:
    movie_title: str
    movie_year: int | None
    total_count: int
    main_video: Video | None
    videos_by_type: dict[VideoType, tuple[Video, ...]] = field(default_factory=dict)
    summary: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {
            "MovieTitle": self.movie_title,
            "MovieYear": self.movie_year,
            "TotalVideoCount": self.total_count,
            "MainTrailer": self.main_video.to_payload() if self.main_video else None,
            "Videos": {
                bucket: [video.to_payload() for video in self.videos_by_type.get(video_type, ())]
                for video_type, bucket in VIDEO_BUCKETS.items()
            },
            "Summary": self.summary,
        }
