"""Pure mappings from TMDb response models to the tool output records."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from movie_tracker.services.models import (
    Genre,
    Keyword,
    MovieDescription,
    MovieDetail,
    MovieSearchResult,
    Person,
    Video,
    VideoBundle,
    VideoType,
)
from movie_tracker.services.tmdb_models import (
    TMDbCredits,
    TMDbExternalIds,
    TMDbGenre,
    TMDbKeyword,
    TMDbMovie,
    TMDbMovieSummary,
    TMDbPerson,
    TMDbVideo,
)

SUPPORTED_VIDEO_SITE = "YouTube"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{key}"
YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{key}/maxresdefault.jpg"
TOP_CAST_LIMIT = 5


def format_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


def genre_from_tmdb(genre: TMDbGenre) -> Genre:
    return Genre(id=str(genre.id), name=genre.name or "")


def person_from_tmdb(person: TMDbPerson) -> Person:
    return Person(id=str(person.id), name=person.name or "")


def keyword_from_tmdb(keyword: TMDbKeyword) -> Keyword:
    return Keyword(id=str(keyword.id), name=keyword.name or "")


def search_result_from_tmdb(
    movie: TMDbMovieSummary, external_ids: TMDbExternalIds
) -> MovieSearchResult:
    return MovieSearchResult(
        id=str(movie.id),
        title=movie.title or "",
        release_date=format_date(movie.release_date) or "",
        imdb_id=external_ids.imdb_id or "",
    )


def detail_from_tmdb(movie_id: str, movie: TMDbMovie) -> MovieDetail:
    """Build the detail record, echoing ``movie_id`` exactly as the caller gave it."""

    return MovieDetail(
        id=movie_id,
        title=movie.title or "",
        overview=movie.overview,
        release_date=format_date(movie.release_date),
        genres=tuple(genre_from_tmdb(genre) for genre in movie.genres),
        runtime=movie.runtime,
        vote_average=movie.vote_average,
        vote_count=movie.vote_count,
        imdb_id=movie.imdb_id or "",
        poster_path=movie.poster_path,
        backdrop_path=movie.backdrop_path,
    )


def top_cast_names(credits: TMDbCredits | None, *, limit: int = TOP_CAST_LIMIT) -> tuple[str, ...]:
    if credits is None:
        return ()
    names = [member.name for member in credits.cast if member.name]
    return tuple(names[:limit])


def description_from_tmdb(
    movie_id: str, movie: TMDbMovie, credits: TMDbCredits | None
) -> MovieDescription:
    return MovieDescription(
        detail=detail_from_tmdb(movie_id, movie),
        tagline=movie.tagline,
        language=movie.original_language,
        cast=top_cast_names(credits),
    )


def video_from_tmdb(video: TMDbVideo) -> Video:
    key = video.key or ""
    return Video(
        name=video.name or "",
        type=video.type or VideoType.OTHER.value,
        key=key,
        youtube_url=YOUTUBE_WATCH_URL.format(key=key),
        embed_url=YOUTUBE_EMBED_URL.format(key=key),
        thumbnail_url=YOUTUBE_THUMBNAIL_URL.format(key=key),
        official=bool(video.official),
    )


def supported_videos(videos: Iterable[TMDbVideo]) -> list[Video]:
    """Keep only videos hosted on YouTube, in TMDb order."""

    return [video_from_tmdb(video) for video in videos if video.site == SUPPORTED_VIDEO_SITE]


def select_main_video(videos: list[Video]) -> Video | None:
    trailers = [video for video in videos if video.video_type is VideoType.TRAILER]
    for trailer in trailers:
        if trailer.official:
            return trailer
    if trailers:
        return trailers[0]
    return videos[0] if videos else None


def select_inline_trailer(videos: list[Video]) -> Video | None:
    """At most one trailer: the first official one, else the first of any kind."""

    trailers = [video for video in videos if video.video_type is VideoType.TRAILER]
    official = [video for video in trailers if video.official]
    return (official or trailers or [None])[0]


def group_videos(videos: list[Video]) -> dict[VideoType, tuple[Video, ...]]:
    grouped: dict[VideoType, list[Video]] = {video_type: [] for video_type in VideoType}
    for video in videos:
        grouped[video.video_type].append(video)
    return {video_type: tuple(items) for video_type, items in grouped.items()}


def video_bundle_from_tmdb(movie: TMDbMovie, videos: Iterable[TMDbVideo]) -> VideoBundle:
    kept = supported_videos(videos)
    title = movie.title or ""
    if kept:
        summary = (
            f"Found {len(kept)} video(s) for {title} including trailers, clips, "
            "and behind-the-scenes content"
        )
    else:
        summary = f"No video content available for {title}"
    return VideoBundle(
        movie_title=title,
        movie_year=movie.release_date.year if movie.release_date else None,
        total_count=len(kept),
        main_video=select_main_video(kept),
        videos_by_type=group_videos(kept),
        summary=summary,
    )
