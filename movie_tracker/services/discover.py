"""Incremental builder for TMDb ``/discover/movie`` queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from movie_tracker.services.datetime_tools import parse_iso_date
from movie_tracker.services.errors import ValidationError


class DiscoverQuery:
    """Collects discover filters; each call adds one constraint and returns ``self``.

    Id lists are joined with commas, which TMDb treats as AND.
    """

    def __init__(self) -> None:
        self._params: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "DiscoverQuery":
        self._params[name] = value
        return self

    def released_after(self, value: date) -> "DiscoverQuery":
        return self._set("primary_release_date.gte", value.isoformat())

    def released_before(self, value: date) -> "DiscoverQuery":
        return self._set("primary_release_date.lte", value.isoformat())

    def with_all_cast(self, ids: Iterable[int]) -> "DiscoverQuery":
        return self._set("with_cast", _join_ids(ids))

    def with_all_genres(self, ids: Iterable[int]) -> "DiscoverQuery":
        return self._set("with_genres", _join_ids(ids))

    def with_all_keywords(self, ids: Iterable[int]) -> "DiscoverQuery":
        return self._set("with_keywords", _join_ids(ids))

    def vote_average_at_least(self, value: float) -> "DiscoverQuery":
        return self._set("vote_average.gte", value)

    def vote_average_at_most(self, value: float) -> "DiscoverQuery":
        return self._set("vote_average.lte", value)

    def vote_count_at_least(self, value: int) -> "DiscoverQuery":
        return self._set("vote_count.gte", value)

    def vote_count_at_most(self, value: int) -> "DiscoverQuery":
        return self._set("vote_count.lte", value)

    def params(self) -> dict[str, Any]:
        return dict(self._params)


def _join_ids(ids: Iterable[int]) -> str:
    return ",".join(str(value) for value in ids)


def parse_id_list(raw: str, *, field_name: str) -> tuple[int, ...]:
    """Parse ``"28,12"`` into ``(28, 12)``; every segment must be an integer."""

    ids = []
    for segment in raw.split(","):
        try:
            ids.append(int(segment.strip()))
        except ValueError as exc:
            raise ValidationError(
                f"{field_name} must be comma-separated integers, got '{raw}'"
            ) from exc
    return tuple(ids)


def _present(raw: str | None) -> bool:
    return raw is not None and raw.strip() != ""


@dataclass(frozen=True, slots=True)
class DiscoveryFilter:
    release_date_from: date | None = None
    release_date_to: date | None = None
    cast_ids: tuple[int, ...] | None = None
    genre_ids: tuple[int, ...] | None = None
    keyword_ids: tuple[int, ...] | None = None
    min_vote_average: float | None = None
    max_vote_average: float | None = None
    min_vote_count: int | None = None
    max_vote_count: int | None = None

    @classmethod
    def from_arguments(
        cls,
        *,
        release_date_from: str | None = None,
        release_date_to: str | None = None,
        cast_ids: str | None = None,
        genre_ids: str | None = None,
        keyword_ids: str | None = None,
        min_vote_average: float | None = None,
        max_vote_average: float | None = None,
        min_vote_count: int | None = None,
        max_vote_count: int | None = None,
    ) -> "DiscoveryFilter":
        """Parse raw tool arguments; blank strings count as absent."""

        return cls(
            release_date_from=parse_iso_date(release_date_from) if _present(release_date_from) else None,
            release_date_to=parse_iso_date(release_date_to) if _present(release_date_to) else None,
            cast_ids=parse_id_list(cast_ids, field_name="cast_ids") if _present(cast_ids) else None,
            genre_ids=parse_id_list(genre_ids, field_name="genre_ids") if _present(genre_ids) else None,
            keyword_ids=(
                parse_id_list(keyword_ids, field_name="keyword_ids") if _present(keyword_ids) else None
            ),
            min_vote_average=min_vote_average,
            max_vote_average=max_vote_average,
            min_vote_count=min_vote_count,
            max_vote_count=max_vote_count,
        )

    def apply(self, query: DiscoverQuery) -> DiscoverQuery:
        if self.release_date_from is not None:
            query = query.released_after(self.release_date_from)
        if self.release_date_to is not None:
            query = query.released_before(self.release_date_to)
        if self.cast_ids:
            query = query.with_all_cast(self.cast_ids)
        if self.genre_ids:
            query = query.with_all_genres(self.genre_ids)
        if self.keyword_ids:
            query = query.with_all_keywords(self.keyword_ids)
        if self.min_vote_average is not None:
            query = query.vote_average_at_least(self.min_vote_average)
        if self.max_vote_average is not None:
            query = query.vote_average_at_most(self.max_vote_average)
        if self.min_vote_count is not None:
            query = query.vote_count_at_least(self.min_vote_count)
        if self.max_vote_count is not None:
            query = query.vote_count_at_most(self.max_vote_count)
        return query
