"""Pydantic models describing catalog payloads."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .utils import DEFAULT_IMAGE_BASE_URL, ImageSize, image_url, parse_release_date


class MovieSummary(BaseModel):
    """A single movie entry as returned by listing and search endpoints.

    Two summaries are equal when they share an ``id``; the remaining fields
    are display data and do not take part in deduplication.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str = ""
    original_title: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    release_date: str | None = None
    genre_ids: tuple[int, ...] = ()

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("genre_ids", mode="before")
    @classmethod
    def _null_genres(cls, value: object) -> object:
        return () if value is None else value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MovieSummary):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def display_title(self) -> str:
        """Return a human-friendly title for list rows."""

        for candidate in (self.title, self.original_title):
            if candidate and candidate.strip():
                return candidate.strip()
        return "Untitled"

    @property
    def release(self) -> date | None:
        return parse_release_date(self.release_date)

    @property
    def release_year(self) -> int | None:
        release = self.release
        return release.year if release else None

    def poster_url(
        self, size: ImageSize = "w500", *, base_url: str = DEFAULT_IMAGE_BASE_URL
    ) -> str | None:
        return image_url(self.poster_path, size, base_url=base_url)

    def backdrop_url(
        self, size: ImageSize = "w780", *, base_url: str = DEFAULT_IMAGE_BASE_URL
    ) -> str | None:
        return image_url(self.backdrop_path, size, base_url=base_url)


class Page(BaseModel):
    """One page of movie summaries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: tuple[MovieSummary, ...] = Field(
        default=(), validation_alias=AliasChoices("items", "results")
    )
    page_number: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("page_number", "page")
    )
    total_pages: int = Field(default=1, ge=1)
    total_results: int = Field(default=0, ge=0)

    @field_validator("total_pages", mode="before")
    @classmethod
    def _at_least_one_page(cls, value: object) -> object:
        # Empty searches report zero pages.
        if value in (0, "0", None):
            return 1
        return value

    @model_validator(mode="after")
    def _page_within_bounds(self) -> "Page":
        if self.page_number > self.total_pages:
            raise ValueError("page_number must not exceed total_pages")
        return self

    @classmethod
    def empty(cls) -> "Page":
        return cls(items=(), page_number=1, total_pages=1, total_results=0)


class Genre(BaseModel):
    id: int
    name: str


class CastMember(BaseModel):
    id: int
    name: str | None = None
    character: str | None = None
    profile_path: str | None = None

    def profile_url(
        self, size: ImageSize = "w200", *, base_url: str = DEFAULT_IMAGE_BASE_URL
    ) -> str | None:
        return image_url(self.profile_path, size, base_url=base_url)


class CrewMember(BaseModel):
    id: int
    name: str | None = None
    job: str | None = None


class Credits(BaseModel):
    cast: list[CastMember] = Field(default_factory=list)
    crew: list[CrewMember] = Field(default_factory=list)

    @field_validator("cast", "crew", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []


class Video(BaseModel):
    id: str
    key: str | None = None
    name: str | None = None
    site: str | None = None
    type: str | None = None

    @property
    def youtube_url(self) -> str | None:
        if self.site == "YouTube" and self.key:
            return f"https://www.youtube.com/watch?v={self.key}"
        return None


class VideoResponse(BaseModel):
    results: list[Video] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []


class MovieDetail(BaseModel):
    """Full movie record including credits and videos."""

    id: int
    imdb_id: str | None = None
    title: str | None = None
    original_title: str | None = None
    overview: str | None = None
    original_language: str | None = None
    adult: bool | None = None
    backdrop_path: str | None = None
    poster_path: str | None = None
    budget: int | None = None
    revenue: int | None = None
    runtime: int | None = None
    genres: list[Genre] = Field(default_factory=list)
    homepage: str | None = None
    popularity: float | None = None
    release_date: str | None = None
    status: str | None = None
    tagline: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    credits: Credits | None = None
    videos: VideoResponse | None = None

    @field_validator("genres", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []

    @property
    def rating_description(self) -> str:
        return f"{self.vote_average or 0:.1f}/10 ({self.vote_count or 0} votes)"

    @property
    def release(self) -> date | None:
        return parse_release_date(self.release_date)

    def trailer(self) -> Video | None:
        """Return the first YouTube trailer, falling back to any YouTube video."""

        if self.videos is None:
            return None
        playable = [video for video in self.videos.results if video.youtube_url]
        for video in playable:
            if (video.type or "").casefold() == "trailer":
                return video
        return playable[0] if playable else None

    def top_cast(self, limit: int = 10) -> list[CastMember]:
        if self.credits is None:
            return []
        return self.credits.cast[:limit]
