"""
Domain models for the movie catalog.

`Movie` is the validated catalog record. Construction never fails on bad field
values: `Movie.create` coerces raw form input, and `Movie.validate` reports
every rule violation at once so the caller can show them together. Records are
frozen; an update always builds a new `Movie` from a complete `MovieDraft`.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Collection, Dict, Optional, Tuple, Union

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from moviecatalog.utils.ids import IdGenerator, TimestampIdGenerator

Clock = Callable[[], datetime]

MIN_TITLE_LENGTH = 2
MIN_DIRECTOR_LENGTH = 2
MIN_DESCRIPTION_LENGTH = 10
MIN_YEAR = 1900
MAX_YEAR_AHEAD = 5
MIN_RATING = 1.0
MAX_RATING = 10.0

_default_id_generator = TimestampIdGenerator()
_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_int(value: Any) -> Optional[int]:
    """Lenient integer parsing for form input; unparseable values become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) or math.isinf(number) else int(number)


def _parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return None if math.isnan(number) or math.isinf(number) else number


def is_valid_url(url: str) -> bool:
    """True when `url` parses as an absolute URL (scheme required)."""
    if not url:
        return False
    try:
        _url_adapter.validate_python(url)
    except PydanticValidationError:
        return False
    return True


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of `Movie.validate`: every violated rule's message, in rule order."""

    errors: Tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


class MovieDraft(BaseModel):
    """
    Complete set of user-editable fields for a movie.

    Every field is required so an update is always a full replacement. Values
    are kept raw (e.g. the year may still be text) and only judged by
    `Movie.validate` after construction.
    """

    title: str
    genre: str
    director: str
    year: Union[int, str]
    rating: Union[float, int, str]
    description: str
    image_url: str = Field(..., alias="imageUrl")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class Movie(BaseModel):
    """
    A single catalog entry.
    """

    id: str = Field(..., description="Opaque unique identifier.")
    title: str = Field(..., description="Movie title.")
    genre: str = Field(..., description="Label from the configured genre set.")
    director: str = Field(..., description="Director name(s).")
    year: Optional[int] = Field(..., description="Release year.")
    rating: Optional[float] = Field(..., description="Score between 1 and 10.")
    description: str = Field(..., description="Synopsis.")
    image_url: str = Field(..., alias="imageUrl", description="Absolute poster URL.")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Creation timestamp, never changed afterwards."
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def create(
        cls,
        title: Any,
        genre: Any,
        director: Any,
        year: Any,
        rating: Any,
        description: Any,
        image_url: Any,
        id: Optional[str] = None,
        *,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> "Movie":
        """
        Build a movie from raw field values and stamp its creation time.

        A new id is generated only when `id` is None; a given id is kept as
        is. The result is not validated; call `validate()` (the catalog does
        this on add and update).
        """
        generate = id_generator or _default_id_generator
        now = clock or utc_now
        return cls(
            id=id if id is not None else generate(),
            title=_text(title),
            genre=_text(genre),
            director=_text(director),
            year=_parse_int(year),
            rating=_parse_float(rating),
            description=_text(description),
            image_url=_text(image_url),
            created_at=now(),
        )

    @classmethod
    def from_draft(
        cls,
        draft: MovieDraft,
        id: Optional[str] = None,
        *,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> "Movie":
        return cls.create(
            draft.title,
            draft.genre,
            draft.director,
            draft.year,
            draft.rating,
            draft.description,
            draft.image_url,
            id,
            id_generator=id_generator,
            clock=clock,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Movie":
        """Rebuild a movie from its serialized mapping, keeping `createdAt`."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Canonical flat mapping used for storage and for presentation."""
        return self.model_dump(mode="json", by_alias=True)

    def to_draft(self) -> MovieDraft:
        return MovieDraft(
            title=self.title,
            genre=self.genre,
            director=self.director,
            year=self.year if self.year is not None else "",
            rating=self.rating if self.rating is not None else "",
            description=self.description,
            image_url=self.image_url,
        )

    def with_created_at(self, created_at: datetime) -> "Movie":
        return self.model_copy(update={"created_at": created_at})

    # Shadows pydantic's deprecated `BaseModel.validate` classmethod.
    def validate(  # type: ignore[override]
        self,
        genres: Optional[Collection[str]] = None,
        current_year: Optional[int] = None,
    ) -> ValidationReport:
        """
        Check every field rule and collect all violations.

        Rules run in a fixed order and never short-circuit. When `genres` is
        given, the genre must be one of them.
        """
        max_year = (current_year or utc_now().year) + MAX_YEAR_AHEAD
        errors = []

        if len(self.title.strip()) < MIN_TITLE_LENGTH:
            errors.append(f"Title must be at least {MIN_TITLE_LENGTH} characters")

        if not self.genre.strip() or (genres is not None and self.genre not in genres):
            errors.append("A valid genre must be selected")

        if len(self.director.strip()) < MIN_DIRECTOR_LENGTH:
            errors.append(f"Director must be at least {MIN_DIRECTOR_LENGTH} characters")

        if self.year is None or not MIN_YEAR <= self.year <= max_year:
            errors.append(f"Year must be between {MIN_YEAR} and the current year + {MAX_YEAR_AHEAD}")

        if self.rating is None or not MIN_RATING <= self.rating <= MAX_RATING:
            errors.append("Rating must be between 1 and 10")

        if len(self.description.strip()) < MIN_DESCRIPTION_LENGTH:
            errors.append(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")

        if not is_valid_url(self.image_url.strip()):
            errors.append("A valid image URL must be provided")

        return ValidationReport(errors=tuple(errors))


__all__ = [
    "Clock",
    "Movie",
    "MovieDraft",
    "ValidationReport",
    "is_valid_url",
    "utc_now",
]
