from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from moviecatalog.domain.models import Movie, MovieDraft, is_valid_url, utc_now
from moviecatalog.utils.ids import SequentialIdGenerator, TimestampIdGenerator

TITLE_ERROR = "Title must be at least 2 characters"
GENRE_ERROR = "A valid genre must be selected"
DIRECTOR_ERROR = "Director must be at least 2 characters"
YEAR_ERROR = "Year must be between 1900 and the current year + 5"
RATING_ERROR = "Rating must be between 1 and 10"
DESCRIPTION_ERROR = "Description must be at least 10 characters"
URL_ERROR = "A valid image URL must be provided"

ALL_ERRORS = [
    TITLE_ERROR,
    GENRE_ERROR,
    DIRECTOR_ERROR,
    YEAR_ERROR,
    RATING_ERROR,
    DESCRIPTION_ERROR,
    URL_ERROR,
]


def test_valid_movie_has_no_errors(make_movie):
    report = make_movie().validate()
    assert report.valid
    assert report.errors == ()


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"title": " A "}, TITLE_ERROR),
        ({"genre": ""}, GENRE_ERROR),
        ({"director": "X"}, DIRECTOR_ERROR),
        ({"year": 1899}, YEAR_ERROR),
        ({"year": "not a year"}, YEAR_ERROR),
        ({"rating": 0.5}, RATING_ERROR),
        ({"rating": 10.1}, RATING_ERROR),
        ({"rating": "abc"}, RATING_ERROR),
        ({"description": "too short"}, DESCRIPTION_ERROR),
        ({"description": "   short    "}, DESCRIPTION_ERROR),
        ({"image_url": "not a url"}, URL_ERROR),
        ({"image_url": "/relative/poster.jpg"}, URL_ERROR),
        ({"image_url": ""}, URL_ERROR),
    ],
)
def test_each_rule_reports_only_its_own_message(make_movie, overrides, expected):
    report = make_movie(**overrides).validate()
    assert not report.valid
    assert list(report.errors) == [expected]


def test_all_violations_are_collected_in_rule_order(make_movie):
    movie = make_movie(
        title="",
        genre="",
        director="",
        year=None,
        rating=None,
        description="",
        image_url="nope",
    )
    assert list(movie.validate().errors) == ALL_ERRORS


def test_year_bounds_are_inclusive(make_movie):
    max_year = utc_now().year + 5
    assert make_movie(year=1900).validate().valid
    assert make_movie(year=max_year).validate().valid
    assert list(make_movie(year=max_year + 1).validate().errors) == [YEAR_ERROR]


def test_year_upper_bound_follows_current_year(make_movie):
    movie = make_movie(year=2030)
    assert movie.validate(current_year=2025).valid
    assert not movie.validate(current_year=2024).valid


def test_rating_bounds_are_inclusive(make_movie):
    assert make_movie(rating=1).validate().valid
    assert make_movie(rating=10).validate().valid


def test_genre_must_be_in_configured_set_when_given(make_movie):
    movie = make_movie(genre="Western")
    assert movie.validate().valid
    assert list(movie.validate(genres=["Drama", "Action"]).errors) == [GENRE_ERROR]


def test_create_coerces_form_text(make_movie):
    movie = make_movie(year=" 1999 ", rating="8.7")
    assert movie.year == 1999
    assert movie.rating == 8.7


def test_create_keeps_given_id_and_stamps_created_at(ids, clock, valid_fields):
    before = clock.now
    movie = Movie.create(**valid_fields, id="custom-id", id_generator=ids, clock=clock)
    assert movie.id == "custom-id"
    assert movie.created_at == before


def test_create_generates_id_when_missing(valid_fields):
    movie = Movie.create(**valid_fields, id_generator=SequentialIdGenerator(prefix="m", start=7))
    assert movie.id == "m_7"


def test_create_never_replaces_a_given_empty_id(valid_fields):
    movie = Movie.create(**valid_fields, id="", id_generator=SequentialIdGenerator(prefix="m"))
    assert movie.id == ""


def test_validate_is_an_instance_check_not_pydantic_parsing(valid_fields):
    movie = Movie.create(**valid_fields)
    report = movie.validate()
    assert report.valid
    assert report.errors == ()

    bad = Movie.create(**{**valid_fields, "title": "x"})
    assert bad.validate().errors == ("Title must be at least 2 characters",)


def test_timestamp_id_generator_format():
    generate = TimestampIdGenerator(time_ms=lambda: 1700000000000)
    first, second = generate(), generate()
    assert re.fullmatch(r"movie_1700000000000_[0-9a-z]{9}", first)
    assert first != second


def test_movie_is_immutable(make_movie):
    movie = make_movie()
    with pytest.raises(Exception):
        movie.title = "Changed"  # type: ignore[misc]


def test_serialized_mapping_uses_canonical_keys(make_movie):
    data = make_movie(id="movie_x").to_dict()
    assert list(data) == [
        "id",
        "title",
        "genre",
        "director",
        "year",
        "rating",
        "description",
        "imageUrl",
        "createdAt",
    ]
    assert data["id"] == "movie_x"
    assert data["year"] == 2016
    assert data["rating"] == 7.9
    assert isinstance(data["createdAt"], str)
    assert datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00")) == datetime(
        2024, 1, 1, 12, 0, tzinfo=timezone.utc
    )


def test_serialize_round_trip_is_identical(valid_fields):
    movie = Movie.create(**valid_fields)
    first = movie.to_dict()
    second = Movie.from_dict(first).to_dict()
    assert first == second


def test_from_dict_preserves_created_at():
    data = {
        "id": "movie_legacy",
        "title": "Matrix",
        "genre": "Science Fiction",
        "director": "Lana Wachowski",
        "year": 1999,
        "rating": 8.7,
        "description": "A hacker discovers the truth about his reality.",
        "imageUrl": "https://example.com/matrix.jpg",
        "createdAt": "2023-05-01T10:00:00.000Z",
    }
    movie = Movie.from_dict(data)
    assert movie.created_at == datetime(2023, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert movie.image_url == "https://example.com/matrix.jpg"


def test_naive_created_at_is_treated_as_utc(make_movie):
    data = make_movie().to_dict()
    data["createdAt"] = "2023-05-01T10:00:00"
    assert Movie.from_dict(data).created_at.tzinfo is not None


def test_draft_requires_every_field(valid_fields):
    fields = dict(valid_fields)
    del fields["director"]
    with pytest.raises(Exception):
        MovieDraft(**fields)


def test_to_draft_round_trips_through_from_draft(make_movie):
    movie = make_movie()
    rebuilt = Movie.from_draft(movie.to_draft(), id=movie.id)
    assert rebuilt.to_dict() | {"createdAt": None} == movie.to_dict() | {"createdAt": None}


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://image.tmdb.org/t/p/w500/poster.jpg", True),
        ("http://localhost:8080/a.png", True),
        ("ftp://files.example.com/poster.png", True),
        ("poster.jpg", False),
        ("", False),
    ],
)
def test_is_valid_url(url, expected):
    assert is_valid_url(url) is expected
