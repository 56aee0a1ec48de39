"""
Domain package for the movie catalog.

Exports the movie record, its draft and validation report, and the default
seed set. Keep this package focused on data definitions and validation.
"""

from moviecatalog.domain.models import Movie, MovieDraft, ValidationReport
from moviecatalog.domain.seed import DEFAULT_MOVIES, default_movies

__all__ = [
    "DEFAULT_MOVIES",
    "Movie",
    "MovieDraft",
    "ValidationReport",
    "default_movies",
]
