"""
Exception hierarchy for the movie catalog.

Every failure a caller of `MovieCatalog` has to react to derives from
`CatalogError`, so presentation code can catch the whole family in one place
and still branch on the concrete type.
"""

from __future__ import annotations

from typing import Iterable, List


class CatalogError(Exception):
    """Base class for catalog failures."""


class ValidationError(CatalogError):
    """
    One or more field rules were violated.

    Carries every message in rule order; callers should show all of them.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("\n".join(self.errors))


class DuplicateIdError(ValidationError):
    """A movie with the same id is already in the catalog."""

    def __init__(self, movie_id: str) -> None:
        self.movie_id = movie_id
        super().__init__([f"A movie with id '{movie_id}' already exists"])


class NotFoundError(CatalogError):
    """An operation referenced a movie id that is not in the catalog."""

    def __init__(self, movie_id: str) -> None:
        self.movie_id = movie_id
        super().__init__(f"Movie not found: {movie_id}")


class PersistenceError(CatalogError):
    """
    The store rejected a write.

    The in-memory catalog is still valid for this process, but the change will
    not survive a reload.
    """

    def __init__(self, storage_key: str, reason: str = "") -> None:
        self.storage_key = storage_key
        message = f"Could not save catalog under '{storage_key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


__all__ = [
    "CatalogError",
    "ValidationError",
    "DuplicateIdError",
    "NotFoundError",
    "PersistenceError",
]
