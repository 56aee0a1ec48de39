"""
Movie catalog: the in-memory collection and its mirror in the key-value store.

Usage (from an entry point):
    from moviecatalog.catalog import MovieCatalog
    from moviecatalog.storage import FileStore

    catalog = MovieCatalog(FileStore(".catalog"))
    movie = catalog.add_draft(draft)
    catalog.search_and_filter("nolan", "Science Fiction")

The catalog is the only writer under its storage key. It loads once at
construction; afterwards every read is served from memory and every
successful mutation rewrites the whole collection to the store.

Stored format (UTF-8 JSON):
    {"schemaVersion": 1, "movies": [{...flat movie mapping...}, ...]}
A bare JSON array of movie mappings is also accepted when loading.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Collection, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from moviecatalog.config import DEFAULT_RECENT_LIMIT, DEFAULT_STORAGE_KEY, Settings, get_settings
from moviecatalog.domain.models import Clock, Movie, MovieDraft, utc_now
from moviecatalog.domain.seed import default_movies
from moviecatalog.errors import DuplicateIdError, NotFoundError, PersistenceError, ValidationError
from moviecatalog.storage.base import KeyValueStore, StoreError
from moviecatalog.storage.factory import build_store
from moviecatalog.utils.ids import IdGenerator, TimestampIdGenerator
from moviecatalog.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_VERSION = 1

SeedFactory = Callable[[Optional[IdGenerator], Optional[Clock]], List[Movie]]


class CorruptCatalogError(ValueError):
    """Stored catalog data could not be turned back into valid movies."""


def encode_movies(movies: List[Movie]) -> bytes:
    payload = {
        "schemaVersion": SCHEMA_VERSION,
        "movies": [movie.to_dict() for movie in movies],
    }
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_movies(raw: bytes) -> List[Movie]:
    """
    Parse stored bytes into validated movies.

    Raises
    ------
    CorruptCatalogError
        If the bytes are not a supported catalog document, a record does not
        deserialize or validate, has a blank id, or two records share
        an id.
    """
    try:
        data: Any = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptCatalogError(f"not a JSON document: {exc}") from exc

    if isinstance(data, dict):
        version = data.get("schemaVersion")
        if version != SCHEMA_VERSION:
            raise CorruptCatalogError(f"unsupported schema version: {version!r}")
        data = data.get("movies")
    if not isinstance(data, list):
        raise CorruptCatalogError("expected a list of movies")

    movies: List[Movie] = []
    seen = set()
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise CorruptCatalogError(f"movie #{position} is not a mapping")
        try:
            movie = Movie.from_dict(item)
        except PydanticValidationError as exc:
            raise CorruptCatalogError(f"movie #{position} is malformed: {exc}") from exc
        if not movie.id.strip():
            raise CorruptCatalogError(f"movie #{position} has a blank id")
        # Genre membership is not re-checked so a changed genre list cannot wipe the catalog.
        report = movie.validate()
        if not report.valid:
            raise CorruptCatalogError(f"movie #{position} is invalid: {'; '.join(report.errors)}")
        if movie.id in seen:
            raise CorruptCatalogError(f"duplicate movie id {movie.id!r}")
        seen.add(movie.id)
        movies.append(movie)
    return movies


def _as_draft(fields: Union[MovieDraft, Mapping[str, Any]]) -> MovieDraft:
    if isinstance(fields, MovieDraft):
        return fields
    try:
        return MovieDraft.model_validate(dict(fields))
    except PydanticValidationError as exc:
        raise ValidationError(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ) from exc


class MovieCatalog:
    """
    Ordered, validated collection of movies persisted under one storage key.

    Parameters
    ----------
    store : KeyValueStore
        Backend the catalog mirrors itself to.
    storage_key : str
        The single key the whole catalog lives under.
    genres : collection of str, optional
        Allowed genre labels; when None any non-empty genre is accepted.
    id_generator : IdGenerator, optional
        Id strategy for movies created through the catalog.
    clock : callable, optional
        Source of creation timestamps for movies created through the catalog.
    seed_factory : callable, optional
        Produces the default movies used when the store has no usable catalog.
    recent_limit : int
        Default size of `recent()`.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        *,
        genres: Optional[Collection[str]] = None,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
        seed_factory: SeedFactory = default_movies,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        self.store = store
        self.storage_key = storage_key
        self.genres = tuple(genres) if genres is not None else None
        self.id_generator: IdGenerator = id_generator or TimestampIdGenerator()
        self.clock: Clock = clock or utc_now
        self.recent_limit = recent_limit
        self._seed_factory = seed_factory
        self._items: List[Movie] = []
        self.load_warnings: List[str] = []
        self.load()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        **kwargs: Any,
    ) -> "MovieCatalog":
        """Build a catalog wired to the configured store, genres and limits."""
        settings = settings or get_settings()
        return cls(
            store if store is not None else build_store(settings),
            settings.storage_key,
            genres=settings.genres,
            recent_limit=settings.recent_limit,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """
        Fill the catalog from the store, seeding defaults when nothing usable is stored.

        Never raises: unreadable or corrupt data falls back to the default set,
        recorded as a warning in the log and in `load_warnings`.
        """
        try:
            raw = self.store.get(self.storage_key)
        except StoreError as exc:
            self._warn(f"Could not read stored catalog, using defaults: {exc}")
            raw = None

        if raw is not None:
            try:
                movies = decode_movies(raw)
            except CorruptCatalogError as exc:
                self._warn(f"Stored catalog is unusable, using defaults: {exc}")
            else:
                if movies:
                    self._items = movies
                    log.info(
                        "Loaded catalog",
                        extra={"storage_key": self.storage_key, "count": len(movies)},
                    )
                    return
                log.info(
                    "Stored catalog is empty, seeding defaults",
                    extra={"storage_key": self.storage_key},
                )

        self._items = self._seed_factory(self.id_generator, self.clock)
        try:
            self.persist()
        except PersistenceError as exc:
            self._warn(f"Default catalog could not be saved: {exc}")
        log.info(
            "Seeded default catalog",
            extra={"storage_key": self.storage_key, "count": len(self._items)},
        )

    def persist(self) -> None:
        """
        Write the whole catalog to the store.

        Raises
        ------
        PersistenceError
            If the store rejects the write. The in-memory catalog is kept.
        """
        payload = encode_movies(self._items)
        try:
            self.store.set(self.storage_key, payload)
        except StoreError as exc:
            log.error(
                "Catalog write failed",
                extra={"storage_key": self.storage_key, "bytes": len(payload)},
            )
            raise PersistenceError(self.storage_key, str(exc)) from exc

    def reset(self) -> None:
        """Drop the stored catalog and start over from the default set."""
        try:
            self.store.remove(self.storage_key)
        except StoreError as exc:
            raise PersistenceError(self.storage_key, str(exc)) from exc
        self._items = self._seed_factory(self.id_generator, self.clock)
        self.persist()
        log.info(
            "Catalog reset to defaults",
            extra={"storage_key": self.storage_key, "count": len(self._items)},
        )

    def _warn(self, message: str) -> None:
        self.load_warnings.append(message)
        log.warning(message, extra={"storage_key": self.storage_key})

    # ------------------------------------------------------------------
    # Lookup and CRUD
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def _index_of(self, movie_id: str) -> Optional[int]:
        for index, movie in enumerate(self._items):
            if movie.id == movie_id:
                return index
        return None

    def _require_index(self, movie_id: str) -> int:
        index = self._index_of(movie_id)
        if index is None:
            raise NotFoundError(movie_id)
        return index

    def get_all(self) -> List[Movie]:
        return list(self._items)

    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        index = self._index_of(movie_id)
        return None if index is None else self._items[index]

    def require(self, movie_id: str) -> Movie:
        return self._items[self._require_index(movie_id)]

    def _check(self, movie: Movie) -> None:
        report = movie.validate(self.genres)
        if not report.valid:
            raise ValidationError(report.errors)

    def add(self, movie: Movie) -> Movie:
        """
        Validate and append a movie, then persist.

        Raises
        ------
        ValidationError
            If any field rule fails (nothing is changed).
        DuplicateIdError
            If a movie with the same id is already present.
        PersistenceError
            If the store write fails; the movie stays in memory.
        """
        self._check(movie)
        if self._index_of(movie.id) is not None:
            raise DuplicateIdError(movie.id)
        self._items.append(movie)
        log.info("Movie added", extra={"movie_id": movie.id})
        self.persist()
        return movie

    def add_draft(self, draft: Union[MovieDraft, Mapping[str, Any]]) -> Movie:
        """Create a movie from a draft with the catalog's id generator and clock, then add it."""
        movie = Movie.from_draft(_as_draft(draft), id_generator=self.id_generator, clock=self.clock)
        return self.add(movie)

    def update(self, movie_id: str, fields: Union[MovieDraft, Mapping[str, Any]]) -> Movie:
        """
        Replace a movie with a new one built from a complete draft.

        The id and creation timestamp are kept and the movie keeps its position.

        Raises
        ------
        NotFoundError
            If no movie has `movie_id`.
        ValidationError
            If the draft is incomplete or the new movie fails validation.
        PersistenceError
            If the store write fails; the replacement stays in memory.
        """
        index = self._require_index(movie_id)
        original = self._items[index]
        replacement = Movie.from_draft(_as_draft(fields), id=movie_id, clock=self.clock)
        replacement = replacement.with_created_at(original.created_at)
        self._check(replacement)
        self._items[index] = replacement
        log.info("Movie updated", extra={"movie_id": movie_id})
        self.persist()
        return replacement

    def delete(self, movie_id: str) -> Movie:
        """
        Remove a movie and persist.

        Raises
        ------
        NotFoundError
            If no movie has `movie_id`.
        PersistenceError
            If the store write fails; the movie stays removed in memory.
        """
        index = self._require_index(movie_id)
        removed = self._items.pop(index)
        log.info("Movie deleted", extra={"movie_id": movie_id})
        self.persist()
        return removed

    # ------------------------------------------------------------------
    # Queries (pure, always on copies)
    # ------------------------------------------------------------------

    @staticmethod
    def _matches_term(movie: Movie, needle: str) -> bool:
        return (
            needle in movie.title.casefold()
            or needle in movie.director.casefold()
            or needle in movie.description.casefold()
        )

    def search(self, term: Optional[str] = None) -> List[Movie]:
        """Case-insensitive match on title, director or description; blank matches all."""
        if not term or not term.strip():
            return self.get_all()
        needle = term.casefold()
        return [movie for movie in self._items if self._matches_term(movie, needle)]

    def filter_by_genre(self, genre: Optional[str] = None) -> List[Movie]:
        if not genre:
            return self.get_all()
        return [movie for movie in self._items if movie.genre == genre]

    def search_and_filter(self, term: Optional[str] = None, genre: Optional[str] = None) -> List[Movie]:
        result = self.filter_by_genre(genre)
        if term and term.strip():
            needle = term.casefold()
            result = [movie for movie in result if self._matches_term(movie, needle)]
        return result

    def recent(self, n: Optional[int] = None) -> List[Movie]:
        """Up to `n` movies, newest `created_at` first; ties keep catalog order."""
        limit = self.recent_limit if n is None else n
        if limit <= 0:
            return []
        return sorted(self._items, key=lambda movie: movie.created_at, reverse=True)[:limit]

    def sort_by_rating(self, descending: bool = True) -> List[Movie]:
        return sorted(self._items, key=lambda movie: movie.rating, reverse=descending)

    def sort_by_year(self, descending: bool = True) -> List[Movie]:
        return sorted(self._items, key=lambda movie: movie.year, reverse=descending)

    def genre_counts(self) -> Dict[str, int]:
        """Number of movies per genre, in order of first appearance."""
        counts: Dict[str, int] = {}
        for movie in self._items:
            counts[movie.genre] = counts.get(movie.genre, 0) + 1
        return counts


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "SCHEMA_VERSION",
    "CorruptCatalogError",
    "MovieCatalog",
    "decode_movies",
    "encode_movies",
]
