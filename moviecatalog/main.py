from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional

import typer

from moviecatalog.catalog import MovieCatalog
from moviecatalog.config import get_settings
from moviecatalog.domain.models import Movie, MovieDraft
from moviecatalog.errors import NotFoundError, PersistenceError, ValidationError
from moviecatalog.reporter import print_errors, print_genre_counts, print_movie_detail, print_movies
from moviecatalog.utils.logging import configure_logging

app = typer.Typer(help="Movie catalog CLI.", no_args_is_help=True)


def _open_catalog() -> MovieCatalog:
    """
    Build the process-wide catalog from settings.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    catalog = MovieCatalog.from_settings(settings)
    for warning in catalog.load_warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW, err=True)
    return catalog


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn catalog errors into readable messages and exit code 1."""
    try:
        yield
    except ValidationError as exc:
        print_errors(exc.errors)
        raise typer.Exit(code=1)
    except NotFoundError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except PersistenceError as exc:
        typer.secho(
            f"{exc}\nThe change was applied but may not survive a restart.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)


def _emit(movies: List[Movie], as_json: bool, title: str, caption: Optional[str] = None) -> None:
    if as_json:
        typer.echo(json.dumps([movie.to_dict() for movie in movies], indent=2, ensure_ascii=False))
    else:
        print_movies(movies, title=title, caption=caption)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    location = {
        "memory": "in-process (not durable)",
        "file": settings.storage_dir,
        "postgres": f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}",
    }[settings.storage_backend]
    typer.echo(
        f"backend={settings.storage_backend} location={location} key={settings.storage_key} | "
        f"genres={len(settings.genres)} recent_limit={settings.recent_limit} env={settings.app_env}"
    )


@app.command("list")
def list_movies(
    sort: Optional[str] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Sort by 'rating' or 'year' (default: catalog order).",
    ),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending instead of descending."),
    as_json: bool = typer.Option(False, "--json", help="Print movies as JSON."),
) -> None:
    """
    List every movie in the catalog.
    """
    catalog = _open_catalog()
    if sort is None:
        movies, caption = catalog.get_all(), None
    elif sort == "rating":
        movies = catalog.sort_by_rating(descending=not ascending)
        caption = f"Sorted by rating ({'ascending' if ascending else 'descending'})"
    elif sort == "year":
        movies = catalog.sort_by_year(descending=not ascending)
        caption = f"Sorted by year ({'ascending' if ascending else 'descending'})"
    else:
        raise typer.BadParameter("must be 'rating' or 'year'", param_hint="--sort")
    _emit(movies, as_json, title=f"Movie Catalog ({len(movies)})", caption=caption)


@app.command()
def show(movie_id: str = typer.Argument(..., help="Movie id.")) -> None:
    """
    Show the details of one movie.
    """
    catalog = _open_catalog()
    with _reported_errors():
        print_movie_detail(catalog.require(movie_id))


@app.command()
def add(
    title: str = typer.Option(..., "--title", "-t"),
    genre: str = typer.Option(..., "--genre", "-g"),
    director: str = typer.Option(..., "--director", "-d"),
    year: str = typer.Option(..., "--year", "-y"),
    rating: str = typer.Option(..., "--rating", "-r"),
    description: str = typer.Option(..., "--description"),
    image_url: str = typer.Option(..., "--image-url", "-i"),
) -> None:
    """
    Add a movie. Every validation problem is reported at once.
    """
    catalog = _open_catalog()
    draft = MovieDraft(
        title=title.strip(),
        genre=genre,
        director=director.strip(),
        year=year,
        rating=rating,
        description=description.strip(),
        image_url=image_url.strip(),
    )
    with _reported_errors():
        movie = catalog.add_draft(draft)
    typer.secho(f"Movie added: {movie.id}", fg=typer.colors.GREEN)


@app.command()
def update(
    movie_id: str = typer.Argument(..., help="Movie id."),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    genre: Optional[str] = typer.Option(None, "--genre", "-g"),
    director: Optional[str] = typer.Option(None, "--director", "-d"),
    year: Optional[str] = typer.Option(None, "--year", "-y"),
    rating: Optional[str] = typer.Option(None, "--rating", "-r"),
    description: Optional[str] = typer.Option(None, "--description"),
    image_url: Optional[str] = typer.Option(None, "--image-url", "-i"),
) -> None:
    """
    Replace a movie. Omitted options keep the current value; the whole record is revalidated.
    """
    catalog = _open_catalog()
    with _reported_errors():
        current = catalog.require(movie_id)
        changes = {
            "title": title,
            "genre": genre,
            "director": director,
            "year": year,
            "rating": rating,
            "description": description,
            "image_url": image_url,
        }
        fields = current.to_draft().model_dump()
        fields.update({name: value for name, value in changes.items() if value is not None})
        movie = catalog.update(movie_id, MovieDraft(**fields))
    typer.secho(f"Movie updated: {movie.id}", fg=typer.colors.GREEN)


@app.command()
def delete(
    movie_id: str = typer.Argument(..., help="Movie id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """
    Delete a movie. This cannot be undone.
    """
    catalog = _open_catalog()
    with _reported_errors():
        movie = catalog.require(movie_id)
        if not yes and not typer.confirm(f'Delete "{movie.title}"? This cannot be undone.'):
            typer.echo("Aborted.")
            raise typer.Exit(code=0)
        catalog.delete(movie_id)
    typer.secho(f"Movie deleted: {movie_id}", fg=typer.colors.GREEN)


@app.command()
def search(
    term: str = typer.Argument("", help="Text to look for in title, director or description."),
    genre: str = typer.Option("", "--genre", "-g", help="Only this genre."),
    as_json: bool = typer.Option(False, "--json", help="Print movies as JSON."),
) -> None:
    """
    Search movies, optionally restricted to one genre.
    """
    catalog = _open_catalog()
    movies = catalog.search_and_filter(term, genre)
    _emit(movies, as_json, title=f"Results ({len(movies)})")


@app.command()
def recent(
    count: Optional[int] = typer.Option(None, "--count", "-n", help="How many movies to show."),
    as_json: bool = typer.Option(False, "--json", help="Print movies as JSON."),
) -> None:
    """
    Show the most recently added movies.
    """
    catalog = _open_catalog()
    _emit(catalog.recent(count), as_json, title="Recently added")


@app.command()
def genres() -> None:
    """
    Show configured genres and how many movies each has.
    """
    catalog = _open_catalog()
    print_genre_counts(get_settings().genres, catalog.genre_counts())


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """
    Discard the stored catalog and restore the default movies.
    """
    if not yes and not typer.confirm("Replace the whole catalog with the default movies?"):
        typer.echo("Aborted.")
        raise typer.Exit(code=0)
    catalog = _open_catalog()
    with _reported_errors():
        catalog.reset()
    typer.secho(f"Catalog reset: {len(catalog)} default movies.", fg=typer.colors.GREEN)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
