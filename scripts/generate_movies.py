"""
Synthetic movie generator for the movie catalog.

Builds deterministic pseudo-random movies (seeded RNG) and either adds them
through the catalog into the configured store, or writes them to a JSON file
in the stored catalog format.
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from moviecatalog.catalog import MovieCatalog, encode_movies
from moviecatalog.config import get_settings
from moviecatalog.domain.models import Movie, MovieDraft, utc_now
from moviecatalog.utils.ids import SequentialIdGenerator
from moviecatalog.utils.logging import configure_logging

app = typer.Typer(help="Generate synthetic movies and load them into the catalog store.")

_ADJECTIVES = ["Silent", "Crimson", "Last", "Hidden", "Broken", "Golden", "Endless", "Distant"]
_NOUNS = ["Horizon", "Empire", "River", "Signal", "Garden", "Machine", "Voyage", "Winter"]
_FIRST = ["Ana", "Marco", "Lucia", "Kenji", "Sofia", "Omar", "Elena", "Tomas"]
_LAST = ["Rivera", "Okafor", "Lindqvist", "Tanaka", "Moreau", "Castillo", "Novak", "Bianchi"]
_PLOTS = [
    "An unlikely pair crosses a divided country to deliver a message that could end a war.",
    "A retired detective is pulled back into the case that ruined her career.",
    "A crew of engineers races to restart a failing station before the storm arrives.",
    "Two rival chefs discover that their family recipes share a forgotten origin.",
    "A small town keeps a secret that a curious student is determined to uncover.",
]


def _generate_drafts(count: int, genres: Sequence[str], seed: int) -> List[MovieDraft]:
    rng = random.Random(seed)
    current_year = utc_now().year
    drafts: List[MovieDraft] = []
    for i in range(count):
        drafts.append(
            MovieDraft(
                title=f"The {rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}",
                genre=rng.choice(list(genres)),
                director=f"{rng.choice(_FIRST)} {rng.choice(_LAST)}",
                year=rng.randint(1950, current_year),
                rating=round(rng.uniform(1, 10), 1),
                description=rng.choice(_PLOTS),
                image_url=f"https://picsum.photos/seed/movie-{seed}-{i}/500/750",
            )
        )
    return drafts


def _write_json(path: Path, drafts: List[MovieDraft]) -> int:
    ids = SequentialIdGenerator(prefix="generated")
    movies = [Movie.from_draft(draft, id_generator=ids) for draft in drafts]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_movies(movies))
    return len(movies)


@app.command()
def main(
    count: int = typer.Option(
        20,
        "--count",
        "-c",
        help="Number of movies to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the movies to this JSON file instead of the configured store.",
    ),
) -> None:
    """
    Generate synthetic movies and add them to the catalog (or write them to a file).
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    start = time.perf_counter()
    drafts = _generate_drafts(count, settings.genres, seed)

    if output:
        written = _write_json(output, drafts)
        typer.echo(f"Wrote {written} movies -> {output} (seed={seed})")
        return

    catalog = MovieCatalog.from_settings(settings)
    for draft in drafts:
        catalog.add_draft(draft)
    duration = time.perf_counter() - start
    typer.echo(
        f"Added {count} movies to '{settings.storage_key}' ({settings.storage_backend}) "
        f"in {duration:.2f}s; catalog now holds {len(catalog)} movies."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
