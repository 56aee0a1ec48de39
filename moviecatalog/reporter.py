from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from moviecatalog.domain.models import Movie


def _rating_style(rating: Optional[float]) -> str:
    if rating is None:
        return "dim"
    if rating >= 8.5:
        return "bold green"
    if rating >= 7:
        return "green"
    if rating >= 5:
        return "yellow"
    return "red"


def print_movies(
    movies: List[Movie],
    title: str = "Movie Catalog",
    caption: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render movies as a rich table, in the order given.
    """
    console = console or Console()

    if not movies:
        console.print("[yellow]No movies to display.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, caption=caption)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Genre", style="magenta")
    table.add_column("Director")
    table.add_column("Year", justify="right", style="blue")
    table.add_column("Rating", justify="right")

    for movie in movies:
        rating = "N/A" if movie.rating is None else f"{movie.rating:.1f}"
        table.add_row(
            escape(movie.id),
            escape(movie.title),
            escape(movie.genre),
            escape(movie.director),
            str(movie.year) if movie.year is not None else "N/A",
            f"[{_rating_style(movie.rating)}]{rating}[/]",
        )

    console.print(table)


def print_movie_detail(movie: Movie, console: Optional[Console] = None) -> None:
    """Show every field of a single movie."""
    console = console or Console()

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("ID", escape(movie.id))
    grid.add_row("Genre", escape(movie.genre))
    grid.add_row("Director", escape(movie.director))
    grid.add_row("Year", str(movie.year))
    grid.add_row("Rating", f"[{_rating_style(movie.rating)}]{movie.rating}[/]")
    grid.add_row("Poster", escape(movie.image_url))
    grid.add_row("Added", movie.created_at.strftime("%Y-%m-%d %H:%M:%S %Z"))
    grid.add_row("", "")
    grid.add_row("Synopsis", escape(movie.description))

    console.print(Panel(grid, title=f"[cyan]{escape(movie.title)}[/cyan]", box=box.ROUNDED))


def print_genre_counts(
    genres: Iterable[str],
    counts: Dict[str, int],
    console: Optional[Console] = None,
) -> None:
    """Configured genres with how many movies each has; unconfigured genres in use are listed last."""
    console = console or Console()

    table = Table(title="Genres", box=box.ROUNDED)
    table.add_column("Genre", style="magenta")
    table.add_column("Movies", justify="right", style="green")

    listed = set()
    for genre in genres:
        listed.add(genre)
        table.add_row(escape(genre), str(counts.get(genre, 0)))
    for genre, count in counts.items():
        if genre not in listed:
            table.add_row(f"{escape(genre)} [dim](not configured)[/dim]", str(count))

    console.print(table)


def print_errors(errors: Iterable[str], console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    for error in errors:
        console.print(f"[red]✗[/red] {escape(error)}")


__all__ = ["print_errors", "print_genre_counts", "print_movie_detail", "print_movies"]
