"""
Built-in default movies.

Used whenever the store holds no usable catalog: on first start, after a
reset, and when stored data cannot be decoded.
"""
from __future__ import annotations

from typing import List, Optional

from moviecatalog.domain.models import Clock, Movie
from moviecatalog.utils.ids import IdGenerator

_TMDB = "https://image.tmdb.org/t/p/w500"

DEFAULT_MOVIES = [
    (
        "The Matrix",
        "Science Fiction",
        "Lana Wachowski, Lilly Wachowski",
        1999,
        8.7,
        "A hacker discovers the shocking truth about his reality and his role in the war against its controllers.",
        f"{_TMDB}/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
    ),
    (
        "The Godfather",
        "Drama",
        "Francis Ford Coppola",
        1972,
        9.2,
        "The aging patriarch of an organized crime dynasty transfers control of his clandestine empire to his reluctant son.",
        f"{_TMDB}/3bhkrj58Vtu7enYsRolD1fZdja1.jpg",
    ),
    (
        "Inception",
        "Science Fiction",
        "Christopher Nolan",
        2010,
        8.8,
        "A thief who steals corporate secrets through shared dream technology is given the inverse task of planting an idea.",
        f"{_TMDB}/9gk7adHYeDvHkCSEqAvQNLV5Uge.jpg",
    ),
    (
        "Forrest Gump",
        "Drama",
        "Robert Zemeckis",
        1994,
        8.8,
        "The Kennedy and Johnson presidencies, Vietnam and Watergate unfold through the perspective of a man from Alabama.",
        f"{_TMDB}/arw2vcBveWOVZr6pxd9XTd1TdQa.jpg",
    ),
    (
        "Pulp Fiction",
        "Action",
        "Quentin Tarantino",
        1994,
        8.9,
        "The lives of two hitmen, a boxer, a gangster's wife and two bandits intertwine in four tales of violence and redemption.",
        f"{_TMDB}/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
    ),
    (
        "Interstellar",
        "Science Fiction",
        "Christopher Nolan",
        2014,
        8.6,
        "A team of explorers travels through a wormhole in space in an attempt to ensure humanity's survival.",
        f"{_TMDB}/gEU2QniE6E77NI6lCU6MxlNBvIx.jpg",
    ),
    (
        "The Lord of the Rings: The Return of the King",
        "Adventure",
        "Peter Jackson",
        2003,
        8.9,
        "Gandalf and Aragorn lead the World of Men against Sauron's army to draw his gaze from Frodo and Sam as they approach Mount Doom.",
        f"{_TMDB}/rCzpDGLbOoPwLjy3OAm5NUPOTrC.jpg",
    ),
    (
        "Gladiator",
        "Action",
        "Ridley Scott",
        2000,
        8.5,
        "A former Roman general sets out to exact vengeance against the corrupt emperor who murdered his family and sent him into slavery.",
        f"{_TMDB}/ty8TGRuvJLPUmAR1H1nRIsgwvim.jpg",
    ),
]


def default_movies(
    id_generator: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
) -> List[Movie]:
    """Fresh `Movie` instances for the default set, with new ids and timestamps."""
    return [
        Movie.create(*fields, id_generator=id_generator, clock=clock)
        for fields in DEFAULT_MOVIES
    ]


__all__ = ["DEFAULT_MOVIES", "default_movies"]
