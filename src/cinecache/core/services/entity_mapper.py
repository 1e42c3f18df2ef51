"""Mapping of upstream Simkl items to normalized catalog entities.

The upstream schema is loosely typed: the same logical field may appear
under several aliases (``ids.simkl_id`` vs ``ids.simkl``), runtimes come
either as free text or as minutes, and list endpoints omit detail-only
fields. Each entity field is resolved through an explicit, ordered
fallback chain so the output shape is stable.
"""

import logging
import re
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any, TypedDict

from cinecache.core.entities.movie import CastMember, Genre, Movie, MovieDetails
from cinecache.core.exceptions import MappingError
from cinecache.utils.images import ImageResolver

logger = logging.getLogger(__name__)

# Fallback chains, highest priority first.
IDENTIFIER_FIELDS = ("simkl_id", "simkl", "slug")
SECONDARY_ID_FIELDS = ("tmdb", "imdb")
RATING_SOURCES = ("simkl", "imdb")
CAST_FIELDS = ("cast", "actors")

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={}"

_RUNTIME_HOURS = re.compile(r"(\d+)\s*h")
_RUNTIME_MINUTES = re.compile(r"(\d+)\s*m")


class UpstreamIds(TypedDict, total=False):
    simkl_id: int
    simkl: int
    slug: str
    imdb: str
    tmdb: str


class UpstreamRating(TypedDict, total=False):
    rating: float
    votes: int


class UpstreamItem(TypedDict, total=False):
    """Item as returned by Simkl list, search and detail endpoints."""

    title: str
    year: int
    ids: UpstreamIds
    poster: str
    fanart: str
    overview: str
    ratings: dict[str, UpstreamRating]
    runtime: str | int
    genres: list[str]
    trailer: str
    director: str
    tagline: str
    budget: str | int
    revenue: str | int
    cast: list[dict[str, Any]]
    actors: list[str]


def map_movie(item: Mapping[str, Any], images: ImageResolver | None = None) -> Movie:
    """Map an upstream item to a summary entity.

    Args:
        item: The upstream item.
        images: Resolver for image URLs. Defaults to the Simkl image host.

    Returns:
        The mapped Movie.

    Raises:
        MappingError: If the item is not a mapping or has no usable title.
    """
    return Movie(**_summary_fields(item, images or ImageResolver()))


def map_movie_details(
    item: Mapping[str, Any], images: ImageResolver | None = None
) -> MovieDetails:
    """Map an upstream item to a detail entity.

    Credits default to an empty tuple when the item carries none, and
    the image set is always complete (placeholders fill the gaps).

    Args:
        item: The upstream item, usually from the detail endpoint.
        images: Resolver for image URLs. Defaults to the Simkl image host.

    Returns:
        The mapped MovieDetails.

    Raises:
        MappingError: If the item is not a mapping or has no usable title.
    """
    fields = _summary_fields(item, images or ImageResolver())
    return MovieDetails(
        **fields,
        tagline=_optional_str(item.get("tagline")),
        director=_director(item.get("director")),
        budget=_optional_str(item.get("budget")),
        revenue=_optional_str(item.get("revenue")),
        cast=resolve_cast(item),
    )


def map_movies(
    items: Iterable[Any], images: ImageResolver | None = None
) -> list[Movie]:
    """Map a batch of upstream items, dropping malformed ones.

    Args:
        items: Upstream items in ranking order.
        images: Resolver for image URLs.

    Returns:
        Mapped movies in the original order, without the dropped items.
    """
    resolver = images or ImageResolver()
    movies: list[Movie] = []
    for position, item in enumerate(items):
        try:
            movies.append(map_movie(item, resolver))
        except MappingError as e:
            logger.warning("Dropping upstream item at position %d: %s", position, e)
    return movies


def resolve_identifier(ids: Mapping[str, Any]) -> tuple[int | str, bool]:
    """Resolve the item identity from its id aliases.

    Args:
        ids: The upstream ``ids`` object.

    Returns:
        Tuple of (identifier, generated). ``generated`` is True when no
        alias was present and a placeholder had to be created.
    """
    value = _first_present(ids, IDENTIFIER_FIELDS)
    if value is not None:
        return value, False
    return f"generated-{uuid.uuid4().hex[:12]}", True


def resolve_rating(ratings: Any) -> float | None:
    """Resolve the rating: catalog aggregate first, then the alternate source."""
    if not isinstance(ratings, Mapping):
        return None
    for source in RATING_SOURCES:
        entry = ratings.get(source)
        if isinstance(entry, Mapping):
            rating = entry.get("rating")
            if isinstance(rating, (int, float)) and not isinstance(rating, bool):
                return float(rating)
    return None


def parse_runtime(raw: Any) -> int | None:
    """Parse a runtime given as minutes or as text such as ``"2h 11m"``.

    Args:
        raw: Upstream runtime value.

    Returns:
        Runtime in minutes, or None if it cannot be parsed.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return int(raw) if raw > 0 else None
    if not isinstance(raw, str) or not raw.strip():
        return None

    text = raw.strip().lower()
    if text.isdigit():
        return int(text) or None

    hours = _RUNTIME_HOURS.search(text)
    minutes = _RUNTIME_MINUTES.search(text)
    if not hours and not minutes:
        return None
    total = (int(hours.group(1)) * 60 if hours else 0) + (
        int(minutes.group(1)) if minutes else 0
    )
    return total or None


def resolve_genres(raw: Any) -> tuple[Genre, ...]:
    """Wrap free-text genres into Genre pairs, keeping upstream order."""
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return ()
    return tuple(
        Genre(id=name.strip(), name=name.strip())
        for name in raw
        if isinstance(name, str) and name.strip()
    )


def resolve_cast(item: Mapping[str, Any]) -> tuple[CastMember, ...]:
    """Resolve detail-level credits; empty when the item has none."""
    raw = _first_present(item, CAST_FIELDS)
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return ()

    cast: list[CastMember] = []
    for entry in raw:
        if isinstance(entry, str) and entry.strip():
            name = entry.strip()
            cast.append(CastMember(id=name, name=name))
        elif isinstance(entry, Mapping):
            name = _optional_str(entry.get("name"))
            if not name:
                continue
            person_id = _first_present(entry, ("id", "simkl_id", "slug"))
            cast.append(
                CastMember(
                    id=str(person_id) if person_id is not None else name,
                    name=name,
                    role=_optional_str(_first_present(entry, ("character", "role"))) or "",
                    image_ref=_optional_str(_first_present(entry, ("image", "avatar"))),
                )
            )
    return tuple(cast)


def _summary_fields(item: Any, images: ImageResolver) -> dict[str, Any]:
    if not isinstance(item, Mapping):
        raise MappingError(f"expected an object, got {type(item).__name__}")

    title = _optional_str(item.get("title"))
    if not title:
        raise MappingError("item has no title")

    ids = item.get("ids")
    if not isinstance(ids, Mapping):
        ids = {}

    identifier, generated = resolve_identifier(ids)
    if generated:
        logger.warning(
            "No upstream identifier for %r; using placeholder %s", title, identifier
        )

    secondary = _first_present(ids, SECONDARY_ID_FIELDS)
    year = item.get("year")
    trailer = _optional_str(item.get("trailer"))

    return {
        "id": identifier,
        "title": title,
        "external_id": str(identifier),
        "secondary_id": str(secondary) if secondary is not None else None,
        "release_year": year if _is_int(year) else date.today().year,
        "overview": _optional_str(item.get("overview")),
        "rating": resolve_rating(item.get("ratings")),
        "genres": resolve_genres(item.get("genres")),
        "trailer": YOUTUBE_WATCH_URL.format(trailer) if trailer else None,
        "runtime": parse_runtime(item.get("runtime")),
        "image_set": images.image_set(
            _optional_str(item.get("poster")), _optional_str(item.get("fanart"))
        ),
        "generated_id": generated,
    }


def _first_present(mapping: Mapping[str, Any], fields: Sequence[str]) -> Any:
    for name in fields:
        value = mapping.get(name)
        if value is not None and value != "":
            return value
    return None


def _director(raw: Any) -> str | None:
    if isinstance(raw, Sequence) and not isinstance(raw, str):
        names = [str(name) for name in raw if name]
        return ", ".join(names) or None
    return _optional_str(raw)


def _optional_str(raw: Any) -> str | None:
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    return text or None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
