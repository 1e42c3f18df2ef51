"""Normalized catalog entities.

Movie is the summary entity returned by list endpoints; MovieDetails
adds the detail-only fields. Both are immutable values created fresh by
every mapping call. ``external_id`` is the identity used for detail
lookups and by the collections store.
"""

from dataclasses import dataclass, field

POSTER_TIERS = ("w480", "w720")
BACKDROP_TIERS = ("w1080",)


@dataclass(frozen=True)
class Genre:
    """Genre pair; ``id`` equals ``name`` as no genre taxonomy is assumed."""

    id: str
    name: str


@dataclass(frozen=True)
class CastMember:
    """Credited person on a detail entity."""

    id: str
    name: str
    role: str = ""
    image_ref: str | None = None


@dataclass(frozen=True)
class ImageSet:
    """Resolved image URLs keyed by role and resolution tier.

    Attributes:
        vertical_poster: Poster URLs keyed by tier (``w480``, ``w720``).
        horizontal_poster: Backdrop URLs keyed by tier (``w1080``).
    """

    vertical_poster: dict[str, str] = field(default_factory=dict)
    horizontal_poster: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        """Check that every poster and backdrop tier has a URL."""
        return all(self.vertical_poster.get(t) for t in POSTER_TIERS) and all(
            self.horizontal_poster.get(t) for t in BACKDROP_TIERS
        )

    @property
    def poster(self) -> str | None:
        """Largest available poster URL."""
        for tier in reversed(POSTER_TIERS):
            if self.vertical_poster.get(tier):
                return self.vertical_poster[tier]
        return None

    @property
    def backdrop(self) -> str | None:
        """Largest available backdrop URL."""
        for tier in reversed(BACKDROP_TIERS):
            if self.horizontal_poster.get(tier):
                return self.horizontal_poster[tier]
        return None


@dataclass(frozen=True)
class Movie:
    """Summary entity for a catalog item.

    ``generated_id`` is True when no upstream identifier was found and
    ``id``/``external_id`` hold a locally generated placeholder that
    cannot be used for detail lookups.
    """

    id: int | str
    title: str
    external_id: str
    release_year: int
    image_set: ImageSet
    secondary_id: str | None = None
    overview: str | None = None
    rating: float | None = None
    genres: tuple[Genre, ...] = ()
    trailer: str | None = None
    runtime: int | None = None
    media_type: str = "movie"
    generated_id: bool = False


@dataclass(frozen=True)
class MovieDetails(Movie):
    """Detail entity: a Movie plus credits, financials and tagline.

    The image set is mandatory and must be complete.
    """

    tagline: str | None = None
    director: str | None = None
    budget: str | None = None
    revenue: str | None = None
    cast: tuple[CastMember, ...] = ()

    def __post_init__(self) -> None:
        if not self.image_set.is_complete:
            raise ValueError("MovieDetails requires a complete image set")


@dataclass(frozen=True)
class SearchPage:
    """One page of search results with the upstream page count."""

    results: list[Movie] = field(default_factory=list)
    total_pages: int = 1


@dataclass(frozen=True)
class ContentRows:
    """Home feed rows fetched together."""

    top_rated: list[Movie] = field(default_factory=list)
    new_releases: list[Movie] = field(default_factory=list)
