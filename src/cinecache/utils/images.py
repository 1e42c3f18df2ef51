"""Image URL resolution for the Simkl image host."""

from dataclasses import dataclass

from cinecache.core.entities.movie import ImageSet

POSTER_PLACEHOLDER = "https://via.placeholder.com/300x450?text=No+Poster"
BACKDROP_PLACEHOLDER = "https://via.placeholder.com/1080x600?text=No+Image"

# Size-tier suffixes appended to the image reference.
POSTER_SUFFIXES = {"w480": "m", "w720": "m"}
BACKDROP_SUFFIXES = {"w1080": "medium"}


@dataclass(frozen=True)
class ImageResolver:
    """Builds fully-qualified image URLs from upstream references.

    References look like ``"12/12688617391bf69f62"``; the URL is
    ``{base}/{folder}/{reference}_{suffix}.webp``. Missing references
    resolve to a placeholder URL so callers always get a string.
    """

    base_url: str = "https://simkl.in"

    def poster(self, ref: str | None, tier: str = "w720") -> str:
        if not ref:
            return POSTER_PLACEHOLDER
        return self._url("posters", ref, POSTER_SUFFIXES[tier])

    def backdrop(self, ref: str | None, tier: str = "w1080") -> str:
        if not ref:
            return BACKDROP_PLACEHOLDER
        return self._url("fanart", ref, BACKDROP_SUFFIXES[tier])

    def image_set(self, poster_ref: str | None, fanart_ref: str | None) -> ImageSet:
        """Resolve every poster and backdrop tier.

        Args:
            poster_ref: Upstream poster reference, if any.
            fanart_ref: Upstream fanart reference, if any.

        Returns:
            A complete ImageSet.
        """
        return ImageSet(
            vertical_poster={tier: self.poster(poster_ref, tier) for tier in POSTER_SUFFIXES},
            horizontal_poster={
                tier: self.backdrop(fanart_ref, tier) for tier in BACKDROP_SUFFIXES
            },
        )

    def _url(self, folder: str, ref: str, suffix: str) -> str:
        return f"{self.base_url.rstrip('/')}/{folder}/{ref.strip('/')}_{suffix}.webp"
