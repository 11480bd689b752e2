"""Extra author page registry.

The set of extra page slugs (``recipes``, ``bio``) is supplied by
provider callables chained like a filter: the first provider receives
an empty list, each later one receives the previous provider's output.

The registry is rebuilt from its providers on every ``get_pages()``
call and never cached, so providers may change their answer between
requests or rule rebuilds.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

logger = logging.getLogger("authorpages.pages")

#: Name of the extension point the providers implement.
EXTENSION_POINT = "author_archive_extended_pages"

type PageProvider = Callable[[list[str]], Any]


def static_pages(*slugs: str) -> PageProvider:
    """Build a provider that appends a fixed set of slugs.

    Usage::

        registry = PageRegistry([static_pages("recipes", "bio")])
    """

    def provider(pages: list[str]) -> list[str]:
        return [*pages, *slugs]

    provider.__name__ = f"static_pages{slugs!r}"
    return provider


def sanitize_pages(pages: Any) -> tuple[str, ...]:
    """Trim, deduplicate and drop empty entries, keeping first-seen order.

    Anything that is not a list or tuple yields an empty result.
    """
    if not isinstance(pages, (list, tuple)):
        return ()
    seen: dict[str, None] = {}
    for page in pages:
        slug = str(page).strip() if page is not None else ""
        if slug:
            seen.setdefault(slug, None)
    return tuple(seen)


class PageRegistry:
    """Ordered set of extra author page slugs.

    Usage::

        registry = PageRegistry([static_pages("recipes")])
        registry.add_provider(lambda pages: [*pages, "bio"])
        registry.get_pages()  # ("recipes", "bio")
    """

    __slots__ = ("_providers",)

    def __init__(self, providers: Iterable[PageProvider] = ()) -> None:
        self._providers: list[PageProvider] = list(providers)

    def add_provider(self, provider: PageProvider) -> None:
        """Register another provider, applied after the existing ones."""
        self._providers.append(provider)

    @property
    def providers(self) -> Sequence[PageProvider]:
        return tuple(self._providers)

    def get_pages(self) -> tuple[str, ...]:
        """Return the current extra page slugs."""
        pages: Any = []
        for provider in self._providers:
            pages = provider(pages)
        if not isinstance(pages, (list, tuple)):
            logger.warning(
                "%s providers returned %s, expected a list of slugs; ignoring",
                EXTENSION_POINT,
                type(pages).__name__,
            )
            return ()
        return sanitize_pages(pages)

    def __contains__(self, slug: object) -> bool:
        return slug in self.get_pages()
