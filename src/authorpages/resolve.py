"""Extra author page resolution at request time.

Runs after the site has matched a rewrite rule. Reads the extra page
marker from the request context, checks it against the page registry
and picks an ``author-page-{slug}`` template when the theme has one.
"""

from collections.abc import Callable

from authorpages.context import RequestContext
from authorpages.pages import PageRegistry

type LookupFn = Callable[[str], str | None]


class RequestResolver:
    """Maps a request context to an extra author page and its template.

    Usage::

        resolver = RequestResolver(registry, lookup.query_template)
        resolver.select_template("author.html", context)
    """

    __slots__ = ("_lookup", "_pages", "_query_var", "_template_prefix")

    def __init__(
        self,
        pages: PageRegistry,
        lookup: LookupFn,
        *,
        query_var: str = "author_page",
        template_prefix: str = "author-page-",
    ) -> None:
        self._pages = pages
        self._lookup = lookup
        self._query_var = query_var
        self._template_prefix = template_prefix

    def resolve_author_page(self, context: RequestContext) -> str:
        """Return the requested extra page slug, or ``""``.

        Empty unless this is an author request whose marker names a
        currently registered page.
        """
        if not context.is_author:
            return ""

        value = context.get(self._query_var)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else ""
        if value is None:
            return ""

        slug = str(value).strip()
        if slug not in self._pages.get_pages():
            return ""
        return slug

    def template_name(self, slug: str) -> str:
        return f"{self._template_prefix}{slug}"

    def select_template(self, default: str, context: RequestContext) -> str:
        """Return the extra page template if one exists, else *default*."""
        slug = self.resolve_author_page(context)
        if not slug:
            return default
        return self._lookup(self.template_name(slug)) or default
