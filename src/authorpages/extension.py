"""Site extensions — the seams a site calls into.

A site is composed with a list of extensions at construction time.
Each extension can register query variables, add rewrite rules when
the rules are flushed, and swap the template for a resolved request.
"""

from typing import Protocol

from authorpages.config import AuthorPagesConfig
from authorpages.context import RequestContext
from authorpages.derive import RuleDeriver
from authorpages.pages import PageRegistry
from authorpages.resolve import LookupFn, RequestResolver
from authorpages.rewrite.rewriter import Rewriter
from authorpages.rewrite.rule import RuleTable


class SiteExtension(Protocol):
    def query_vars(self, query_vars: list[str]) -> list[str]: ...

    def generate_rewrite_rules(self, table: RuleTable, rewriter: Rewriter) -> None: ...

    def template_include(
        self,
        template: str,
        context: RequestContext,
        lookup: LookupFn,
    ) -> str: ...


class AuthorPagesExtension:
    """Extra pages under the author archive (``/author/jane/recipes``).

    Usage::

        pages = PageRegistry([static_pages("recipes", "bio")])
        site = Site(config, extensions=[AuthorPagesExtension(pages, config)])

    Theme templates named ``author-page-{slug}.html`` are used for the
    extra pages; without one the regular author template is kept.
    """

    __slots__ = ("_config", "_pages")

    def __init__(self, pages: PageRegistry, config: AuthorPagesConfig | None = None) -> None:
        self._pages = pages
        self._config = config or AuthorPagesConfig()

    @property
    def pages(self) -> PageRegistry:
        return self._pages

    def query_vars(self, query_vars: list[str]) -> list[str]:
        if self._config.query_var in query_vars:
            return query_vars
        return [*query_vars, self._config.query_var]

    def deriver(self, rewriter: Rewriter) -> RuleDeriver:
        return RuleDeriver(
            rewriter,
            query_var=self._config.query_var,
            precedence=self._config.precedence,
        )

    def generate_rewrite_rules(self, table: RuleTable, rewriter: Rewriter) -> None:
        self.deriver(rewriter).install(table, self._pages.get_pages())

    def resolver(self, lookup: LookupFn) -> RequestResolver:
        return RequestResolver(
            self._pages,
            lookup,
            query_var=self._config.query_var,
            template_prefix=self._config.template_prefix,
        )

    def template_include(
        self,
        template: str,
        context: RequestContext,
        lookup: LookupFn,
    ) -> str:
        return self.resolver(lookup).select_template(template, context)
