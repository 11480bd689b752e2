"""Site — the rewrite host the extensions plug into.

Owns the rewrite rule table, the public query variables and the kida
environment. Extensions are passed in at construction and consulted
at the three seams described in ``authorpages.extension``.

Usage::

    pages = PageRegistry([static_pages("recipes")])
    site = Site(AuthorPagesConfig(), extensions=[AuthorPagesExtension(pages)])
    site.flush_rules()
    site.resolve("/author/jane/recipes").template  # "author-page-recipes.html"
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from kida import Environment

from authorpages.config import AuthorPagesConfig
from authorpages.context import RequestContext
from authorpages.errors import NotFound
from authorpages.extension import SiteExtension
from authorpages.rewrite.rewriter import Rewriter
from authorpages.rewrite.rule import RuleTable
from authorpages.templating import TemplateLookup, create_environment

logger = logging.getLogger("authorpages.site")

#: Query variables the site itself understands.
BASE_QUERY_VARS = ("author_name", "author", "feed", "paged", "embed")


@dataclass(frozen=True, slots=True)
class Resolution:
    """A resolved request: its context and the template to render."""

    context: RequestContext
    template: str


class Site:
    """Rewrite host with explicit extensions."""

    __slots__ = ("_config", "_env", "_extensions", "_lookup", "_rewriter", "_table")

    def __init__(
        self,
        config: AuthorPagesConfig | None = None,
        extensions: Iterable[SiteExtension] = (),
        env: Environment | None = None,
    ) -> None:
        self._config = config or AuthorPagesConfig()
        self._extensions: tuple[SiteExtension, ...] = tuple(extensions)
        self._rewriter = Rewriter(self._config)
        self._env = env if env is not None else create_environment(self._config)
        self._lookup = TemplateLookup(self._env, self._config.template_suffix)
        self._table = RuleTable()

    @property
    def config(self) -> AuthorPagesConfig:
        return self._config

    @property
    def extensions(self) -> tuple[SiteExtension, ...]:
        return self._extensions

    @property
    def rewriter(self) -> Rewriter:
        return self._rewriter

    @property
    def rules(self) -> RuleTable:
        return self._table

    @property
    def lookup(self) -> TemplateLookup:
        return self._lookup

    @property
    def query_vars(self) -> Sequence[str]:
        query_vars = list(BASE_QUERY_VARS)
        for extension in self._extensions:
            query_vars = extension.query_vars(query_vars)
        return tuple(query_vars)

    def flush_rules(self) -> RuleTable:
        """Rebuild the rule table: site rules, then extension rules."""
        table = RuleTable({})
        permastruct = self._rewriter.author_permastruct
        if permastruct:
            table.extend(self._rewriter.generate_rules(permastruct, walk_dirs=False))

        for extension in self._extensions:
            extension.generate_rewrite_rules(table, self._rewriter)

        self._table = table
        logger.debug("flushed rewrite rules: %d rules", len(table))
        return table

    def match(self, path: str) -> RequestContext:
        """Match *path* and build its request context.

        Raises ``NotFound`` when no rule matches.
        """
        result = self._table.match(path, self.query_vars)
        if result is None:
            raise NotFound(path)
        return RequestContext(
            path=path,
            query=result.query,
            matched_rule=result.rule.pattern,
            matched_target=result.rule.target,
        )

    def default_template(self, context: RequestContext) -> str:
        """Pick a template through the site's own hierarchy."""
        suffix = self._config.template_suffix
        template = None
        if context.is_author:
            name = context.get("author_name")
            if isinstance(name, tuple):
                name = name[0] if name else ""
            candidates = [f"author-{name}{suffix}"] if name else []
            template = self._lookup.query_template(
                "author", [*candidates, f"author{suffix}"]
            ) or self._lookup.query_template("archive")
        return template or self._lookup.query_template("index") or f"index{suffix}"

    def resolve(self, path: str) -> Resolution:
        context = self.match(path)
        template = self.default_template(context)
        for extension in self._extensions:
            template = extension.template_include(template, context, self._lookup)
        return Resolution(context=context, template=template)

    def render(self, path: str, **context: Any) -> str:
        """Resolve *path* and render its template."""
        resolution = self.resolve(path)
        template = self._env.get_template(resolution.template)
        return template.render({**resolution.context.as_template_context(), **context})
