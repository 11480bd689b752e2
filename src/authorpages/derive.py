"""Rewrite rules for extra author pages.

For every extra page slug the author permastruct is extended with the
slug (``author/%author%/recipes``) and expanded by the rewriter. Of the
expanded rules only those that carry the slug in their pattern and
resolve an author by name are kept; their target gets the extra page
marker appended right after the author lookup::

    author/([^/]+)/recipes/?$
        -> index.php?author_name=$matches[1]&author_page=recipes

The derived rules are merged in front of the site's own rules so the
more specific extra page URLs win over the generic author archive.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from authorpages.config import Precedence
from authorpages.rewrite.rule import RuleTable, union

logger = logging.getLogger("authorpages.rewrite")


class RuleExpander(Protocol):
    """What the deriver needs from the host's rewrite facility."""

    @property
    def author_permastruct(self) -> str | None: ...

    @property
    def author_match(self) -> str: ...

    def generate_rules(self, permastruct: str) -> dict[str, str]: ...


class RuleDeriver:
    """Derives extra author page rules from the author permastruct.

    Stateless: deriving twice from the same inputs yields equal mappings.

    Usage::

        deriver = RuleDeriver(Rewriter())
        rules = deriver.derive(("recipes", "bio"))
    """

    __slots__ = ("_precedence", "_query_var", "_rewriter")

    def __init__(
        self,
        rewriter: RuleExpander,
        *,
        query_var: str = "author_page",
        precedence: Precedence | str = Precedence.LAST,
    ) -> None:
        self._rewriter = rewriter
        self._query_var = query_var
        self._precedence = Precedence.parse(precedence)

    @property
    def precedence(self) -> Precedence:
        return self._precedence

    def filter_page_rules(self, rules: Mapping[str, str], page: str) -> dict[str, str]:
        """Keep the author rules for *page* and add the page marker to them."""
        author_match = self._rewriter.author_match
        marked = f"{author_match}&{self._query_var}={page}"

        page_rules: dict[str, str] = {}
        for pattern, target in rules.items():
            if page not in pattern:
                continue
            if author_match not in target:
                continue
            page_rules[pattern] = target.replace(author_match, marked, 1)
        return page_rules

    def derive(self, pages: Iterable[str], base: str | None = None) -> dict[str, str]:
        """Return the rules for all *pages*, ordered by precedence.

        *base* defaults to the rewriter's author permastruct. Without an
        author permastruct there is nothing to extend and the result is
        empty.
        """
        if base is None:
            base = self._rewriter.author_permastruct
        if not base:
            return {}

        derived: dict[str, str] = {}
        for page in pages:
            expanded = self._rewriter.generate_rules(f"{base.rstrip('/')}/{page}")
            page_rules = self.filter_page_rules(expanded, page)
            logger.debug(
                "author page %r: kept %d of %d expanded rules",
                page,
                len(page_rules),
                len(expanded),
            )
            if self._precedence is Precedence.LAST:
                derived = union(page_rules, derived)
            else:
                derived = union(derived, page_rules)
        return derived

    def install(self, table: RuleTable, pages: Iterable[str]) -> bool:
        """Put the derived rules in front of *table*.

        An uncompiled table, or an empty derivation, leaves *table*
        untouched. Returns whether the table changed.
        """
        rules = self.derive(pages)
        if table.rules is None or not rules:
            return False
        table.prepend(rules)
        logger.debug("installed %d author page rules", len(rules))
        return True
