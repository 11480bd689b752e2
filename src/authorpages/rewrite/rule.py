"""Rewrite rules and the ordered rule table."""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote

logger = logging.getLogger("authorpages.rewrite")

# $matches[1] back-references inside rule targets
_BACKREF = re.compile(r"\$matches\[(\d+)\]")


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """A single rule: URL regex -> index query string.

    ``pattern`` is matched against the request path without its leading
    slash. ``target`` is a query string such as
    ``index.php?author_name=$matches[1]`` whose back-references are
    filled from the pattern's groups.
    """

    pattern: str
    target: str


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """Result of a successful rule match."""

    rule: RewriteRule
    query: dict[str, str | tuple[str, ...]]


def union(left: Mapping[str, str], right: Mapping[str, str]) -> dict[str, str]:
    """Merge two rule mappings, *left* first.

    Patterns present in both keep the *left* target.
    """
    merged = dict(left)
    for pattern, target in right.items():
        merged.setdefault(pattern, target)
    return merged


def fill_target(target: str, match: re.Match[str]) -> str:
    """Replace ``$matches[n]`` back-references with captured groups."""

    def _group(m: re.Match[str]) -> str:
        index = int(m.group(1))
        if index > (match.re.groups or 0):
            return ""
        return quote(match.group(index) or "", safe="")

    return _BACKREF.sub(_group, target)


def _compile(pattern: str) -> re.Pattern[str] | None:
    """Compile a rule pattern anchored at the path start, or ``None`` if invalid."""
    try:
        return re.compile(f"^{pattern}")
    except re.error as exc:
        logger.warning("skipping rewrite rule %r: invalid pattern (%s)", pattern, exc)
        return None


def parse_target(target: str) -> list[tuple[str, str]]:
    """Split ``index.php?a=1&b=2`` into ``[("a", "1"), ("b", "2")]``."""
    _, _, query = target.partition("?")
    return parse_qsl(query, keep_blank_values=True)


class RuleTable:
    """Ordered rewrite rule table.

    ``rules`` is ``None`` until the host compiles the table; extensions
    must leave an uncompiled table untouched.

    Usage::

        table = RuleTable({"author/([^/]+)/?$": "index.php?author_name=$matches[1]"})
        table.prepend({"author/([^/]+)/bio/?$": "index.php?author_name=$matches[1]&author_page=bio"})
        match = table.match("/author/jane/bio", {"author_name", "author_page"})
    """

    __slots__ = ("_compiled", "rules")

    def __init__(self, rules: Mapping[str, str] | None = None) -> None:
        self.rules: dict[str, str] | None = dict(rules) if rules is not None else None
        # None marks a pattern that does not compile
        self._compiled: dict[str, re.Pattern[str] | None] = {}

    def __len__(self) -> int:
        return len(self.rules or {})

    def __iter__(self) -> Iterator[RewriteRule]:
        return iter(self.items())

    def items(self) -> list[RewriteRule]:
        """Return all rules in match order."""
        return [RewriteRule(pattern, target) for pattern, target in (self.rules or {}).items()]

    def prepend(self, rules: Mapping[str, str]) -> None:
        """Put *rules* in front of the existing ones.

        Raises ``RuntimeError`` if the table has not been compiled yet.
        """
        if self.rules is None:
            msg = "Cannot prepend rules to an uncompiled rule table."
            raise RuntimeError(msg)
        self.rules = union(rules, self.rules)

    def extend(self, rules: Mapping[str, str]) -> None:
        """Append *rules* after the existing ones. Compiles the table if needed."""
        self.rules = union(self.rules or {}, rules)

    def match(self, path: str, query_vars: Iterable[str]) -> RuleMatch | None:
        """Match *path* against the rules in order.

        Only query variables listed in *query_vars* are kept. A variable
        that appears more than once becomes a tuple of values.
        """
        request = path.partition("?")[0].strip("/")
        allowed = set(query_vars)

        for pattern, target in (self.rules or {}).items():
            if pattern not in self._compiled:
                self._compiled[pattern] = _compile(pattern)
            regex = self._compiled[pattern]
            if regex is None:
                continue
            m = regex.match(request)
            if m is None:
                continue

            query: dict[str, str | tuple[str, ...]] = {}
            for name, value in parse_target(fill_target(target, m)):
                if name not in allowed:
                    continue
                if name in query:
                    previous = query[name]
                    if isinstance(previous, tuple):
                        query[name] = (*previous, value)
                    else:
                        query[name] = (previous, value)
                else:
                    query[name] = value
            return RuleMatch(rule=RewriteRule(pattern, target), query=query)

        return None
