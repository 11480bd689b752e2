"""Permastruct expansion — turns a URL structure into rewrite rules.

A permastruct is a slash-separated URL template with ``%tag%``
placeholders, e.g. ``author/%author%/recipes``. Each tag maps to a
capture regex and a query variable::

    %author%  ->  ([^/]+)  ->  author_name=$matches[1]

``generate_rules()`` expands a permastruct into every rule the site
serves for it: the archive itself plus its feed, embed and paged
permutations, optionally for every leading directory of the structure.
"""

import re
from dataclasses import dataclass

from authorpages.config import AuthorPagesConfig

_TAG = re.compile(r"%[^%/]+%")

FEED_TYPES = ("feed", "rdf", "rss", "rss2", "atom")


@dataclass(frozen=True, slots=True)
class RewriteTag:
    """A permastruct placeholder.

    ``tag`` is the placeholder (``%author%``), ``regex`` the capture
    group it becomes in a rule pattern and ``query`` the query variable
    prefix it becomes in a rule target (``author_name=``).
    """

    tag: str
    regex: str
    query: str


AUTHOR_TAG = RewriteTag("%author%", "([^/]+)", "author_name=")


class Rewriter:
    """Rewrite rule expansion for the configured URL structures.

    Usage::

        rewriter = Rewriter(AuthorPagesConfig())
        rewriter.author_permastruct        # "author/%author%"
        rules = rewriter.generate_rules("author/%author%/recipes")
    """

    __slots__ = ("_config", "_tags")

    def __init__(self, config: AuthorPagesConfig | None = None) -> None:
        self._config = config or AuthorPagesConfig()
        self._tags: dict[str, RewriteTag] = {AUTHOR_TAG.tag: AUTHOR_TAG}

    @property
    def index(self) -> str:
        return self._config.index

    @property
    def author_permastruct(self) -> str | None:
        """The author archive structure, or ``None`` when pretty author URLs are off."""
        base = self._config.author_base.strip("/")
        if not base:
            return None
        return f"{base}/{AUTHOR_TAG.tag}"

    @property
    def author_match(self) -> str:
        """Target fragment of a plain author archive query."""
        return f"{self.index}?{AUTHOR_TAG.query}{self.preg_index(1)}"

    def add_tag(self, tag: RewriteTag) -> None:
        """Register an additional placeholder."""
        self._tags[tag.tag] = tag

    @staticmethod
    def preg_index(number: int) -> str:
        """Back-reference to capture group *number* in a rule target."""
        return f"$matches[{number}]"

    def generate_rules(self, permastruct: str, *, walk_dirs: bool = True) -> dict[str, str]:
        """Expand *permastruct* into an ordered ``pattern -> target`` mapping.

        With *walk_dirs*, every leading directory of the structure is
        expanded as well (``author``, ``author/%author%``, ...), shortest
        first. Unknown placeholders are left in the pattern verbatim.
        """
        dirs = [part for part in permastruct.strip("/").split("/") if part]
        if not dirs:
            return {}

        structs = (
            ["/".join(dirs[: i + 1]) for i in range(len(dirs))]
            if walk_dirs
            else ["/".join(dirs)]
        )

        rules: dict[str, str] = {}
        for struct in structs:
            rules.update(self._expand(struct))
        return rules

    def _expand(self, struct: str) -> dict[str, str]:
        pattern = struct
        queries: list[str] = []
        for tag_text in _TAG.findall(struct):
            tag = self._tags.get(tag_text)
            if tag is None:
                continue
            pattern = pattern.replace(tag_text, tag.regex, 1)
            queries.append(f"{tag.query}{self.preg_index(len(queries) + 1)}")

        query = f"{self.index}?" + "&".join(queries)
        sep = "&" if queries else ""
        next_group = self.preg_index(len(queries) + 1)

        rules: dict[str, str] = {}
        if self._config.feeds:
            feeds = "|".join(FEED_TYPES)
            rules[f"{pattern}/feed/({feeds})/?$"] = f"{query}{sep}feed={next_group}"
            rules[f"{pattern}/({feeds})/?$"] = f"{query}{sep}feed={next_group}"
        if self._config.embed:
            rules[f"{pattern}/embed/?$"] = f"{query}{sep}embed=true"
        if self._config.paged:
            rules[f"{pattern}/page/?([0-9]{{1,}})/?$"] = f"{query}{sep}paged={next_group}"
        rules[f"{pattern}/?$"] = query
        return rules
