"""Author pages configuration.

AuthorPagesConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from authorpages.errors import ConfigurationError


class Precedence(StrEnum):
    """Merge order of the rules derived for each extra page.

    ``LAST``: the last registered page's rules are tried first.
    ``FIRST``: registry order is kept.
    """

    LAST = "last"
    FIRST = "first"

    @classmethod
    def parse(cls, value: "str | Precedence") -> "Precedence":
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            msg = f"Unknown precedence {value!r}. Expected one of: {choices}"
            raise ConfigurationError(msg) from None


@dataclass(frozen=True, slots=True)
class AuthorPagesConfig:
    """Configuration for the rewrite host and the author pages extension.

    All fields have sensible defaults. Override what you need::

        config = AuthorPagesConfig(author_base="writers", template_dir="views")
    """

    # Rewrite host
    index: str = "index.php"
    author_base: str = "author"  # "" disables pretty author URLs
    feeds: bool = True
    paged: bool = True
    embed: bool = True

    # Extra pages
    query_var: str = "author_page"
    precedence: Precedence = Precedence.LAST

    # Templates
    template_dir: str | Path = "templates"
    template_prefix: str = "author-page-"
    template_suffix: str = ".html"
