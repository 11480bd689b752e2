"""Kida environment setup and template hierarchy lookup.

The site renders with a kida ``Environment`` loading from
``config.template_dir``. ``TemplateLookup`` answers the hierarchy
question "which of these candidate templates exists?" without
rendering anything.
"""

import logging
from collections.abc import Iterable

from kida import Environment, FileSystemLoader
from kida.environment.exceptions import TemplateNotFoundError, TemplateSyntaxError

from authorpages.config import AuthorPagesConfig

logger = logging.getLogger("authorpages.templating")


def create_environment(config: AuthorPagesConfig) -> Environment:
    """Create a kida Environment over ``config.template_dir``."""
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=True,
    )


class TemplateLookup:
    """Template hierarchy lookup against a kida environment.

    Names passed to ``query_template()`` are extension-less; the
    configured suffix is appended::

        lookup = TemplateLookup(env)
        lookup.query_template("author-page-recipes")  # "author-page-recipes.html" or None
    """

    __slots__ = ("_env", "_suffix")

    def __init__(self, env: Environment, suffix: str = ".html") -> None:
        self._env = env
        self._suffix = suffix

    @property
    def env(self) -> Environment:
        return self._env

    def exists(self, name: str) -> bool:
        """Whether *name* loads and compiles.

        A template that fails to compile counts as missing, so the
        hierarchy moves on to the next candidate.
        """
        try:
            self._env.get_template(name)
        except TemplateNotFoundError:
            return False
        except TemplateSyntaxError as exc:
            logger.warning("skipping template %r: %s", name, exc)
            return False
        return True

    def locate(self, names: Iterable[str]) -> str | None:
        """Return the first existing template among *names*."""
        for name in names:
            if name and self.exists(name):
                return name
        return None

    def query_template(self, type_: str, templates: Iterable[str] = ()) -> str | None:
        """Locate the template for a hierarchy *type_*.

        *templates* are full candidate names tried in order; when empty,
        the only candidate is ``type_`` plus the suffix.
        """
        candidates = list(templates) or [f"{type_}{self._suffix}"]
        return self.locate(candidates)

    def __call__(self, type_: str) -> str | None:
        return self.query_template(type_)
