"""Site construction from CLI arguments.

Shared by ``authorpages rules`` and ``authorpages match``.
"""

import argparse

from kida import DictLoader, Environment

from authorpages.config import AuthorPagesConfig, Precedence
from authorpages.extension import AuthorPagesExtension
from authorpages.pages import PageRegistry, static_pages
from authorpages.site import Site


def build_site(args: argparse.Namespace) -> Site:
    """Build and flush a site for the parsed arguments.

    Without ``--templates`` the site gets an empty template loader, so
    every lookup falls back to the default template name.
    """
    templates = getattr(args, "templates", None)
    config = AuthorPagesConfig(
        author_base=args.author_base,
        precedence=Precedence.parse(args.precedence),
        template_dir=templates or "templates",
    )
    pages = PageRegistry([static_pages(*args.pages)])
    env = None if templates else Environment(loader=DictLoader({}))
    site = Site(config, extensions=[AuthorPagesExtension(pages, config)], env=env)
    site.flush_rules()
    return site
