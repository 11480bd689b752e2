"""``authorpages match`` — resolve a request path.

Prints the query variables the matching rule produced, the extra
author page (if any) and the template the site would render.
"""

import argparse
import sys

from authorpages.cli._site import build_site
from authorpages.errors import NotFound
from authorpages.extension import AuthorPagesExtension


def run_match(args: argparse.Namespace) -> None:
    site = build_site(args)

    try:
        resolution = site.resolve(args.path)
    except NotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    context = resolution.context
    author_page = ""
    for extension in site.extensions:
        if isinstance(extension, AuthorPagesExtension):
            author_page = extension.resolver(site.lookup).resolve_author_page(context)

    print(f"rule:        {context.matched_rule}")
    print(f"target:      {context.matched_target}")
    for name, value in context.query.items():
        print(f"  {name} = {value!r}")
    print(f"author page: {author_page or '-'}")
    print(f"template:    {resolution.template}")
