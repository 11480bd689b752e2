"""authorpages CLI — inspect derived rules and resolve paths.

Entry point registered as ``authorpages`` in ``pyproject.toml``::

    [project.scripts]
    authorpages = "authorpages.cli:main"
"""

import argparse
import logging
import sys


def _add_site_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--page",
        dest="pages",
        action="append",
        default=[],
        metavar="SLUG",
        help="Extra author page slug (repeatable)",
    )
    parser.add_argument("--author-base", default="author", help="Author archive base")
    parser.add_argument(
        "--precedence",
        choices=("last", "first"),
        default="last",
        help="Which page's rules are tried first",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``authorpages`` command."""
    parser = argparse.ArgumentParser(
        prog="authorpages",
        description="authorpages — extra pages under the author archive.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- authorpages rules ------------------------------------------------
    rules_parser = subparsers.add_parser("rules", help="List derived rewrite rules")
    _add_site_arguments(rules_parser)
    rules_parser.add_argument(
        "--all",
        action="store_true",
        help="Include the site's own author rules",
    )

    # -- authorpages match ------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Resolve a request path")
    match_parser.add_argument("path", help="Request path (e.g. /author/jane/recipes)")
    _add_site_arguments(match_parser)
    match_parser.add_argument(
        "--templates",
        default=None,
        metavar="DIR",
        help="Template directory used for the template lookup",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "rules":
        from authorpages.cli._rules import run_rules

        run_rules(args)
    elif args.command == "match":
        from authorpages.cli._match import run_match

        run_match(args)
