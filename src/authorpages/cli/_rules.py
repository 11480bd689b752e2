"""``authorpages rules`` — list derived rewrite rules."""

import argparse

from authorpages.cli._site import build_site
from authorpages.extension import AuthorPagesExtension
from authorpages.rewrite.rule import RewriteRule


def _print_table(rules: list[RewriteRule]) -> None:
    width = max(max(len(r.pattern) for r in rules), 7)  # "PATTERN" header
    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("PATTERN", "TARGET"))
    sep_len = width + 2 + max(len(r.target) for r in rules)
    print("-" * min(sep_len, 80))
    for rule in rules:
        print(fmt.format(rule.pattern, rule.target))


def run_rules(args: argparse.Namespace) -> None:
    """Print the derived rules, or the whole flushed table with ``--all``."""
    site = build_site(args)

    if args.all:
        rules = site.rules.items()
    else:
        rules = []
        for extension in site.extensions:
            if isinstance(extension, AuthorPagesExtension):
                derived = extension.deriver(site.rewriter).derive(extension.pages.get_pages())
                rules.extend(RewriteRule(p, t) for p, t in derived.items())

    if not rules:
        print("No rewrite rules.")
        return
    _print_table(rules)
