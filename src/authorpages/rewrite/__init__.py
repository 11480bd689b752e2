"""Rewrite rules — permastruct expansion and the ordered rule table.

Rules are generated when the site flushes its rewrite rules and
matched in insertion order at request time.
"""

from authorpages.rewrite.rewriter import RewriteTag, Rewriter
from authorpages.rewrite.rule import RewriteRule, RuleMatch, RuleTable, union

__all__ = [
    "RewriteRule",
    "RewriteTag",
    "Rewriter",
    "RuleMatch",
    "RuleTable",
    "union",
]
