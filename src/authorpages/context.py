"""Resolved request context — the query variables a rewrite rule produced."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

type QueryValue = str | tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RequestContext:
    """The current request after rule matching. Read-only.

    ``query`` holds the public query variables the matched rule set.
    A variable the rule produced more than once is a tuple.
    """

    path: str
    query: Mapping[str, QueryValue] = field(default_factory=dict)
    matched_rule: str | None = None
    matched_target: str | None = None

    def get(self, name: str, default: Any = "") -> Any:
        """Return query variable *name*, or *default* when unset."""
        return self.query.get(name, default)

    @property
    def is_author(self) -> bool:
        """Whether this is an author archive request."""
        return bool(self.get("author_name") or self.get("author"))

    def as_template_context(self) -> dict[str, Any]:
        """Flatten into a template context (``request`` plus every query variable)."""
        return {"request": self, **self.query}
