"""authorpages exception hierarchy.

Only the host-facing layer (``Site``, config parsing) raises. The page
registry, rule deriver and request resolver degrade to empty results
instead of signalling errors.
"""


class AuthorPagesError(Exception):
    """Base for all authorpages-specific errors."""


class ConfigurationError(AuthorPagesError):
    """Raised when a configuration value is invalid."""


class NotFound(AuthorPagesError):  # noqa: N818
    """No rewrite rule matched the request path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No rewrite rule matches {path!r}")
