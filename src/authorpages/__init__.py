"""authorpages — extra pages under the author archive.

Adds sub-pages such as ``/author/jane/recipes`` to a site's author
archive: rewrite rules derived from the author permastruct, an
``author_page`` query variable, and ``author-page-{slug}`` templates.

Basic usage::

    from authorpages import AuthorPagesExtension, PageRegistry, Site, static_pages

    pages = PageRegistry([static_pages("recipes", "bio")])
    site = Site(extensions=[AuthorPagesExtension(pages)])
    site.flush_rules()

    site.resolve("/author/jane/recipes").template
"""

__version__ = "0.1.0"
__all__ = [
    "AuthorPagesConfig",
    "AuthorPagesError",
    "AuthorPagesExtension",
    "ConfigurationError",
    "NotFound",
    "PageRegistry",
    "Precedence",
    "RequestContext",
    "RequestResolver",
    "Resolution",
    "Rewriter",
    "RuleDeriver",
    "RuleTable",
    "Site",
    "TemplateLookup",
    "static_pages",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import authorpages`` free of the kida import until a site
    or template lookup is actually requested.
    """
    if name in ("AuthorPagesConfig", "Precedence"):
        from authorpages import config as _config

        return getattr(_config, name)

    if name in ("AuthorPagesError", "ConfigurationError", "NotFound"):
        from authorpages import errors as _errors

        return getattr(_errors, name)

    if name in ("PageRegistry", "static_pages"):
        from authorpages import pages as _pages

        return getattr(_pages, name)

    if name == "RequestContext":
        from authorpages.context import RequestContext

        return RequestContext

    if name == "RequestResolver":
        from authorpages.resolve import RequestResolver

        return RequestResolver

    if name == "RuleDeriver":
        from authorpages.derive import RuleDeriver

        return RuleDeriver

    if name in ("Rewriter", "RuleTable"):
        from authorpages import rewrite as _rewrite

        return getattr(_rewrite, name)

    if name == "AuthorPagesExtension":
        from authorpages.extension import AuthorPagesExtension

        return AuthorPagesExtension

    if name in ("Site", "Resolution"):
        from authorpages import site as _site

        return getattr(_site, name)

    if name == "TemplateLookup":
        from authorpages.templating import TemplateLookup

        return TemplateLookup

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
