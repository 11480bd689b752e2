"""Tests for authorpages.derive — extra author page rule derivation."""

import logging

import pytest

from authorpages.config import AuthorPagesConfig, Precedence
from authorpages.derive import RuleDeriver
from authorpages.rewrite.rewriter import Rewriter
from authorpages.rewrite.rule import RuleTable

AUTHOR_MATCH = "index.php?author_name=$matches[1]"


@pytest.fixture
def deriver() -> RuleDeriver:
    return RuleDeriver(Rewriter())


class TestFilterPageRules:
    def test_keeps_only_page_author_rules(self, deriver: RuleDeriver) -> None:
        rules = {
            "author/?$": "index.php?",
            "author/([^/]+)/?$": AUTHOR_MATCH,
            "author/([^/]+)/recipes/?$": AUTHOR_MATCH,
            "recipes/?$": "index.php?pagename=recipes",
        }
        assert deriver.filter_page_rules(rules, "recipes") == {
            "author/([^/]+)/recipes/?$": f"{AUTHOR_MATCH}&author_page=recipes",
        }

    def test_marker_inserted_after_author_lookup(self, deriver: RuleDeriver) -> None:
        rules = {"author/([^/]+)/recipes/page/?([0-9]{1,})/?$": f"{AUTHOR_MATCH}&paged=$matches[2]"}
        result = deriver.filter_page_rules(rules, "recipes")
        assert list(result.values()) == [
            f"{AUTHOR_MATCH}&author_page=recipes&paged=$matches[2]"
        ]

    def test_custom_query_var(self) -> None:
        deriver = RuleDeriver(Rewriter(), query_var="section")
        rules = {"author/([^/]+)/bio/?$": AUTHOR_MATCH}
        assert deriver.filter_page_rules(rules, "bio") == {
            "author/([^/]+)/bio/?$": f"{AUTHOR_MATCH}&section=bio",
        }


class TestDerive:
    def test_no_pages(self, deriver: RuleDeriver) -> None:
        assert deriver.derive(()) == {}

    def test_single_page(self, deriver: RuleDeriver) -> None:
        rules = deriver.derive(("recipes",))

        assert rules["author/([^/]+)/recipes/?$"] == f"{AUTHOR_MATCH}&author_page=recipes"
        assert len(rules) == 5
        for pattern, target in rules.items():
            assert "recipes" in pattern
            assert target.count("author_page=recipes") == 1
            assert target.startswith(f"{AUTHOR_MATCH}&author_page=recipes")

    def test_generic_author_rules_excluded(self, deriver: RuleDeriver) -> None:
        rules = deriver.derive(("recipes",))
        assert "author/([^/]+)/?$" not in rules
        assert "author/?$" not in rules

    def test_idempotent(self, deriver: RuleDeriver) -> None:
        first = deriver.derive(("recipes", "bio"))
        second = deriver.derive(("recipes", "bio"))
        assert first == second
        assert list(first) == list(second)

    def test_last_page_first_by_default(self, deriver: RuleDeriver) -> None:
        patterns = list(deriver.derive(("recipes", "bio")))
        assert deriver.precedence is Precedence.LAST
        assert all("bio" in p for p in patterns[:5])
        assert all("recipes" in p for p in patterns[5:])

    def test_first_precedence_keeps_registry_order(self) -> None:
        deriver = RuleDeriver(Rewriter(), precedence="first")
        patterns = list(deriver.derive(("recipes", "bio")))
        assert all("recipes" in p for p in patterns[:5])
        assert all("bio" in p for p in patterns[5:])

    def test_no_author_permastruct(self) -> None:
        deriver = RuleDeriver(Rewriter(AuthorPagesConfig(author_base="")))
        assert deriver.derive(("recipes",)) == {}

    def test_explicit_base(self, deriver: RuleDeriver) -> None:
        rules = deriver.derive(("recipes",), base="author/%author%/")
        assert "author/([^/]+)/recipes/?$" in rules

    def test_explicit_empty_base(self, deriver: RuleDeriver) -> None:
        assert deriver.derive(("recipes",), base="") == {}

    def test_logs_per_page(self, deriver: RuleDeriver, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="authorpages.rewrite"):
            deriver.derive(("recipes",))
        assert "author page 'recipes': kept 5 of 15 expanded rules" in caplog.text


class TestInstall:
    def test_prepends_to_table(self, deriver: RuleDeriver) -> None:
        table = RuleTable({"author/([^/]+)/?$": AUTHOR_MATCH})

        assert deriver.install(table, ("recipes",)) is True
        patterns = [r.pattern for r in table]
        assert patterns[-1] == "author/([^/]+)/?$"
        assert patterns[0].startswith("author/([^/]+)/recipes")
        assert len(table) == 6

    def test_empty_derivation_leaves_table(self, deriver: RuleDeriver) -> None:
        table = RuleTable({"author/([^/]+)/?$": AUTHOR_MATCH})
        assert deriver.install(table, ()) is False
        assert len(table) == 1

    def test_uncompiled_table_untouched(self, deriver: RuleDeriver) -> None:
        table = RuleTable()
        assert deriver.install(table, ("recipes",)) is False
        assert table.rules is None

    def test_empty_compiled_table_receives_rules(self, deriver: RuleDeriver) -> None:
        table = RuleTable({})
        assert deriver.install(table, ("recipes",)) is True
        assert len(table) == 5

    def test_page_url_resolves_through_table(self, deriver: RuleDeriver) -> None:
        table = RuleTable({"author/([^/]+)/?$": AUTHOR_MATCH})
        deriver.install(table, ("recipes",))

        match = table.match("/author/jane/recipes/page/2", {"author_name", "author_page", "paged"})
        assert match is not None
        assert match.query == {"author_name": "jane", "author_page": "recipes", "paged": "2"}


class TestUncompilableSlug:
    def test_site_routing_survives(self, deriver: RuleDeriver) -> None:
        table = RuleTable({"author/([^/]+)/?$": AUTHOR_MATCH})
        deriver.install(table, ("faq(old", "recipes"))
        query_vars = {"author_name", "author_page"}

        author = table.match("/author/jane", query_vars)
        assert author is not None
        assert author.query == {"author_name": "jane"}

        page = table.match("/author/jane/recipes", query_vars)
        assert page is not None
        assert page.query == {"author_name": "jane", "author_page": "recipes"}
