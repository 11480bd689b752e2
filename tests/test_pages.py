"""Tests for authorpages.pages — the extra page registry."""

import logging

import pytest

from authorpages.pages import PageRegistry, sanitize_pages, static_pages


class TestSanitizePages:
    def test_trims_dedupes_and_drops_empty(self) -> None:
        assert sanitize_pages([" recipes", "bio", "recipes ", "", "  "]) == ("recipes", "bio")

    def test_keeps_first_seen_order(self) -> None:
        assert sanitize_pages(["bio", "recipes", "bio"]) == ("bio", "recipes")

    def test_tuple_input(self) -> None:
        assert sanitize_pages(("bio",)) == ("bio",)

    @pytest.mark.parametrize("value", [None, "recipes", 42, {"recipes": 1}])
    def test_non_sequence_is_empty(self, value: object) -> None:
        assert sanitize_pages(value) == ()

    def test_non_string_entries_coerced(self) -> None:
        assert sanitize_pages([2024, None, " x "]) == ("2024", "x")


class TestPageRegistry:
    def test_no_providers(self) -> None:
        assert PageRegistry().get_pages() == ()

    def test_static_pages(self) -> None:
        registry = PageRegistry([static_pages("recipes", "bio")])
        assert registry.get_pages() == ("recipes", "bio")

    def test_providers_are_chained(self) -> None:
        seen: list[list[str]] = []

        def first(pages: list[str]) -> list[str]:
            seen.append(list(pages))
            return [*pages, "recipes"]

        def second(pages: list[str]) -> list[str]:
            seen.append(list(pages))
            return [*pages, " bio "]

        registry = PageRegistry([first, second])
        assert registry.get_pages() == ("recipes", "bio")
        assert seen == [[], ["recipes"]]

    def test_add_provider(self) -> None:
        registry = PageRegistry([static_pages("recipes")])
        registry.add_provider(lambda pages: [*pages, "bio", "recipes"])
        assert registry.get_pages() == ("recipes", "bio")
        assert len(registry.providers) == 2

    def test_recomputed_on_every_call(self) -> None:
        slugs = ["recipes"]
        registry = PageRegistry([lambda pages: [*pages, *slugs]])
        assert registry.get_pages() == ("recipes",)

        slugs.append("bio")
        assert registry.get_pages() == ("recipes", "bio")

    def test_malformed_output_is_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = PageRegistry([lambda pages: "recipes"])
        with caplog.at_level(logging.WARNING, logger="authorpages.pages"):
            assert registry.get_pages() == ()
        assert "author_archive_extended_pages" in caplog.text

    def test_contains(self) -> None:
        registry = PageRegistry([static_pages("recipes")])
        assert "recipes" in registry
        assert "bio" not in registry
