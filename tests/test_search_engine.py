from __future__ import annotations

import unittest
from typing import List, Sequence
from unittest import mock

from garmentsearch.index import engine as engine_module
from garmentsearch.index.catalog import Item, build_sample_catalog
from garmentsearch.index.engine import FacetCount, SearchEngine, SearchOptions, facet_counts
from garmentsearch.index.facets import ALL_COLORS, ALL_SIZES, Color, Size, UnknownFacetValueError


def shirt(size: Size, color: Color) -> Item:
    return Item.create(size, color)


class SearchEngineTestBase(unittest.TestCase):
    """Checks results against expectations computed straight from the catalog."""

    def _matches(self, item: Item, options: SearchOptions) -> bool:
        return (not options.colors or item.color in options.colors) and (
            not options.sizes or item.size in options.sizes
        )

    def assert_results(self, catalog: Sequence[Item], items: Sequence[Item], options: SearchOptions) -> None:
        expected = [i for i in catalog if self._matches(i, options)]
        self.assertEqual([i.id for i in items], [i.id for i in expected])
        for got, want in zip(items, expected):
            self.assertIs(got, want)

    def assert_size_counts(self, catalog: Sequence[Item], options: SearchOptions, counts: Sequence[FacetCount]) -> None:
        self.assertEqual([fc.value for fc in counts], list(ALL_SIZES))
        for fc in counts:
            expected = sum(1 for i in catalog if i.size is fc.value and self._matches(i, options))
            self.assertEqual(fc.count, expected, f"size {fc.value.label}")

    def assert_color_counts(self, catalog: Sequence[Item], options: SearchOptions, counts: Sequence[FacetCount]) -> None:
        self.assertEqual([fc.value for fc in counts], list(ALL_COLORS))
        for fc in counts:
            expected = sum(1 for i in catalog if i.color is fc.value and self._matches(i, options))
            self.assertEqual(fc.count, expected, f"color {fc.value.label}")

    def check(self, catalog: List[Item], options: SearchOptions):
        results = SearchEngine(catalog).search(options)
        self.assert_results(catalog, results.items, options)
        self.assert_size_counts(catalog, options, results.size_counts)
        self.assert_color_counts(catalog, options, results.color_counts)
        return results


class SearchScenariosTestCase(SearchEngineTestBase):
    def test_small_red(self) -> None:
        red_small = shirt(Size.SMALL, Color.RED)
        catalog = [red_small, shirt(Size.MEDIUM, Color.BLACK), shirt(Size.LARGE, Color.BLUE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL], colors=[Color.RED]))

        self.assertEqual(results.items, [red_small])
        self.assertEqual(results.size_count(Size.SMALL), 1)
        self.assertEqual(results.size_count(Size.MEDIUM), 0)
        self.assertEqual(results.size_count(Size.LARGE), 0)
        self.assertEqual(results.color_count(Color.RED), 1)
        self.assertEqual(results.color_count(Color.BLACK), 0)
        self.assertEqual(results.color_count(Color.BLUE), 0)

    def test_red_in_two_sizes(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.MEDIUM, Color.RED), shirt(Size.LARGE, Color.BLUE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL, Size.MEDIUM], colors=[Color.RED]))

        self.assertEqual(results.items, catalog[:2])
        self.assertEqual(results.size_count(Size.SMALL), 1)
        self.assertEqual(results.size_count(Size.MEDIUM), 1)
        self.assertEqual(results.size_count(Size.LARGE), 0)
        self.assertEqual(results.color_count(Color.RED), 2)
        self.assertEqual(results.color_count(Color.BLUE), 0)

    def test_three_reds_two_sizes_requested(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.MEDIUM, Color.RED), shirt(Size.LARGE, Color.RED)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL, Size.MEDIUM], colors=[Color.RED]))

        self.assertEqual(len(results.items), 2)
        self.assertEqual(results.color_count(Color.RED), 2)
        self.assertEqual(results.size_count(Size.LARGE), 0)

    def test_small_red_or_blue(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.SMALL, Color.BLUE), shirt(Size.LARGE, Color.WHITE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL], colors=[Color.RED, Color.BLUE]))

        self.assertEqual(results.items, catalog[:2])
        self.assertEqual(results.size_count(Size.SMALL), 2)
        self.assertEqual(results.size_count(Size.LARGE), 0)
        self.assertEqual(results.color_count(Color.RED), 1)
        self.assertEqual(results.color_count(Color.BLUE), 1)
        self.assertEqual(results.color_count(Color.WHITE), 0)

    def test_small_red_or_blue_with_extra_color(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.SMALL, Color.BLUE), shirt(Size.SMALL, Color.WHITE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL], colors=[Color.RED, Color.BLUE]))

        self.assertEqual(results.items, catalog[:2])
        self.assertEqual(results.color_count(Color.WHITE), 0)

    def test_no_results(self) -> None:
        catalog = [shirt(Size.MEDIUM, Color.RED), shirt(Size.LARGE, Color.BLUE), shirt(Size.SMALL, Color.WHITE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL], colors=[Color.RED, Color.BLUE]))

        self.assertEqual(results.items, [])
        self.assertTrue(all(fc.count == 0 for fc in results.size_counts + results.color_counts))

    def test_no_colors_means_any_color(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.SMALL, Color.BLUE), shirt(Size.SMALL, Color.WHITE)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL]))

        self.assertEqual(results.items, catalog)
        self.assertEqual(results.color_count(Color.RED), 1)
        self.assertEqual(results.color_count(Color.BLUE), 1)
        self.assertEqual(results.color_count(Color.WHITE), 1)
        self.assertEqual(results.size_count(Size.SMALL), 3)

    def test_empty_catalog(self) -> None:
        results = self.check([], SearchOptions(sizes=[Size.SMALL], colors=[Color.RED, Color.BLUE]))

        self.assertEqual(results.items, [])
        self.assertEqual(len(results.size_counts), len(ALL_SIZES))
        self.assertEqual(len(results.color_counts), len(ALL_COLORS))
        self.assertTrue(all(fc.count == 0 for fc in results.size_counts + results.color_counts))


class SearchBehaviourTestCase(SearchEngineTestBase):
    def test_empty_query_returns_whole_catalog(self) -> None:
        catalog = build_sample_catalog(40, seed=3)
        options = SearchOptions()
        self.assertTrue(options.is_empty())
        self.assertFalse(SearchOptions(colors=[Color.RED]).is_empty())
        results = self.check(catalog, options)

        self.assertEqual(results.items, catalog)
        self.assertEqual(sum(fc.count for fc in results.size_counts), 40)
        self.assertEqual(sum(fc.count for fc in results.color_counts), 40)

    def test_duplicates_in_query_are_ignored(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.LARGE, Color.RED)]
        results = self.check(catalog, SearchOptions(sizes=[Size.SMALL, Size.SMALL], colors=[Color.RED, Color.RED]))

        self.assertEqual(results.items, catalog[:1])
        self.assertEqual(results.color_count(Color.RED), 1)

    def test_sets_are_accepted(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.LARGE, Color.BLUE)]
        self.check(catalog, SearchOptions(sizes={Size.LARGE}, colors=frozenset({Color.BLUE, Color.RED})))

    def test_sample_catalog_queries(self) -> None:
        catalog = build_sample_catalog(500, seed=11)
        queries = [
            SearchOptions(colors=[Color.RED]),
            SearchOptions(sizes=[Size.MEDIUM, Size.LARGE]),
            SearchOptions(sizes=[Size.SMALL], colors=[Color.BLACK, Color.YELLOW]),
            SearchOptions(sizes=list(ALL_SIZES), colors=list(ALL_COLORS)),
        ]
        for options in queries:
            with self.subTest(options=options):
                self.check(catalog, options)

    def test_counts_are_cross_filtered(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.LARGE, Color.RED), shirt(Size.SMALL, Color.BLUE)]
        results = SearchEngine(catalog).search(SearchOptions(sizes=[Size.SMALL]))

        # Large red is filtered out by size, so it does not count towards red.
        self.assertEqual(results.color_count(Color.RED), 1)
        self.assertEqual(results.size_count(Size.LARGE), 0)

    def test_catalog_is_not_mutated_and_copied(self) -> None:
        catalog = [shirt(Size.SMALL, Color.RED), shirt(Size.MEDIUM, Color.BLUE)]
        snapshot = list(catalog)
        engine = SearchEngine(catalog)

        results = engine.search(SearchOptions(colors=[Color.RED]))
        results.items.append(shirt(Size.LARGE, Color.BLACK))
        self.assertEqual(catalog, snapshot)

        catalog.append(shirt(Size.SMALL, Color.RED))
        self.assertEqual(len(engine.search(SearchOptions(colors=[Color.RED])).items), 1)
        self.assertEqual(len(engine), 2)

    def test_search_logs_query_only_at_debug(self) -> None:
        engine = SearchEngine([shirt(Size.SMALL, Color.RED)])
        with mock.patch.object(engine_module.log, "isEnabledFor", return_value=False), \
                mock.patch.object(engine_module.log, "debug") as debug:
            engine.search(SearchOptions(colors=[Color.RED]))
        debug.assert_not_called()

        with self.assertLogs("garmentsearch.index.engine", level="DEBUG") as captured:
            engine.search(SearchOptions(sizes=[Size.SMALL], colors=[Color.RED]))
        self.assertIn("sizes=['small'] colors=['red']: 1 of 1 items", captured.output[0])

    def test_results_are_fresh_per_call(self) -> None:
        engine = SearchEngine([shirt(Size.SMALL, Color.RED)])
        first = engine.search(SearchOptions())
        second = engine.search(SearchOptions())
        self.assertIsNot(first.items, second.items)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_to_dict_shape(self) -> None:
        item = shirt(Size.MEDIUM, Color.YELLOW)
        data = SearchEngine([item]).search(SearchOptions()).to_dict()

        self.assertEqual(data["items"], [item.to_dict()])
        self.assertEqual([e["size"] for e in data["size_counts"]], ["small", "medium", "large"])
        self.assertEqual({e["color"]: e["count"] for e in data["color_counts"]}["yellow"], 1)


class SearchErrorsTestCase(unittest.TestCase):
    def test_unknown_size_in_query_fails_fast(self) -> None:
        engine = SearchEngine([shirt(Size.SMALL, Color.RED)])
        with self.assertRaises(UnknownFacetValueError):
            engine.search(SearchOptions(sizes=["small"]))  # type: ignore[list-item]

    def test_color_passed_as_size_is_rejected(self) -> None:
        engine = SearchEngine([])
        with self.assertRaises(UnknownFacetValueError):
            engine.search(SearchOptions(sizes=[Color.RED]))  # type: ignore[list-item]

    def test_item_with_unknown_color_is_rejected(self) -> None:
        bad = Item("x", "Bad", Size.SMALL, "purple")  # type: ignore[arg-type]
        with self.assertRaises(UnknownFacetValueError):
            SearchEngine([bad])

    def test_facet_counts_rejects_values_outside_universe(self) -> None:
        items = [shirt(Size.LARGE, Color.RED)]
        with self.assertRaises(UnknownFacetValueError):
            facet_counts(items, (Size.SMALL, Size.MEDIUM), lambda i: i.size)

    def test_lookup_of_missing_count(self) -> None:
        results = SearchEngine([]).search(SearchOptions())
        with self.assertRaises(UnknownFacetValueError):
            results.size_count(Color.RED)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
