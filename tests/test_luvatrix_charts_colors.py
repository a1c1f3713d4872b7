from __future__ import annotations

import unittest

from luvatrix_charts import ChartDataError
from luvatrix_charts.colors import COLOR_SCHEMES, DEFAULT_SCHEME, ColorMap, color_helper, resolve_scheme


class ColorHelperTests(unittest.TestCase):
    def test_ordinal_assigns_palette_in_domain_order(self) -> None:
        palette = COLOR_SCHEMES["cool"].colors
        colors = color_helper("cool", "ordinal", ["a", "b", "c"])
        self.assertEqual([colors("a"), colors("b"), colors("c")], list(palette[:3]))

    def test_ordinal_cycles_palette(self) -> None:
        palette = COLOR_SCHEMES["vivid"].colors
        domain = [f"label-{i}" for i in range(len(palette) + 2)]
        colors = color_helper("vivid", "ordinal", domain)
        self.assertEqual(colors(domain[len(palette)]), palette[0])
        self.assertEqual(colors(domain[len(palette) + 1]), palette[1])

    def test_duplicate_domain_labels_keep_first_slot(self) -> None:
        colors = color_helper(["#111111", "#222222", "#333333"], "ordinal", ["a", "a", "b"])
        self.assertEqual(colors.domain, ("a", "b"))
        self.assertEqual(colors("b"), "#222222")

    def test_identical_inputs_give_identical_colors(self) -> None:
        domain = ["x", "y", "z", "w"]
        custom = {"y": "#abcdef"}
        first = color_helper("natural", "ordinal", domain, custom)
        second = color_helper("natural", "ordinal", domain, custom)
        self.assertEqual(first, second)
        for _ in range(3):
            self.assertEqual([first(label) for label in domain], [second(label) for label in domain])

    def test_custom_mapping_overrides_palette(self) -> None:
        colors = color_helper("vivid", "ordinal", ["a", "b"], {"b": "#000000"})
        self.assertEqual(colors("b"), "#000000")
        self.assertEqual(colors("a"), COLOR_SCHEMES["vivid"].colors[0])

    def test_custom_override_wins_for_cycled_index(self) -> None:
        palette = COLOR_SCHEMES["fire"].colors
        domain = [str(i) for i in range(len(palette) + 1)]
        late = domain[-1]
        colors = color_helper("fire", "ordinal", domain, {late: "#123456"})
        self.assertEqual(colors(late), "#123456")

    def test_custom_records_match_case_insensitively(self) -> None:
        colors = color_helper("vivid", "ordinal", ["Germany", "France"], [{"name": "germany", "value": "#a10a28"}])
        self.assertEqual(colors("Germany"), "#a10a28")
        self.assertEqual(colors("France"), COLOR_SCHEMES["vivid"].colors[1])

    def test_custom_callable_falls_through_on_none(self) -> None:
        colors = color_helper("vivid", "ordinal", ["a", "b"], lambda label: "#ffffff" if label == "a" else None)
        self.assertEqual(colors("a"), "#ffffff")
        self.assertEqual(colors("b"), COLOR_SCHEMES["vivid"].colors[1])

    def test_malformed_custom_records_rejected(self) -> None:
        with self.assertRaises(ValueError):
            color_helper("vivid", "ordinal", ["a"], [{"label": "a"}])

    def test_unknown_scheme_falls_back_and_logs(self) -> None:
        with self.assertLogs("luvatrix_charts.colors", level="WARNING") as logs:
            colors = color_helper("not-a-scheme", "ordinal", ["a"])
        self.assertEqual(colors.scheme, COLOR_SCHEMES[DEFAULT_SCHEME])
        self.assertIn("not-a-scheme", logs.output[0])

    def test_explicit_color_sequence(self) -> None:
        scheme = resolve_scheme(["#010101", "#020202"])
        self.assertEqual(scheme.colors, ("#010101", "#020202"))

    def test_labels_outside_domain_get_stable_palette_color(self) -> None:
        colors = color_helper("vivid", "ordinal", ["a"])
        out = colors("stranger")
        self.assertIn(out, COLOR_SCHEMES["vivid"].colors)
        self.assertEqual(out, color_helper("vivid", "ordinal", ["a"])("stranger"))

    def test_empty_domain_is_still_total(self) -> None:
        colors = color_helper(None, "ordinal", [])
        self.assertIn(colors("anything"), COLOR_SCHEMES[DEFAULT_SCHEME].colors)

    def test_unknown_scale_type_rejected(self) -> None:
        with self.assertRaises(ValueError):
            color_helper("vivid", "radial", ["a"])  # type: ignore[arg-type]


class ContinuousColorTests(unittest.TestCase):
    def test_linear_interpolates_between_stops(self) -> None:
        colors = color_helper(["#000000", "#ffffff"], "linear", [0, 10])
        self.assertEqual(colors(0), "#000000")
        self.assertEqual(colors(10), "#ffffff")
        self.assertEqual(colors(5), "#808080")
        self.assertEqual(colors(50), "#ffffff")

    def test_linear_requires_numeric_domain(self) -> None:
        with self.assertRaises(ChartDataError):
            color_helper(["#000000", "#ffffff"], "linear", ["a", "b"])

    def test_quantile_bins_by_domain_distribution(self) -> None:
        palette = ["#000001", "#000002", "#000003", "#000004"]
        colors = color_helper(palette, "quantile", list(range(1, 9)))
        self.assertEqual(colors(1), palette[0])
        self.assertEqual(colors(4), palette[1])
        self.assertEqual(colors(8), palette[3])

    def test_color_map_is_value_object(self) -> None:
        scheme = resolve_scheme("ocean")
        self.assertEqual(
            ColorMap(scheme=scheme, scale_type="ordinal", domain=("a",)),
            ColorMap(scheme=scheme, scale_type="ordinal", domain=("a",)),
        )

    def test_color_map_with_mapping_overrides_is_hashable(self) -> None:
        first = color_helper("ocean", "ordinal", ["a", "b"], {"a": "#000000"})
        second = color_helper("ocean", "ordinal", ["a", "b"], {"a": "#000000"})
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(len({first, second}), 1)
        self.assertNotEqual(first, color_helper("ocean", "ordinal", ["a", "b"], {"a": "#ffffff"}))


if __name__ == "__main__":
    unittest.main()
