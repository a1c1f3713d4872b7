from __future__ import annotations

import unittest

import numpy as np

from luvatrix_charts import ChartDataError
from luvatrix_charts.adapters import normalize_series
from luvatrix_charts.dimensions import ViewDimensions
from luvatrix_charts.scales import (
    BandScale,
    LinearScale,
    generate_nice_ticks,
    get_x_domain,
    get_x_scale,
    get_y_domain,
    get_y_scale,
    tick_labels,
)


def _series(values, names=None):
    names = names if names is not None else [f"s{i}" for i in range(len(values))]
    return normalize_series(list(zip(names, values)))


class DomainTests(unittest.TestCase):
    def test_continuous_domain_anchors_positive_data_at_zero(self) -> None:
        self.assertEqual(get_x_domain(_series([5, 10, 15])), (0.0, 15.0))

    def test_continuous_domain_anchors_negative_data_at_zero(self) -> None:
        self.assertEqual(get_x_domain(_series([-5, -1])), (-5.0, 0.0))

    def test_continuous_domain_mixed_sign(self) -> None:
        self.assertEqual(get_x_domain(_series([-3, 8])), (-3.0, 8.0))

    def test_empty_series_yields_degenerate_domain(self) -> None:
        self.assertEqual(get_x_domain(normalize_series([])), (0.0, 0.0))
        self.assertEqual(get_y_domain(normalize_series([])), ())

    def test_ordinal_domain_is_unique_in_first_seen_order(self) -> None:
        series = _series([1, 2, 3, 4], names=["b", "a", "b", "c"])
        self.assertEqual(get_y_domain(series), ("b", "a", "c"))


class LinearScaleTests(unittest.TestCase):
    def test_linear_interpolation_and_extrapolation(self) -> None:
        scale = LinearScale(domain=(0, 15), range=(0, 300))
        self.assertAlmostEqual(scale(7.5), 150.0)
        self.assertAlmostEqual(scale(30), 600.0)
        self.assertAlmostEqual(scale(-15), -300.0)

    def test_clamp_is_opt_in(self) -> None:
        scale = LinearScale(domain=(0, 15), range=(0, 300), clamp=True)
        self.assertAlmostEqual(scale(30), 300.0)
        self.assertAlmostEqual(scale(-1), 0.0)

    def test_vectorized_evaluation(self) -> None:
        scale = LinearScale(domain=(0, 10), range=(0, 100))
        out = scale(np.asarray([0.0, 5.0, 10.0]))
        np.testing.assert_allclose(out, [0.0, 50.0, 100.0])

    def test_degenerate_domain_maps_to_range_start(self) -> None:
        scale = LinearScale(domain=(0, 0), range=(0, 250))
        self.assertTrue(scale.is_degenerate)
        self.assertEqual(scale(0), 0.0)
        self.assertEqual(scale(42), 0.0)

    def test_invert_round_trips_single_value(self) -> None:
        scale = LinearScale(domain=(-5, 15), range=(0, 400))
        self.assertAlmostEqual(scale.invert(scale(3.0)), 3.0)

    def test_ticks_stay_inside_domain(self) -> None:
        scale = LinearScale(domain=(0, 15), range=(0, 300))
        self.assertEqual(scale.ticks(4), (0.0, 5.0, 10.0, 15.0))

    def test_nice_extends_domain_to_round_values(self) -> None:
        scale = LinearScale(domain=(0, 13.7), range=(0, 300)).nice(5)
        self.assertEqual(scale.domain, (0.0, 15.0))

    def test_non_numeric_input_fails_fast(self) -> None:
        scale = LinearScale(domain=(0, 1), range=(0, 1))
        with self.assertRaises(ChartDataError):
            scale("12")

    def test_scales_compare_by_value(self) -> None:
        series = _series([5, 10, 15])
        dims = ViewDimensions(width=300, height=200)
        self.assertEqual(get_x_scale(series, dims), get_x_scale(series, dims))
        self.assertEqual(get_x_scale(series, dims).range, (0.0, 300.0))


class BandScaleTests(unittest.TestCase):
    def test_three_bands_increase_with_inner_padding(self) -> None:
        scale = BandScale(domain=("a", "b", "c"), range=(0, 100))
        starts = [scale(label) for label in ("a", "b", "c")]
        self.assertTrue(starts[0] < starts[1] < starts[2])
        self.assertAlmostEqual(scale.step, 100 / 2.8)
        self.assertAlmostEqual(scale.bandwidth, scale.step * 0.8)
        self.assertAlmostEqual(starts[0], 0.0)
        self.assertAlmostEqual(starts[2] + scale.bandwidth, 100.0)

    def test_single_label_gets_one_padded_band(self) -> None:
        scale = BandScale(domain=("only",), range=(0, 100))
        self.assertAlmostEqual(scale.bandwidth, 80.0)
        self.assertEqual(scale.band("only"), (10.0, 90.0))

    def test_reversed_range_puts_first_label_nearest_range_start(self) -> None:
        series = _series([1, 2, 3], names=["a", "b", "c"])
        scale = get_y_scale(series, ViewDimensions(width=100, height=100))
        self.assertEqual(scale.range, (100.0, 0.0))
        self.assertGreater(scale("a"), scale("b"))
        self.assertGreater(scale("b"), scale("c"))

    def test_rounded_bands_use_integer_steps(self) -> None:
        scale = BandScale(domain=("a", "b", "c"), range=(0, 100), rounded=True)
        self.assertEqual(scale.step, 35.0)
        self.assertEqual(scale.bandwidth, 28.0)

    def test_empty_domain_is_degenerate(self) -> None:
        scale = BandScale(domain=(), range=(0, 100))
        self.assertEqual(scale.bandwidth, 0.0)
        self.assertIsNone(scale("a"))
        self.assertIsNone(scale.band("a"))

    def test_unknown_label_has_no_band(self) -> None:
        scale = BandScale(domain=("a",), range=(0, 100))
        self.assertIsNone(scale("z"))
        self.assertNotIn("z", scale)

    def test_invalid_padding_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BandScale(domain=("a",), range=(0, 1), padding_inner=1.5)

    def test_rebuilding_with_same_inputs_is_identical(self) -> None:
        series = _series([3, 1], names=["x", "y"])
        dims = ViewDimensions(width=50, height=80)
        first = get_y_scale(series, dims)
        second = get_y_scale(series, dims)
        self.assertEqual(first, second)
        self.assertEqual((first("x"), first.bandwidth), (second("x"), second.bandwidth))


class NiceTickTests(unittest.TestCase):
    def test_nice_ticks_cover_range(self) -> None:
        ticks = generate_nice_ticks(0.0, 97.0, 5)
        self.assertEqual(float(ticks[0]), 0.0)
        self.assertGreaterEqual(float(ticks[-1]), 97.0)

    def test_nice_ticks_accept_reversed_bounds(self) -> None:
        np.testing.assert_allclose(generate_nice_ticks(15.0, 0.0, 4), [0.0, 5.0, 10.0, 15.0])

    def test_tick_labels_use_consistent_decimals(self) -> None:
        self.assertEqual(tick_labels(np.asarray([1.5, 2.0, 2.5])), ("1.5", "2", "2.5"))
        self.assertEqual(tick_labels((20.0, 30.0, 40.0)), ("20", "30", "40"))
        self.assertEqual(tick_labels(()), ())

    def test_fractional_steps_label_without_float_noise(self) -> None:
        labels = tick_labels(generate_nice_ticks(0.0, 1.0, 11))
        self.assertEqual(labels, tuple(["0"] + [f"0.{i}" for i in range(1, 10)] + ["1"]))


if __name__ == "__main__":
    unittest.main()
