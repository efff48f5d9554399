import numpy as np
import pandas as pd
import pytest

from shooting_trends.errors import TrendFitError
from shooting_trends.trend import fit_trend, format_trend, predict


def test_exact_line_is_recovered():
    x = [1, 2, 3, 4, 5]
    y = [2 * v + 3 for v in x]
    model = fit_trend(x, y)
    assert model["slope"] == pytest.approx(2.0)
    assert model["intercept"] == pytest.approx(3.0)
    assert model["r_squared"] == pytest.approx(1.0)
    assert model["predicted"] == pytest.approx(np.array(y, dtype=float))
    assert model["n_obs"] == 5
    assert model["n_dropped"] == 0


def test_two_points_are_enough():
    model = fit_trend([0, 1], [3, 5])
    assert model["slope"] == pytest.approx(2.0)
    assert model["intercept"] == pytest.approx(3.0)
    assert model["r_squared"] == pytest.approx(1.0)


def test_noisy_fit_matches_numpy_polyfit():
    rng = np.random.default_rng(0)
    x = np.arange(2006, 2023, dtype=float)
    y = -1.5 * x + 3000 + rng.normal(0, 5, size=len(x))
    model = fit_trend(x, y)
    slope, intercept = np.polyfit(x, y, 1)
    assert model["slope"] == pytest.approx(slope)
    assert model["intercept"] == pytest.approx(intercept, rel=1e-6)
    assert 0 < model["r_squared"] < 1


def test_missing_pairs_are_removed_before_fitting():
    x = pd.Series([2019, 2020, 2021, 2022])
    y = pd.Series([pd.NA, 10.0, 20.0, 30.0], dtype="Float64")
    model = fit_trend(x, y)
    assert model["n_obs"] == 3
    assert model["n_dropped"] == 1
    assert model["slope"] == pytest.approx(10.0)


def test_fewer_than_two_points_is_rejected():
    with pytest.raises(TrendFitError):
        fit_trend([1], [2])
    with pytest.raises(TrendFitError):
        fit_trend([], [])


def test_fewer_than_two_valid_points_is_rejected():
    y = pd.Series([pd.NA, 4.0], dtype="Float64")
    with pytest.raises(TrendFitError):
        fit_trend([2019, 2020], y)


def test_zero_variance_x_is_rejected():
    with pytest.raises(TrendFitError, match="zero variance"):
        fit_trend([2020, 2020, 2020], [1, 2, 3])


def test_mismatched_lengths_are_rejected():
    with pytest.raises(TrendFitError):
        fit_trend([1, 2, 3], [1, 2])


def test_constant_y_is_a_perfect_flat_fit():
    model = fit_trend([1, 2, 3], [4, 4, 4])
    assert model["slope"] == pytest.approx(0.0, abs=1e-12)
    assert model["r_squared"] == 1.0


def test_predict_and_format():
    model = fit_trend([1, 2, 3], [5, 7, 9], x_label="Year", y_label="% change")
    assert predict(model, [10]) == pytest.approx([23.0])
    assert format_trend(model).startswith("% change = 3.000 + 2.000 * Year")
