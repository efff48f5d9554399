"""Ordinary least squares trend fits between two aligned numeric series."""

import numpy as np
import pandas as pd
import statsmodels.api as sm

from .errors import TrendFitError


def _to_float_array(values):
    """Array-like (possibly nullable) to float64 ndarray with NaN for missing."""
    return pd.Series(values, dtype="Float64").to_numpy(dtype=np.float64, na_value=np.nan)


def fit_trend(x, y, x_label="x", y_label="y"):
    """Fit y = intercept + slope * x by OLS.

    Pairs where either value is missing are removed first. Raises TrendFitError if x and y differ in
    length, fewer than 2 pairs remain, or x is constant.
    Returns dict: slope, intercept, r_squared, n_obs, n_dropped, x, y, predicted, x_label, y_label.
    """
    x_arr = _to_float_array(x)
    y_arr = _to_float_array(y)
    if len(x_arr) != len(y_arr):
        raise TrendFitError(f"x and y must be the same length ({len(x_arr)} != {len(y_arr)})")
    valid = np.isfinite(x_arr) & np.isfinite(y_arr)
    x_arr, y_arr = x_arr[valid], y_arr[valid]
    n_dropped = int((~valid).sum())
    if len(x_arr) < 2:
        raise TrendFitError(f"Need at least 2 valid (x, y) pairs to fit {y_label} on {x_label}, got {len(x_arr)}")
    if np.ptp(x_arr) == 0:
        raise TrendFitError(f"{x_label} has zero variance; slope is undefined")

    res = sm.OLS(y_arr, sm.add_constant(x_arr, has_constant="add")).fit()
    intercept, slope = float(res.params[0]), float(res.params[1])
    predicted = intercept + slope * x_arr
    # statsmodels reports nan when y is constant (centered TSS == 0); the line then fits exactly
    ss_tot = float(np.sum((y_arr - y_arr.mean()) ** 2))
    r_squared = float(res.rsquared) if ss_tot > 0 else 1.0
    return {
        "slope": slope,
        "intercept": intercept,
        "r_squared": r_squared,
        "n_obs": int(len(x_arr)),
        "n_dropped": n_dropped,
        "x": x_arr,
        "y": y_arr,
        "predicted": predicted,
        "x_label": x_label,
        "y_label": y_label,
    }


def predict(model, x):
    """Evaluate a fitted trend line at new x values."""
    return model["intercept"] + model["slope"] * np.asarray(x, dtype=np.float64)


def format_trend(model):
    """One-line regression summary, e.g. for printing or the report."""
    return (f"{model['y_label']} = {model['intercept']:.3f} + {model['slope']:.3f} * {model['x_label']} "
            f"(R² = {model['r_squared']:.3f}, n = {model['n_obs']})")
