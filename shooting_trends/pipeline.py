"""Clean → aggregate → derive → fit, run once citywide and once per borough.

Every stage returns new objects; bundles are passed along as return values.
"""

import pandas as pd

from .cleaning import clean_records
from .config import BOROUGH_COMPARISONS, BOROUGHS
from .errors import TrendFitError
from .series import count_by_period, cumulative, fill_years, percent_change, yearly_from_daily
from .trend import fit_trend


def build_series(records, boro=None, year_range=None):
    """Derived series and the year-vs-percent-change trend for one borough (None = citywide).

    Yearly counts cover every year in year_range (first, last), zero-filled; by default the series' own span.
    Boroughs get the citywide range so their yearly series line up with each other.
    """
    label = boro or "CITYWIDE"
    first, last = year_range if year_range is not None else (None, None)
    daily = count_by_period(records, key="date", boro=boro)
    yearly = fill_years(yearly_from_daily(daily), first, last)
    yearly_pct = percent_change(yearly)

    year_trend, year_trend_error = None, None
    try:
        year_trend = fit_trend(yearly_pct.index, yearly_pct, x_label="Year",
                               y_label=f"{label.title()} % change in shootings")
    except TrendFitError as e:
        year_trend_error = str(e)
        print(f"    [{label}] Year trend undefined: {e}")

    return {
        "label": label,
        "daily": daily,
        "daily_cumulative": cumulative(daily),
        "yearly": yearly,
        "yearly_cumulative": cumulative(yearly),
        "yearly_pct_change": yearly_pct,
        "year_trend": year_trend,
        "year_trend_error": year_trend_error,
    }


def compare_boroughs(boro_x, boro_y, bundles):
    """Fit boro_y's yearly percent change on boro_x's, aligned on year. Raises TrendFitError if undefined."""
    pct_x = bundles[boro_x]["yearly_pct_change"].rename("x")
    pct_y = bundles[boro_y]["yearly_pct_change"].rename("y")
    aligned = pd.concat([pct_x, pct_y], axis=1, join="inner")
    return fit_trend(aligned["x"], aligned["y"],
                     x_label=f"{boro_x.title()} % change", y_label=f"{boro_y.title()} % change")


def run_analysis(raw, on_incomplete="drop", on_bad_date="raise", boroughs=None, comparisons=None):
    """Full analysis over raw rows. Returns dict: citywide, boroughs, comparisons, n_raw, n_clean.

    Every borough named in comparisons must also be in boroughs, else ValueError.
    """
    boroughs = BOROUGHS if boroughs is None else boroughs
    comparisons = BOROUGH_COMPARISONS if comparisons is None else comparisons
    if (missing := sorted({b for pair in comparisons for b in pair} - set(boroughs))):
        raise ValueError(f"Comparison boroughs not in boroughs: {missing}. boroughs={list(boroughs)}")

    print("Cleaning rows...")
    records = clean_records(raw, on_incomplete=on_incomplete, on_bad_date=on_bad_date)

    print("Aggregating citywide...")
    citywide = build_series(records)
    years = citywide["yearly"].index
    year_range = (int(years.min()), int(years.max())) if len(years) else None
    print(f"  Years: {years.tolist()}")

    print("Aggregating by borough...")
    by_boro = {}
    for boro in boroughs:
        by_boro[boro] = build_series(records, boro=boro, year_range=year_range)
        print(f"  {boro}: {int(by_boro[boro]['yearly'].sum()):,} incidents")

    print("Fitting borough comparisons...")
    fits = []
    for boro_x, boro_y in comparisons:
        try:
            model = compare_boroughs(boro_x, boro_y, by_boro)
        except TrendFitError as e:
            print(f"    [{boro_y} vs {boro_x}] Fit undefined: {e}")
            fits.append({"x_boro": boro_x, "y_boro": boro_y, "model": None, "error": str(e)})
            continue
        fits.append({"x_boro": boro_x, "y_boro": boro_y, "model": model, "error": None})

    return {
        "citywide": citywide,
        "boroughs": by_boro,
        "comparisons": fits,
        "n_raw": len(raw),
        "n_clean": len(records),
    }
