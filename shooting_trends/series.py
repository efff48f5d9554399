"""Period counts and the series derived from them.

A Period Count series is a pandas Series indexed by period (Timestamp for daily, int for yearly),
index name "period", sorted ascending. count_by_period() establishes that order; cumulative() and
percent_change() rely on it and do not re-sort.
"""

import pandas as pd

PERIOD_KEYS = ("date", "year")


def _as_period_counts(counts, is_year):
    counts = counts.sort_index().astype("int64").rename("count")
    if is_year:
        counts.index = counts.index.astype("int64")
    counts.index.name = "period"
    return counts


def count_by_period(records, key="date", boro=None):
    """Count cleaned records per period (key="date" or "year"), optionally for one borough."""
    if key not in PERIOD_KEYS:
        raise ValueError(f"key must be one of {PERIOD_KEYS}, got {key!r}")
    df = records if boro is None else records[records["boro"] == str(boro).strip().upper()]
    dates = pd.to_datetime(df["occur_date"])
    periods = dates if key == "date" else dates.dt.year
    counts = df.groupby(periods.rename("period")).size()
    return _as_period_counts(counts, is_year=key == "year")


def yearly_from_daily(daily):
    """Re-aggregate a daily Period Count series to calendar years."""
    years = pd.DatetimeIndex(daily.index).year
    return _as_period_counts(daily.groupby(years).sum(), is_year=True)


def fill_years(yearly, first=None, last=None):
    """Reindex a yearly Period Count series over every year first..last, with 0 for years without records.

    first/last default to the series' own span. Percent change is only year-over-year on a contiguous range.
    """
    if first is None or last is None:
        if len(yearly) == 0:
            return yearly
        first, last = int(yearly.index.min()), int(yearly.index.max())
    years = pd.RangeIndex(first, last + 1, name="period")
    return _as_period_counts(yearly.reindex(years, fill_value=0), is_year=True)


def cumulative(counts):
    """Running total of a sorted Period Count series."""
    return counts.cumsum().rename("cumulative_count")


def percent_change(counts):
    """Period-over-period percent change: (count_i / count_{i-1} - 1) * 100 for i > 0.

    The first period has no predecessor and is omitted. A zero prior count gives pd.NA (nullable Float64),
    kept in place so the index still lines up with the periods.
    """
    prev = counts.shift(1).iloc[1:].astype("Float64")
    cur = counts.iloc[1:].astype("Float64")
    pct = (cur / prev.where(prev > 0) - 1) * 100
    return pct.rename("pct_change")
