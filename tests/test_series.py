import random

import pandas as pd
import pytest

from shooting_trends.series import count_by_period, cumulative, fill_years, percent_change, yearly_from_daily


def records(pairs):
    return pd.DataFrame({
        "occur_date": [pd.Timestamp(d) for d, _ in pairs],
        "boro": [b for _, b in pairs],
    })


def yearly(pairs):
    counts = pd.Series(dict(pairs), name="count")
    counts.index.name = "period"
    return counts


SAMPLE = [
    ("2020-03-01", "BRONX"), ("2019-01-05", "QUEENS"), ("2020-03-01", "QUEENS"),
    ("2019-01-05", "BRONX"), ("2021-12-31", "BRONX"), ("2020-03-02", "BRONX"),
]


def test_count_by_date_sorted_ascending():
    counts = count_by_period(records(SAMPLE), key="date")
    assert counts.index.tolist() == [pd.Timestamp("2019-01-05"), pd.Timestamp("2020-03-01"),
                                     pd.Timestamp("2020-03-02"), pd.Timestamp("2021-12-31")]
    assert counts.tolist() == [2, 2, 1, 1]
    assert counts.index.name == "period"


def test_count_by_year_with_borough_filter():
    counts = count_by_period(records(SAMPLE), key="year", boro="bronx")
    assert counts.index.tolist() == [2019, 2020, 2021]
    assert counts.tolist() == [1, 2, 1]


def test_count_by_period_ignores_input_order():
    expected = count_by_period(records(SAMPLE), key="date")
    rng = random.Random(7)
    for _ in range(5):
        shuffled = SAMPLE[:]
        rng.shuffle(shuffled)
        pd.testing.assert_series_equal(count_by_period(records(shuffled), key="date"), expected)


def test_count_by_period_unknown_borough_is_empty():
    counts = count_by_period(records(SAMPLE), key="year", boro="STATEN ISLAND")
    assert len(counts) == 0


def test_count_by_period_rejects_unknown_key():
    with pytest.raises(ValueError):
        count_by_period(records(SAMPLE), key="month")


def test_yearly_from_daily_matches_direct_yearly_count():
    df = records(SAMPLE)
    from_daily = yearly_from_daily(count_by_period(df, key="date"))
    assert from_daily.index.tolist() == [2019, 2020, 2021]
    assert from_daily.tolist() == count_by_period(df, key="year").tolist()


def test_cumulative_is_monotone_and_ends_at_total():
    counts = count_by_period(records(SAMPLE), key="date")
    cum = cumulative(counts)
    assert len(cum) == len(counts)
    assert cum.is_monotonic_increasing
    assert cum.iloc[-1] == counts.sum()
    assert cum.index.equals(counts.index)


def test_cumulative_scenario_one():
    counts = count_by_period(records([("2020-01-01", "BRONX"), ("2020-01-01", "BRONX")]), key="date")
    cum = cumulative(counts)
    assert list(cum.items()) == [(pd.Timestamp("2020-01-01"), 2)]


def test_percent_change_scenario_two():
    pct = percent_change(yearly([(2018, 10), (2019, 20), (2020, 15)]))
    assert pct.index.tolist() == [2019, 2020]
    assert pct.tolist() == pytest.approx([100.0, -25.0])


def test_percent_change_after_zero_year_is_undefined():
    pct = percent_change(yearly([(2018, 0), (2019, 5)]))
    assert pct.index.tolist() == [2019]
    assert pct.iloc[0] is pd.NA


def test_percent_change_keeps_alignment_around_undefined_value():
    pct = percent_change(yearly([(2017, 4), (2018, 0), (2019, 5), (2020, 10)]))
    assert pct.index.tolist() == [2018, 2019, 2020]
    assert pct.iloc[0] == pytest.approx(-100.0)
    assert pct.iloc[1] is pd.NA
    assert pct.iloc[2] == pytest.approx(100.0)


def test_percent_change_length_and_formula():
    counts = yearly([(2015, 3), (2016, 7), (2017, 7), (2018, 2), (2019, 9)])
    pct = percent_change(counts)
    assert len(pct) == len(counts) - 1
    for i in range(1, len(counts)):
        assert pct.iloc[i - 1] == pytest.approx((counts.iloc[i] / counts.iloc[i - 1] - 1) * 100)


def test_percent_change_single_period_is_empty():
    assert len(percent_change(yearly([(2020, 5)]))) == 0


def test_fill_years_zero_fills_gaps_in_own_span():
    filled = fill_years(yearly([(2017, 4), (2019, 5)]))
    assert filled.to_dict() == {2017: 4, 2018: 0, 2019: 5}
    assert filled.index.name == "period"


def test_fill_years_extends_to_given_range():
    filled = fill_years(yearly([(2019, 5)]), 2018, 2020)
    assert filled.to_dict() == {2018: 0, 2019: 5, 2020: 0}


def test_fill_years_empty_without_range_stays_empty():
    empty = count_by_period(records(SAMPLE), key="year", boro="STATEN ISLAND")
    assert len(fill_years(empty)) == 0


def test_percent_change_over_filled_gap():
    pct = percent_change(fill_years(yearly([(2017, 4), (2019, 5)])))
    assert pct.index.tolist() == [2018, 2019]
    assert pct.iloc[0] == pytest.approx(-100.0)
    assert pct.iloc[1] is pd.NA
