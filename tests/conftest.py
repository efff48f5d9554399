import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


def make_raw(rows):
    """Raw DataFrame in the Open Data column layout from (date, boro, murder_flag) tuples."""
    return pd.DataFrame(rows, columns=["OCCUR_DATE", "BORO", "STATISTICAL_MURDER_FLAG"])


@pytest.fixture
def raw_multi_year():
    """Citywide 10/20/15 non-murder victims in 2018/2019/2020, split over two boroughs, plus murders."""
    rows = []
    for year, bronx, brooklyn in [(2018, 4, 6), (2019, 8, 12), (2020, 5, 10)]:
        rows += [(f"03/15/{year}", "BRONX", "false")] * bronx
        rows += [(f"07/04/{year}", "BROOKLYN", "false")] * brooklyn
        rows += [(f"07/04/{year}", "BROOKLYN", "true")] * 3
    return make_raw(rows)
