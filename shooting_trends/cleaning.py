"""Row cleaning for the NYPD shooting CSV: murder-flag filter, required-field filter, date parsing.

Two policies control what happens to bad rows:
- on_incomplete: "drop" (default) silently drops rows missing OCCUR_DATE or BORO and only prints the count;
  "raise" fails the run with DataQualityError. Dropping hides data loss, so the count is always printed.
- on_bad_date: "raise" (default) aborts on the first batch of unparseable dates; "skip" drops them.
"""

import numpy as np
import pandas as pd

from .config import BAD_DATE_POLICIES, BORO_COL, DATE_COL, INCOMPLETE_POLICIES, MURDER_FLAG_COL, REQUIRED_COLS
from .errors import DataQualityError, DateParseError

DATE_FORMAT = "%m/%d/%Y"
TRUE_VALUES = {"TRUE", "T", "Y", "YES", "1"}
FALSE_VALUES = {"FALSE", "F", "N", "NO", "0"}


def parse_murder_flag(val):
    """Return True/False for a STATISTICAL_MURDER_FLAG value, None if missing or unrecognised."""
    if isinstance(val, (bool, np.bool_)):
        return bool(val)
    if pd.isna(val):
        return None
    v = str(val).strip().upper()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    return None


def is_blank(series):
    """Boolean mask: value is NaN, empty, or a stringified null ("nan", "None")."""
    return series.isna() | series.astype(str).str.strip().isin(["", "nan", "None"])


def parse_occur_date(val):
    """Parse one MM/DD/YYYY string to a midnight Timestamp. Returns pd.NaT if missing or invalid."""
    if pd.isna(val) or str(val).strip() in ("", "nan", "None"):
        return pd.NaT
    v = str(val).strip()
    if "/" not in v or len(v.split("/")) != 3:
        return pd.NaT
    return pd.to_datetime(v, format=DATE_FORMAT, errors="coerce")


def filter_records(df, on_incomplete="drop"):
    """Keep non-murder rows with both OCCUR_DATE and BORO, projected to (occur_date, boro).

    Returns a new DataFrame; the input is not modified. occur_date is still the raw string here,
    see normalize_dates(). boro is stripped and upper-cased.
    """
    if on_incomplete not in INCOMPLETE_POLICIES:
        raise ValueError(f"on_incomplete must be one of {INCOMPLETE_POLICIES}, got {on_incomplete!r}")
    if df is None or len(df) == 0:
        raise DataQualityError("Input dataset has no rows")
    if (missing := [c for c in REQUIRED_COLS if c not in df.columns]):
        raise DataQualityError(f"Input dataset missing required columns: {missing}. Found: {df.columns.tolist()}")

    # Step 1: non-murder rows only (missing/unrecognised flag is not "false")
    is_non_murder = df[MURDER_FLAG_COL].map(lambda v: parse_murder_flag(v) is False).astype(bool)
    df_non_murder = df[is_non_murder]

    # Step 2: required fields present
    incomplete = is_blank(df_non_murder[DATE_COL]) | is_blank(df_non_murder[BORO_COL])
    n_incomplete = int(incomplete.sum())
    if n_incomplete and on_incomplete == "raise":
        raise DataQualityError(f"{n_incomplete:,} non-murder rows missing {DATE_COL} or {BORO_COL}")
    df_complete = df_non_murder[~incomplete]

    print(f"  Rows loaded:                    {len(df):>10,}")
    print(f"  Rows dropped (murder flag):     {len(df) - len(df_non_murder):>10,}")
    print(f"  Rows dropped (missing fields):  {n_incomplete:>10,}")
    print(f"  Rows kept:                      {len(df_complete):>10,}")

    return pd.DataFrame({
        "occur_date": df_complete[DATE_COL].astype(str).str.strip().to_numpy(),
        "boro": df_complete[BORO_COL].astype(str).str.strip().str.upper().to_numpy(),
    })


def normalize_dates(records, on_bad_date="raise"):
    """Replace the occur_date strings with parsed midnight Timestamps. Returns a new DataFrame."""
    if on_bad_date not in BAD_DATE_POLICIES:
        raise ValueError(f"on_bad_date must be one of {BAD_DATE_POLICIES}, got {on_bad_date!r}")
    parsed = pd.to_datetime(records["occur_date"].apply(parse_occur_date))
    bad = parsed.isna()
    if bad.any():
        if on_bad_date == "raise":
            raise DateParseError(records.loc[bad, "occur_date"].tolist())
        print(f"  Rows dropped (bad {DATE_COL}):     {int(bad.sum()):>10,}")
    return (records.loc[~bad]
            .assign(occur_date=parsed[~bad].dt.normalize())
            .reset_index(drop=True))


def clean_records(df, on_incomplete="drop", on_bad_date="raise"):
    """filter_records() then normalize_dates()."""
    return normalize_dates(filter_records(df, on_incomplete=on_incomplete), on_bad_date=on_bad_date)

"""MIT License

Creative Commons CC-BY-SA 4.0 2026 Diego Aguilar-Canabal"""
