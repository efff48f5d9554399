"""Report configuration: module constants with environment-variable overrides.

No CLI flags. Each setting can be overridden by the env var listed in ENV_VARS,
e.g. SHOOTING_DATA_PATH=./NYPD_Shooting_Incident_Data__Historic_.csv to skip the download.
"""

import os
from pathlib import Path

# NYC Open Data: NYPD Shooting Incident Data (Historic)
DATA_URL = "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"
CACHE_PATH = Path.cwd() / "nypd_shooting_cache.csv"
CACHE_MAX_AGE_DAYS = 30
OUTPUT_DIR = Path.cwd() / "report"

# Column names (from the Open Data CSV header)
DATE_COL = "OCCUR_DATE"
BORO_COL = "BORO"
MURDER_FLAG_COL = "STATISTICAL_MURDER_FLAG"
REQUIRED_COLS = [MURDER_FLAG_COL, DATE_COL, BORO_COL]

BOROUGHS = ["BRONX", "BROOKLYN", "MANHATTAN", "QUEENS", "STATEN ISLAND"]

# Borough pairs (x, y) whose yearly percent-change series are fit against each other
BOROUGH_COMPARISONS = [("BRONX", "BROOKLYN"), ("QUEENS", "MANHATTAN")]

INCOMPLETE_POLICIES = ("drop", "raise")
BAD_DATE_POLICIES = ("raise", "skip")

ENV_VARS = {
    "data_url": "SHOOTING_DATA_URL",
    "data_path": "SHOOTING_DATA_PATH",
    "cache_path": "SHOOTING_CACHE_PATH",
    "cache_max_age_days": "SHOOTING_CACHE_MAX_AGE_DAYS",
    "output_dir": "SHOOTING_OUTPUT_DIR",
    "on_incomplete": "SHOOTING_ON_INCOMPLETE",
    "on_bad_date": "SHOOTING_ON_BAD_DATE",
}


def load_settings(environ=None):
    """Return the settings dict, applying overrides from environ (defaults to os.environ)."""
    env = os.environ if environ is None else environ

    def get(key):
        return env.get(ENV_VARS[key], "").strip() or None

    data_path = get("data_path")
    max_age = get("cache_max_age_days")
    try:
        max_age_days = int(max_age) if max_age is not None else CACHE_MAX_AGE_DAYS
    except ValueError:
        raise ValueError(f"{ENV_VARS['cache_max_age_days']} must be an integer, got {max_age!r}") from None

    settings = {
        "data_url": get("data_url") or DATA_URL,
        "data_path": Path(data_path) if data_path else None,
        "cache_path": Path(get("cache_path") or CACHE_PATH),
        "cache_max_age_days": max_age_days,
        "output_dir": Path(get("output_dir") or OUTPUT_DIR),
        "on_incomplete": (get("on_incomplete") or "drop").lower(),
        "on_bad_date": (get("on_bad_date") or "raise").lower(),
    }
    if settings["on_incomplete"] not in INCOMPLETE_POLICIES:
        raise ValueError(f"{ENV_VARS['on_incomplete']} must be one of {INCOMPLETE_POLICIES}, "
                         f"got {settings['on_incomplete']!r}")
    if settings["on_bad_date"] not in BAD_DATE_POLICIES:
        raise ValueError(f"{ENV_VARS['on_bad_date']} must be one of {BAD_DATE_POLICIES}, "
                         f"got {settings['on_bad_date']!r}")
    return settings
