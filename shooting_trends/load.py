"""Fetch the NYPD shooting CSV (cached on disk) and read it into a DataFrame."""

import io
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd
import requests

from .config import REQUIRED_COLS

ENCODINGS = ["utf-8", "utf-8-sig", "latin1", "cp1252"]


def cache_is_fresh(cache_path, max_age_days):
    """True if cache_path exists and was written less than max_age_days ago."""
    cache_path = Path(cache_path)
    if not cache_path.exists():
        return False
    modified = datetime.fromtimestamp(cache_path.stat().st_mtime)
    return datetime.now() - modified < timedelta(days=max_age_days)


def download_dataset(url, cache_path, max_age_days=30, timeout=60):
    """Download url to cache_path unless a fresh cache exists. Returns cache_path."""
    cache_path = Path(cache_path)
    if cache_is_fresh(cache_path, max_age_days):
        print(f"Loading shooting data from cache: {cache_path}")
        return cache_path
    print(f"Cache expired or missing, downloading: {url}")
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_bytes(resp.content)
    print(f"  Saved: {cache_path} ({len(resp.content):,} bytes)")
    return cache_path


def read_raw_csv(source):
    """Read the raw CSV (path or bytes), trying several encodings. Required columns are kept as strings."""
    last_error = None
    for encoding in ENCODINGS:
        handle = io.BytesIO(source) if isinstance(source, bytes) else source
        try:
            return pd.read_csv(handle, encoding=encoding, low_memory=False,
                               dtype={col: str for col in REQUIRED_COLS})
        except (UnicodeDecodeError, UnicodeError) as exc:
            last_error = exc
            continue
    raise last_error


def load_raw(settings):
    """Raw rows from settings["data_path"] if set, else from the cached download."""
    if settings.get("data_path") is not None:
        path = Path(settings["data_path"])
        print(f"Loading: {path}")
    else:
        path = download_dataset(settings["data_url"], settings["cache_path"], settings["cache_max_age_days"])
    df = read_raw_csv(path)
    print(f"  Rows: {len(df):,}, Columns: {len(df.columns)}")
    return df
