"""NYPD shooting incident trends: cleaning, period aggregation, OLS trend fits and report rendering."""

__version__ = "0.1.0"
