"""Exceptions raised by the cleaning, aggregation and trend steps."""


class DataQualityError(ValueError):
    """Input rows are empty, lack required columns, or fail the incomplete-row policy."""


class DateParseError(ValueError):
    """OCCUR_DATE value could not be parsed as MM/DD/YYYY."""

    def __init__(self, values):
        self.values = list(values)
        preview = ", ".join(repr(v) for v in self.values[:5])
        more = f" (+{len(self.values) - 5} more)" if len(self.values) > 5 else ""
        super().__init__(f"Unparseable OCCUR_DATE values: {preview}{more}")


class TrendFitError(ValueError):
    """OLS fit is undefined for the given inputs."""
