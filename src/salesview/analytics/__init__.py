"""Analytics derived from the displayed page."""

from salesview.analytics.timeseries import aggregate

__all__ = ["aggregate"]
