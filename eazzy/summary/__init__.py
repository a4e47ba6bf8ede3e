"""Monthly summary package."""

from eazzy.summary.aggregator import MONTH_NAMES, in_period, summarize

__all__ = ["MONTH_NAMES", "in_period", "summarize"]
