"""Analytics accessors used by the dashboard."""

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.adapters.analytics.http import HttpAnalyticsAccessor
from vidhost.adapters.analytics.stub import StubAnalyticsAccessor

__all__ = [
    "AnalyticsAccessor",
    "HttpAnalyticsAccessor",
    "StubAnalyticsAccessor",
]
