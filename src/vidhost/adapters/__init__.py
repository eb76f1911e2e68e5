"""Adapters for external services."""

from vidhost.adapters.analytics.base import AnalyticsAccessor
from vidhost.adapters.processor.base import ProcessorTrigger
from vidhost.adapters.storage.base import ObjectStore

__all__ = [
    "AnalyticsAccessor",
    "ObjectStore",
    "ProcessorTrigger",
]
