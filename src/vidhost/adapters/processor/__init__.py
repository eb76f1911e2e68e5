"""Processor notification adapters."""

from vidhost.adapters.processor.base import ProcessorNotification, ProcessorTrigger
from vidhost.adapters.processor.http import HttpProcessorTrigger
from vidhost.adapters.processor.stub import StubProcessorTrigger

__all__ = [
    "HttpProcessorTrigger",
    "ProcessorNotification",
    "ProcessorTrigger",
    "StubProcessorTrigger",
]
