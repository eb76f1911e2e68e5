"""Application services."""

from vidhost.services.processing import process_video
from vidhost.services.reconcile import ReconcileReport, reconcile
from vidhost.services.upload import UploadPipeline, get_object_store, get_processor_trigger

__all__ = [
    "ReconcileReport",
    "UploadPipeline",
    "get_object_store",
    "get_processor_trigger",
    "process_video",
    "reconcile",
]
