"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from vidhost.adapters.storage.base import ObjectStore
from vidhost.db.session import get_session
from vidhost.services.upload import UploadPipeline, get_object_store, get_processor_trigger

# Database session dependency
SessionDep = Annotated[Session, Depends(get_session)]


def get_store() -> ObjectStore:
    """Get the configured object store."""
    return get_object_store()


StoreDep = Annotated[ObjectStore, Depends(get_store)]


def get_upload_pipeline(store: StoreDep) -> UploadPipeline:
    """Get an upload pipeline wired to the configured adapters."""
    return UploadPipeline(store=store, trigger=get_processor_trigger())


UploadPipelineDep = Annotated[UploadPipeline, Depends(get_upload_pipeline)]
