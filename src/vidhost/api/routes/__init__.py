"""API route modules."""

from vidhost.api.routes import analytics, health, processor, upload, videos

__all__ = ["analytics", "health", "processor", "upload", "videos"]
