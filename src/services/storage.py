"""Artifact storage for generated report PDFs."""
import logging
from typing import Optional

from config.settings import StorageSettings

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class StorageError(Exception):
    """Raised when an artifact cannot be stored or its URL cannot be produced."""
    pass


class ArtifactStore:
    """
    Minimal storage interface.

    ``store`` returns an opaque locator that is persisted with the result
    row; ``resolve`` turns that locator into a URL a browser can fetch. URL
    signing and expiry are backend configuration, so a locator stays valid
    even when the URL it resolves to does not.
    """

    backend: str = "unknown"

    def store(self, key: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def resolve(self, locator: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError


def report_key(slug: str) -> str:
    return f"ai-readiness/{slug}.pdf"


def join_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/{key.lstrip('/')}"


def create_artifact_store(settings: Optional[StorageSettings] = None) -> ArtifactStore:
    """Builds the configured storage backend."""
    settings = settings or StorageSettings()
    if settings.backend == "s3":
        from .storage_backends.s3 import S3ArtifactStore

        store = S3ArtifactStore(settings)
    else:
        from .storage_backends.localfs import LocalArtifactStore

        store = LocalArtifactStore(settings)
    logger.info(f"Artifact storage backend: {store.backend}")
    return store
