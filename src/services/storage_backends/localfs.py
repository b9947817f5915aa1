"""Filesystem storage backend for local development and tests."""
import logging
from pathlib import Path

from config.settings import StorageSettings

from ..storage import PDF_CONTENT_TYPE, ArtifactStore, StorageError, join_url

logger = logging.getLogger(__name__)


class LocalArtifactStore(ArtifactStore):
    backend = "local"

    def __init__(self, settings: StorageSettings):
        self.root = Path(settings.local_root).resolve()
        self.public_base_url = settings.public_base_url

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        # Keys come from slugs, but never let one escape the root
        if self.root not in path.parents:
            raise StorageError(f"Key '{key}' resolves outside the storage root")
        return path

    def store(self, key: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.info(f"Stored {len(data)} bytes at {path}")
        return key

    def resolve(self, locator: str) -> str:
        if self.public_base_url:
            return join_url(self.public_base_url, locator)
        return self._path_for(locator).as_uri()
