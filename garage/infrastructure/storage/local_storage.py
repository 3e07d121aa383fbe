import os
import logging
import tempfile
from typing import Optional

from ...application.ports.storage_repo import StorageRepository

logger = logging.getLogger(__name__)


class LocalStorageRepository(StorageRepository):
    """Content directory on local disk, keyed by bare filename.

    Files are written to a hidden temporary name and hard-linked into place, so
    a filename only becomes visible once its bytes are complete and an existing
    file is never replaced.
    """

    def __init__(self, upload_dir: str) -> None:
        self.upload_dir = os.path.abspath(upload_dir)

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def _resolve(self, filename: str) -> Optional[str]:
        if not filename or os.path.basename(filename) != filename or filename.startswith("."):
            return None
        return os.path.join(self.upload_dir, filename)

    def exists(self, filename: str) -> bool:
        path = self._resolve(filename)
        return bool(path) and os.path.exists(path)

    def save_bytes(self, filename: str, data: bytes) -> str:
        path = self._resolve(filename)
        if path is None:
            raise ValueError(f"Invalid storage filename: {filename!r}")
        self.ensure_dir()
        fd, tmp_path = tempfile.mkstemp(prefix=".", suffix=".part", dir=self.upload_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # Raises FileExistsError instead of overwriting
            os.link(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.info(f"Stored {len(data)} bytes as {filename}")
        return path
