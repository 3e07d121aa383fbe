import re
import os
import time
import base64
import binascii
import logging
import mimetypes
import random
from dataclasses import dataclass
from typing import Optional

from ..ports.storage_repo import StorageRepository
from ...exceptions import IOFailure, MissingField, PayloadTooLarge, ValidationFailure

logger = logging.getLogger(__name__)

DATA_URI_HEADER = re.compile(r"^data:image/[\w.+-]+;base64,")
SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")
URL_PREFIX = "/uploads/"
MAX_NAME_ATTEMPTS = 5


@dataclass
class ImageService:
    """Turns uploaded images into files in the content directory.

    Both ingestion paths end in :meth:`_store`, which picks a fresh
    ``{ms-timestamp}-{random}{ext}`` name and returns the ``/uploads/...``
    reference to embed in a record's ``image`` field.
    """

    storage: StorageRepository
    max_size: int = 5 * 1024 * 1024
    default_extension: str = ".jpg"

    def ingest_file(self, data: bytes, filename: Optional[str], content_type: Optional[str] = None, declared_size: Optional[int] = None) -> str:
        if declared_size is not None and declared_size > self.max_size:
            raise PayloadTooLarge(self._too_large_message())
        if data is None:
            raise MissingField("Missing image file")
        if len(data) > self.max_size:
            raise PayloadTooLarge(self._too_large_message())

        ext = self._extension_from_name(filename)
        if ext is None and content_type:
            guessed = mimetypes.guess_extension(content_type.split(";")[0].strip())
            ext = guessed if guessed and SAFE_EXTENSION.match(guessed) else None
        return self._store(data, ext or self.default_extension)

    def ingest_base64(self, image: Optional[str], file_name: Optional[str]) -> str:
        if not image or not file_name:
            raise MissingField("Missing image data or file name")

        payload = DATA_URI_HEADER.sub("", image.strip(), count=1)
        payload = "".join(payload.split())
        if not payload:
            raise MissingField("Missing image data or file name")

        # Reject from the encoded length so oversize payloads are never decoded
        padding = len(payload) - len(payload.rstrip("="))
        estimated = (len(payload) * 3) // 4 - padding
        if estimated > self.max_size:
            raise PayloadTooLarge(self._too_large_message())

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationFailure("Image data is not valid base64") from e
        if len(data) > self.max_size:
            raise PayloadTooLarge(self._too_large_message())

        ext = self._extension_from_name(file_name) or self.default_extension
        return self._store(data, ext)

    def _store(self, data: bytes, ext: str) -> str:
        filename = None
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = self._generate_filename(ext)
            if self.storage.exists(candidate):
                continue
            try:
                self.storage.save_bytes(candidate, data)
            except FileExistsError:
                # Another writer published the same name first
                continue
            except OSError as e:
                logger.exception(f"Error writing image {candidate}")
                raise IOFailure() from e
            filename = candidate
            break
        if filename is None:
            raise IOFailure("Could not allocate a filename for the uploaded image")

        image_url = f"{URL_PREFIX}{filename}"
        logger.info(f"Generated URL: {image_url}")
        return image_url

    @staticmethod
    def _generate_filename(ext: str) -> str:
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

    @staticmethod
    def _extension_from_name(name: Optional[str]) -> Optional[str]:
        if not name:
            return None
        ext = os.path.splitext(name)[1]
        return ext if SAFE_EXTENSION.match(ext) else None

    def _too_large_message(self) -> str:
        return f"File too large (max {self.max_size} bytes)"
