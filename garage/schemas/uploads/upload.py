# garage/schemas/uploads/upload.py
from pydantic import BaseModel
from typing import Optional


class Base64UploadRequest(BaseModel):
    # Both optional so a missing field reaches the service as MissingField
    image: Optional[str] = None  # base64, optionally with a data:image/...;base64, header
    fileName: Optional[str] = None


class UploadResponse(BaseModel):
    imageUrl: str
