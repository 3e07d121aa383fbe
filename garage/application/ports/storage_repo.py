from typing import Protocol


class StorageRepository(Protocol):
    def exists(self, filename: str) -> bool:
        ...

    def save_bytes(self, filename: str, data: bytes) -> str:
        ...
