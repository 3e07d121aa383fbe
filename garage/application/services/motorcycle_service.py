import logging
from dataclasses import dataclass, replace
from typing import List

from ..ports.motorcycle_repo import MotorcycleRepository, MotorcycleDto
from ...exceptions import NotFound, ValidationFailure

logger = logging.getLogger(__name__)


@dataclass
class MotorcycleService:
    repo: MotorcycleRepository

    def list_all(self) -> List[MotorcycleDto]:
        return self.repo.list_all()

    def create(self, record: MotorcycleDto) -> MotorcycleDto:
        if not record.id or not str(record.id).strip():
            raise ValidationFailure("Motorcycle id is required")
        self._validate(record)
        self.repo.insert(record)
        return record

    def update(self, motorcycle_id: str, record: MotorcycleDto) -> MotorcycleDto:
        record = replace(record, id=motorcycle_id)
        self._validate(record)
        if not self.repo.replace(motorcycle_id, record):
            logger.warning(f"Update for unknown motorcycle {motorcycle_id}")
            raise NotFound(f"Motorcycle with ID {motorcycle_id} not found")
        return record

    def delete(self, motorcycle_id: str) -> None:
        if not self.repo.delete(motorcycle_id):
            logger.warning(f"Delete for unknown motorcycle {motorcycle_id}")
            raise NotFound(f"Motorcycle with ID {motorcycle_id} not found")

    @staticmethod
    def _validate(record: MotorcycleDto) -> None:
        if not record.name or not record.name.strip():
            raise ValidationFailure("Motorcycle name is required")
        if not record.category or not record.category.strip():
            raise ValidationFailure("Motorcycle category is required")
        if isinstance(record.year, bool) or not isinstance(record.year, int):
            raise ValidationFailure("Motorcycle year must be an integer")
