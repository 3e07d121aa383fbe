import logging
from typing import List
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from .....db.models import Motorcycle
from .....exceptions import Conflict, StorageFailure, ValidationFailure
from .....application.ports.motorcycle_repo import (
    MotorcycleRepository,
    MotorcycleDto,
    SpecsDto,
)

logger = logging.getLogger(__name__)

# Columns rewritten by a full replacement; id and created_at are never touched
MUTABLE_COLUMNS = (
    "name", "category", "year", "description", "modifications", "image",
    "engine", "power", "torque", "weight", "top_speed",
)


def to_row(record: MotorcycleDto) -> Motorcycle:
    """Flatten the nested record into a table row."""
    specs = record.specs or SpecsDto()
    return Motorcycle(
        id=record.id,
        name=record.name,
        category=record.category,
        year=record.year,
        description=record.description,
        modifications=record.modifications,
        image=record.image,
        engine=specs.engine,
        power=specs.power,
        torque=specs.torque,
        weight=specs.weight,
        top_speed=specs.topSpeed,
    )


def from_row(row: Motorcycle) -> MotorcycleDto:
    """Rebuild the nested record, ``specs`` included, from a table row."""
    return MotorcycleDto(
        id=row.id,
        name=row.name,
        category=row.category,
        year=row.year,
        description=row.description,
        modifications=row.modifications,
        image=row.image,
        specs=SpecsDto(
            engine=row.engine,
            power=row.power,
            torque=row.torque,
            weight=row.weight,
            topSpeed=row.top_speed,
        ),
        created_at=row.created_at,
    )


class SqlMotorcycleRepository(MotorcycleRepository):
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[MotorcycleDto]:
        try:
            rows = self.session.exec(
                select(Motorcycle).order_by(Motorcycle.created_at.desc())
            ).all()
        except SQLAlchemyError as e:
            logger.exception("Error listing motorcycles")
            raise StorageFailure("Failed to fetch motorcycles") from e
        return [from_row(r) for r in rows]

    def insert(self, record: MotorcycleDto) -> None:
        if self._exists(record.id):
            raise Conflict(f"Motorcycle with ID {record.id} already exists")
        row = to_row(record)
        try:
            self.session.add(row)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if self._exists(record.id):
                raise Conflict(f"Motorcycle with ID {record.id} already exists") from e
            raise ValidationFailure("Motorcycle is missing required fields") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Error inserting motorcycle {record.id}")
            raise StorageFailure("Failed to add motorcycle") from e
        logger.info(f"Inserted motorcycle {record.id}")

    def replace(self, motorcycle_id: str, record: MotorcycleDto) -> bool:
        try:
            row = self.session.get(Motorcycle, motorcycle_id)
            if not row:
                return False
            incoming = to_row(record)
            for column in MUTABLE_COLUMNS:
                setattr(row, column, getattr(incoming, column))
            self.session.add(row)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationFailure("Motorcycle is missing required fields") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Error updating motorcycle {motorcycle_id}")
            raise StorageFailure("Failed to update motorcycle") from e
        logger.info(f"Replaced motorcycle {motorcycle_id}")
        return True

    def delete(self, motorcycle_id: str) -> bool:
        try:
            row = self.session.get(Motorcycle, motorcycle_id)
            if not row:
                return False
            self.session.delete(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Error deleting motorcycle {motorcycle_id}")
            raise StorageFailure("Failed to delete motorcycle") from e
        logger.info(f"Deleted motorcycle {motorcycle_id}")
        return True

    def _exists(self, motorcycle_id: str) -> bool:
        try:
            return self.session.get(Motorcycle, motorcycle_id) is not None
        except SQLAlchemyError as e:
            raise StorageFailure("Failed to add motorcycle") from e
