from dataclasses import dataclass, field
from typing import List, Optional, Protocol
from datetime import datetime


@dataclass
class SpecsDto:
    engine: Optional[str] = None
    power: Optional[str] = None
    torque: Optional[str] = None
    weight: Optional[str] = None
    topSpeed: Optional[str] = None


@dataclass
class MotorcycleDto:
    id: str
    name: str
    category: str
    year: int
    description: Optional[str] = None
    modifications: Optional[str] = None
    image: Optional[str] = None
    specs: SpecsDto = field(default_factory=SpecsDto)
    created_at: Optional[datetime] = None


class MotorcycleRepository(Protocol):
    def list_all(self) -> List[MotorcycleDto]:
        ...

    def insert(self, record: MotorcycleDto) -> None:
        ...

    def replace(self, motorcycle_id: str, record: MotorcycleDto) -> bool:
        ...

    def delete(self, motorcycle_id: str) -> bool:
        ...
