# garage/schemas/catalog/motorcycle.py
from pydantic import BaseModel, Field
from typing import Optional


class MotorcycleSpecs(BaseModel):
    engine: Optional[str] = None
    power: Optional[str] = None
    torque: Optional[str] = None
    weight: Optional[str] = None
    topSpeed: Optional[str] = None


class MotorcycleBase(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    year: int
    description: Optional[str] = None
    modifications: Optional[str] = None  # comma-separated, split by the client
    image: Optional[str] = None  # external URL or /uploads/... reference
    specs: MotorcycleSpecs = Field(default_factory=MotorcycleSpecs)


class MotorcycleCreate(MotorcycleBase):
    id: str = Field(..., min_length=1)


class MotorcycleUpdate(MotorcycleBase):
    # The path parameter is authoritative
    id: Optional[str] = None


class MotorcycleResponse(MotorcycleBase):
    id: str
