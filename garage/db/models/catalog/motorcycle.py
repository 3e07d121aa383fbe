# garage/db/models/catalog/motorcycle.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from sqlalchemy import Column, String


class Motorcycle(SQLModel, table=True):
    """Flat row of a build record; the five spec fields are sibling columns."""
    __tablename__ = "motorcycles"
    id: str = Field(primary_key=True)
    name: str = Field(nullable=False)
    category: str = Field(nullable=False)
    year: int = Field(nullable=False)
    description: Optional[str] = None
    modifications: Optional[str] = None
    image: Optional[str] = None
    engine: Optional[str] = None
    power: Optional[str] = None
    torque: Optional[str] = None
    weight: Optional[str] = None
    top_speed: Optional[str] = Field(default=None, sa_column=Column("topSpeed", String, nullable=True))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True)
