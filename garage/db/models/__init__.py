# Models package (re-export feature modules for stable imports)
from .catalog.motorcycle import Motorcycle

__all__ = [
    "Motorcycle",
]
