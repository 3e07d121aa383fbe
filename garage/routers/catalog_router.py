from typing import List
from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/categories", tags=["Catalog"])


@router.get("", response_model=List[str])
def list_categories(request: Request):
    """Brand tags the gallery filters on."""
    return list(request.app.state.settings.CATEGORIES)
