from dataclasses import asdict
from typing import List
from fastapi import APIRouter, Depends, Response
from sqlmodel import Session
import logging

from ..database import get_session
from ..schemas.catalog.motorcycle import MotorcycleBase, MotorcycleCreate, MotorcycleUpdate, MotorcycleResponse
from ..schemas.common.common import ErrorResponse, SuccessResponse
from ..application.ports.motorcycle_repo import MotorcycleDto, SpecsDto
from ..application.services.motorcycle_service import MotorcycleService
from ..infrastructure.persistence.sqlalchemy.repositories.motorcycle_repository_sql import SqlMotorcycleRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/motorcycles",
    tags=["Motorcycles"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_motorcycle_service(session: Session = Depends(get_session)) -> MotorcycleService:
    return MotorcycleService(repo=SqlMotorcycleRepository(session))


def _to_dto(motorcycle_id: str, payload: MotorcycleBase) -> MotorcycleDto:
    fields = payload.model_dump(exclude={"id", "specs"})
    return MotorcycleDto(id=motorcycle_id, specs=SpecsDto(**payload.specs.model_dump()), **fields)


def _to_response(record: MotorcycleDto) -> MotorcycleResponse:
    data = asdict(record)
    data.pop("created_at", None)
    return MotorcycleResponse(**data)


@router.get("", response_model=List[MotorcycleResponse])
def list_motorcycles(service: MotorcycleService = Depends(get_motorcycle_service)):
    return [_to_response(m) for m in service.list_all()]


@router.post("", response_model=MotorcycleResponse, status_code=201, responses={409: {"model": ErrorResponse}})
def create_motorcycle(
    payload: MotorcycleCreate,
    service: MotorcycleService = Depends(get_motorcycle_service),
):
    created = service.create(_to_dto(payload.id, payload))
    return _to_response(created)


@router.put("/{motorcycle_id}", response_model=MotorcycleResponse, responses={404: {"model": ErrorResponse}})
def update_motorcycle(
    motorcycle_id: str,
    payload: MotorcycleUpdate,
    service: MotorcycleService = Depends(get_motorcycle_service),
):
    updated = service.update(motorcycle_id, _to_dto(motorcycle_id, payload))
    return _to_response(updated)


@router.delete("/{motorcycle_id}", status_code=204, responses={404: {"model": ErrorResponse}})
def delete_motorcycle(
    motorcycle_id: str,
    service: MotorcycleService = Depends(get_motorcycle_service),
):
    logger.info(f"DELETE request for ID: {motorcycle_id}")
    service.delete(motorcycle_id)
    return Response(status_code=204)


# Same operation for clients that cannot send DELETE
@router.post("/{motorcycle_id}/delete", response_model=SuccessResponse, responses={404: {"model": ErrorResponse}})
def delete_motorcycle_via_post(
    motorcycle_id: str,
    service: MotorcycleService = Depends(get_motorcycle_service),
):
    logger.info(f"DELETE (POST) request for ID: {motorcycle_id}")
    service.delete(motorcycle_id)
    return SuccessResponse(success=True)
