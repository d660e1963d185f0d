from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_pos_service
from app.domain.enums import CampusType
from app.services import PosService
from .schemas import PosDto
from .routing import ensure_matching_id

router = APIRouter(prefix="/pos", tags=["pos"])

Service = Annotated[PosService, Depends(get_pos_service)]


@router.get("", response_model=list[PosDto])
async def get_all_pos(service: Service):
    return await service.get_all()


@router.get("/filter", response_model=PosDto)
async def get_pos_by_name(service: Service, name: Annotated[str, Query(min_length=1)]):
    return await service.get_by_name(name)


@router.get("/{pos_id}", response_model=PosDto)
async def get_pos(pos_id: int, service: Service):
    return await service.get_by_id(pos_id)


@router.post("", response_model=PosDto, status_code=status.HTTP_201_CREATED)
async def create_pos(body: PosDto, service: Service):
    return await service.upsert(body.to_domain())


@router.post("/import/osm/{node_id}", response_model=PosDto, status_code=status.HTTP_201_CREATED)
async def import_pos_from_osm(node_id: int, service: Service, campus_type: CampusType):
    return await service.import_from_osm_node(node_id, campus_type)


@router.put("/{pos_id}", response_model=PosDto)
async def update_pos(pos_id: int, body: PosDto, service: Service):
    ensure_matching_id(pos_id, body.id)
    return await service.upsert(body.to_domain(pos_id))


@router.delete("/{pos_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pos(pos_id: int, service: Service) -> None:
    await service.delete(pos_id)
