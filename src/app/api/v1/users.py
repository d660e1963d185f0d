from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_user_service
from app.services import UserService
from .schemas import UserDto
from .routing import ensure_matching_id

router = APIRouter(prefix="/users", tags=["users"])

Service = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserDto])
async def get_all_users(service: Service):
    return await service.get_all()


@router.get("/filter", response_model=UserDto)
async def get_user_by_login_name(service: Service, login_name: Annotated[str, Query(min_length=1)]):
    return await service.get_by_login_name(login_name)


@router.get("/{user_id}", response_model=UserDto)
async def get_user(user_id: int, service: Service):
    return await service.get_by_id(user_id)


@router.post("", response_model=UserDto, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserDto, service: Service):
    return await service.upsert(body.to_domain())


@router.put("/{user_id}", response_model=UserDto)
async def update_user(user_id: int, body: UserDto, service: Service):
    ensure_matching_id(user_id, body.id)
    return await service.upsert(body.to_domain(user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: Service) -> None:
    await service.delete(user_id)
