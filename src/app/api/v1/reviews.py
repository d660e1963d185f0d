from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_review_service
from app.services import ReviewService
from .schemas import ReviewDto
from .routing import ensure_matching_id

router = APIRouter(prefix="/reviews", tags=["reviews"])

Service = Annotated[ReviewService, Depends(get_review_service)]


@router.get("", response_model=list[ReviewDto])
async def get_all_reviews(service: Service):
    return await service.get_all()


@router.get("/filter", response_model=list[ReviewDto])
async def filter_reviews(service: Service, pos_id: int, approved: bool):
    return await service.filter(pos_id, approved)


@router.get("/{review_id}", response_model=ReviewDto)
async def get_review(review_id: int, service: Service):
    return await service.get_by_id(review_id)


@router.post("", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
async def create_review(body: ReviewDto, service: Service):
    return await service.upsert(body.to_domain())


@router.put("/{review_id}", response_model=ReviewDto)
async def update_review(review_id: int, body: ReviewDto, service: Service):
    ensure_matching_id(review_id, body.id)
    return await service.upsert(body.to_domain(review_id))


@router.put("/{review_id}/approve", response_model=ReviewDto)
async def approve_review(review_id: int, service: Service, user_id: int):
    review = await service.get_by_id(review_id)
    return await service.approve(review, user_id)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: int, service: Service) -> None:
    await service.delete(review_id)
