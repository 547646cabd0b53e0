"""
handlers/review_handler.py
--------------------------
HTTP routes for the review resource.
Each handler parses the path/body, delegates to ReviewService and
returns JSON. Failures are raised as ReviewError and rendered by the
application's error envelope handler.
"""

import re

from fastapi import APIRouter, Depends, Request

from errors import ValidationError
from handlers.schemas import CreateReviewRequest, UpdateReviewRequest
from services.review_service import ReviewService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/review", tags=["reviews"])

_INT_RE = re.compile(r"[+-]?[0-9]+")


def get_review_service(request: Request) -> ReviewService:
    """FastAPI dependency returning the service injected at app creation."""
    return request.app.state.review_service


def parse_review_id(raw: str) -> int:
    """Parse a base-10 path id, raising ValidationError on anything else."""
    if not _INT_RE.fullmatch(raw):
        raise ValidationError(f"invalid id: {raw!r} is not an integer")
    return int(raw)


@router.post("")
def create_review(
    body: CreateReviewRequest,
    service: ReviewService = Depends(get_review_service),
) -> dict:
    """Create a review; the response carries the new id and dateCreated."""
    review = service.create_review(
        body.title, body.director, body.release_date, body.rating, body.review_notes,
    )
    return review.to_dict()


@router.get("/{review_id}")
def get_review(review_id: str, service: ReviewService = Depends(get_review_service)) -> dict:
    return service.get_review(parse_review_id(review_id)).to_dict()


@router.put("/{review_id}")
def update_review(
    review_id: str,
    body: UpdateReviewRequest,
    service: ReviewService = Depends(get_review_service),
) -> dict:
    """Replace a review's fields. The path id wins over any id in the body."""
    review = service.update_review(
        parse_review_id(review_id),
        body.title, body.director, body.release_date, body.rating, body.review_notes,
    )
    return review.to_dict()


@router.delete("/{review_id}")
def delete_review(review_id: str, service: ReviewService = Depends(get_review_service)) -> dict:
    service.delete_review(parse_review_id(review_id))
    return {"deleted": "success"}
