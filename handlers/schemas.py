"""
handlers/schemas.py
-------------------
Pydantic request shapes for the review routes.
Bodies are flat JSON objects with string-valued fields.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateReviewRequest(BaseModel):
    """Body of POST /review."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    director: str = Field(min_length=1)
    release_date: str = Field(alias="releaseDate")
    rating: str = Field(min_length=1)
    review_notes: str = Field(alias="reviewNotes", min_length=1)


class UpdateReviewRequest(CreateReviewRequest):
    """
    Body of PUT /review/{id}: the full Review shape.

    `id` is overridden by the path and `dateCreated` is never taken
    from the client; both are accepted only so that a Review returned
    by the API can be sent back unchanged.
    """

    id: Optional[int] = None
    date_created: Optional[str] = Field(default=None, alias="dateCreated")
