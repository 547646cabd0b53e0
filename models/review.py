"""
models/review.py
----------------
Domain model for movie reviews.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.dates import created_stamp, normalize_release_date


@dataclass
class Review:
    """
    Represents a single movie review.

    Attributes:
        id: Database primary key (0 for records not yet persisted).
        title: Movie title.
        director: Movie director.
        release_date: Normalized release date ("DD Mon YY HH:MM").
        rating: Free-form rating text (e.g. "9/10").
        review_notes: The review itself.
        date_created: Server-assigned creation timestamp, set once.
    """
    title: str
    director: str
    release_date: str
    rating: str
    review_notes: str
    id: int = 0
    date_created: str = ""

    @classmethod
    def new(
        cls,
        title: str,
        director: str,
        release_date: str,
        rating: str,
        review_notes: str,
        now: Optional[datetime] = None,
    ) -> "Review":
        """Build an unsaved review with a normalized release date and a creation stamp."""
        return cls(
            title=title,
            director=director,
            release_date=normalize_release_date(release_date, now),
            rating=rating,
            review_notes=review_notes,
            date_created=created_stamp(now),
        )

    @classmethod
    def from_row(cls, row: tuple) -> "Review":
        """Convert a (id, title, director, releaseDate, rating, reviewNotes, dateCreated) row."""
        return cls(
            id=row[0],
            title=row[1],
            director=row[2],
            release_date=row[3],
            rating=row[4],
            review_notes=row[5],
            date_created=row[6],
        )

    def is_persisted(self) -> bool:
        return self.id != 0

    def to_dict(self) -> dict:
        """JSON representation used in API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "director": self.director,
            "releaseDate": self.release_date,
            "rating": self.rating,
            "reviewNotes": self.review_notes,
            "dateCreated": self.date_created,
        }
