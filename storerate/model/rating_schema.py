from datetime import datetime
from typing import Optional

from pydantic import StrictInt, field_validator

from storerate.model.base_schema import APIModel
from storerate.model.user_schema import UserResponse

RATING_MIN = 1
RATING_MAX = 5


def check_rating(value: int) -> int:
    if not RATING_MIN <= value <= RATING_MAX:
        raise ValueError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
    return value


class RatingUpdate(APIModel):
    rating: StrictInt

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, value: int) -> int:
        return check_rating(value)


class RatingCreate(RatingUpdate):
    store_id: StrictInt


class RatingResponse(APIModel):
    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: Optional[datetime] = None


class RatingWithUser(RatingResponse):
    user: UserResponse
