from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from storerate.model.base_schema import APIModel
from storerate.model.rating_schema import RatingWithUser


class StoreCreate(APIModel):
    name: str
    address: str

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Store name is required")
        return value

    @field_validator("address")
    @classmethod
    def address_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Store address is required")
        return value


class StoreResponse(StoreCreate):
    id: int
    created_at: Optional[datetime] = None


class EnrichedStoreResponse(StoreResponse):
    average_rating: float = 0
    rating_count: int = 0
    my_rating: Optional[int] = None


class StoreDetailResponse(EnrichedStoreResponse):
    ratings: List[RatingWithUser] = []


class SystemStats(APIModel):
    total_users: int
    total_stores: int
    total_ratings: int
