from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from utils.geo_utils import round_location


class Category(BaseModel):
    id: str
    title: str
    created_at: datetime
    user_id: Optional[str] = None


class Message(BaseModel):
    id: str
    content: str
    created_at: datetime
    category_id: str
    user_id: Optional[str] = None


class PublicPost(BaseModel):
    id: str
    user_id: Optional[str] = None
    content: str
    city: Optional[str] = None
    # rows written by other clients may carry nulls; the cluster builder drops them
    lat: Optional[float] = None
    lng: Optional[float] = None
    created_at: datetime


class NotificationRow(BaseModel):
    id: str
    recipient_user_id: str
    from_message_id: str
    from_user_id: str
    distance_km: float
    similarity: float
    preview: str
    created_at: datetime
    read_at: Optional[datetime] = None


class Cluster(BaseModel):
    key: str
    lat: float
    lng: float
    posts: List[PublicPost]


def _non_blank(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} cannot be empty.")
    return value


class CategoryInput(BaseModel):
    title: str
    user_id: str

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        return _non_blank(v, "Title")


class MessageInput(BaseModel):
    content: str
    category_id: str
    user_id: str

    @field_validator("content")
    @classmethod
    def _strip_content(cls, v: str) -> str:
        return _non_blank(v, "Message")


class PublicPostInput(BaseModel):
    """Row written to `public_posts`. Coordinates are rounded on construction."""

    user_id: str
    content: str
    city: Optional[str] = None
    lat: float
    lng: float
    decimals: int = Field(default=2, exclude=True)

    @field_validator("content")
    @classmethod
    def _strip_content(cls, v: str) -> str:
        return _non_blank(v, "Message")

    @field_validator("city")
    @classmethod
    def _blank_city_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def _round_coordinates(self):
        lat, lng = round_location(self.lat, self.lng, self.decimals)
        self.lat = lat
        self.lng = lng
        return self


class PublishState(BaseModel):
    message: Message
    user_id: str
    lat: float
    lng: float
    city: Optional[str] = None
    decimals: int = 2
    payload: Optional[PublicPostInput] = None
    post: Optional[PublicPost] = None
