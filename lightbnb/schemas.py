from pydantic import BaseModel, ConfigDict
from typing import Optional, Union
import datetime


class UserBase(BaseModel):
    name: str
    email: str


class UserCreate(UserBase):
    # Already hashed by the calling application
    password: str


class UserRead(UserBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class PropertyBase(BaseModel):
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    street: str
    city: str
    province: str
    post_code: str
    country: str
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0


class PropertyCreate(PropertyBase):
    owner_id: int


class PropertyRead(PropertyBase):
    id: int
    owner_id: int
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class ReservationRead(BaseModel):
    # The merged row carries the property's id under "id"
    id: int
    guest_id: int
    property_id: int
    start_date: datetime.date
    end_date: datetime.date
    title: str
    cost_per_night: int
    thumbnail_photo_url: Optional[str] = None
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class PropertySearch(BaseModel):
    """Optional search constraints; unset fields add no condition."""
    city: Optional[str] = None
    minimum_price_per_night: Optional[Union[int, float]] = None
    maximum_price_per_night: Optional[Union[int, float]] = None
    minimum_rating: Optional[Union[int, float]] = None
    owner_id: Optional[int] = None

    model_config = ConfigDict(extra="ignore")
