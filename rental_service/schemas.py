from pydantic import BaseModel, ConfigDict, Field
import datetime

from .models import BookingStatus


class EquipmentRead(BaseModel):
    name: str
    price_per_day: float
    stock: int

    model_config = ConfigDict(from_attributes=True)


class BookingCreate(BaseModel):
    # Dates stay strings here; validation.py enforces the YYYY-MM-DD calendar format.
    # Any total price sent by the client is ignored.
    booking_code: str
    user_name: str
    items: list[str]
    rent_date: str
    return_date: str
    payment_method: str
    status: BookingStatus


class BookingRead(BaseModel):
    id: int
    booking_code: str
    user_name: str
    items: list[str] = Field(validation_alias="item_list")
    rent_date: datetime.date
    return_date: datetime.date
    payment_method: str
    total_price: float
    status: BookingStatus
    created_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PriceQuote(BaseModel):
    total_price: float
    rental_days: int


class StockCheckRequest(BaseModel):
    items: list[str]
    rent_date: str = Field(alias="rentDate")
    return_date: str = Field(alias="returnDate")

    model_config = ConfigDict(populate_by_name=True)


class StockStatus(BaseModel):
    is_available: bool = Field(alias="isAvailable")
    available_stock: int = Field(alias="availableStock")
    message: str | None = None

    model_config = ConfigDict(populate_by_name=True)
