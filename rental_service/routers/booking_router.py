from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from .. import availability, bookings, crud, schemas, validation
from ..database import get_db
from ..rate_limit import rate_limit

router = APIRouter(tags=["Bookings"])


@router.get("/bookings", response_model=List[schemas.BookingRead])
def read_bookings(db: Session = Depends(get_db)):
    """
    Get all bookings, newest first.
    """
    return crud.list_bookings(db)


@router.get("/bookings/{booking_code}", response_model=schemas.BookingRead)
def read_booking(booking_code: str, db: Session = Depends(get_db)):
    return crud.get_booking_by_code(db, booking_code)


@router.post("/bookings", response_model=schemas.BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
        booking: schemas.BookingCreate,
        db: Session = Depends(get_db),
        limit: None = Depends(rate_limit(times=30, minutes=1))
):
    """
    Create a booking. The total price is computed by the server.
    """
    return bookings.create_booking(db, booking)


@router.post("/bookings/quote", response_model=schemas.PriceQuote)
def quote_booking(
        booking: schemas.BookingCreate,
        db: Session = Depends(get_db),
        limit: None = Depends(rate_limit(times=60, minutes=1))
):
    """
    Validate and price a booking without saving it.
    """
    return bookings.price_and_validate_booking(db, booking)


@router.post(
    "/check-stock",
    response_model=dict[str, schemas.StockStatus],
    response_model_exclude_none=True,
)
def check_stock(
        request: schemas.StockCheckRequest,
        db: Session = Depends(get_db),
        limit: None = Depends(rate_limit(times=60, minutes=1))
):
    """
    Available stock of each requested item between rentDate and returnDate.
    """
    period = validation.validate_stock_check(request)
    return availability.check_stock(db, request.items, period)
