# Services/rental_router.py
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, confloat
from typing import List, Optional, Tuple
from datetime import date

from Models import Customer, RecordKind, RentalRecord, Vehicle
from Services.rental_system import RentalSystem
from storage import get_rental_system

router = APIRouter(
    responses={404: {"description": "Vehicle or customer not found"}}
)

class RentalRequest(BaseModel):
    """
    Schema for a rent or return.

    Attributes:
        license_plate: Plate of a registered vehicle (any case)
        customer_id: ID of a registered customer
        record_date: Transaction date, defaults to today
        amount: Rental price when renting, extra fees when returning
    """
    license_plate: str
    customer_id: int
    record_date: Optional[date] = None
    amount: confloat(ge=0) = 0.0

class RentalRecordResponse(BaseModel):
    kind: RecordKind
    license_plate: str
    customer_id: int
    customer_name: str
    record_date: date
    amount: float

    @classmethod
    def from_record(cls, record: RentalRecord) -> "RentalRecordResponse":
        return cls(
            kind=record.kind,
            license_plate=record.vehicle.license_plate,
            customer_id=record.customer.customer_id,
            customer_name=record.customer.customer_name,
            record_date=record.record_date,
            amount=record.amount,
        )

def _resolve(system: RentalSystem, rental: RentalRequest) -> Tuple[Vehicle, Customer]:
    vehicle = system.find_vehicle_by_plate(rental.license_plate)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found"
        )
    customer = system.find_customer_by_id(rental.customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    return vehicle, customer

@router.post("/rent",
    response_model=RentalRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Rent out an available vehicle",
    responses={409: {"description": "Vehicle is not available"}}
)
async def rent_vehicle(
    rental: RentalRequest,
    system: RentalSystem = Depends(get_rental_system)
):
    vehicle, customer = _resolve(system, rental)
    if not system.rent_vehicle(vehicle, customer, rental.record_date or date.today(), rental.amount):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vehicle is not available for renting"
        )
    return RentalRecordResponse.from_record(system.rental_history[-1])

@router.post("/return",
    response_model=RentalRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Return a rented vehicle",
    responses={409: {"description": "Vehicle is not rented"}}
)
async def return_vehicle(
    rental: RentalRequest,
    system: RentalSystem = Depends(get_rental_system)
):
    vehicle, customer = _resolve(system, rental)
    if not system.return_vehicle(vehicle, customer, rental.record_date or date.today(), rental.amount):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vehicle is not rented"
        )
    return RentalRecordResponse.from_record(system.rental_history[-1])

@router.get("/history", response_model=List[RentalRecordResponse])
async def rental_history(
    system: RentalSystem = Depends(get_rental_system)
):
    return [RentalRecordResponse.from_record(r) for r in system.rental_history]

@router.get("/history/table", response_class=PlainTextResponse)
async def rental_history_table(
    system: RentalSystem = Depends(get_rental_system)
):
    return system.display_rental_history()
