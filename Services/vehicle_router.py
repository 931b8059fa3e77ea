# Services/vehicle_router.py
from fastapi import APIRouter, HTTPException, Depends, Query, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, ValidationError, constr, conint
from typing import List, Optional

from Models import VehicleStatus, VehicleType, build_vehicle
from Services.rental_system import RentalSystem
from storage import get_rental_system

router = APIRouter(
    responses={404: {"description": "Vehicle not found"}}
)

class VehicleBase(BaseModel):
    """
    Base vehicle schema with common attributes.

    Attributes:
        vehicle_type: CAR, MOTORCYCLE or TRUCK
        license_plate: Three letters followed by three digits (e.g. "ABC123")
        make: Manufacturer, stored capitalized
        model: Model name, stored capitalized
        year: Model year
    """
    vehicle_type: VehicleType = VehicleType.CAR
    license_plate: constr(min_length=1, max_length=20)
    make: constr(min_length=1, max_length=50)
    model: constr(min_length=1, max_length=50)
    year: conint(ge=1886, le=9999)

class VehicleCreate(VehicleBase):
    """Schema for registering a vehicle. Only the field matching the type is used."""
    seats: Optional[conint(ge=1)] = None
    has_sidecar: Optional[bool] = None
    cargo_capacity: Optional[float] = None

class VehicleResponse(BaseModel):
    vehicle_type: VehicleType
    license_plate: str
    make: Optional[str]
    model: Optional[str]
    year: int
    status: VehicleStatus

    model_config = ConfigDict(from_attributes=True)

def _detail_for(vehicle: VehicleCreate) -> Optional[str]:
    if vehicle.vehicle_type == VehicleType.CAR and vehicle.seats is not None:
        return str(vehicle.seats)
    if vehicle.vehicle_type == VehicleType.MOTORCYCLE and vehicle.has_sidecar is not None:
        return str(vehicle.has_sidecar).lower()
    if vehicle.vehicle_type == VehicleType.TRUCK and vehicle.cargo_capacity is not None:
        return str(vehicle.cargo_capacity)
    return None

@router.post("",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a vehicle",
    responses={409: {"description": "Plate already registered"}}
)
async def create_vehicle(
    vehicle: VehicleCreate,
    system: RentalSystem = Depends(get_rental_system)
):
    try:
        new_vehicle = build_vehicle(
            vehicle.vehicle_type, vehicle.make, vehicle.model, vehicle.year, _detail_for(vehicle)
        )
        new_vehicle.set_license_plate(vehicle.license_plate)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors()[0]["msg"]
        )

    if not system.add_vehicle(new_vehicle):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Vehicle with plate {new_vehicle.license_plate} already exists"
        )
    return VehicleResponse.model_validate(new_vehicle)

@router.get("/list", response_model=List[VehicleResponse])
async def list_vehicles(
    available_only: bool = Query(default=False, description="Only return available vehicles"),
    system: RentalSystem = Depends(get_rental_system)
):
    return [VehicleResponse.model_validate(v) for v in system.list_vehicles(available_only)]

@router.get("/table", response_class=PlainTextResponse)
async def vehicle_table(
    available_only: bool = Query(default=False),
    system: RentalSystem = Depends(get_rental_system)
):
    """Vehicles as a fixed-width text table."""
    return system.display_vehicles(available_only)

@router.get("/{license_plate}", response_model=VehicleResponse)
async def get_vehicle(
    license_plate: str,
    system: RentalSystem = Depends(get_rental_system)
):
    vehicle = system.find_vehicle_by_plate(license_plate)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found"
        )
    return VehicleResponse.model_validate(vehicle)

class PlateChange(BaseModel):
    license_plate: constr(min_length=1, max_length=20)

@router.put("/{license_plate}/plate",
    response_model=VehicleResponse,
    summary="Re-plate a vehicle",
    responses={409: {"description": "Plate already registered"}}
)
async def change_plate(
    license_plate: str,
    change: PlateChange,
    system: RentalSystem = Depends(get_rental_system)
):
    vehicle = system.find_vehicle_by_plate(license_plate)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found"
        )
    try:
        changed = system.change_license_plate(vehicle, change.license_plate)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors()[0]["msg"]
        )
    if not changed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Vehicle with plate {change.license_plate.upper()} already exists"
        )
    return VehicleResponse.model_validate(vehicle)
