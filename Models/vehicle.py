# Models/vehicle.py
import re
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Three letters followed by three digits, checked after uppercasing
PLATE_PATTERN = re.compile(r"[A-Z]{3}[0-9]{3}")


class VehicleStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUTOFSERVICE = "OUTOFSERVICE"


class VehicleType(str, Enum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"
    TRUCK = "TRUCK"


def capitalize(value: Optional[str]) -> Optional[str]:
    """Upper-case the first character and lower-case the rest."""
    if not value:
        return value
    return value[:1].upper() + value[1:].lower()


def is_valid_plate(plate: Optional[str]) -> bool:
    if plate is None or not plate.strip():
        return False
    return PLATE_PATTERN.fullmatch(plate.upper()) is not None


class Vehicle(BaseModel):
    """
    A rentable vehicle.

    Attributes:
        vehicle_type: Tag identifying the concrete kind of vehicle
        make: Manufacturer, capitalized on construction (e.g. "Toyota")
        model: Model name, capitalized on construction (e.g. "Corolla")
        year: Model year
        license_plate: Unique plate, unset until assigned
        status: Current lifecycle state
    """
    model_config = ConfigDict(validate_assignment=True)

    vehicle_type: VehicleType
    make: Optional[str] = None
    model: Optional[str] = None
    year: int = 0
    license_plate: Optional[str] = None
    status: VehicleStatus = VehicleStatus.AVAILABLE

    def __init__(self, **data):
        # Construction only; later assignments are stored as given
        for name in ("make", "model"):
            if isinstance(data.get(name), str):
                data[name] = capitalize(data[name])
        super().__init__(**data)

    @field_validator("license_plate")
    @classmethod
    def check_plate(cls, value):
        if not is_valid_plate(value):
            raise ValueError("Invalid license plate. Must be three letters followed by three numbers.")
        return value.upper()

    def set_license_plate(self, plate: Optional[str]) -> None:
        # Raises a ValidationError (a ValueError) and keeps the old plate on failure
        self.license_plate = plate

    def set_status(self, status: VehicleStatus) -> None:
        self.status = status

    def is_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE

    @property
    def type_label(self) -> str:
        return self.vehicle_type.value.capitalize()

    @property
    def detail(self) -> str:
        """Subtype-specific attribute in its persisted text form."""
        return ""

    def get_info(self) -> str:
        return f"| {self.license_plate} | {self.make} | {self.model} | {self.year} | {self.status.value} |"


class Car(Vehicle):
    vehicle_type: Literal[VehicleType.CAR] = VehicleType.CAR
    seats: int = 4

    @property
    def detail(self) -> str:
        return str(self.seats)


class Motorcycle(Vehicle):
    vehicle_type: Literal[VehicleType.MOTORCYCLE] = VehicleType.MOTORCYCLE
    has_sidecar: bool = False

    @property
    def detail(self) -> str:
        return str(self.has_sidecar).lower()


class Truck(Vehicle):
    vehicle_type: Literal[VehicleType.TRUCK] = VehicleType.TRUCK
    cargo_capacity: float = 0.0

    @property
    def detail(self) -> str:
        return str(self.cargo_capacity)


def build_vehicle(vehicle_type: VehicleType, make: Optional[str], model: Optional[str],
                  year: int, detail: Optional[str] = None) -> Vehicle:
    """
    Create the concrete vehicle for a type tag.

    `detail` is the subtype attribute as stored on disk: seat count for cars,
    "true"/"false" for a motorcycle sidecar, cargo capacity for trucks. When it
    is missing the subtype default applies. Raises ValueError for unparseable
    details.
    """
    vehicle_type = VehicleType(vehicle_type)
    fields = {"make": make, "model": model, "year": year}

    if vehicle_type == VehicleType.CAR:
        if detail:
            fields["seats"] = int(detail)
        return Car(**fields)

    if vehicle_type == VehicleType.MOTORCYCLE:
        if detail:
            fields["has_sidecar"] = detail.strip().lower() == "true"
        return Motorcycle(**fields)

    if detail:
        fields["cargo_capacity"] = float(detail)
    return Truck(**fields)
