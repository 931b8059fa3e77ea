# Models/__init__.py
from .vehicle import (
    Car,
    Motorcycle,
    Truck,
    Vehicle,
    VehicleStatus,
    VehicleType,
    build_vehicle,
    is_valid_plate,
)
from .customer import Customer
from .rental import RecordKind, RentalHistory, RentalRecord

# List all models for easy access
__all__ = [
    'Car',
    'Customer',
    'Motorcycle',
    'RecordKind',
    'RentalHistory',
    'RentalRecord',
    'Truck',
    'Vehicle',
    'VehicleStatus',
    'VehicleType',
    'build_vehicle',
    'is_valid_plate',
]
