# Services/rental_system.py
import logging
from datetime import date
from typing import List, Optional, Union

from Models import (
    Customer,
    RecordKind,
    RentalHistory,
    RentalRecord,
    Vehicle,
    VehicleStatus,
)
from storage import FlatFileStorage

logger = logging.getLogger(__name__)


class RentalSystem:
    """
    In-memory rental ledger backed by a FlatFileStorage.

    Vehicles, customers and rental records are kept in insertion order and
    searched linearly. Each successful registration, rent or return is
    appended to storage. Build one instance at start-up with
    `from_storage` and hand it to whoever needs it.
    """

    def __init__(self, storage: FlatFileStorage):
        self.storage = storage
        self._vehicles: List[Vehicle] = []
        self._customers: List[Customer] = []
        self._history = RentalHistory()

    @classmethod
    def from_storage(cls, storage: FlatFileStorage) -> "RentalSystem":
        system = cls(storage)
        system.load_data()
        return system

    # --- Collections ---

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self._vehicles)

    @property
    def customers(self) -> List[Customer]:
        return list(self._customers)

    @property
    def rental_history(self) -> List[RentalRecord]:
        return self._history.get_rental_history()

    def list_vehicles(self, only_available: bool = False) -> List[Vehicle]:
        if only_available:
            return [v for v in self._vehicles if v.is_available()]
        return list(self._vehicles)

    # --- Registration ---

    def add_vehicle(self, vehicle: Vehicle) -> bool:
        if vehicle.license_plate is None:
            raise ValueError("Vehicle must have a license plate before it can be registered.")
        if self.find_vehicle_by_plate(vehicle.license_plate) is not None:
            logger.warning(f"Vehicle with plate {vehicle.license_plate} already exists.")
            return False
        self._vehicles.append(vehicle)
        self.storage.save_vehicle(vehicle)
        logger.info(f"Vehicle {vehicle.license_plate} registered")
        return True

    def add_customer(self, customer: Customer) -> bool:
        if self.find_customer_by_id(customer.customer_id) is not None:
            logger.warning(f"Customer with ID {customer.customer_id} already exists.")
            return False
        self._customers.append(customer)
        self.storage.save_customer(customer)
        logger.info(f"Customer {customer.customer_id} registered")
        return True

    def change_license_plate(self, vehicle: Vehicle, new_plate: str) -> bool:
        """
        Re-plate a registered vehicle and persist the change.

        Raises ValueError for an invalid plate. Returns False, leaving the
        vehicle untouched, when the vehicle is not registered or another
        vehicle already holds the plate.
        """
        if not any(v is vehicle for v in self._vehicles):
            logger.warning(f"Vehicle {vehicle.license_plate} is not registered.")
            return False
        holder = self.find_vehicle_by_plate(new_plate)
        if holder is not None and holder is not vehicle:
            logger.warning(f"Vehicle with plate {new_plate.upper()} already exists.")
            return False

        old_plate = vehicle.license_plate
        vehicle.set_license_plate(new_plate)
        if vehicle.license_plate == old_plate:
            return True
        self.storage.save_plate_change(vehicle, old_plate)
        logger.info(f"Vehicle {old_plate} re-plated as {vehicle.license_plate}")
        return True

    # --- Rentals ---

    def rent_vehicle(self, vehicle: Vehicle, customer: Customer, rental_date: date, amount: float) -> bool:
        if vehicle.status != VehicleStatus.AVAILABLE:
            logger.warning(f"Vehicle {vehicle.license_plate} is not available for renting.")
            return False
        # Build the record before touching the status so a rejected record changes nothing
        record = self._build_record(vehicle, customer, rental_date, amount, RecordKind.RENT)
        vehicle.set_status(VehicleStatus.RENTED)
        self._commit(record)
        logger.info(f"Vehicle {vehicle.license_plate} rented to {customer.customer_name}")
        return True

    def return_vehicle(self, vehicle: Vehicle, customer: Customer, return_date: date, extra_fees: float) -> bool:
        if vehicle.status != VehicleStatus.RENTED:
            logger.warning(f"Vehicle {vehicle.license_plate} is not rented.")
            return False
        record = self._build_record(vehicle, customer, return_date, extra_fees, RecordKind.RETURN)
        vehicle.set_status(VehicleStatus.AVAILABLE)
        self._commit(record)
        logger.info(f"Vehicle {vehicle.license_plate} returned by {customer.customer_name}")
        return True

    def _build_record(self, vehicle, customer, record_date, amount, kind) -> RentalRecord:
        return RentalRecord(
            vehicle=vehicle,
            customer=customer,
            record_date=record_date,
            amount=amount,
            kind=kind,
        )

    def _commit(self, record: RentalRecord) -> None:
        self._history.add_record(record)
        self.storage.save_record(record)

    # --- Lookup ---

    def find_vehicle_by_plate(self, plate: Optional[str]) -> Optional[Vehicle]:
        if plate is None:
            return None
        plate = plate.upper()
        for vehicle in self._vehicles:
            if vehicle.license_plate is not None and vehicle.license_plate.upper() == plate:
                return vehicle
        return None

    def find_customer_by_id(self, customer_id: Union[str, int]) -> Optional[Customer]:
        """Look up a customer; raises ValueError when the id is not numeric."""
        target = int(customer_id)
        for customer in self._customers:
            if customer.customer_id == target:
                return customer
        return None

    # --- Display ---

    def display_vehicles(self, only_available: bool = False) -> str:
        lines = [
            f"| {'Type':<12}| {'Plate':<8}| {'Make':<12}| {'Model':<12}| {'Year':<6}| {'Status':<13}|",
            "-" * 77,
        ]
        for v in self.list_vehicles(only_available):
            lines.append(
                f"| {v.type_label:<12}| {v.license_plate:<8}| {v.make or '':<12}| "
                f"{v.model or '':<12}| {v.year:<6}| {v.status.value:<13}|"
            )
        return "\n".join(lines)

    def display_all_customers(self) -> str:
        return "\n".join(f"  {c}" for c in self._customers)

    def display_rental_history(self) -> str:
        return "\n".join(str(r) for r in self._history.get_rental_history())

    # --- Loading ---

    def load_data(self) -> None:
        """
        Replace the in-memory state with what storage holds.

        Duplicate plates or ids on disk keep their first occurrence. Replaying
        the rental records restores each vehicle's current status.
        """
        self._vehicles.clear()
        self._customers.clear()
        self._history.clear()

        for vehicle in self.storage.load_vehicles():
            if self.find_vehicle_by_plate(vehicle.license_plate) is not None:
                logger.warning(f"Ignoring duplicate stored vehicle {vehicle.license_plate}")
                continue
            self._vehicles.append(vehicle)

        for customer in self.storage.load_customers():
            if self.find_customer_by_id(customer.customer_id) is not None:
                logger.warning(f"Ignoring duplicate stored customer {customer.customer_id}")
                continue
            self._customers.append(customer)

        for record in self.storage.load_records(self._vehicles, self._customers):
            self._history.add_record(record)
            if record.kind == RecordKind.RENT:
                record.vehicle.set_status(VehicleStatus.RENTED)
            else:
                record.vehicle.set_status(VehicleStatus.AVAILABLE)

        logger.info(
            f"Loaded {len(self._vehicles)} vehicles, {len(self._customers)} customers "
            f"and {len(self._history)} rental records"
        )
