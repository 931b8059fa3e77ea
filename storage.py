# storage.py
import csv
import logging
import os
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Union

from dotenv import load_dotenv
from fastapi import Request

from Models import (
    Customer,
    RecordKind,
    RentalRecord,
    Vehicle,
    VehicleStatus,
    VehicleType,
    build_vehicle,
)
from paths import data_file

# Load environment variables from .env
load_dotenv()

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_VEHICLES_FILE = data_file("vehicles.txt")
DEFAULT_CUSTOMERS_FILE = data_file("customers.txt")
DEFAULT_RECORDS_FILE = data_file("rental_records.txt")


class FlatFileStorage:
    """
    Append-only persistence for the rental ledger.

    Each entity kind lives in its own newline-delimited file written with the
    csv module, so commas and quotes inside names survive a reload:

        vehicles:        license_plate,make,model,year,status,vehicle_type,detail[,previous_plate]
        customers:       customer_id,customer_name
        rental records:  kind,license_plate,customer_id,date,amount

    Every write opens, appends and closes its file. I/O errors are logged and
    swallowed: a failed write loses that line, a failed read yields no data.
    """

    def __init__(self, vehicles_path: PathLike, customers_path: PathLike, records_path: PathLike):
        self.vehicles_path = Path(vehicles_path)
        self.customers_path = Path(customers_path)
        self.records_path = Path(records_path)

    @classmethod
    def from_env(cls) -> "FlatFileStorage":
        """Build storage from VEHICLES_FILE, CUSTOMERS_FILE and RENTAL_RECORDS_FILE."""
        storage = cls(
            os.getenv("VEHICLES_FILE", str(DEFAULT_VEHICLES_FILE)),
            os.getenv("CUSTOMERS_FILE", str(DEFAULT_CUSTOMERS_FILE)),
            os.getenv("RENTAL_RECORDS_FILE", str(DEFAULT_RECORDS_FILE)),
        )
        logger.info(
            f"Ledger files: vehicles={storage.vehicles_path}, "
            f"customers={storage.customers_path}, records={storage.records_path}"
        )
        return storage

    # --- Writing ---

    def save_vehicle(self, vehicle: Vehicle) -> bool:
        return self._append_row(self.vehicles_path, self._vehicle_row(vehicle), "vehicle")

    def save_plate_change(self, vehicle: Vehicle, previous_plate: str) -> bool:
        """Append the vehicle under its new plate, pointing back at the old one."""
        row = self._vehicle_row(vehicle) + [previous_plate]
        return self._append_row(self.vehicles_path, row, "plate change")

    def save_customer(self, customer: Customer) -> bool:
        return self._append_row(
            self.customers_path,
            [customer.customer_id, customer.customer_name],
            "customer",
        )

    def save_record(self, record: RentalRecord) -> bool:
        row = [
            record.kind.value,
            record.vehicle.license_plate,
            record.customer.customer_id,
            record.record_date.isoformat(),
            record.amount,
        ]
        return self._append_row(self.records_path, row, "rental record")

    def _vehicle_row(self, vehicle: Vehicle) -> list:
        return [
            vehicle.license_plate,
            vehicle.make or "",
            vehicle.model or "",
            vehicle.year,
            vehicle.status.value,
            vehicle.vehicle_type.value,
            vehicle.detail,
        ]

    def _append_row(self, path: Path, row: list, label: str) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", newline="", encoding="utf-8") as fh:
                csv.writer(fh).writerow(row)
            return True
        except OSError as e:
            logger.error(f"Error saving {label}: {e}")
            return False

    # --- Reading ---

    def load_vehicles(self) -> List[Vehicle]:
        """
        Rebuild vehicles in registration order. A line whose eighth field
        names a previous plate re-plates that vehicle instead of adding one.
        """
        vehicles = []
        for line_no, row in enumerate(self._read_rows(self.vehicles_path, "vehicles"), start=1):
            if len(row) < 5:
                logger.warning(f"Skipping short vehicle line {line_no}: {row}")
                continue
            try:
                # Lines without a type tag predate typed storage and load as cars
                vehicle_type = VehicleType(row[5]) if len(row) > 5 and row[5] else VehicleType.CAR
                detail = row[6] if len(row) > 6 else None
                vehicle = build_vehicle(vehicle_type, row[1], row[2], int(row[3]), detail)
                vehicle.set_license_plate(row[0])
                vehicle.set_status(VehicleStatus(row[4]))
            except ValueError as e:
                logger.warning(f"Skipping malformed vehicle line {line_no}: {e}")
                continue

            previous_plate = row[7].upper() if len(row) > 7 and row[7] else None
            if previous_plate is None:
                vehicles.append(vehicle)
                continue

            existing = next((v for v in vehicles if v.license_plate == previous_plate), None)
            taken = any(v.license_plate == vehicle.license_plate and v is not existing for v in vehicles)
            if existing is None or taken:
                logger.warning(
                    f"Skipping plate change line {line_no}: {previous_plate} -> {vehicle.license_plate}"
                )
                continue
            existing.set_license_plate(vehicle.license_plate)
        return vehicles

    def load_plate_changes(self) -> Dict[str, str]:
        """Map each superseded plate to the plate that replaced it."""
        changes = {}
        for row in self._read_rows(self.vehicles_path, "vehicles"):
            if len(row) > 7 and row[7]:
                changes[row[7].upper()] = row[0].upper()
        return changes

    def load_customers(self) -> List[Customer]:
        customers = []
        for line_no, row in enumerate(self._read_rows(self.customers_path, "customers"), start=1):
            if len(row) < 2:
                logger.warning(f"Skipping short customer line {line_no}: {row}")
                continue
            try:
                customers.append(Customer(customer_id=int(row[0]), customer_name=row[1]))
            except ValueError as e:
                logger.warning(f"Skipping malformed customer line {line_no}: {e}")
        return customers

    def load_records(self, vehicles: Iterable[Vehicle], customers: Iterable[Customer]) -> List[RentalRecord]:
        """
        Rebuild rental records, resolving each line against the given vehicles
        (by plate, following plate changes when the plate is no longer current)
        and customers (by id). Lines naming an unknown vehicle or customer are
        logged and skipped.
        """
        by_plate: Dict[str, Vehicle] = {v.license_plate: v for v in vehicles if v.license_plate}
        by_id: Dict[int, Customer] = {c.customer_id: c for c in customers}
        plate_changes = self.load_plate_changes()

        def resolve(plate):
            seen = set()
            while plate not in by_plate and plate in plate_changes and plate not in seen:
                seen.add(plate)
                plate = plate_changes[plate]
            return by_plate.get(plate)

        records = []
        for line_no, row in enumerate(self._read_rows(self.records_path, "rental records"), start=1):
            if len(row) < 5:
                logger.warning(f"Skipping short rental record line {line_no}: {row}")
                continue
            try:
                kind = RecordKind(row[0])
                plate = row[1].upper()
                customer_id = int(row[2])
                record_date = date.fromisoformat(row[3])
                amount = float(row[4])
            except ValueError as e:
                logger.warning(f"Skipping malformed rental record line {line_no}: {e}")
                continue

            vehicle = resolve(plate)
            customer = by_id.get(customer_id)
            if vehicle is None or customer is None:
                logger.warning(
                    f"Skipping rental record line {line_no}: unknown vehicle {plate} or customer {customer_id}"
                )
                continue

            records.append(RentalRecord(
                vehicle=vehicle,
                customer=customer,
                record_date=record_date,
                amount=amount,
                kind=kind,
            ))
        return records

    def _read_rows(self, path: Path, label: str) -> List[List[str]]:
        try:
            with path.open(newline="", encoding="utf-8") as fh:
                return [row for row in csv.reader(fh) if row]
        except FileNotFoundError:
            # First run
            return []
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error(f"Error loading {label}: {e}")
            return []


# Dependency for FastAPI
def get_rental_system(request: Request):
    return request.app.state.rental_system
