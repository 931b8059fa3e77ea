# Models/rental.py
from datetime import date
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict

from .customer import Customer
from .vehicle import Vehicle


class RecordKind(str, Enum):
    RENT = "RENT"
    RETURN = "RETURN"


class RentalRecord(BaseModel):
    """
    Immutable log entry for one rent or return.

    `amount` is the rental price for RENT records and the extra fees charged
    for RETURN records.
    """
    model_config = ConfigDict(frozen=True)

    vehicle: Vehicle
    customer: Customer
    record_date: date
    amount: float
    kind: RecordKind

    def __str__(self):
        return (
            f"{self.kind.value} | Plate: {self.vehicle.license_plate} | "
            f"Customer: {self.customer.customer_name} | Date: {self.record_date.isoformat()} | "
            f"Amount: ${self.amount:.2f}"
        )


class RentalHistory:
    """Append-only, chronologically ordered list of rental records."""

    def __init__(self):
        self._records: List[RentalRecord] = []

    def add_record(self, record: RentalRecord) -> None:
        self._records.append(record)

    def get_rental_history(self) -> List[RentalRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self):
        return len(self._records)
