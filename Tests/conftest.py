import pytest

from Models import Car, Customer
from storage import FlatFileStorage
from Services.rental_system import RentalSystem


@pytest.fixture
def storage(tmp_path):
    return FlatFileStorage(
        tmp_path / "vehicles.txt",
        tmp_path / "customers.txt",
        tmp_path / "rental_records.txt",
    )


@pytest.fixture
def system(storage):
    return RentalSystem.from_storage(storage)


@pytest.fixture
def car():
    vehicle = Car(make="toyota", model="camry", year=2021)
    vehicle.set_license_plate("BBB222")
    return vehicle


@pytest.fixture
def customer():
    return Customer(customer_id=1, customer_name="John Doe")
