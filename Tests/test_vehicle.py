import pytest

from Models import Car, Motorcycle, Truck, VehicleStatus, VehicleType, build_vehicle, is_valid_plate


@pytest.mark.parametrize("plate", ["AAA100", "ABC567", "ZZZ999"])
def test_valid_plates_are_accepted(plate):
    car = Car(make="Toyota", model="Corolla", year=2019)
    car.set_license_plate(plate)
    assert car.license_plate == plate


def test_plate_is_stored_uppercased():
    car = Car(make="Ford", model="Focus", year=2021)
    car.set_license_plate("abc567")
    assert car.license_plate == "ABC567"


@pytest.mark.parametrize("plate", ["", "   ", None, "AAA1000", "ZZZ99", "AA1000", "AAA10A", "AAA100\n"])
def test_invalid_plates_are_rejected(plate):
    car = Car(make="Honda", model="Civic", year=2020)
    with pytest.raises(ValueError):
        car.set_license_plate(plate)
    assert car.license_plate is None


def test_failed_reassignment_keeps_previous_plate():
    car = Car(make="Honda", model="Civic", year=2020)
    car.set_license_plate("AAA100")
    with pytest.raises(ValueError):
        car.set_license_plate("nope")
    assert car.license_plate == "AAA100"
    car.set_license_plate("bbb200")
    assert car.license_plate == "BBB200"


def test_is_valid_plate():
    assert is_valid_plate("xyz123")
    assert not is_valid_plate("XYZ12")
    assert not is_valid_plate(None)


def test_make_and_model_are_capitalized():
    car = Car(make="toyota", model="COROLLA", year=2019)
    assert car.make == "Toyota"
    assert car.model == "Corolla"


def test_empty_make_passes_through():
    car = Car(make="", model=None, year=2019)
    assert car.make == ""
    assert car.model is None


def test_new_vehicle_defaults():
    bike = Motorcycle(make="honda", model="cb500", year=2022)
    assert bike.status == VehicleStatus.AVAILABLE
    assert bike.license_plate is None
    assert bike.vehicle_type == VehicleType.MOTORCYCLE
    assert bike.type_label == "Motorcycle"


def test_build_vehicle_uses_type_tag_and_detail():
    car = build_vehicle(VehicleType.CAR, "kia", "rio", 2018, "5")
    bike = build_vehicle("MOTORCYCLE", "ducati", "monster", 2020, "true")
    truck = build_vehicle(VehicleType.TRUCK, "volvo", "fh", 2015, "12.5")

    assert isinstance(car, Car) and car.seats == 5
    assert isinstance(bike, Motorcycle) and bike.has_sidecar is True
    assert isinstance(truck, Truck) and truck.cargo_capacity == 12.5


def test_build_vehicle_defaults_without_detail():
    assert build_vehicle(VehicleType.CAR, "kia", "rio", 2018).seats == 4
    assert build_vehicle(VehicleType.MOTORCYCLE, "bmw", "r", 2018, "").has_sidecar is False


def test_build_vehicle_rejects_unknown_type():
    with pytest.raises(ValueError):
        build_vehicle("BOAT", "x", "y", 2000)


def test_get_info():
    car = Car(make="mazda", model="mx5", year=2017)
    car.set_license_plate("MAZ123")
    assert car.get_info() == "| MAZ123 | Mazda | Mx5 | 2017 | AVAILABLE |"


def test_assignment_does_not_recapitalize():
    car = Car(make="toyota", model="corolla", year=2019)
    car.make = "toyota GR"
    assert car.make == "toyota GR"
    assert car.model == "Corolla"
