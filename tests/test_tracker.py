"""
Tests for vehicles and their service histories.
"""
import unittest
from datetime import date

from pydantic import ValidationError

from repufrenos.schemas.tracker import (
    BrakeServiceBase, MechanicServiceBase, OilChangeBase, VehicleCreate, WorkshopInfo,
)
from repufrenos.storage import MemoryStore
from repufrenos.tracker import (
    BrakeServiceRepository, MechanicServiceRepository, MissingVehicleError, OilChangeRepository,
    RecordNotFoundError, VehicleRepository, WorkshopInfoRepository,
    delete_vehicle_cascade, vehicle_summaries,
)
from repufrenos.tracker.vehicles import VEHICLES_KEY


def vehicle_data(**overrides):
    values = {"make": "Toyota", "model": "Yaris", "year": "2019", "patente": "ABCD12"}
    values.update(overrides)
    return VehicleCreate(**values)


def oil_change(day, mileage="50000"):
    return OilChangeBase(date=day, mileage=mileage, oil_type="10W-40", filter_type="Bosch F1")


class TestVehicleRepository(unittest.TestCase):

    def setUp(self):
        self.store = MemoryStore()
        self.vehicles = VehicleRepository(self.store)

    def test_vehicles_sorted_by_make_and_model(self):
        self.vehicles.add(vehicle_data(make="toyota", model="Yaris"))
        self.vehicles.add(vehicle_data(make="Chevrolet", model="Sail"))
        self.vehicles.add(vehicle_data(make="Chevrolet", model="Onix"))
        names = [f"{v.make} {v.model}" for v in self.vehicles.list()]
        self.assertEqual(names, ["Chevrolet Onix", "Chevrolet Sail", "toyota Yaris"])

    def test_update_keeps_id(self):
        vehicle = self.vehicles.add(vehicle_data())
        updated = self.vehicles.update(vehicle.id, vehicle_data(owner_name="Ana"))
        self.assertEqual(updated.id, vehicle.id)
        self.assertEqual(self.vehicles.require(vehicle.id).owner_name, "Ana")

    def test_update_unknown_vehicle(self):
        with self.assertRaises(RecordNotFoundError):
            self.vehicles.update("missing", vehicle_data())

    def test_search_matches_patente_and_owner(self):
        self.vehicles.add(vehicle_data(patente="XY1234", owner_name="Pedro"))
        self.vehicles.add(vehicle_data(make="Kia", model="Rio", patente="ZZ9999"))
        self.assertEqual(len(self.vehicles.search("xy12")), 1)
        self.assertEqual(len(self.vehicles.search("pedro")), 1)
        self.assertEqual(len(self.vehicles.search(None)), 2)

    def test_phone_number_rules(self):
        self.assertEqual(vehicle_data(phone_number="+56").phone_number, "")
        self.assertEqual(vehicle_data(phone_number="+56912345678").phone_number, "+56912345678")
        with self.assertRaises(ValidationError):
            vehicle_data(phone_number="912345678")

    def test_invalid_year(self):
        with self.assertRaises(ValidationError):
            vehicle_data(year="19")


class TestServiceRecords(unittest.TestCase):

    def setUp(self):
        self.store = MemoryStore()
        self.vehicle = VehicleRepository(self.store).add(vehicle_data())
        self.oil = OilChangeRepository(self.store, self.vehicle.id)

    def test_records_newest_first(self):
        self.oil.add(oil_change(date(2024, 1, 10)))
        self.oil.add(oil_change(date(2024, 6, 1)))
        self.oil.add(oil_change(date(2023, 12, 1)))
        self.assertEqual(
            [r.date for r in self.oil.list()],
            [date(2024, 6, 1), date(2024, 1, 10), date(2023, 12, 1)],
        )

    def test_records_are_stored_per_vehicle(self):
        record = self.oil.add(oil_change(date(2024, 1, 10)))
        self.assertIn(OilChangeRepository.key_for(self.vehicle.id), self.store.keys())
        self.assertEqual(record.vehicle_id, self.vehicle.id)

    def test_missing_vehicle_id(self):
        with self.assertRaises(MissingVehicleError):
            OilChangeRepository(self.store).add(oil_change(date(2024, 1, 10)))

    def test_update_and_delete(self):
        record = self.oil.add(oil_change(date(2024, 1, 10)))
        self.oil.update(record.id, oil_change(date(2024, 1, 10), mileage="61000"))
        self.assertEqual(self.oil.require(record.id).mileage, "61000")
        self.oil.delete(record.id)
        self.assertEqual(self.oil.list(), [])
        with self.assertRaises(RecordNotFoundError):
            self.oil.require(record.id)

    def test_brake_pad_model_required_with_pad_change(self):
        with self.assertRaises(ValidationError):
            BrakeServiceBase(date=date(2024, 1, 1), mileage="1000", pad_change=True)
        service = BrakeServiceBase(date=date(2024, 1, 1), mileage="1000", pad_change=True, pad_model="Brembo P1")
        self.assertEqual(service.pad_model, "Brembo P1")

    def test_mechanic_details_minimum_length(self):
        with self.assertRaises(ValidationError):
            MechanicServiceBase(date=date(2024, 1, 1), details="abc")

    def test_delete_vehicle_cascades(self):
        self.oil.add(oil_change(date(2024, 1, 10)))
        BrakeServiceRepository(self.store, self.vehicle.id).add(
            BrakeServiceBase(date=date(2024, 1, 1), mileage="1000", alignment=True)
        )
        MechanicServiceRepository(self.store, self.vehicle.id).add(
            MechanicServiceBase(date=date(2024, 1, 1), details="Cambio de correa")
        )

        delete_vehicle_cascade(self.store, self.vehicle.id)

        self.assertEqual(VehicleRepository(self.store).list(), [])
        leftovers = [key for key in self.store.keys() if self.vehicle.id in key]
        self.assertEqual(leftovers, [])

    def test_summaries_count_records(self):
        self.oil.add(oil_change(date(2024, 1, 10)))
        self.oil.add(oil_change(date(2024, 2, 10)))
        summary = vehicle_summaries(self.store)[0]
        self.assertEqual(summary.oil_changes, 2)
        self.assertEqual(summary.brake_services, 0)
        self.assertEqual(summary.mechanic_services, 0)


class TestUnreadableStoredData(unittest.TestCase):

    def test_unreadable_vehicle_is_skipped(self):
        store = MemoryStore()
        vehicle = VehicleRepository(store).add(vehicle_data())
        stored = store.peek_json(VEHICLES_KEY)
        store.set_json(VEHICLES_KEY, stored + [{"id": "v1", "make": "Kia"}])
        self.assertEqual([v.id for v in VehicleRepository(store).list()], [vehicle.id])

    def test_unreadable_record_is_skipped(self):
        store = MemoryStore()
        vehicle = VehicleRepository(store).add(vehicle_data())
        oil = OilChangeRepository(store, vehicle.id)
        record = oil.add(oil_change(date(2024, 1, 10)))
        key = OilChangeRepository.key_for(vehicle.id)
        store.set_json(key, store.peek_json(key) + [{"id": "r1", "date": "2024-01-01"}])
        self.assertEqual([r.id for r in oil.list()], [record.id])


class TestWorkshopInfo(unittest.TestCase):

    def test_missing_workshop_info(self):
        self.assertIsNone(WorkshopInfoRepository(MemoryStore()).get())

    def test_save_and_get(self):
        store = MemoryStore()
        WorkshopInfoRepository(store).save(WorkshopInfo(name="Taller Sur", technicians=["Luis"]))
        info = WorkshopInfoRepository(store).get()
        self.assertEqual(info.name, "Taller Sur")
        self.assertEqual(info.technicians, ["Luis"])

    def test_invalid_website(self):
        with self.assertRaises(ValidationError):
            WorkshopInfo(website="not a url")

    def test_blank_technician(self):
        with self.assertRaises(ValidationError):
            WorkshopInfo(technicians=["Luis", "  "])


if __name__ == "__main__":
    unittest.main()
