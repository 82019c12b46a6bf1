import unittest

from server.smartpark.models import AVAILABLE, OCCUPIED
from tests.base import SmartParkTestCase


class ParkingRecordRoutesTest(SmartParkTestCase):

    def setUp(self):
        super().setUp()
        self.plate = self.add_car("RAB123A")
        self.slot, = self.add_slots(1)

    def park(self, plate_number=None, slot_number=None):
        return self.client.post("/api/parkingrecords", headers=self.staff_headers, json={
            "PlateNumber": plate_number or self.plate,
            "SlotNumber": slot_number or self.slot,
        })

    def test_requires_token(self):
        response = self.client.get("/api/parkingrecords")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["message"], "No token provided")

    def test_rejects_bad_token(self):
        response = self.client.get("/api/parkingrecords", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["message"], "Unauthorized")

    def test_entry_and_exit(self):
        response = self.park()
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["message"], "Car parked successfully")
        parking_id = body["parkingId"]
        self.assertEqual(self.slot_status(self.slot), OCCUPIED)

        response = self.client.put(f"/api/parkingrecords/{parking_id}/exit", headers=self.staff_headers)
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["message"], "Car exit recorded successfully")
        self.assertGreaterEqual(body["duration"], 0)
        self.assertEqual(self.slot_status(self.slot), AVAILABLE)
        self.assertOccupancyConsistent()

    def test_entry_validation(self):
        response = self.client.post("/api/parkingrecords", headers=self.staff_headers,
                                    json={"PlateNumber": self.plate})
        self.assertEqual(response.status_code, 400)

        response = self.client.post("/api/parkingrecords", headers=self.staff_headers,
                                    json={"PlateNumber": self.plate, "SlotNumber": "abc"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "SlotNumber must be an integer")

    def test_entry_rejects_wrongly_typed_fields(self):
        for plate in (["A", "B"], {"plate": self.plate}, 123):
            response = self.client.post("/api/parkingrecords", headers=self.staff_headers,
                                        json={"PlateNumber": plate, "SlotNumber": self.slot})
            self.assertEqual(response.status_code, 400, plate)
            self.assertEqual(response.get_json()["message"], "PlateNumber must be a string")

        for slot in (2.9, float(self.slot), True, [self.slot], "1.5", "-1"):
            response = self.client.post("/api/parkingrecords", headers=self.staff_headers,
                                        json={"PlateNumber": self.plate, "SlotNumber": slot})
            self.assertEqual(response.status_code, 400, slot)
            self.assertEqual(response.get_json()["message"], "SlotNumber must be an integer")

        self.assertEqual(self.slot_status(self.slot), AVAILABLE)
        self.assertEqual(self.client.get("/api/parkingrecords", headers=self.staff_headers).get_json(), [])

    def test_entry_accepts_digit_string_slot(self):
        response = self.park(slot_number=str(self.slot))
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.slot_status(self.slot), OCCUPIED)

    def test_entry_errors(self):
        response = self.park(plate_number="UNKNOWN")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Car not found")

        response = self.park(slot_number=42)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Parking slot not found")

        self.park()
        other = self.add_car("RAC456B")
        response = self.park(plate_number=other)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "Parking slot is already occupied")

    def test_car_already_parked(self):
        self.park()
        second_slot, = self.add_slots(1)

        response = self.park(slot_number=second_slot)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], f"This car is already parked in slot {self.slot}")

    def test_exit_of_closed_record(self):
        parking_id = self.park().get_json()["parkingId"]
        self.client.put(f"/api/parkingrecords/{parking_id}/exit", headers=self.staff_headers)

        response = self.client.put(f"/api/parkingrecords/{parking_id}/exit", headers=self.staff_headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Active parking record not found")

    def test_listing_includes_car_and_slot(self):
        parking_id = self.park().get_json()["parkingId"]

        records = self.client.get("/api/parkingrecords", headers=self.staff_headers).get_json()
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record["ParkingID"], parking_id)
        self.assertEqual(record["PlateNumber"], self.plate)
        self.assertEqual(record["DriverName"], "Alice")
        self.assertEqual(record["SlotStatus"], OCCUPIED)
        self.assertIsNone(record["ExitTime"])

        active = self.client.get("/api/parkingrecords/active", headers=self.staff_headers).get_json()
        self.assertEqual([r["ParkingID"] for r in active], [parking_id])

        single = self.client.get(f"/api/parkingrecords/{parking_id}", headers=self.staff_headers)
        self.assertEqual(single.status_code, 200)
        self.assertEqual(single.get_json()["SlotNumber"], self.slot)

        self.client.put(f"/api/parkingrecords/{parking_id}/exit", headers=self.staff_headers)
        active = self.client.get("/api/parkingrecords/active", headers=self.staff_headers).get_json()
        self.assertEqual(active, [])

    def test_get_missing_record(self):
        response = self.client.get("/api/parkingrecords/99", headers=self.staff_headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Parking record not found")

    def test_delete_active_record_frees_slot(self):
        parking_id = self.park().get_json()["parkingId"]

        response = self.client.delete(f"/api/parkingrecords/{parking_id}", headers=self.staff_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["message"], "Parking record deleted successfully")
        self.assertEqual(self.slot_status(self.slot), AVAILABLE)
        missing = self.client.get(f"/api/parkingrecords/{parking_id}", headers=self.staff_headers)
        self.assertEqual(missing.status_code, 404)
        self.assertOccupancyConsistent()

    def test_delete_missing_record(self):
        response = self.client.delete("/api/parkingrecords/99", headers=self.staff_headers)
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
