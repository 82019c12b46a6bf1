from server.smartpark.extensions import db
from server.smartpark.utils import isoformat


class ParkingRecord(db.Model):
    __tablename__ = "parking_records"

    parking_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    plate_number = db.Column(db.String(20), db.ForeignKey("cars.plate_number"), nullable=False, index=True)
    slot_number = db.Column(db.Integer, db.ForeignKey("parking_slots.slot_number"), nullable=False, index=True)
    entry_time = db.Column(db.DateTime, nullable=False, index=True)
    exit_time = db.Column(db.DateTime, nullable=True)
    duration = db.Column(db.Integer, nullable=True)  # minutes, set at exit

    car = db.relationship("Car", lazy="joined", innerjoin=True)
    slot = db.relationship("ParkingSlot", lazy="joined", innerjoin=True)

    @property
    def is_active(self):
        return self.exit_time is None

    def to_dict(self):
        data = {
            "ParkingID": self.parking_id,
            "PlateNumber": self.plate_number,
            "SlotNumber": self.slot_number,
            "EntryTime": isoformat(self.entry_time),
            "ExitTime": isoformat(self.exit_time),
            "Duration": self.duration,
        }
        if self.car is not None:
            data.update({
                "DriverName": self.car.driver_name,
                "PhoneNumber": self.car.phone_number,
                "CarType": self.car.car_type,
                "CarSize": self.car.car_size,
            })
        if self.slot is not None:
            data["SlotStatus"] = self.slot.status
        return data
