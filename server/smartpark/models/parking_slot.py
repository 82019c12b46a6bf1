from server.smartpark.extensions import db

AVAILABLE = "available"
OCCUPIED = "occupied"


class ParkingSlot(db.Model):
    __tablename__ = "parking_slots"

    slot_number = db.Column(db.Integer, primary_key=True, autoincrement=True)
    status = db.Column(db.String(20), nullable=False, default=AVAILABLE)

    @property
    def is_available(self):
        return self.status == AVAILABLE

    def to_dict(self):
        return {
            "SlotNumber": self.slot_number,
            "SlotStatus": self.status,
        }
