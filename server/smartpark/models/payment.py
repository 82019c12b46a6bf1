from server.smartpark.extensions import db
from server.smartpark.utils import isoformat, utcnow


class PSPayment(db.Model):
    """Parking-service payment. Not linked to a specific parking record."""
    __tablename__ = "ps_payments"

    payment_number = db.Column(db.Integer, primary_key=True, autoincrement=True)
    plate_number = db.Column(db.String(20), db.ForeignKey("cars.plate_number"), nullable=False, index=True)
    amount_paid = db.Column(db.Numeric(10, 2), nullable=False)
    payment_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    car = db.relationship("Car", lazy="joined", innerjoin=True)

    def to_dict(self):
        data = {
            "PaymentNumber": self.payment_number,
            "PlateNumber": self.plate_number,
            "AmountPaid": float(self.amount_paid) if self.amount_paid is not None else None,
            "PaymentDate": isoformat(self.payment_date),
        }
        if self.car is not None:
            data.update({
                "DriverName": self.car.driver_name,
                "PhoneNumber": self.car.phone_number,
                "CarType": self.car.car_type,
            })
        return data
