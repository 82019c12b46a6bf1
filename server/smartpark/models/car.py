from server.smartpark.extensions import db


class Car(db.Model):
    __tablename__ = "cars"

    plate_number = db.Column(db.String(20), primary_key=True)
    driver_name = db.Column(db.String(100), nullable=False)
    car_type = db.Column(db.String(50), nullable=False)
    car_size = db.Column(db.String(20), nullable=True)
    phone_number = db.Column(db.String(20), nullable=False)

    def to_dict(self):
        return {
            "PlateNumber": self.plate_number,
            "DriverName": self.driver_name,
            "CarType": self.car_type,
            "CarSize": self.car_size,
            "PhoneNumber": self.phone_number,
        }
