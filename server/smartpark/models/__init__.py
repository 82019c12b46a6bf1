from .user import User
from .car import Car
from .parking_slot import ParkingSlot, AVAILABLE, OCCUPIED
from .parking_record import ParkingRecord
from .payment import PSPayment
