import logging

from . import api_bp
from flask import request, jsonify
from server.smartpark.errors import Conflict, NotFound, ValidationError
from server.smartpark.extensions import db
from server.smartpark.models import Car, ParkingRecord, PSPayment
from server.smartpark.utils import parse_plate_number, token_required

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("DriverName", "CarType", "PhoneNumber")


def _get_car_or_404(plate_number):
    car = db.session.get(Car, plate_number)
    if car is None:
        raise NotFound("Car not found")
    return car


def _check_required_fields(data):
    if not all(isinstance(data.get(f), str) and data[f].strip() for f in REQUIRED_FIELDS):
        raise ValidationError("Please provide all required fields")
    car_size = data.get("CarSize")
    if car_size is not None and not isinstance(car_size, str):
        raise ValidationError("CarSize must be a string")


@api_bp.route("/cars", methods=["GET"])
@token_required
def list_cars():
    cars = Car.query.order_by(Car.plate_number).all()
    return jsonify([c.to_dict() for c in cars]), 200


@api_bp.route("/cars/<plate_number>", methods=["GET"])
@token_required
def get_car(plate_number):
    return jsonify(_get_car_or_404(plate_number).to_dict()), 200


@api_bp.route("/cars", methods=["POST"])
@token_required
def create_car():
    data = request.get_json(silent=True) or {}
    plate_number = parse_plate_number(data.get("PlateNumber"), "Please provide all required fields")
    _check_required_fields(data)

    if db.session.get(Car, plate_number) is not None:
        raise Conflict("A car with this plate number already exists")

    car = Car(
        plate_number=plate_number,
        driver_name=data["DriverName"],
        car_type=data["CarType"],
        car_size=data.get("CarSize"),
        phone_number=data["PhoneNumber"],
    )
    db.session.add(car)
    db.session.commit()

    logger.info(f"Car {plate_number} created")
    return jsonify({"message": "Car created successfully"}), 201


@api_bp.route("/cars/<plate_number>", methods=["PUT"])
@token_required
def update_car(plate_number):
    data = request.get_json(silent=True) or {}
    _check_required_fields(data)

    car = _get_car_or_404(plate_number)
    car.driver_name = data["DriverName"]
    car.car_type = data["CarType"]
    car.phone_number = data["PhoneNumber"]
    if "CarSize" in data:
        car.car_size = data["CarSize"]
    db.session.commit()

    return jsonify({"message": "Car updated successfully"}), 200


@api_bp.route("/cars/<plate_number>", methods=["DELETE"])
@token_required
def delete_car(plate_number):
    car = _get_car_or_404(plate_number)

    if ParkingRecord.query.filter_by(plate_number=plate_number).first():
        raise Conflict("Cannot delete car with existing parking records. Delete related records first.")

    if PSPayment.query.filter_by(plate_number=plate_number).first():
        raise Conflict("Cannot delete car with existing payments. Delete related payments first.")

    db.session.delete(car)
    db.session.commit()

    logger.info(f"Car {plate_number} deleted")
    return jsonify({"message": "Car deleted successfully"}), 200
