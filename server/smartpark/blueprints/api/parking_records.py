from . import api_bp
from flask import request, jsonify
from server.smartpark.errors import ValidationError
from server.smartpark.extensions import db
from server.smartpark.services import OccupancyManager
from server.smartpark.utils import parse_plate_number, parse_slot_number, token_required


def _manager():
    return OccupancyManager(db.session)


@api_bp.route("/parkingrecords", methods=["GET"])
@token_required
def list_parking_records():
    records = _manager().list_records()
    return jsonify([r.to_dict() for r in records]), 200


@api_bp.route("/parkingrecords/active", methods=["GET"])
@token_required
def list_active_parking_records():
    records = _manager().list_records(active_only=True)
    return jsonify([r.to_dict() for r in records]), 200


@api_bp.route("/parkingrecords/<int:parking_id>", methods=["GET"])
@token_required
def get_parking_record(parking_id):
    return jsonify(_manager().get_record(parking_id).to_dict()), 200


@api_bp.route("/parkingrecords", methods=["POST"])
@token_required
def register_entry():
    """Car entry: occupy the slot and open a parking record."""
    data = request.get_json(silent=True) or {}
    plate_number = data.get("PlateNumber")
    slot_number = data.get("SlotNumber")

    if not plate_number or slot_number is None:
        raise ValidationError("PlateNumber and SlotNumber are required")

    plate_number = parse_plate_number(plate_number, "PlateNumber must be a string")
    slot_number = parse_slot_number(slot_number)

    parking_id = _manager().register_entry(plate_number, slot_number)

    return jsonify({
        "message": "Car parked successfully",
        "parkingId": parking_id
    }), 201


@api_bp.route("/parkingrecords/<int:parking_id>/exit", methods=["PUT"])
@token_required
def register_exit(parking_id):
    """Car exit: close the record and free the slot."""
    duration = _manager().register_exit(parking_id)

    return jsonify({
        "message": "Car exit recorded successfully",
        "duration": duration
    }), 200


@api_bp.route("/parkingrecords/<int:parking_id>", methods=["DELETE"])
@token_required
def delete_parking_record(parking_id):
    _manager().delete_record(parking_id)
    return jsonify({"message": "Parking record deleted successfully"}), 200
