import logging

from . import api_bp
from flask import jsonify, request
from server.smartpark.errors import Conflict, NotFound, ValidationError
from server.smartpark.extensions import db
from server.smartpark.models import AVAILABLE, OCCUPIED, ParkingRecord, ParkingSlot
from server.smartpark.utils import admin_required, token_required

logger = logging.getLogger(__name__)


def _get_slot_or_404(slot_number):
    slot = db.session.get(ParkingSlot, slot_number)
    if slot is None:
        raise NotFound("Parking slot not found")
    return slot


def _slots_with_status(status=None):
    query = ParkingSlot.query
    if status:
        query = query.filter_by(status=status)
    return jsonify([s.to_dict() for s in query.order_by(ParkingSlot.slot_number).all()]), 200


@api_bp.route("/parkingslots", methods=["GET"])
@token_required
def list_parking_slots():
    return _slots_with_status()


@api_bp.route("/parkingslots/available", methods=["GET"])
@token_required
def list_available_slots():
    return _slots_with_status(AVAILABLE)


@api_bp.route("/parkingslots/occupied", methods=["GET"])
@token_required
def list_occupied_slots():
    return _slots_with_status(OCCUPIED)


@api_bp.route("/parkingslots/<int:slot_number>", methods=["GET"])
@token_required
def get_parking_slot(slot_number):
    return jsonify(_get_slot_or_404(slot_number).to_dict()), 200


@api_bp.route("/parkingslots", methods=["POST"])
@admin_required
def create_parking_slot():
    data = request.get_json(silent=True) or {}
    slot_number = data.get("SlotNumber")

    # Occupancy only changes through parking entry and exit
    if data.get("SlotStatus", AVAILABLE) != AVAILABLE:
        raise ValidationError("New parking slots are always available")

    if slot_number is not None:
        if not isinstance(slot_number, int) or isinstance(slot_number, bool) or slot_number < 1:
            raise ValidationError("SlotNumber must be a positive integer")
        if db.session.get(ParkingSlot, slot_number) is not None:
            raise Conflict(f"Parking slot {slot_number} already exists")

    slot = ParkingSlot(slot_number=slot_number, status=AVAILABLE)
    db.session.add(slot)
    db.session.commit()

    logger.info(f"Parking slot {slot.slot_number} created")
    return jsonify({
        "message": "Parking slot added successfully",
        "slotNumber": slot.slot_number
    }), 201


@api_bp.route("/parkingslots/<int:slot_number>", methods=["DELETE"])
@admin_required
def delete_parking_slot(slot_number):
    slot = _get_slot_or_404(slot_number)

    active = ParkingRecord.query.filter_by(slot_number=slot_number, exit_time=None).first()
    if active or not slot.is_available:
        raise Conflict("Cannot delete parking slot that is currently in use")

    if ParkingRecord.query.filter_by(slot_number=slot_number).first():
        raise Conflict("Cannot delete parking slot with existing parking records. Delete related records first.")

    db.session.delete(slot)
    db.session.commit()

    logger.info(f"Parking slot {slot_number} deleted")
    return jsonify({"message": "Parking slot deleted successfully"}), 200
