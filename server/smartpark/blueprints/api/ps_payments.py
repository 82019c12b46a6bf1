import logging
from decimal import Decimal, InvalidOperation

from . import api_bp
from flask import current_app, request, jsonify
from server.smartpark.errors import NotFound, ValidationError
from server.smartpark.extensions import db
from server.smartpark.models import Car, PSPayment
from server.smartpark.utils import parse_plate_number, token_required

logger = logging.getLogger(__name__)


def _parse_amount(value):
    """Amount must be a positive number; returned as Decimal."""
    if isinstance(value, bool):
        raise ValidationError("AmountPaid must be a positive number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("AmountPaid must be a positive number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("AmountPaid must be a positive number")
    return amount


def _get_payment_or_404(payment_number):
    payment = db.session.get(PSPayment, payment_number)
    if payment is None:
        raise NotFound("Payment not found")
    return payment


@api_bp.route("/pspayments", methods=["GET"])
@token_required
def list_payments():
    payments = PSPayment.query.order_by(PSPayment.payment_date.desc(), PSPayment.payment_number.desc()).all()
    return jsonify([p.to_dict() for p in payments]), 200


@api_bp.route("/pspayments/<int:payment_number>", methods=["GET"])
@token_required
def get_payment(payment_number):
    return jsonify(_get_payment_or_404(payment_number).to_dict()), 200


@api_bp.route("/pspayments/car/<plate_number>", methods=["GET"])
@token_required
def list_payments_for_car(plate_number):
    payments = (
        PSPayment.query.filter_by(plate_number=plate_number)
        .order_by(PSPayment.payment_date.desc(), PSPayment.payment_number.desc())
        .all()
    )
    return jsonify([p.to_dict() for p in payments]), 200


@api_bp.route("/pspayments", methods=["POST"])
@token_required
def create_payment():
    data = request.get_json(silent=True) or {}
    plate_number = parse_plate_number(data.get("PlateNumber"))

    amount = _parse_amount(data.get("AmountPaid", current_app.config["PARKING_FEE"]))

    if db.session.get(Car, plate_number) is None:
        raise NotFound("Car not found")

    payment = PSPayment(plate_number=plate_number, amount_paid=amount)
    db.session.add(payment)
    db.session.commit()

    logger.info(f"Payment {payment.payment_number} of {amount} recorded for {plate_number}")
    return jsonify({
        "message": "Payment added successfully",
        "paymentNumber": payment.payment_number
    }), 201


@api_bp.route("/pspayments/<int:payment_number>", methods=["PUT"])
@token_required
def update_payment(payment_number):
    data = request.get_json(silent=True) or {}

    if "AmountPaid" not in data:
        raise ValidationError("AmountPaid is required")

    amount = _parse_amount(data["AmountPaid"])
    payment = _get_payment_or_404(payment_number)
    payment.amount_paid = amount
    db.session.commit()

    return jsonify({"message": "Payment updated successfully"}), 200


@api_bp.route("/pspayments/<int:payment_number>", methods=["DELETE"])
@token_required
def delete_payment(payment_number):
    payment = _get_payment_or_404(payment_number)
    db.session.delete(payment)
    db.session.commit()

    return jsonify({"message": "Payment deleted successfully"}), 200
