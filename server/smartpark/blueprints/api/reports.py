from . import api_bp
from flask import current_app, request, jsonify
from server.smartpark.extensions import db
from server.smartpark.services import ReportAggregator
from server.smartpark.utils import token_required


@api_bp.route("/reports", methods=["GET"])
@api_bp.route("/reports/parking", methods=["GET"])
@token_required
def parking_report():
    """Parking summary between fromDate and toDate (YYYY-MM-DD, inclusive)."""
    aggregator = ReportAggregator(db.session, current_app.config["PARKING_FEE"])
    report = aggregator.parking_report(request.args.get("fromDate"), request.args.get("toDate"))
    return jsonify(report), 200
