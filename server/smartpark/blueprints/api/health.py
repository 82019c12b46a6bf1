from . import api_bp
from flask import jsonify
from datetime import datetime, UTC


@api_bp.route("/health", methods=["GET"])
def health_check():
    return jsonify({"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}), 200
