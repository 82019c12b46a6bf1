from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api")

# Import routes
from . import cars
from . import parking_slots
from . import parking_records
from . import ps_payments
from . import reports
from . import health
