from .occupancy import OccupancyManager
from .reports import ReportAggregator, parse_date_range
