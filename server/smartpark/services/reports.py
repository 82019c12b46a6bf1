import logging
import re
from datetime import date, datetime, time, timedelta

from sqlalchemy import and_, case, func, select

from server.smartpark.errors import ValidationError
from server.smartpark.models import ParkingRecord, PSPayment

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_date_range(from_date, to_date):
    """
    Turn two YYYY-MM-DD strings into a half-open datetime range
    [from_date 00:00, day after to_date 00:00).
    """
    if not from_date or not to_date:
        raise ValidationError("From date and to date are required")

    if not DATE_PATTERN.match(from_date) or not DATE_PATTERN.match(to_date):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")

    try:
        start_day = datetime.strptime(from_date, "%Y-%m-%d").date()
        end_day = datetime.strptime(to_date, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")

    if start_day > end_day:
        raise ValidationError("From date must not be after to date")

    start = datetime.combine(start_day, time.min)
    if end_day == date.max:
        end = datetime.max
    else:
        end = datetime.combine(end_day + timedelta(days=1), time.min)
    return start, end


class ReportAggregator:
    """Read-only parking summaries over a calendar date range."""

    def __init__(self, session, parking_fee):
        self.session = session
        self.parking_fee = parking_fee

    def parking_report(self, from_date, to_date):
        start, end = parse_date_range(from_date, to_date)
        logger.debug(f"Building parking report for {from_date}..{to_date}")

        in_range = and_(ParkingRecord.entry_time >= start, ParkingRecord.entry_time < end)
        completed_duration = case((ParkingRecord.exit_time.is_not(None), ParkingRecord.duration), else_=None)
        legacy_duration = case((ParkingRecord.exit_time.is_not(None), ParkingRecord.duration), else_=0)

        summary = self.session.execute(
            select(
                func.count(ParkingRecord.parking_id).label("total"),
                func.sum(case((ParkingRecord.exit_time.is_(None), 1), else_=0)).label("active"),
                func.avg(completed_duration).label("avg_completed"),
                func.avg(legacy_duration).label("avg_all"),
            ).where(in_range)
        ).one()

        collected = self.session.execute(
            select(func.coalesce(func.sum(PSPayment.amount_paid), 0)).where(
                PSPayment.payment_date >= start,
                PSPayment.payment_date < end,
            )
        ).scalar()

        entry_day = func.date(ParkingRecord.entry_time)
        by_day = self.session.execute(
            select(entry_day.label("date"), func.count(ParkingRecord.parking_id).label("count"))
            .where(in_range)
            .group_by(entry_day)
            .order_by(entry_day)
        ).all()

        total_parkings = summary.total or 0
        active_parking = int(summary.active or 0)

        return {
            "fromDate": from_date,
            "toDate": to_date,
            "fixedParkingFee": self.parking_fee,
            "totalParkings": total_parkings,
            "activeParking": active_parking,
            "avgDuration": round(float(summary.avg_completed or 0), 2),
            "avgDurationAllRecords": round(float(summary.avg_all or 0), 2),
            "currentRevenue": active_parking * self.parking_fee,
            "collectedRevenue": float(collected or 0),
            "parkingsByDay": [{"date": str(row.date), "count": row.count} for row in by_day],
        }
