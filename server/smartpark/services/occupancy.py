"""
Parking occupancy and record lifecycle.

A slot is occupied exactly while one parking record referencing it has no
exit time. Entry, exit and delete are the only operations allowed to change
a slot's status, and each one applies its slot and record writes in a single
transaction on the injected session.
"""

import logging

from sqlalchemy import select, update

from server.smartpark.errors import Conflict, InternalError, NotFound, SmartParkError
from server.smartpark.models import AVAILABLE, OCCUPIED, Car, ParkingRecord, ParkingSlot
from server.smartpark.utils import calculate_duration, utcnow


class OccupancyManager:
    """Entry, exit and delete of parking records against a SQLAlchemy session."""

    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_records(self, active_only=False):
        query = select(ParkingRecord).order_by(ParkingRecord.entry_time.desc(), ParkingRecord.parking_id.desc())
        if active_only:
            query = query.where(ParkingRecord.exit_time.is_(None))
        return self.session.execute(query).scalars().all()

    def get_record(self, parking_id):
        record = self.session.get(ParkingRecord, parking_id)
        if record is None:
            raise NotFound("Parking record not found")
        return record

    def active_record_for_car(self, plate_number):
        query = select(ParkingRecord).where(
            ParkingRecord.plate_number == plate_number,
            ParkingRecord.exit_time.is_(None),
        )
        return self.session.execute(query).scalars().first()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def register_entry(self, plate_number, slot_number):
        """Park a car in a slot. Returns the new parking id."""
        self.logger.info(f"Processing entry for {plate_number} into slot {slot_number}")

        try:
            # Row lock on the car serializes entries for the same plate
            car = self.session.get(Car, plate_number, with_for_update=True)
            if car is None:
                raise NotFound("Car not found")

            slot = self.session.get(ParkingSlot, slot_number)
            if slot is None:
                raise NotFound("Parking slot not found")

            if not slot.is_available:
                raise Conflict("Parking slot is already occupied")

            active = self.active_record_for_car(plate_number)
            if active is not None:
                raise Conflict(f"This car is already parked in slot {active.slot_number}")

            # Only one transaction can move the slot out of 'available'
            result = self.session.execute(
                update(ParkingSlot)
                .where(ParkingSlot.slot_number == slot_number, ParkingSlot.status == AVAILABLE)
                .values(status=OCCUPIED)
            )
            if result.rowcount != 1:
                raise Conflict("Parking slot is already occupied")

            record = ParkingRecord(
                plate_number=plate_number,
                slot_number=slot_number,
                entry_time=self.clock(),
            )
            self.session.add(record)
            self.session.flush()
            parking_id = record.parking_id
            self.session.commit()

        except SmartParkError:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            self.logger.error(f"Error registering entry for {plate_number}: {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        self.logger.info(f"Car {plate_number} parked in slot {slot_number} (record {parking_id})")
        return parking_id

    def register_exit(self, parking_id):
        """Close an active record and free its slot. Returns the duration in minutes."""
        self.logger.info(f"Processing exit for record {parking_id}")

        try:
            record = self.session.execute(
                select(ParkingRecord)
                .where(ParkingRecord.parking_id == parking_id, ParkingRecord.exit_time.is_(None))
                .with_for_update()
            ).scalars().first()
            if record is None:
                raise NotFound("Active parking record not found")

            exit_time = self.clock()
            duration = calculate_duration(record.entry_time, exit_time)
            slot_number = record.slot_number

            result = self.session.execute(
                update(ParkingRecord)
                .where(ParkingRecord.parking_id == parking_id, ParkingRecord.exit_time.is_(None))
                .values(exit_time=exit_time, duration=duration)
            )
            if result.rowcount != 1:
                raise NotFound("Active parking record not found")

            self.session.execute(
                update(ParkingSlot)
                .where(ParkingSlot.slot_number == slot_number)
                .values(status=AVAILABLE)
            )
            self.session.commit()

        except SmartParkError:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            self.logger.error(f"Error registering exit for record {parking_id}: {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        self.logger.info(f"Record {parking_id} closed after {duration} min, slot {slot_number} freed")
        return duration

    def delete_record(self, parking_id):
        """Remove a record; an active record releases its slot first."""
        try:
            record = self.session.get(ParkingRecord, parking_id, with_for_update=True)
            if record is None:
                raise NotFound("Parking record not found")

            if record.is_active:
                self.session.execute(
                    update(ParkingSlot)
                    .where(ParkingSlot.slot_number == record.slot_number)
                    .values(status=AVAILABLE)
                )
                self.logger.info(f"Record {parking_id} was active, slot {record.slot_number} freed")

            self.session.delete(record)
            self.session.commit()

        except SmartParkError:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            self.logger.error(f"Error deleting record {parking_id}: {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        self.logger.info(f"Record {parking_id} deleted")
