"""
Booking Repository - read access to bookings for pricing and availability.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from database.models import Booking
from planning_types import BookingType
from services.availability_service import (
    HOLDING_BOOKING_STATUSES,
    BookingWindow,
    find_conflicting_bookings,
)

logger = logging.getLogger(__name__)


class BookingRepository:
    """Repository for booking database queries."""

    def __init__(self, session: Session):
        self.session = session

    def get_existing_pallet_count(self, customer_id: str) -> int:
        """
        Pallets a customer already holds in active pallet bookings.

        Feeds the cumulative volume discount for the customer's next booking.
        """
        total = self.session.query(
            func.coalesce(func.sum(Booking.pallet_count), 0)
        ).filter(
            Booking.customer_id == customer_id,
            Booking.booking_type == BookingType.PALLET.value,
            Booking.booking_status == 'active',
            Booking.status == True  # noqa: E712
        ).scalar()
        return int(total or 0)

    def list_bookings_in_window(self, warehouse_id: str, start: date,
                                end: Optional[date] = None) -> List[BookingWindow]:
        """Bookings of a warehouse that hold capacity during [start, end]."""
        records = self.session.query(Booking).filter(
            Booking.warehouse_id == warehouse_id,
            Booking.booking_status.in_(HOLDING_BOOKING_STATUSES),
            Booking.status == True  # noqa: E712
        ).order_by(Booking.start_date).all()

        windows = [
            BookingWindow(
                booking_id=record.id,
                quantity=(record.area_sq_ft if record.booking_type == BookingType.AREA_RENTAL.value
                          else record.pallet_count) or 0,
                start_date=record.start_date,
                end_date=record.end_date,
                booking_type=record.booking_type,
                booking_status=record.booking_status,
            )
            for record in records
        ]
        overlapping = find_conflicting_bookings(windows, start, end)
        logger.debug(f"Warehouse {warehouse_id}: {len(overlapping)} bookings overlap {start}..{end}")
        return overlapping
