"""
Availability Service - date-window capacity checks against existing bookings.

A booking holds capacity from its start date through its end date inclusive.
Bookings without an end date hold capacity indefinitely.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from planning_types import BookingType

logger = logging.getLogger(__name__)

# Statuses that still hold capacity
HOLDING_BOOKING_STATUSES = ('pending', 'confirmed', 'active')


def _as_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class BookingWindow:
    """Capacity held by one booking over a date range"""
    booking_id: str
    quantity: float
    start_date: date
    end_date: Optional[date] = None
    booking_type: BookingType = BookingType.PALLET
    booking_status: str = 'pending'

    def __post_init__(self):
        object.__setattr__(self, 'start_date', _as_date(self.start_date))
        object.__setattr__(self, 'end_date', _as_date(self.end_date))
        object.__setattr__(self, 'booking_type', BookingType.parse(self.booking_type))
        object.__setattr__(self, 'booking_status', str(self.booking_status).lower())

    @property
    def holds_capacity(self) -> bool:
        return self.booking_status in HOLDING_BOOKING_STATUSES

    def overlaps(self, start: date, end: Optional[date] = None) -> bool:
        """True if this booking shares at least one day with [start, end]"""
        if end is not None and self.start_date > end:
            return False
        if self.end_date is not None and self.end_date < start:
            return False
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'BookingWindow':
        booking_type = BookingType.parse(data.get('booking_type') or data.get('type') or BookingType.PALLET)
        if booking_type is BookingType.AREA_RENTAL:
            quantity = data.get('area_sq_ft') or data.get('quantity') or 0
        else:
            quantity = data.get('pallet_count') or data.get('quantity') or 0
        return cls(
            booking_id=str(data.get('id') or data.get('booking_id')),
            quantity=quantity,
            start_date=data['start_date'],
            end_date=data.get('end_date'),
            booking_type=booking_type,
            booking_status=data.get('booking_status', 'pending'),
        )


def find_conflicting_bookings(bookings: Iterable[BookingWindow], start: date,
                              end: Optional[date] = None,
                              booking_type: Optional[BookingType] = None) -> List[BookingWindow]:
    """
    Bookings that hold capacity during [start, end]

    Args:
        bookings: Candidate bookings for one warehouse
        start: First requested day
        end: Last requested day, None for an open-ended request
        booking_type: Only consider bookings of this kind when given

    Returns:
        Matching bookings in input order
    """
    start = _as_date(start)
    end = _as_date(end)
    if booking_type is not None:
        booking_type = BookingType.parse(booking_type)

    return [
        booking for booking in bookings
        if booking.holds_capacity
        and (booking_type is None or booking.booking_type is booking_type)
        and booking.overlaps(start, end)
    ]


def check_availability(requested_quantity: float, capacity: float,
                       bookings: Iterable[BookingWindow], start: date,
                       end: Optional[date] = None,
                       booking_type: Optional[BookingType] = None) -> Dict[str, Any]:
    """
    Can `requested_quantity` more units be booked for [start, end]?

    Args:
        requested_quantity: Pallets (or square feet) being requested
        capacity: Total capacity of the warehouse in the same unit
        bookings: Existing bookings for the warehouse
        start, end: Requested date range
        booking_type: Restrict the check to one booking kind

    Returns:
        Dict with available, requested_quantity, available_quantity,
        utilization_percent and conflicting_booking_ids
    """
    conflicts = find_conflicting_bookings(bookings, start, end, booking_type)
    used = sum(booking.quantity for booking in conflicts)
    available_quantity = max(0, capacity - used)
    utilization = round(min(used, capacity) / capacity * 100, 2) if capacity > 0 else 0.0

    result = {
        'available': requested_quantity <= available_quantity,
        'requested_quantity': requested_quantity,
        'available_quantity': available_quantity,
        'utilization_percent': utilization,
        'conflicting_booking_ids': [booking.booking_id for booking in conflicts],
    }
    logger.debug(
        f"Availability {start}..{end}: used {used} of {capacity}, "
        f"requested {requested_quantity} -> {'ok' if result['available'] else 'full'}"
    )
    return result
