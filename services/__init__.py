"""
Services package for the warehouse planner.
Contains repository classes for database access and the availability checker.
"""

from services.floor_repository import FloorRepository
from services.booking_repository import BookingRepository
from services.pricing_repository import PricingRepository
from services.availability_service import (
    BookingWindow,
    check_availability,
    find_conflicting_bookings
)

__all__ = [
    'FloorRepository',
    'BookingRepository',
    'PricingRepository',
    'BookingWindow',
    'check_availability',
    'find_conflicting_bookings'
]
