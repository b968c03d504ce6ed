"""
Tests for date-window availability checks
"""
import pytest
from datetime import date
from planning_types import BookingType
from services.availability_service import (
    BookingWindow,
    check_availability,
    find_conflicting_bookings,
)


@pytest.fixture
def bookings():
    return [
        BookingWindow('jan', 40, date(2026, 1, 1), date(2026, 1, 31), booking_status='active'),
        BookingWindow('feb', 30, date(2026, 2, 1), date(2026, 2, 28), booking_status='confirmed'),
        BookingWindow('open', 10, date(2026, 1, 15), None, booking_status='pending'),
        BookingWindow('gone', 500, date(2026, 1, 1), date(2026, 12, 31), booking_status='cancelled'),
        BookingWindow('area', 45000, date(2026, 1, 1), date(2026, 12, 31),
                      booking_type='area-rental', booking_status='active'),
    ]


@pytest.mark.unit
class TestBookingWindow:
    """Tests for overlap rules"""

    def test_parses_iso_dates(self):
        window = BookingWindow('b1', 5, '2026-03-01', '2026-03-10T00:00:00')
        assert window.start_date == date(2026, 3, 1)
        assert window.end_date == date(2026, 3, 10)

    def test_touching_end_date_overlaps(self):
        window = BookingWindow('b1', 5, date(2026, 1, 1), date(2026, 1, 31))
        assert window.overlaps(date(2026, 1, 31), date(2026, 2, 5)) is True

    def test_disjoint_ranges(self):
        window = BookingWindow('b1', 5, date(2026, 1, 1), date(2026, 1, 31))
        assert window.overlaps(date(2026, 2, 1), date(2026, 2, 5)) is False

    def test_open_ended_booking_runs_forever(self):
        window = BookingWindow('b1', 5, date(2026, 1, 1))
        assert window.overlaps(date(2030, 6, 1), date(2030, 6, 2)) is True

    def test_from_dict_area_rental_uses_area(self):
        window = BookingWindow.from_dict({
            'id': 'r1', 'type': 'area-rental', 'area_sq_ft': 42000,
            'start_date': '2026-01-01', 'booking_status': 'Active',
        })
        assert window.booking_type is BookingType.AREA_RENTAL
        assert window.quantity == 42000
        assert window.holds_capacity is True


@pytest.mark.unit
class TestConflicts:
    """Tests for conflict detection"""

    def test_cancelled_bookings_ignored(self, bookings):
        conflicts = find_conflicting_bookings(bookings, date(2026, 1, 10), date(2026, 1, 20))
        assert 'gone' not in [b.booking_id for b in conflicts]

    def test_filter_by_booking_type(self, bookings):
        conflicts = find_conflicting_bookings(bookings, date(2026, 1, 10), date(2026, 1, 20),
                                              booking_type='pallet')
        assert [b.booking_id for b in conflicts] == ['jan', 'open']

    def test_open_ended_request(self, bookings):
        conflicts = find_conflicting_bookings(bookings, date(2026, 2, 10), booking_type='pallet')
        assert [b.booking_id for b in conflicts] == ['feb', 'open']


@pytest.mark.unit
class TestCheckAvailability:
    """Tests for the availability result"""

    def test_available(self, bookings):
        result = check_availability(50, 100, bookings, date(2026, 1, 10), date(2026, 1, 20),
                                    booking_type='pallet')
        assert result == {
            'available': True,
            'requested_quantity': 50,
            'available_quantity': 50,
            'utilization_percent': 50.0,
            'conflicting_booking_ids': ['jan', 'open'],
        }

    def test_not_available(self, bookings):
        result = check_availability(51, 100, bookings, date(2026, 1, 10), date(2026, 1, 20),
                                    booking_type='pallet')
        assert result['available'] is False

    def test_overbooked_floor_reports_zero(self, bookings):
        result = check_availability(1, 30, bookings, date(2026, 1, 10), date(2026, 1, 20),
                                    booking_type='pallet')
        assert result['available_quantity'] == 0
        assert result['utilization_percent'] == 100.0

    def test_zero_capacity(self):
        result = check_availability(1, 0, [], date(2026, 1, 1))
        assert result['available'] is False
        assert result['utilization_percent'] == 0.0

    def test_no_bookings(self):
        result = check_availability(10, 10, [], date(2026, 1, 1), date(2026, 1, 2))
        assert result['available'] is True
        assert result['conflicting_booking_ids'] == []
