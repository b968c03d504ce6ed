"""
Availability API Routes Blueprint

- /api/availability/check - Can a warehouse take a booking for a date range
"""

import logging
from datetime import date
from flask import Blueprint, request, jsonify

from database import get_db_session
from services.availability_service import check_availability
from services.booking_repository import BookingRepository
from validators import (
    ValidationError,
    format_success_response,
    require_valid,
    validate_availability_request,
)

logger = logging.getLogger(__name__)

availability_bp = Blueprint('availability_bp', __name__)


@availability_bp.route('/api/availability/check', methods=['POST'])
def check():
    """Check requested quantity against capacity minus overlapping bookings"""
    try:
        data = request.get_json(silent=True)
        require_valid(validate_availability_request(data))

        start = date.fromisoformat(data['start_date'][:10])
        end = date.fromisoformat(data['end_date'][:10]) if data.get('end_date') else None
        booking_type = data.get('booking_type') or data.get('type')

        with get_db_session() as db:
            bookings = BookingRepository(db).list_bookings_in_window(data['warehouse_id'], start, end)

        result = check_availability(
            data['quantity'],
            data['capacity'],
            bookings,
            start,
            end,
            booking_type=booking_type,
        )
        return jsonify(format_success_response(result))
    except ValidationError:
        raise
    except Exception as e:
        logger.error(f"Error checking availability: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500
