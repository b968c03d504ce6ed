"""
Pricing API Routes Blueprint

- /api/pricing/config - Current rate table
- /api/pricing/pallet - Quote a pallet booking
- /api/pricing/area-rental - Quote an annual area rental
- /api/pricing/quote - Quote either kind, with the customer's existing pallets

Quotes that name a warehouse_id use that warehouse's stored rates; stored
membership tiers replace the static ones wherever they exist.
"""

import logging
from flask import Blueprint, request, jsonify, current_app

from database import get_db_session
from planning_types import BookingType, PricingCalculationInput, PricingConfig
from pricing_engine import (
    PricingError,
    calculate_area_rental_pricing,
    calculate_pallet_pricing,
    calculate_pricing,
)
from services.booking_repository import BookingRepository
from services.pricing_repository import PricingRepository
from validators import (
    ValidationError,
    format_success_response,
    require_valid,
    validate_pricing_request,
)

logger = logging.getLogger(__name__)

pricing_bp = Blueprint('pricing_bp', __name__)


def get_pricing_config() -> PricingConfig:
    """Rate table built at startup, rebuilt from config if missing"""
    config = getattr(current_app, 'pricing_config', None)
    if config is None:
        config = PricingConfig.from_dict(current_app.config['PRICING'])
        current_app.pricing_config = config
    return config


def _warehouse_id(data):
    return data.get('warehouse_id') or data.get('warehouseId')


def resolve_pricing_config(db, warehouse_id=None) -> PricingConfig:
    """Static rate table with any stored overrides for the warehouse applied"""
    return PricingRepository(db).get_pricing_config(warehouse_id, get_pricing_config())


def _pricing_input(data, booking_type=None) -> PricingCalculationInput:
    require_valid(validate_pricing_request(data, booking_type))
    return PricingCalculationInput.from_dict(data, booking_type=booking_type)


@pricing_bp.route('/api/pricing/config', methods=['GET'])
def get_config():
    """Current rate table"""
    try:
        return jsonify(format_success_response(get_pricing_config().to_dict()))
    except Exception as e:
        logger.error(f"Error reading pricing config: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500


@pricing_bp.route('/api/pricing/pallet', methods=['POST'])
def price_pallet_booking():
    """Quote a pallet booking"""
    try:
        data = request.get_json(silent=True)
        pricing_input = _pricing_input(data, BookingType.PALLET.value)
        with get_db_session() as db:
            config = resolve_pricing_config(db, _warehouse_id(data))
        result = calculate_pallet_pricing(pricing_input, config)
        return jsonify(format_success_response(result.to_dict(), "Pallet booking priced"))
    except (ValidationError, PricingError):
        raise
    except Exception as e:
        logger.error(f"Error pricing pallet booking: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500


@pricing_bp.route('/api/pricing/area-rental', methods=['POST'])
def price_area_rental():
    """Quote an annual area rental"""
    try:
        data = request.get_json(silent=True)
        pricing_input = _pricing_input(data, BookingType.AREA_RENTAL.value)
        with get_db_session() as db:
            config = resolve_pricing_config(db, _warehouse_id(data))
        result = calculate_area_rental_pricing(pricing_input, config)
        return jsonify(format_success_response(result.to_dict(), "Area rental priced"))
    except (ValidationError, PricingError):
        raise
    except Exception as e:
        logger.error(f"Error pricing area rental: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500


@pricing_bp.route('/api/pricing/quote', methods=['POST'])
def quote():
    """
    Quote either booking kind

    When customer_id is given and existing_pallet_count is not, the customer's
    active pallet bookings count toward the volume discount. A warehouse_id
    selects that warehouse's stored rates.
    """
    try:
        data = request.get_json(silent=True)
        require_valid(validate_pricing_request(data))
        data = dict(data)

        customer_id = data.get('customer_id')
        warehouse_id = _warehouse_id(data)
        with get_db_session() as db:
            if customer_id and data.get('existing_pallet_count') is None \
                    and data.get('existingPalletCount') is None:
                data['existing_pallet_count'] = BookingRepository(db).get_existing_pallet_count(customer_id)
                logger.debug(f"Customer {customer_id} holds {data['existing_pallet_count']} pallets")
            config = resolve_pricing_config(db, warehouse_id)

        pricing_input = PricingCalculationInput.from_dict(data)
        result = calculate_pricing(pricing_input, config)

        payload = result.to_dict()
        payload['booking_type'] = pricing_input.booking_type.value
        payload['existing_pallet_count'] = pricing_input.existing_pallet_count
        payload['warehouse_id'] = warehouse_id
        return jsonify(format_success_response(payload, "Quote calculated"))
    except (ValidationError, PricingError):
        raise
    except Exception as e:
        logger.error(f"Error calculating quote: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500
