"""
Floor Capacity API Routes Blueprint

- /api/capacity/preview - Capacity of an unsaved floor
- /api/warehouses/<id>/floors - List or replace a warehouse's floors
- /api/warehouses/<id>/floors/capacity - Capacity of every saved floor
"""

import logging
from flask import Blueprint, request, jsonify, current_app

from capacity_calculations import calculate_default_capacity, calculate_floor_capacity
from database import get_db_session
from planning_types import FloorPlan, parse_pallet_specs
from pricing_engine import PricingError
from services.floor_repository import FloorRepository
from validators import (
    ValidationError,
    format_success_response,
    require_valid,
    validate_custom_pallet_dimensions,
    validate_floor_plan_request,
    validate_pallet_specs,
)

logger = logging.getLogger(__name__)

capacity_bp = Blueprint('capacity_bp', __name__)


def _floor_from_body(data, require_name=False, field='floor'):
    """Validate and materialise one floor body"""
    require_valid(validate_floor_plan_request(data, require_name=require_name), field)
    try:
        floor = FloorPlan.from_dict(data, current_app.config['FLOOR_DEFAULTS'])
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), field)

    require_valid(validate_custom_pallet_dimensions(
        floor.custom_pallet_length_cm,
        floor.custom_pallet_width_cm,
        floor.custom_pallet_height_cm,
        current_app.config['CUSTOM_PALLET_LIMITS'],
    ), field)
    return floor


def _capacity_summary(results):
    return {
        'capacity': [result.to_dict() for result in results],
        'total_max_pallets': sum(result.max_pallets for result in results),
    }


# ============================================================================
# PREVIEW
# ============================================================================

@capacity_bp.route('/api/capacity/preview', methods=['POST'])
def preview_capacity():
    """Capacity of a floor from the request body, without saving it"""
    try:
        data = request.get_json(silent=True) or {}
        floor = _floor_from_body(data.get('floor'))

        if data.get('pallets') is not None:
            require_valid(validate_pallet_specs(data['pallets']), 'pallets')
            try:
                pallets = parse_pallet_specs(data['pallets'])
            except (TypeError, ValueError) as e:
                raise ValidationError(str(e), 'pallets')
            results = calculate_floor_capacity(floor, pallets)
        else:
            results = calculate_default_capacity(floor)

        payload = {'floor': floor.to_dict(), **_capacity_summary(results)}
        return jsonify(format_success_response(payload, "Capacity calculated"))
    except (ValidationError, PricingError):
        raise
    except Exception as e:
        logger.error(f"Error previewing capacity: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500


# ============================================================================
# SAVED FLOORS
# ============================================================================

@capacity_bp.route('/api/warehouses/<warehouse_id>/floors', methods=['GET', 'POST'])
def handle_floors(warehouse_id):
    """List a warehouse's floors, or replace them all"""
    try:
        if request.method == 'GET':
            with get_db_session() as db:
                floors = FloorRepository(db).list_floors(warehouse_id)
            return jsonify(format_success_response(floors))

        data = request.get_json(silent=True) or {}
        raw_floors = data.get('floors')
        if not isinstance(raw_floors, list):
            raise ValidationError("floors must be an array", 'floors')

        plans = [
            _floor_from_body(item, field=f'floors[{index}]')
            for index, item in enumerate(raw_floors)
        ]

        with get_db_session() as db:
            saved = FloorRepository(db).replace_floors(warehouse_id, plans)
        return jsonify(format_success_response(saved, f"Saved {len(saved)} floors")), 201
    except (ValidationError, PricingError):
        raise
    except Exception as e:
        logger.error(f"Error handling floors for warehouse {warehouse_id}: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500


@capacity_bp.route('/api/warehouses/<warehouse_id>/floors/capacity', methods=['GET'])
def get_warehouse_capacity(warehouse_id):
    """Default-catalogue capacity for each saved floor, plus per-type totals"""
    try:
        with get_db_session() as db:
            plans = FloorRepository(db).list_floor_plans(warehouse_id)

        floors = []
        totals = {}
        for plan in plans:
            results = calculate_default_capacity(plan)
            floors.append({
                'name': plan.name,
                'floor_level': plan.floor_level,
                'total_sq_ft': plan.total_sq_ft,
                **_capacity_summary(results),
            })
            for result in results:
                totals[result.pallet_type] = totals.get(result.pallet_type, 0) + result.max_pallets

        return jsonify(format_success_response({'floors': floors, 'totals': totals}))
    except Exception as e:
        logger.error(f"Error calculating capacity for warehouse {warehouse_id}: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500
