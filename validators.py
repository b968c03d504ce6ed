"""
Input Validation Utilities
Validates request bodies for floor plans, pallet specs, pricing and availability
before they are materialised into planning values
"""
import logging
import math
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

FLOOR_DIMENSION_FIELDS = {
    'length': ('length', 'length_m', 'lengthM'),
    'width': ('width', 'width_m', 'widthM'),
    'height': ('height', 'height_m', 'heightM'),
}

FLOOR_CLEARANCE_FIELDS = {
    'wall_clearance': ('wall_clearance', 'wall_clearance_m', 'wallClearanceM'),
    'sprinkler_clearance': ('sprinkler_clearance', 'sprinkler_clearance_m', 'sprinklerClearanceM'),
    'safety_clearance': ('safety_clearance', 'safety_clearance_m', 'safetyClearanceM'),
    'loading_zone_depth': ('loading_zone_depth', 'loading_zone_depth_m', 'loadingZoneDepthM'),
    'dock_zone_depth': ('dock_zone_depth', 'dock_zone_depth_m', 'dockZoneDepthM'),
    'main_aisle': ('main_aisle', 'main_aisle_m', 'mainAisleM'),
    'side_aisle': ('side_aisle', 'side_aisle_m', 'sideAisleM'),
    'pedestrian_aisle': ('pedestrian_aisle', 'pedestrian_aisle_m', 'pedestrianAisleM'),
}

BOOKING_TYPES = ('pallet', 'area-rental')


class ValidationError(Exception):
    """Raised when a request body fails validation"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _first_present(data: Dict[str, Any], keys) -> Tuple[Optional[str], Any]:
    for key in keys:
        if key in data and data[key] is not None:
            return key, data[key]
    return None, None


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate that all required fields are present in the data

    Args:
        data: Dictionary of input data
        required_fields: List of required field names

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing_fields = [field for field in required_fields if field not in data or data[field] is None or data[field] == '']

    if missing_fields:
        return False, f"Missing required fields: {', '.join(missing_fields)}"

    return True, None


def validate_string_length(value: str, min_length: int = 0, max_length: int = 1000) -> Tuple[bool, Optional[str]]:
    """Validate string length is within acceptable range"""
    if not isinstance(value, str):
        return False, "Value must be a string"

    if len(value) < min_length:
        return False, f"Value too short (minimum {min_length} characters)"

    if len(value) > max_length:
        return False, f"Value too long (maximum {max_length} characters)"

    return True, None


def validate_number_range(value: float, min_value: Optional[float] = None, max_value: Optional[float] = None) -> Tuple[bool, Optional[str]]:
    """
    Validate number is within acceptable range

    Args:
        value: Number to validate
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not _is_number(value):
        return False, "Value must be a number"

    if not _is_finite(value):
        return False, "Value must be a finite number"

    if min_value is not None and value < min_value:
        return False, f"Value too small (minimum {min_value})"

    if max_value is not None and value > max_value:
        return False, f"Value too large (maximum {max_value})"

    return True, None


def validate_positive_integer(value: Any) -> Tuple[bool, Optional[str]]:
    """Validate value is a whole number greater than zero"""
    if not _is_number(value):
        return False, "Value must be a number"

    if not _is_finite(value):
        return False, "Value must be a finite number"

    if isinstance(value, float) and not value.is_integer():
        return False, "Value must be a whole number"

    if value <= 0:
        return False, "Value must be greater than zero"

    return True, None


def validate_iso_date(value: Any) -> Tuple[bool, Optional[str]]:
    """Validate an ISO-8601 calendar date string (YYYY-MM-DD)"""
    if not isinstance(value, str):
        return False, "Date must be a string"

    try:
        date.fromisoformat(value[:10])
    except ValueError:
        return False, "Date must be in YYYY-MM-DD format"

    return True, None


def validate_zone(zone: Any, index: int) -> Tuple[bool, Optional[str]]:
    """Validate one floor zone object"""
    if not isinstance(zone, dict):
        return False, f"Zone {index} must be an object"

    key, zone_type = _first_present(zone, ('zone_type', 'zoneType'))
    if key is None:
        return False, f"Zone {index} is missing zone_type"
    is_valid, error = validate_string_length(zone_type, min_length=1, max_length=50)
    if not is_valid:
        return False, f"Zone {index} invalid zone_type: {error}"

    for name, keys in (('x', ('x', 'x_m', 'xM')), ('y', ('y', 'y_m', 'yM')),
                       ('width', ('width', 'width_m', 'widthM')),
                       ('height', ('height', 'height_m', 'heightM'))):
        key, value = _first_present(zone, keys)
        if key is None:
            return False, f"Zone {index} is missing {name}"
        is_valid, error = validate_number_range(value, min_value=0)
        if not is_valid:
            return False, f"Zone {index} invalid {name}: {error}"

    return True, None


def validate_floor_plan_request(data: Any, require_name: bool = False) -> Tuple[bool, Optional[str]]:
    """
    Validate a floor plan body

    Dimensions may be zero: an under-specified floor is a legal plan with zero
    capacity. Negative or non-numeric values are rejected.

    Args:
        data: Floor plan dictionary
        require_name: True when the floor is being saved rather than previewed

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "floor must be an object"

    if require_name:
        is_valid, error = validate_string_length(data.get('name'), min_length=1, max_length=200)
        if not is_valid:
            return False, f"Invalid name: {error}"

    for name, keys in FLOOR_DIMENSION_FIELDS.items():
        key, value = _first_present(data, keys)
        if key is None:
            return False, f"Missing required fields: {name}"
        is_valid, error = validate_number_range(value, min_value=0)
        if not is_valid:
            return False, f"Invalid {name}: {error}"

    for name, keys in FLOOR_CLEARANCE_FIELDS.items():
        key, value = _first_present(data, keys)
        if key is None:
            continue
        is_valid, error = validate_number_range(value, min_value=0)
        if not is_valid:
            return False, f"Invalid {name}: {error}"

    key, override = _first_present(data, ('stacking_override', 'stackingOverride'))
    if key is not None:
        is_valid, error = validate_positive_integer(override)
        if not is_valid:
            return False, f"Invalid stacking_override: {error}"

    key, level = _first_present(data, ('floor_level', 'floorLevel'))
    if key is not None and (not _is_number(level) or not _is_finite(level) or int(level) != level):
        return False, "Invalid floor_level: Value must be a whole number"

    zones = data.get('zones', [])
    if not isinstance(zones, list):
        return False, "zones must be an array"
    for idx, zone in enumerate(zones):
        is_valid, error = validate_zone(zone, idx)
        if not is_valid:
            return False, error

    return True, None


def validate_pallet_specs(pallets: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate a list of pallet spec objects

    Zero or negative dimensions are allowed here and produce zero capacity.
    """
    if not isinstance(pallets, list):
        return False, "pallets must be an array"

    for idx, pallet in enumerate(pallets):
        if not isinstance(pallet, dict):
            return False, f"Pallet {idx} must be an object"

        key, pallet_type = _first_present(pallet, ('pallet_type', 'palletType', 'type'))
        if key is not None:
            is_valid, error = validate_string_length(pallet_type, min_length=1, max_length=50)
            if not is_valid:
                return False, f"Pallet {idx} invalid pallet_type: {error}"

        for name in ('length', 'width', 'height'):
            key, value = _first_present(pallet, (name, f'{name}_m', f'{name}M'))
            if key is None:
                return False, f"Pallet {idx} is missing {name}"
            if not _is_number(value):
                return False, f"Pallet {idx} invalid {name}: Value must be a number"
            if not _is_finite(value):
                return False, f"Pallet {idx} invalid {name}: Value must be a finite number"

    return True, None


def validate_custom_pallet_dimensions(length_cm: float, width_cm: float, height_cm: float,
                                      limits: Dict[str, float]) -> Tuple[bool, Optional[str]]:
    """
    Validate custom pallet dimensions against the planner's accepted range

    Args:
        length_cm, width_cm, height_cm: Custom pallet size in centimeters
        limits: CUSTOM_PALLET_LIMITS mapping (min_/max_ *_cm keys)

    Returns:
        Tuple of (is_valid, error_message)
    """
    for name, value in (('length', length_cm), ('width', width_cm), ('height', height_cm)):
        is_valid, error = validate_number_range(
            value,
            min_value=limits.get(f'min_{name}_cm'),
            max_value=limits.get(f'max_{name}_cm'),
        )
        if not is_valid:
            return False, f"Invalid custom pallet {name}: {error}"
        if isinstance(value, float) and not value.is_integer():
            return False, f"Invalid custom pallet {name}: Value must be a whole number of centimeters"

    return True, None


def validate_pricing_request(data: Any, booking_type: Optional[str] = None) -> Tuple[bool, Optional[str]]:
    """
    Validate the shape of a pricing request

    Presence of pallet_count / area_sq_ft is enforced by the pricing engine
    itself; this only rejects values of the wrong type.

    Args:
        data: Request data dictionary
        booking_type: Booking type fixed by the route, if any

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object"

    kind = booking_type or data.get('booking_type') or data.get('type')
    if kind not in BOOKING_TYPES:
        return False, f"booking_type must be one of: {', '.join(BOOKING_TYPES)}"

    for name, keys in (('pallet_count', ('pallet_count', 'palletCount')),
                       ('area_sq_ft', ('area_sq_ft', 'areaSqFt'))):
        key, value = _first_present(data, keys)
        if key is None:
            continue
        is_valid, error = validate_number_range(value)
        if not is_valid:
            return False, f"Invalid {name}: {error}"
        if name == 'pallet_count' and isinstance(value, float) and not value.is_integer():
            return False, "Invalid pallet_count: Value must be a whole number"

    key, months = _first_present(data, ('months',))
    if key is not None:
        is_valid, error = validate_positive_integer(months)
        if not is_valid:
            return False, f"Invalid months: {error}"

    key, existing = _first_present(data, ('existing_pallet_count', 'existingPalletCount'))
    if key is not None:
        is_valid, error = validate_number_range(existing, min_value=0)
        if not is_valid:
            return False, f"Invalid existing_pallet_count: {error}"

    key, tier = _first_present(data, ('membership_tier', 'membershipTier'))
    if key is not None:
        is_valid, error = validate_string_length(tier, min_length=1, max_length=50)
        if not is_valid:
            return False, f"Invalid membership_tier: {error}"

    key, warehouse_id = _first_present(data, ('warehouse_id', 'warehouseId'))
    if key is not None:
        is_valid, error = validate_string_length(warehouse_id, min_length=1, max_length=36)
        if not is_valid:
            return False, f"Invalid warehouse_id: {error}"

    return True, None


def validate_availability_request(data: Any) -> Tuple[bool, Optional[str]]:
    """Validate an availability check body"""
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object"

    is_valid, error = validate_required_fields(data, ['warehouse_id', 'quantity', 'capacity', 'start_date'])
    if not is_valid:
        return False, error

    for name in ('quantity', 'capacity'):
        is_valid, error = validate_number_range(data[name], min_value=0)
        if not is_valid:
            return False, f"Invalid {name}: {error}"

    for name in ('start_date', 'end_date'):
        if data.get(name) is None:
            continue
        is_valid, error = validate_iso_date(data[name])
        if not is_valid:
            return False, f"Invalid {name}: {error}"

    if data.get('end_date') and data['end_date'][:10] < data['start_date'][:10]:
        return False, "end_date must not be before start_date"

    kind = data.get('booking_type') or data.get('type')
    if kind is not None and kind not in BOOKING_TYPES:
        return False, f"booking_type must be one of: {', '.join(BOOKING_TYPES)}"

    return True, None


def require_valid(result: Tuple[bool, Optional[str]], field: Optional[str] = None):
    """Raise ValidationError for a failed (is_valid, error) tuple"""
    is_valid, error = result
    if not is_valid:
        logger.info(f"Request validation failed: {error}")
        raise ValidationError(error, field)


def format_validation_error(field: Optional[str], message: str) -> Dict[str, Any]:
    """
    Format validation error for consistent API responses

    Args:
        field: Field name that failed validation
        message: Error message

    Returns:
        Error response dictionary
    """
    return {
        'success': False,
        'error': 'Validation Error',
        'field': field,
        'message': message
    }


def format_success_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """
    Format success response for consistent API responses

    Args:
        data: Response data
        message: Success message

    Returns:
        Success response dictionary
    """
    return {
        'success': True,
        'message': message,
        'data': data
    }
