"""
Tests for input validation utilities
"""
import pytest
from config import Config
from validators import (
    ValidationError,
    format_success_response,
    format_validation_error,
    require_valid,
    validate_availability_request,
    validate_custom_pallet_dimensions,
    validate_floor_plan_request,
    validate_number_range,
    validate_pallet_specs,
    validate_positive_integer,
    validate_pricing_request,
    validate_required_fields,
    validate_string_length,
)


@pytest.mark.unit
class TestRequiredFields:
    """Tests for required fields validation"""

    def test_validate_all_fields_present(self):
        data = {'warehouse_id': 'w1', 'quantity': 10}
        is_valid, error = validate_required_fields(data, ['warehouse_id', 'quantity'])
        assert is_valid is True
        assert error is None

    def test_validate_missing_field(self):
        is_valid, error = validate_required_fields({'warehouse_id': 'w1'}, ['warehouse_id', 'quantity'])
        assert is_valid is False
        assert 'quantity' in error

    def test_validate_empty_field(self):
        is_valid, error = validate_required_fields({'warehouse_id': ''}, ['warehouse_id'])
        assert is_valid is False


@pytest.mark.unit
class TestPrimitiveValidators:
    """Tests for string and number validators"""

    def test_string_length_bounds(self):
        assert validate_string_length('Ground', 1, 200)[0] is True
        assert validate_string_length('', 1, 200)[0] is False
        assert validate_string_length('x' * 201, 1, 200)[0] is False

    def test_number_range(self):
        assert validate_number_range(5, 0, 10) == (True, None)
        assert validate_number_range(-1, min_value=0)[0] is False
        assert validate_number_range(11, max_value=10)[0] is False

    def test_boolean_is_not_a_number(self):
        is_valid, error = validate_number_range(True)
        assert is_valid is False
        assert 'number' in error

    @pytest.mark.parametrize('value', [float('inf'), float('-inf'), float('nan'), 10 ** 400])
    def test_non_finite_number_rejected(self, value):
        is_valid, error = validate_number_range(value, min_value=0)
        assert is_valid is False
        assert 'finite' in error

    def test_infinite_positive_integer_rejected(self):
        assert validate_positive_integer(float('inf'))[0] is False

    @pytest.mark.parametrize('value,expected', [
        (1, True), (3.0, True), (0, False), (-2, False), (2.5, False), ('3', False),
    ])
    def test_positive_integer(self, value, expected):
        assert validate_positive_integer(value)[0] is expected


@pytest.mark.unit
class TestFloorPlanValidation:
    """Tests for floor plan bodies"""

    def test_valid_body(self, sample_floor_body):
        assert validate_floor_plan_request(sample_floor_body) == (True, None)

    def test_zero_dimensions_allowed(self):
        assert validate_floor_plan_request({'length': 0, 'width': 0, 'height': 0})[0] is True

    def test_missing_dimension(self):
        is_valid, error = validate_floor_plan_request({'length': 10, 'width': 10})
        assert is_valid is False
        assert 'height' in error

    def test_negative_clearance(self, sample_floor_body):
        sample_floor_body['wallClearanceM'] = -0.5
        is_valid, error = validate_floor_plan_request(sample_floor_body)
        assert is_valid is False
        assert 'wall_clearance' in error

    @pytest.mark.parametrize('key', ['lengthM', 'heightM', 'dockZoneDepthM'])
    def test_infinite_floor_value(self, sample_floor_body, key):
        sample_floor_body[key] = float('inf')
        is_valid, error = validate_floor_plan_request(sample_floor_body)
        assert is_valid is False
        assert 'finite' in error

    def test_infinite_zone_extent(self, sample_floor_body):
        sample_floor_body['zones'] = [{'zone_type': 'storage', 'x': 0, 'y': 0,
                                       'width': float('inf'), 'height': 5}]
        assert validate_floor_plan_request(sample_floor_body)[0] is False

    def test_infinite_floor_level(self, sample_floor_body):
        sample_floor_body['floorLevel'] = float('inf')
        assert validate_floor_plan_request(sample_floor_body)[0] is False

    def test_negative_aisle(self, sample_floor_body):
        sample_floor_body['mainAisleM'] = -1
        is_valid, error = validate_floor_plan_request(sample_floor_body)
        assert is_valid is False
        assert 'main_aisle' in error

    @pytest.mark.parametrize('override', [0, -1, 1.5, 'two'])
    def test_invalid_stacking_override(self, sample_floor_body, override):
        sample_floor_body['stackingOverride'] = override
        is_valid, error = validate_floor_plan_request(sample_floor_body)
        assert is_valid is False
        assert 'stacking_override' in error

    def test_name_required_when_saving(self, sample_floor_body):
        del sample_floor_body['name']
        assert validate_floor_plan_request(sample_floor_body)[0] is True
        assert validate_floor_plan_request(sample_floor_body, require_name=True)[0] is False

    def test_zone_missing_type(self, sample_floor_body):
        sample_floor_body['zones'] = [{'x': 0, 'y': 0, 'width': 5, 'height': 5}]
        is_valid, error = validate_floor_plan_request(sample_floor_body)
        assert is_valid is False
        assert 'zone_type' in error

    def test_zones_must_be_list(self, sample_floor_body):
        sample_floor_body['zones'] = {'zone_type': 'storage'}
        assert validate_floor_plan_request(sample_floor_body)[0] is False

    def test_not_an_object(self):
        assert validate_floor_plan_request(None)[0] is False


@pytest.mark.unit
class TestPalletValidation:
    """Tests for pallet specs and custom pallet limits"""

    def test_valid_pallets(self):
        pallets = [{'type': 'euro', 'length': 1.2, 'width': 0.8, 'height': 1.5}]
        assert validate_pallet_specs(pallets) == (True, None)

    def test_pallets_must_be_list(self):
        assert validate_pallet_specs({'type': 'euro'})[0] is False

    def test_pallet_missing_height(self):
        is_valid, error = validate_pallet_specs([{'length': 1, 'width': 1}])
        assert is_valid is False
        assert 'height' in error

    def test_custom_pallet_within_limits(self):
        assert validate_custom_pallet_dimensions(100, 100, 150, Config.CUSTOM_PALLET_LIMITS) == (True, None)

    @pytest.mark.parametrize('dims,field', [
        ((79, 100, 150), 'length'),
        ((100, 121, 150), 'width'),
        ((100, 100, 201), 'height'),
    ])
    def test_custom_pallet_outside_limits(self, dims, field):
        is_valid, error = validate_custom_pallet_dimensions(*dims, Config.CUSTOM_PALLET_LIMITS)
        assert is_valid is False
        assert field in error

    def test_custom_pallet_fractional_centimeters(self):
        is_valid, error = validate_custom_pallet_dimensions(99.5, 100, 150, Config.CUSTOM_PALLET_LIMITS)
        assert is_valid is False
        assert 'whole number' in error

    def test_custom_pallet_whole_float_centimeters(self):
        assert validate_custom_pallet_dimensions(100.0, 100.0, 150.0, Config.CUSTOM_PALLET_LIMITS)[0] is True

    def test_infinite_pallet_dimension(self):
        is_valid, error = validate_pallet_specs([{'length': float('inf'), 'width': 1, 'height': 1}])
        assert is_valid is False
        assert 'finite' in error


@pytest.mark.unit
class TestPricingValidation:
    """Tests for pricing request bodies"""

    def test_valid_pallet_request(self):
        data = {'booking_type': 'pallet', 'pallet_count': 10, 'months': 2, 'membership_tier': 'gold'}
        assert validate_pricing_request(data) == (True, None)

    def test_route_supplies_booking_type(self):
        assert validate_pricing_request({'area_sq_ft': 50000}, booking_type='area-rental')[0] is True

    def test_unknown_booking_type(self):
        is_valid, error = validate_pricing_request({'booking_type': 'container'})
        assert is_valid is False
        assert 'booking_type' in error

    def test_string_pallet_count(self):
        assert validate_pricing_request({'type': 'pallet', 'pallet_count': '10'})[0] is False

    @pytest.mark.parametrize('field', ['pallet_count', 'area_sq_ft'])
    def test_infinite_quantity(self, field):
        is_valid, error = validate_pricing_request({'type': 'pallet', field: float('inf')})
        assert is_valid is False
        assert field in error

    def test_fractional_pallet_count(self):
        is_valid, error = validate_pricing_request({'type': 'pallet', 'pallet_count': 2.5})
        assert is_valid is False
        assert 'whole number' in error

    def test_fractional_area_allowed(self):
        assert validate_pricing_request({'area_sq_ft': 40000.5}, booking_type='area-rental')[0] is True

    def test_infinite_existing_count(self):
        data = {'type': 'pallet', 'pallet_count': 10, 'existing_pallet_count': float('inf')}
        assert validate_pricing_request(data)[0] is False

    def test_zero_months(self):
        is_valid, error = validate_pricing_request({'type': 'pallet', 'pallet_count': 10, 'months': 0})
        assert is_valid is False
        assert 'months' in error

    def test_negative_existing_count(self):
        data = {'type': 'pallet', 'pallet_count': 10, 'existing_pallet_count': -1}
        assert validate_pricing_request(data)[0] is False


@pytest.mark.unit
class TestAvailabilityValidation:
    """Tests for availability check bodies"""

    def test_valid_request(self):
        data = {'warehouse_id': 'w1', 'quantity': 10, 'capacity': 100,
                'start_date': '2026-01-01', 'end_date': '2026-01-31'}
        assert validate_availability_request(data) == (True, None)

    def test_end_before_start(self):
        data = {'warehouse_id': 'w1', 'quantity': 10, 'capacity': 100,
                'start_date': '2026-02-01', 'end_date': '2026-01-01'}
        is_valid, error = validate_availability_request(data)
        assert is_valid is False
        assert 'end_date' in error

    def test_bad_date_format(self):
        data = {'warehouse_id': 'w1', 'quantity': 10, 'capacity': 100, 'start_date': '01/02/2026'}
        assert validate_availability_request(data)[0] is False

    def test_unknown_booking_type(self):
        data = {'warehouse_id': 'w1', 'quantity': 10, 'capacity': 100,
                'start_date': '2026-01-01', 'booking_type': 'container'}
        assert validate_availability_request(data)[0] is False


@pytest.mark.unit
class TestResponseHelpers:
    """Tests for error raising and response formatting"""

    def test_require_valid_passes(self):
        require_valid((True, None))

    def test_require_valid_raises(self):
        with pytest.raises(ValidationError) as exc:
            require_valid((False, 'bad value'), 'floor')
        assert exc.value.message == 'bad value'
        assert exc.value.field == 'floor'

    def test_format_validation_error(self):
        body = format_validation_error('months', 'too small')
        assert body == {'success': False, 'error': 'Validation Error', 'field': 'months', 'message': 'too small'}

    def test_format_success_response(self):
        body = format_success_response({'x': 1}, 'Done')
        assert body == {'success': True, 'message': 'Done', 'data': {'x': 1}}
