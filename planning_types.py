"""
Planning Value Types
Immutable inputs and results for floor capacity planning and booking pricing.

Floors, pallets and rate tables arrive from the persistence layer or from
request bodies as loose dictionaries. They are materialised here once, so the
calculators only ever see typed, frozen values.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

SQ_FT_PER_SQ_M = 10.7639

STORAGE_ZONE_TYPE = 'storage'

# Standard (GMA 48" x 40") and Euro (120 x 80 cm) footprints, meters
STANDARD_PALLET_FOOTPRINT = (1.2192, 1.016)
EURO_PALLET_FOOTPRINT = (1.2, 0.8)

DEFAULT_MEMBERSHIP_TIER = 'bronze'


def _pick(data: Mapping[str, Any], *keys, default=None):
    """Return the first key present in data (snake_case or camelCase aliases)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number, not a boolean")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be a number, got {value!r}")
    except OverflowError:
        raise ValueError(f"{name} is too large")
    if math.isnan(number):
        raise ValueError(f"{name} must not be NaN")
    return number


class BookingType(str, Enum):
    """Booking kinds priced by the engine"""
    PALLET = 'pallet'
    AREA_RENTAL = 'area-rental'

    @classmethod
    def parse(cls, value: Any) -> 'BookingType':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown booking type: {value!r}")


# =============================================================================
# FLOOR GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class FloorZone:
    """Rectangular region of a floor, positioned in the floor's plane (meters)"""
    zone_type: str
    x: float
    y: float
    width: float
    height: float
    rotation_deg: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'zone_type', str(self.zone_type))
        for name in ('x', 'y', 'width', 'height', 'rotation_deg'):
            object.__setattr__(self, name, _as_float(getattr(self, name), name))

    @property
    def is_storage(self) -> bool:
        return self.zone_type.strip().lower() == STORAGE_ZONE_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FloorZone':
        return cls(
            zone_type=_pick(data, 'zone_type', 'zoneType', default=''),
            x=_pick(data, 'x', 'x_m', 'xM', default=0),
            y=_pick(data, 'y', 'y_m', 'yM', default=0),
            width=_pick(data, 'width', 'width_m', 'widthM', default=0),
            height=_pick(data, 'height', 'height_m', 'heightM', default=0),
            rotation_deg=_pick(data, 'rotation_deg', 'rotationDeg', default=0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'zone_type': self.zone_type,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'rotation_deg': self.rotation_deg,
        }


@dataclass(frozen=True)
class PalletSpec:
    """
    One pallet type's geometry (meters).

    Non-positive dimensions are accepted; the capacity calculator turns them
    into zero capacity instead of failing.
    """
    pallet_type: str
    length: float
    width: float
    height: float

    def __post_init__(self):
        object.__setattr__(self, 'pallet_type', str(self.pallet_type))
        for name in ('length', 'width', 'height'):
            object.__setattr__(self, name, _as_float(getattr(self, name), name))

    @property
    def has_valid_geometry(self) -> bool:
        return self.length > 0 and self.width > 0 and self.height > 0

    @classmethod
    def standard(cls, height: float = 1.5) -> 'PalletSpec':
        length, width = STANDARD_PALLET_FOOTPRINT
        return cls('standard', length, width, height)

    @classmethod
    def euro(cls, height: float = 1.5) -> 'PalletSpec':
        length, width = EURO_PALLET_FOOTPRINT
        return cls('euro', length, width, height)

    @classmethod
    def custom(cls, length_cm: float, width_cm: float, height_cm: float) -> 'PalletSpec':
        return cls(
            'custom',
            _as_float(length_cm, 'length_cm') / 100,
            _as_float(width_cm, 'width_cm') / 100,
            _as_float(height_cm, 'height_cm') / 100,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PalletSpec':
        pallet_type = _pick(data, 'pallet_type', 'palletType', 'type', default='custom')
        return cls(
            pallet_type=pallet_type,
            length=_pick(data, 'length', 'length_m', 'lengthM', default=0),
            width=_pick(data, 'width', 'width_m', 'widthM', default=0),
            height=_pick(data, 'height', 'height_m', 'heightM', default=0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pallet_type': self.pallet_type,
            'length': self.length,
            'width': self.width,
            'height': self.height,
        }


@dataclass(frozen=True)
class FloorPlan:
    """
    Physical description of one storage floor.

    Dimensions and clearances are in meters. The custom pallet settings are
    kept in centimeters, the way the floor planner stores them.
    """
    length: float
    width: float
    height: float
    wall_clearance: float = 0.5
    sprinkler_clearance: float = 0.9
    safety_clearance: float = 0.5
    loading_zone_depth: float = 3.0
    dock_zone_depth: float = 4.5
    main_aisle: float = 3.5
    side_aisle: float = 2.5
    pedestrian_aisle: float = 1.0
    stacking_override: Optional[int] = None
    zones: Tuple[FloorZone, ...] = ()
    name: str = ''
    floor_level: int = 1
    standard_pallet_height: float = 1.5
    euro_pallet_height: float = 1.5
    custom_pallet_length_cm: float = 100
    custom_pallet_width_cm: float = 100
    custom_pallet_height_cm: float = 150

    def __post_init__(self):
        for name in ('length', 'width', 'height', 'wall_clearance', 'sprinkler_clearance',
                     'safety_clearance', 'loading_zone_depth', 'dock_zone_depth',
                     'main_aisle', 'side_aisle', 'pedestrian_aisle',
                     'standard_pallet_height', 'euro_pallet_height',
                     'custom_pallet_length_cm', 'custom_pallet_width_cm',
                     'custom_pallet_height_cm'):
            object.__setattr__(self, name, _as_float(getattr(self, name), name))

        override = self.stacking_override
        if override is not None:
            if isinstance(override, bool):
                raise TypeError("stacking_override must be an integer")
            if isinstance(override, float):
                if not override.is_integer():
                    raise ValueError(f"stacking_override must be a whole number, got {override}")
                override = int(override)
            object.__setattr__(self, 'stacking_override', int(override))

        zones = tuple(
            zone if isinstance(zone, FloorZone) else FloorZone.from_dict(zone)
            for zone in (self.zones or ())
        )
        object.__setattr__(self, 'zones', zones)

    @property
    def total_sq_ft(self) -> int:
        area = self.length * self.width * SQ_FT_PER_SQ_M
        return round(area) if math.isfinite(area) else 0

    @property
    def storage_zones(self) -> Tuple[FloorZone, ...]:
        return tuple(zone for zone in self.zones if zone.is_storage)

    def default_pallet_specs(self) -> List[PalletSpec]:
        """Standard, euro and custom pallets as configured on this floor"""
        return [
            PalletSpec.standard(self.standard_pallet_height),
            PalletSpec.euro(self.euro_pallet_height),
            PalletSpec.custom(
                self.custom_pallet_length_cm,
                self.custom_pallet_width_cm,
                self.custom_pallet_height_cm,
            ),
        ]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  defaults: Optional[Mapping[str, Any]] = None) -> 'FloorPlan':
        """
        Build a floor plan from a request body or a stored floor record

        Accepts the planner's camelCase keys (``lengthM``, ``wallClearanceM``)
        as well as snake_case ones.

        Args:
            data: Floor body or record
            defaults: Values for clearances, aisles and pallet settings missing
                from ``data`` (the FLOOR_DEFAULTS table); dataclass defaults
                apply to anything neither provides
        """
        defaults = defaults or {}
        kwargs = {
            'length': _pick(data, 'length', 'length_m', 'lengthM', default=0),
            'width': _pick(data, 'width', 'width_m', 'widthM', default=0),
            'height': _pick(data, 'height', 'height_m', 'heightM', default=0),
            'stacking_override': _pick(data, 'stacking_override', 'stackingOverride'),
            'zones': tuple(FloorZone.from_dict(z) for z in _pick(data, 'zones', default=[])),
            'name': _pick(data, 'name', default=''),
            'floor_level': int(_pick(data, 'floor_level', 'floorLevel', default=1)),
        }
        optional = {
            'wall_clearance': ('wall_clearance', 'wall_clearance_m', 'wallClearanceM'),
            'sprinkler_clearance': ('sprinkler_clearance', 'sprinkler_clearance_m', 'sprinklerClearanceM'),
            'safety_clearance': ('safety_clearance', 'safety_clearance_m', 'safetyClearanceM'),
            'loading_zone_depth': ('loading_zone_depth', 'loading_zone_depth_m', 'loadingZoneDepthM'),
            'dock_zone_depth': ('dock_zone_depth', 'dock_zone_depth_m', 'dockZoneDepthM'),
            'main_aisle': ('main_aisle', 'main_aisle_m', 'mainAisleM'),
            'side_aisle': ('side_aisle', 'side_aisle_m', 'sideAisleM'),
            'pedestrian_aisle': ('pedestrian_aisle', 'pedestrian_aisle_m', 'pedestrianAisleM'),
            'standard_pallet_height': ('standard_pallet_height', 'standard_pallet_height_m',
                                       'standardPalletHeightM'),
            'euro_pallet_height': ('euro_pallet_height', 'euro_pallet_height_m', 'euroPalletHeightM'),
            'custom_pallet_length_cm': ('custom_pallet_length_cm', 'customPalletLengthCm'),
            'custom_pallet_width_cm': ('custom_pallet_width_cm', 'customPalletWidthCm'),
            'custom_pallet_height_cm': ('custom_pallet_height_cm', 'customPalletHeightCm'),
        }
        for attr, keys in optional.items():
            value = _pick(data, *keys)
            if value is None:
                value = defaults.get(attr)
            if value is not None:
                kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'floor_level': self.floor_level,
            'length': self.length,
            'width': self.width,
            'height': self.height,
            'wall_clearance': self.wall_clearance,
            'sprinkler_clearance': self.sprinkler_clearance,
            'safety_clearance': self.safety_clearance,
            'loading_zone_depth': self.loading_zone_depth,
            'dock_zone_depth': self.dock_zone_depth,
            'main_aisle': self.main_aisle,
            'side_aisle': self.side_aisle,
            'pedestrian_aisle': self.pedestrian_aisle,
            'stacking_override': self.stacking_override,
            'standard_pallet_height': self.standard_pallet_height,
            'euro_pallet_height': self.euro_pallet_height,
            'custom_pallet_length_cm': self.custom_pallet_length_cm,
            'custom_pallet_width_cm': self.custom_pallet_width_cm,
            'custom_pallet_height_cm': self.custom_pallet_height_cm,
            'total_sq_ft': self.total_sq_ft,
            'zones': [zone.to_dict() for zone in self.zones],
        }


@dataclass(frozen=True)
class CapacityResult:
    """Capacity of one floor for one pallet type"""
    pallet_type: str
    footprint_count: int
    stack_count: int

    @property
    def max_pallets(self) -> int:
        return self.footprint_count * self.stack_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pallet_type': self.pallet_type,
            'footprint_count': self.footprint_count,
            'stack_count': self.stack_count,
            'max_pallets': self.max_pallets,
        }


# =============================================================================
# PRICING
# =============================================================================

@dataclass(frozen=True)
class VolumeDiscountTier:
    pallet_threshold: int
    discount_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {'pallet_threshold': self.pallet_threshold, 'discount_percent': self.discount_percent}


@dataclass(frozen=True)
class MembershipDiscount:
    tier: str
    discount_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {'tier': self.tier, 'discount_percent': self.discount_percent}


def _parse_volume_tiers(raw: Any) -> List[VolumeDiscountTier]:
    if isinstance(raw, Mapping):
        # Stored warehouse pricing keeps tiers as {"<threshold>": percent}
        return [VolumeDiscountTier(int(threshold), _as_float(percent, 'discount_percent'))
                for threshold, percent in raw.items()]
    tiers = []
    for item in raw or []:
        if isinstance(item, VolumeDiscountTier):
            tiers.append(item)
            continue
        tiers.append(VolumeDiscountTier(
            int(_pick(item, 'pallet_threshold', 'palletThreshold', default=0)),
            _as_float(_pick(item, 'discount_percent', 'discountPercent', default=0), 'discount_percent'),
        ))
    return tiers


def _parse_membership_discounts(raw: Any) -> List[MembershipDiscount]:
    if isinstance(raw, Mapping):
        return [MembershipDiscount(str(tier).lower(), _as_float(percent, 'discount_percent'))
                for tier, percent in raw.items()]
    discounts = []
    for item in raw or []:
        if isinstance(item, MembershipDiscount):
            discounts.append(item)
            continue
        discounts.append(MembershipDiscount(
            str(_pick(item, 'tier', default='')).lower(),
            _as_float(_pick(item, 'discount_percent', 'discountPercent', default=0), 'discount_percent'),
        ))
    return discounts


@dataclass(frozen=True)
class PricingConfig:
    """
    Static rate table supplied by the caller.

    Volume tiers are kept sorted from the highest threshold down, which is the
    order the discount lookup walks them in.
    """
    pallet_in: float
    storage_per_pallet_per_month: float
    area_rental_per_sq_ft_per_year: float
    area_rental_min_sq_ft: float
    volume_discounts: Tuple[VolumeDiscountTier, ...] = ()
    membership_discounts: Tuple[MembershipDiscount, ...] = ()
    pallet_out: float = 0.0

    def __post_init__(self):
        for name in ('pallet_in', 'pallet_out', 'storage_per_pallet_per_month',
                     'area_rental_per_sq_ft_per_year', 'area_rental_min_sq_ft'):
            value = _as_float(getattr(self, name), name)
            if value < 0:
                raise ValueError(f"{name} must not be negative")
            object.__setattr__(self, name, value)

        tiers = _parse_volume_tiers(self.volume_discounts)
        for tier in tiers:
            if tier.pallet_threshold < 0 or tier.discount_percent < 0:
                raise ValueError(f"Invalid volume discount tier: {tier}")
        object.__setattr__(
            self, 'volume_discounts',
            tuple(sorted(tiers, key=lambda t: t.pallet_threshold, reverse=True))
        )

        memberships = _parse_membership_discounts(self.membership_discounts)
        for membership in memberships:
            if membership.discount_percent < 0:
                raise ValueError(f"Invalid membership discount: {membership}")
        object.__setattr__(self, 'membership_discounts', tuple(memberships))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PricingConfig':
        return cls(
            pallet_in=_pick(data, 'pallet_in', 'palletIn', default=0),
            pallet_out=_pick(data, 'pallet_out', 'palletOut', default=0),
            storage_per_pallet_per_month=_pick(
                data, 'storage_per_pallet_per_month', 'storagePerPalletPerMonth', default=0),
            area_rental_per_sq_ft_per_year=_pick(
                data, 'area_rental_per_sq_ft_per_year', 'areaRentalPerSqFtPerYear', default=0),
            area_rental_min_sq_ft=_pick(data, 'area_rental_min_sq_ft', 'areaRentalMinSqFt', default=0),
            volume_discounts=_pick(data, 'volume_discounts', 'volumeDiscounts', default=()),
            membership_discounts=_pick(data, 'membership_discounts', 'membershipDiscounts', default=()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pallet_in': self.pallet_in,
            'pallet_out': self.pallet_out,
            'storage_per_pallet_per_month': self.storage_per_pallet_per_month,
            'area_rental_per_sq_ft_per_year': self.area_rental_per_sq_ft_per_year,
            'area_rental_min_sq_ft': self.area_rental_min_sq_ft,
            'volume_discounts': [tier.to_dict() for tier in self.volume_discounts],
            'membership_discounts': [m.to_dict() for m in self.membership_discounts],
        }


@dataclass(frozen=True)
class PricingCalculationInput:
    """One booking's pricing request"""
    booking_type: BookingType
    pallet_count: Optional[int] = None
    area_sq_ft: Optional[float] = None
    months: Optional[int] = None
    membership_tier: Optional[str] = None
    existing_pallet_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'booking_type', BookingType.parse(self.booking_type))
        if self.membership_tier is not None:
            object.__setattr__(self, 'membership_tier', str(self.membership_tier).lower())
        object.__setattr__(self, 'existing_pallet_count', int(self.existing_pallet_count or 0))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], booking_type: Any = None) -> 'PricingCalculationInput':
        return cls(
            booking_type=booking_type or _pick(data, 'booking_type', 'type', default=BookingType.PALLET),
            pallet_count=_pick(data, 'pallet_count', 'palletCount'),
            area_sq_ft=_pick(data, 'area_sq_ft', 'areaSqFt'),
            months=_pick(data, 'months'),
            membership_tier=_pick(data, 'membership_tier', 'membershipTier'),
            existing_pallet_count=_pick(data, 'existing_pallet_count', 'existingPalletCount', default=0),
        )


@dataclass(frozen=True)
class BreakdownLine:
    item: str
    quantity: float
    unit_price: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'item': self.item,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
            'total': self.total,
        }


@dataclass(frozen=True)
class PricingCalculationResult:
    """Cost breakdown for one booking"""
    base_amount: float
    volume_discount: float
    volume_discount_percent: float
    membership_discount: float
    membership_discount_percent: float
    subtotal: float
    total_discount: float
    total_discount_percent: float
    final_amount: float
    breakdown: Tuple[BreakdownLine, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_amount': self.base_amount,
            'volume_discount': self.volume_discount,
            'volume_discount_percent': self.volume_discount_percent,
            'membership_discount': self.membership_discount,
            'membership_discount_percent': self.membership_discount_percent,
            'subtotal': self.subtotal,
            'total_discount': self.total_discount,
            'total_discount_percent': self.total_discount_percent,
            'final_amount': self.final_amount,
            'breakdown': [line.to_dict() for line in self.breakdown],
        }


def parse_pallet_specs(items: Iterable[Mapping[str, Any]]) -> List[PalletSpec]:
    """Build pallet specs from request data, keeping the caller's order"""
    return [item if isinstance(item, PalletSpec) else PalletSpec.from_dict(item) for item in items]
